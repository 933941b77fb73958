from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from jobportal.database import Base
from jobportal.database_types import GUID


class ApplicationStatus(str, Enum):
    """Valid statuses for a job application"""
    APPLIED = "Applied"
    IN_REVIEW = "In Review"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class Application(Base):
    __tablename__ = "applications"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    job_id = Column(GUID, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    applicant_id = Column(GUID, ForeignKey("users.id"), nullable=False)
    
    # Only the employer owning the job changes this
    status = Column(String, nullable=False, default=ApplicationStatus.APPLIED.value)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    # Relationships
    job = relationship("Job")
    applicant = relationship("User")
    
    __table_args__ = (
        # One application per job seeker per job, even under concurrent requests
        UniqueConstraint('job_id', 'applicant_id', name='uq_application_job_applicant'),
        
        Index('idx_applications_applicant_created', 'applicant_id', 'created_at'),
    )
