from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from jobportal.database import Base
from jobportal.database_types import GUID


class SavedJob(Base):
    __tablename__ = "saved_jobs"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    job_id = Column(GUID, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    jobseeker_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    job = relationship("Job")
    
    __table_args__ = (
        UniqueConstraint('job_id', 'jobseeker_id', name='uq_saved_job_jobseeker'),
    )
