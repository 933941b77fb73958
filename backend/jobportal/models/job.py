from datetime import datetime
from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
import uuid

from jobportal.database import Base
from jobportal.database_types import GUID


class Job(Base):
    __tablename__ = "jobs"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    
    # Owning employer
    company_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    
    # Job details
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True)  # e.g., "Engineering", "Design"
    job_type = Column(String(50), nullable=True)  # Remote | Full-Time | Part-Time | Contract | Internship
    
    # Salary range (salary_min < salary_max when both are set)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    
    # Closed jobs stay readable but reject new applications
    is_closed = Column(Boolean, default=False, nullable=False)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    # Relationships
    company = relationship("User")
    
    __table_args__ = (
        # Public listing always filters on is_closed
        Index('idx_jobs_open_created', 'is_closed', 'created_at'),
    )
