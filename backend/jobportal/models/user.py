from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Enum as SQLEnum
import uuid
import enum

from jobportal.database import Base
from jobportal.database_types import GUID


class UserRole(str, enum.Enum):
    """User role; fixed at registration."""
    EMPLOYER = "employer"  # Posts jobs, reviews applicants
    JOBSEEKER = "jobseeker"  # Browses, saves and applies to jobs


class User(Base):
    __tablename__ = "users"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    
    role = Column(
        SQLEnum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.JOBSEEKER,
        index=True
    )
    
    # Profile (URLs to the media host)
    avatar = Column(String(500), nullable=True)
    resume = Column(String(500), nullable=True)
    
    # Employer-only company profile
    company_name = Column(String(255), nullable=True)
    company_description = Column(Text, nullable=True)
    company_logo = Column(String(500), nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    def is_employer(self) -> bool:
        return self.role == UserRole.EMPLOYER
    
    def is_jobseeker(self) -> bool:
        return self.role == UserRole.JOBSEEKER
