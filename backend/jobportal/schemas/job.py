"""Job-related Pydantic schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class CompanySummary(BaseModel):
    """Owning employer as shown next to a job."""
    id: UUID
    name: str
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    
    model_config = ConfigDict(from_attributes=True)


class JobBase(BaseModel):
    """Base schema with common job fields."""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None  # e.g., "Engineering", "Design"
    job_type: Optional[str] = None  # Remote | Full-Time | Part-Time | Contract | Internship
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)


class JobCreate(JobBase):
    """Schema for posting a new job."""
    pass


class JobUpdate(BaseModel):
    """Schema for a partial job update; only sent fields are merged."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    job_type: Optional[str] = None
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)


class JobResponse(JobBase):
    """Schema for a job as stored."""
    id: UUID
    company_id: UUID
    is_closed: bool
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class JobWithCompany(JobResponse):
    """Job plus its owning employer's summary."""
    company: Optional[CompanySummary] = None


class JobDetailResponse(JobWithCompany):
    """
    Job as seen by a particular viewer.
    
    is_saved / application_status are computed per request for the
    authenticated viewer and are never stored on the job.
    """
    is_saved: bool = False
    application_status: Optional[str] = None


class EmployerJobResponse(JobResponse):
    """Employer's own job with the number of applications received."""
    application_count: int = 0


class JobSummary(BaseModel):
    """Short job info embedded in applications."""
    id: UUID
    title: str
    location: Optional[str] = None
    category: Optional[str] = None
    job_type: Optional[str] = None
    company_id: UUID
    is_closed: bool
    
    model_config = ConfigDict(from_attributes=True)


class ToggleCloseResponse(BaseModel):
    message: str
    job: JobResponse
