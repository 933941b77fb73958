"""Application-related Pydantic schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict

from jobportal.schemas.job import JobSummary


class ApplicantSummary(BaseModel):
    """Short applicant info shown to the employer."""
    id: UUID
    name: str
    email: str
    avatar: Optional[str] = None
    resume: Optional[str] = None
    
    model_config = ConfigDict(from_attributes=True)


class ApplicationResponse(BaseModel):
    """Schema for an application as stored."""
    id: UUID
    job_id: UUID
    applicant_id: UUID
    status: str
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class MyApplicationResponse(ApplicationResponse):
    """Job seeker's application with the job it targets."""
    job: JobSummary


class JobApplicationResponse(ApplicationResponse):
    """Application to an employer's job with the applicant's info."""
    applicant: ApplicantSummary


class ApplicationDetailResponse(ApplicationResponse):
    job: JobSummary
    applicant: ApplicantSummary


class JobApplicantsResponse(BaseModel):
    """All applications for one job."""
    job: JobSummary
    applications: list[JobApplicationResponse]


class StatusUpdateRequest(BaseModel):
    """
    New status for an application.
    
    Kept as a plain string so an unknown value is reported by the
    application service rather than by request parsing.
    """
    status: str
