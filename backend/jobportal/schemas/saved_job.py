"""Saved-job (bookmark) Pydantic schemas."""
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict

from jobportal.schemas.job import JobWithCompany


class SavedJobResponse(BaseModel):
    id: UUID
    job_id: UUID
    jobseeker_id: UUID
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class SavedJobWithJob(SavedJobResponse):
    """Bookmark with the job and its employer."""
    job: JobWithCompany
