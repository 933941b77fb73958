"""Employer dashboard schemas."""
from pydantic import BaseModel

from jobportal.schemas.application import ApplicationDetailResponse
from jobportal.schemas.job import JobResponse


class OverviewCounts(BaseModel):
    total_active_jobs: int
    total_closed_jobs: int
    total_applications: int
    total_hired: int


class OverviewData(BaseModel):
    recent_jobs: list[JobResponse]
    recent_applications: list[ApplicationDetailResponse]


class OverviewResponse(BaseModel):
    """Rollup computed on every request; nothing is stored."""
    counts: OverviewCounts
    data: OverviewData
