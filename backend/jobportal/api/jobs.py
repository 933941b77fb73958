"""
Jobs API endpoints.
Handles job posting CRUD, browsing and open/close toggling.
"""
import logging
from typing import Optional, List
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.database import get_db
from jobportal.models.user import User
from jobportal.api.auth import get_current_user, get_optional_user
from jobportal.schemas.job import (
    JobCreate,
    JobUpdate,
    JobResponse,
    JobDetailResponse,
    EmployerJobResponse,
    ToggleCloseResponse,
)
from jobportal.services import jobs as job_service
from jobportal.services.jobs import JobFilters

# Configure logger
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=JobResponse, status_code=201)
async def create_job(
    job: JobCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Post a new job.
    
    Employers only. salary_min must be less than salary_max.
    """
    return await job_service.create_job(db, current_user, job.model_dump())


@router.get("/", response_model=List[JobDetailResponse])
async def list_jobs(
    keyword: Optional[str] = Query(None, description="Search in title (case-insensitive)"),
    location: Optional[str] = Query(None, description="Filter by location (partial match)"),
    category: Optional[str] = Query(None, description="Filter by category"),
    job_type: Optional[str] = Query(None, description="Filter by job type"),
    min_salary: Optional[int] = Query(None, ge=0, description="Jobs whose salary_max is at least this"),
    max_salary: Optional[int] = Query(None, ge=0, description="Jobs whose salary_max is at most this"),
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    """
    List open jobs with optional filtering.
    
    Closed jobs are never listed. With a bearer token, each job also tells
    whether the caller saved it and the status of the caller's application.
    """
    filters = JobFilters(
        keyword=keyword,
        location=location,
        category=category,
        job_type=job_type,
        min_salary=min_salary,
        max_salary=max_salary,
    )
    return await job_service.list_jobs(db, filters, viewer)


@router.get("/get-jobs-employer", response_model=List[EmployerJobResponse])
async def list_employer_jobs(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Jobs posted by the caller, open and closed, with application counts."""
    return await job_service.list_employer_jobs(db, current_user)


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(
    job_id: UUID,
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a job by ID (closed jobs included)."""
    return await job_service.get_job(db, job_id, viewer)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: UUID,
    changes: JobUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a job (partial). Only the employer who posted it may do this."""
    return await job_service.update_job(
        db, current_user, job_id, changes.model_dump(exclude_unset=True)
    )


@router.delete("/{job_id}")
async def delete_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Delete a job.
    
    Applications and bookmarks for the job are removed with it.
    """
    await job_service.delete_job(db, current_user, job_id)
    return {"message": "Job deleted successfully"}


@router.put("/{job_id}/toggle-close", response_model=ToggleCloseResponse)
async def toggle_close_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Close an open job or reopen a closed one."""
    job = await job_service.toggle_job_closed(db, current_user, job_id)
    return ToggleCloseResponse(
        message=f"Job has been {'closed' if job.is_closed else 'reopened'}",
        job=JobResponse.model_validate(job)
    )
