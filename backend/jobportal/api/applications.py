"""
Applications API endpoints.
Job seekers apply and track their applications; employers review them.
"""
import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.database import get_db
from jobportal.models.user import User
from jobportal.api.auth import get_current_user
from jobportal.schemas.application import (
    ApplicationResponse,
    ApplicationDetailResponse,
    JobApplicantsResponse,
    MyApplicationResponse,
    StatusUpdateRequest,
)
from jobportal.services import applications as application_service

logger = logging.getLogger(__name__)
router = APIRouter()


# Endpoints
# Static paths first so "/my" isn't parsed as an application id
@router.get("/my", response_model=List[MyApplicationResponse])
async def list_my_applications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """The caller's applications, newest first."""
    return await application_service.list_my_applications(db, current_user)


@router.get("/job/{job_id}", response_model=JobApplicantsResponse)
async def list_job_applications(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """All applicants for a job. Only the employer who posted it may call this."""
    return await application_service.list_job_applications(db, current_user, job_id)


@router.post("/{job_id}", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Apply to a job.
    
    Returns:
        201: Application created with status "Applied"
        403: Caller is not a job seeker
        404: Job not found
        409: Job closed, or caller already applied
    """
    return await application_service.apply_to_job(db, current_user, job_id)


@router.get("/{application_id}", response_model=ApplicationDetailResponse)
async def get_application(
    application_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Application detail; visible to the applicant and the job's employer only."""
    return await application_service.get_application(db, current_user, application_id)


@router.put("/{application_id}/status", response_model=ApplicationResponse)
async def update_status(
    application_id: UUID,
    update: StatusUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Set an application's status (Applied, In Review, Accepted, Rejected).
    
    Only the employer who posted the job may do this.
    """
    return await application_service.set_application_status(
        db, current_user, application_id, update.status
    )
