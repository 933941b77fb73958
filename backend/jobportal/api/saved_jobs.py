"""
Saved jobs API endpoints.
Job seekers bookmark jobs to come back to later.
"""
import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.database import get_db
from jobportal.models.user import User
from jobportal.api.auth import get_current_user
from jobportal.schemas.saved_job import SavedJobResponse, SavedJobWithJob
from jobportal.services import saved_jobs as saved_job_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/my", response_model=List[SavedJobWithJob])
async def list_my_saved_jobs(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await saved_job_service.list_saved_jobs(db, current_user)


@router.post("/{job_id}", response_model=SavedJobResponse, status_code=201)
async def save_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Bookmark a job. 409 if it's already saved."""
    return await saved_job_service.save_job(db, current_user, job_id)


@router.delete("/{job_id}")
async def unsave_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Remove a bookmark. 404 if the job isn't in the saved list."""
    await saved_job_service.unsave_job(db, current_user, job_id)
    return {"message": "Job removed from saved list"}
