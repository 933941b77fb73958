"""Saved-job index: job seekers' bookmarks."""
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobportal.errors import Forbidden, NotFound, Conflict
from jobportal.models.job import Job
from jobportal.models.saved_job import SavedJob
from jobportal.models.user import User
from jobportal.services import authorization

logger = logging.getLogger(__name__)


def _require_jobseeker(actor: User) -> None:
    if not authorization.is_jobseeker(actor):
        raise Forbidden("Only job seekers can save jobs")


async def save_job(db: AsyncSession, actor: User, job_id: UUID) -> SavedJob:
    """Bookmark a job. Saving twice is a Conflict."""
    _require_jobseeker(actor)
    
    job_result = await db.execute(select(Job.id).where(Job.id == job_id))
    if job_result.scalar_one_or_none() is None:
        raise NotFound("Job not found")
    
    existing = await db.execute(
        select(SavedJob.id).where(
            SavedJob.job_id == job_id,
            SavedJob.jobseeker_id == actor.id
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise Conflict("Job already saved")
    
    saved = SavedJob(job_id=job_id, jobseeker_id=actor.id)
    db.add(saved)
    
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise Conflict("Job already saved")
    
    await db.refresh(saved)
    logger.info(f"User {actor.id} saved job {job_id}")
    return saved


async def unsave_job(db: AsyncSession, actor: User, job_id: UUID) -> None:
    """Remove a bookmark; NotFound if it isn't there."""
    _require_jobseeker(actor)
    
    result = await db.execute(
        select(SavedJob).where(
            SavedJob.job_id == job_id,
            SavedJob.jobseeker_id == actor.id
        )
    )
    saved = result.scalar_one_or_none()
    
    if not saved:
        raise NotFound("Job not found in your saved list")
    
    await db.delete(saved)
    await db.commit()
    logger.info(f"User {actor.id} removed saved job {job_id}")


async def list_saved_jobs(db: AsyncSession, actor: User) -> list[SavedJob]:
    """Bookmarks with their job and the job's employer, newest first."""
    _require_jobseeker(actor)
    
    result = await db.execute(
        select(SavedJob)
        .options(selectinload(SavedJob.job).selectinload(Job.company))
        .where(SavedJob.jobseeker_id == actor.id)
        .order_by(SavedJob.created_at.desc())
    )
    return list(result.scalars().all())
