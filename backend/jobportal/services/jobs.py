"""
Job lifecycle: posting, browsing, editing, closing and deleting jobs.

Ownership checks go through the authorization gate; every denied check
raises before the database is touched.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobportal.errors import ValidationError, Forbidden, NotFound
from jobportal.models.application import Application
from jobportal.models.job import Job
from jobportal.models.saved_job import SavedJob
from jobportal.models.user import User
from jobportal.schemas.job import JobDetailResponse, EmployerJobResponse
from jobportal.services import authorization

logger = logging.getLogger(__name__)


@dataclass
class JobFilters:
    """Public listing filters (all optional)."""
    keyword: Optional[str] = None  # substring of title, case-insensitive
    location: Optional[str] = None  # substring, case-insensitive
    category: Optional[str] = None  # exact
    job_type: Optional[str] = None  # exact
    min_salary: Optional[int] = None  # job.salary_max >= min_salary
    max_salary: Optional[int] = None  # job.salary_max <= max_salary


def validate_salary_range(salary_min: Optional[int], salary_max: Optional[int]) -> None:
    """Raise ValidationError unless salary_min < salary_max (when both are set)."""
    if salary_min is not None and salary_max is not None and salary_min >= salary_max:
        raise ValidationError(
            f"salary_min ({salary_min}) must be less than salary_max ({salary_max})"
        )


async def _load_job(db: AsyncSession, job_id: UUID, with_company: bool = False) -> Job:
    query = select(Job).where(Job.id == job_id)
    if with_company:
        query = query.options(selectinload(Job.company))
    result = await db.execute(query)
    job = result.scalar_one_or_none()
    
    if not job:
        raise NotFound("Job not found")
    return job


async def _load_owned_job(db: AsyncSession, actor: User, job_id: UUID, action: str) -> Job:
    """Fetch a job and make sure actor owns it."""
    job = await _load_job(db, job_id)
    if not authorization.can_mutate_job(actor, job):
        logger.warning(f"User {actor.id} denied {action} on job {job_id}")
        raise Forbidden(f"Only the employer who posted this job can {action} it")
    return job


async def _viewer_state(db: AsyncSession, viewer: Optional[User]) -> tuple[set[str], dict[str, str]]:
    """
    Saved job ids and {job_id: status} for the viewer.
    
    Read-time join only; nothing here is persisted on jobs.
    """
    if viewer is None:
        return set(), {}
    
    saved_result = await db.execute(
        select(SavedJob.job_id).where(SavedJob.jobseeker_id == viewer.id)
    )
    saved_ids = {str(job_id) for job_id in saved_result.scalars().all()}
    
    status_result = await db.execute(
        select(Application.job_id, Application.status).where(Application.applicant_id == viewer.id)
    )
    status_map = {str(job_id): status for job_id, status in status_result.all()}
    
    return saved_ids, status_map


def build_job_detail(job: Job, saved_ids: set[str], status_map: dict[str, str]) -> JobDetailResponse:
    """Build JobDetailResponse from a Job with its company loaded."""
    detail = JobDetailResponse.model_validate(job)
    return detail.model_copy(update={
        "is_saved": str(job.id) in saved_ids,
        "application_status": status_map.get(str(job.id)),
    })


async def create_job(db: AsyncSession, actor: User, data: dict) -> Job:
    """Post a new job owned by actor."""
    if not authorization.can_post_job(actor):
        raise Forbidden("Only employers can post jobs")
    
    validate_salary_range(data.get("salary_min"), data.get("salary_max"))
    
    job = Job(company_id=actor.id, **data)
    db.add(job)
    await db.commit()
    await db.refresh(job)
    
    logger.info(f"Created job {job.id}: {job.title} (employer {actor.id})")
    return job


async def list_jobs(
    db: AsyncSession,
    filters: JobFilters,
    viewer: Optional[User] = None
) -> list[JobDetailResponse]:
    """List open jobs matching filters, newest first."""
    query = select(Job).options(selectinload(Job.company)).where(Job.is_closed.is_(False))
    
    if filters.keyword:
        query = query.where(Job.title.icontains(filters.keyword, autoescape=True))
    if filters.location:
        query = query.where(Job.location.icontains(filters.location, autoescape=True))
    if filters.category:
        query = query.where(Job.category == filters.category)
    if filters.job_type:
        query = query.where(Job.job_type == filters.job_type)
    if filters.min_salary is not None:
        query = query.where(Job.salary_max >= filters.min_salary)
    if filters.max_salary is not None:
        query = query.where(Job.salary_max <= filters.max_salary)
    
    query = query.order_by(Job.created_at.desc())
    
    result = await db.execute(query)
    jobs = result.scalars().all()
    
    saved_ids, status_map = await _viewer_state(db, viewer)
    
    logger.info(f"Listed {len(jobs)} jobs (filters: {filters})")
    return [build_job_detail(job, saved_ids, status_map) for job in jobs]


async def list_employer_jobs(db: AsyncSession, actor: User) -> list[EmployerJobResponse]:
    """All jobs posted by actor (open and closed) with application counts."""
    if not authorization.is_employer(actor):
        raise Forbidden("Only employers can list their posted jobs")
    
    counts = (
        select(Application.job_id, func.count(Application.id).label("application_count"))
        .group_by(Application.job_id)
        .subquery()
    )
    result = await db.execute(
        select(Job, func.coalesce(counts.c.application_count, 0))
        .outerjoin(counts, counts.c.job_id == Job.id)
        .where(Job.company_id == actor.id)
        .order_by(Job.created_at.desc())
    )
    
    jobs = []
    for job, application_count in result.all():
        response = EmployerJobResponse.model_validate(job)
        jobs.append(response.model_copy(update={"application_count": application_count}))
    return jobs


async def get_job(db: AsyncSession, job_id: UUID, viewer: Optional[User] = None) -> JobDetailResponse:
    """Job detail, closed or not, with the viewer's own flags."""
    job = await _load_job(db, job_id, with_company=True)
    saved_ids, status_map = await _viewer_state(db, viewer)
    return build_job_detail(job, saved_ids, status_map)


async def update_job(db: AsyncSession, actor: User, job_id: UUID, changes: dict) -> Job:
    """Merge changes into an owned job, re-checking the salary range."""
    job = await _load_owned_job(db, actor, job_id, "update")

    if "title" in changes and not changes["title"]:
        raise ValidationError("Job title cannot be empty")
    validate_salary_range(
        changes.get("salary_min", job.salary_min),
        changes.get("salary_max", job.salary_max),
    )
    
    for field, value in changes.items():
        setattr(job, field, value)
    
    await db.commit()
    await db.refresh(job)
    
    logger.info(f"Updated job {job.id}: fields={sorted(changes)}")
    return job


async def delete_job(db: AsyncSession, actor: User, job_id: UUID) -> None:
    """Delete an owned job together with its applications and bookmarks."""
    job = await _load_owned_job(db, actor, job_id, "delete")
    
    applications = await db.execute(delete(Application).where(Application.job_id == job.id))
    saved = await db.execute(delete(SavedJob).where(SavedJob.job_id == job.id))
    await db.delete(job)
    await db.commit()
    
    logger.info(
        f"Deleted job {job_id} ({applications.rowcount} applications, "
        f"{saved.rowcount} bookmarks removed)"
    )


async def toggle_job_closed(db: AsyncSession, actor: User, job_id: UUID) -> Job:
    """Flip is_closed. Existing applications are left as they are."""
    job = await _load_owned_job(db, actor, job_id, "close or reopen")
    
    job.is_closed = not job.is_closed
    await db.commit()
    await db.refresh(job)
    
    logger.info(f"Job {job.id} {'closed' if job.is_closed else 'reopened'}")
    return job
