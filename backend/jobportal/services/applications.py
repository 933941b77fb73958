"""
Application ledger.

A job seeker applies once per job; the employer owning the job moves the
application between statuses. Any status may be set from any other, there
is no transition graph. ALL status changes go through set_application_status.
"""
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobportal.errors import ValidationError, Forbidden, NotFound, Conflict
from jobportal.models.application import Application, ApplicationStatus
from jobportal.models.job import Job
from jobportal.models.user import User
from jobportal.schemas.application import JobApplicantsResponse, JobApplicationResponse
from jobportal.schemas.job import JobSummary
from jobportal.services import authorization

logger = logging.getLogger(__name__)

VALID_STATUSES = [status.value for status in ApplicationStatus]


def parse_status(value: str) -> ApplicationStatus:
    """Map a raw status string to ApplicationStatus or raise ValidationError."""
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise ValidationError(
            f"Invalid status '{value}'. Must be one of: {', '.join(VALID_STATUSES)}"
        )


async def _get_job(db: AsyncSession, job_id: UUID) -> Job:
    result = await db.execute(select(Job).where(Job.id == job_id))
    job = result.scalar_one_or_none()
    if not job:
        raise NotFound("Job not found")
    return job


async def apply_to_job(db: AsyncSession, actor: User, job_id: UUID) -> Application:
    """
    Create an application in Applied status.
    
    Raises:
        NotFound: Job doesn't exist
        Conflict: Job is closed (for any actor) or actor already applied
        Forbidden: Actor is not a job seeker
    """
    job = await _get_job(db, job_id)
    
    if job.is_closed:
        raise Conflict("This job is closed and no longer accepting applications")
    
    already_applied = False
    if authorization.is_jobseeker(actor):
        existing = await db.execute(
            select(Application.id).where(
                Application.job_id == job.id,
                Application.applicant_id == actor.id
            )
        )
        already_applied = existing.scalar_one_or_none() is not None
    
    if not authorization.can_apply(actor, job, already_applied):
        if not authorization.is_jobseeker(actor):
            logger.warning(f"Non-jobseeker {actor.id} tried to apply to job {job.id}")
            raise Forbidden("Only job seekers can apply to jobs")
        raise Conflict("Already applied to this job")
    
    actor_id = actor.id
    application = Application(
        job_id=job.id,
        applicant_id=actor_id,
        status=ApplicationStatus.APPLIED.value
    )
    db.add(application)
    
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent request inserted the same (job, applicant) pair first
        await db.rollback()
        logger.info(f"Duplicate application rejected by constraint: job {job_id}, applicant {actor_id}")
        raise Conflict("Already applied to this job")
    
    await db.refresh(application)
    
    logger.info(f"Application {application.id} created: applicant {actor.id} → job {job.id}")
    return application


async def list_my_applications(db: AsyncSession, actor: User) -> list[Application]:
    """The job seeker's applications with their jobs, newest first."""
    if not authorization.is_jobseeker(actor):
        raise Forbidden("Only job seekers can view their applications")
    
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.job))
        .where(Application.applicant_id == actor.id)
        .order_by(Application.created_at.desc())
    )
    return list(result.scalars().all())


async def list_job_applications(db: AsyncSession, actor: User, job_id: UUID) -> JobApplicantsResponse:
    """Every application for a job the actor owns, newest first."""
    job = await _get_job(db, job_id)
    
    if not authorization.owns_job(actor, job):
        logger.warning(f"User {actor.id} denied applicant list for job {job_id}")
        raise Forbidden("Only the employer who posted this job can view its applicants")
    
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.applicant))
        .where(Application.job_id == job.id)
        .order_by(Application.created_at.desc())
    )
    applications = result.scalars().all()
    
    return JobApplicantsResponse(
        job=JobSummary.model_validate(job),
        applications=[JobApplicationResponse.model_validate(app) for app in applications],
    )


async def get_application(db: AsyncSession, actor: User, application_id: UUID) -> Application:
    """Application detail for its applicant or the owning employer."""
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.job), selectinload(Application.applicant))
        .where(Application.id == application_id)
    )
    application = result.scalar_one_or_none()
    
    if not application:
        raise NotFound("Application not found")
    
    if not authorization.can_view_application(actor, application, application.job):
        logger.warning(f"User {actor.id} denied access to application {application_id}")
        raise Forbidden("You are not allowed to view this application")
    
    return application


async def set_application_status(
    db: AsyncSession,
    actor: User,
    application_id: UUID,
    status: str
) -> Application:
    """
    Change an application's status.
    
    Raises:
        NotFound: Application doesn't exist
        Forbidden: Actor doesn't own the job (status left unchanged)
        ValidationError: status is not one of the four known values
    """
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.job))
        .where(Application.id == application_id)
    )
    application = result.scalar_one_or_none()
    
    if not application:
        raise NotFound("Application not found")
    
    if not authorization.can_update_application_status(actor, application, application.job):
        logger.warning(f"User {actor.id} denied status change on application {application_id}")
        raise Forbidden("Not authorized to update this application")
    
    new_status = parse_status(status)
    
    previous = application.status
    application.status = new_status.value
    await db.commit()
    await db.refresh(application)
    
    log_data = {
        "application_id": str(application_id),
        "from_status": previous,
        "to_status": new_status.value,
        "employer_id": str(actor.id),
    }
    logger.info(f"Application status change: {previous} → {new_status.value}", extra=log_data)
    
    return application
