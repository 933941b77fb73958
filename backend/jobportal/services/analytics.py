"""Employer dashboard rollup, recomputed from jobs and applications on every call."""
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobportal.errors import Forbidden
from jobportal.models.application import Application, ApplicationStatus
from jobportal.models.job import Job
from jobportal.models.user import User
from jobportal.schemas.analytics import OverviewCounts, OverviewData, OverviewResponse
from jobportal.schemas.application import ApplicationDetailResponse
from jobportal.schemas.job import JobResponse
from jobportal.services import authorization

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


async def employer_overview(db: AsyncSession, actor: User, recent_limit: int = RECENT_LIMIT) -> OverviewResponse:
    """
    Counts and recent activity across the employer's own jobs.
    
    Returns:
        OverviewResponse with active/closed job counts, applications
        received, hires (Accepted), and the latest jobs/applications.
    """
    if not authorization.is_employer(actor):
        raise Forbidden("Only employers can view the dashboard")
    
    job_counts = await db.execute(
        select(Job.is_closed, func.count(Job.id))
        .where(Job.company_id == actor.id)
        .group_by(Job.is_closed)
    )
    by_closed = {bool(is_closed): count for is_closed, count in job_counts.all()}
    
    owned_job_ids = select(Job.id).where(Job.company_id == actor.id)
    
    application_counts = await db.execute(
        select(Application.status, func.count(Application.id))
        .where(Application.job_id.in_(owned_job_ids))
        .group_by(Application.status)
    )
    by_status = dict(application_counts.all())
    
    recent_jobs = await db.execute(
        select(Job)
        .where(Job.company_id == actor.id)
        .order_by(Job.created_at.desc())
        .limit(recent_limit)
    )
    
    recent_applications = await db.execute(
        select(Application)
        .options(selectinload(Application.job), selectinload(Application.applicant))
        .where(Application.job_id.in_(owned_job_ids))
        .order_by(Application.created_at.desc())
        .limit(recent_limit)
    )
    
    counts = OverviewCounts(
        total_active_jobs=by_closed.get(False, 0),
        total_closed_jobs=by_closed.get(True, 0),
        total_applications=sum(by_status.values()),
        total_hired=by_status.get(ApplicationStatus.ACCEPTED.value, 0),
    )
    logger.info(f"Dashboard overview for employer {actor.id}: {counts.model_dump()}")
    
    return OverviewResponse(
        counts=counts,
        data=OverviewData(
            recent_jobs=[JobResponse.model_validate(job) for job in recent_jobs.scalars().all()],
            recent_applications=[
                ApplicationDetailResponse.model_validate(app)
                for app in recent_applications.scalars().all()
            ],
        ),
    )
