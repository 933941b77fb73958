"""
Authorization gate.

Pure predicates deciding whether an identity may act on a job or an
application. They never touch the database and never raise: a missing
actor is simply not allowed. Callers must turn a False result into a
Forbidden error before doing any work.
"""
from typing import Optional

from jobportal.models.application import Application
from jobportal.models.job import Job
from jobportal.models.user import User


def _same_id(left, right) -> bool:
    # GUID columns come back as UUID, freshly built objects may hold str
    return left is not None and right is not None and str(left) == str(right)


def is_employer(actor: Optional[User]) -> bool:
    return actor is not None and actor.is_employer()


def is_jobseeker(actor: Optional[User]) -> bool:
    return actor is not None and actor.is_jobseeker()


def owns_job(actor: Optional[User], job: Optional[Job]) -> bool:
    """True when actor is the employer that posted job."""
    return is_employer(actor) and job is not None and _same_id(job.company_id, actor.id)


def can_post_job(actor: Optional[User]) -> bool:
    return is_employer(actor)


def can_mutate_job(actor: Optional[User], job: Optional[Job]) -> bool:
    """Update, delete and open/close are reserved to the owning employer."""
    return owns_job(actor, job)


def can_apply(actor: Optional[User], job: Optional[Job], already_applied: bool) -> bool:
    """
    A job seeker may apply once to an open job.
    
    Args:
        actor: The would-be applicant
        job: Target job
        already_applied: Whether an application for (job, actor) exists
    """
    if not is_jobseeker(actor) or job is None:
        return False
    return not job.is_closed and not already_applied


def can_view_application(
    actor: Optional[User],
    application: Optional[Application],
    job: Optional[Job]
) -> bool:
    """Only the applicant and the employer owning the job may read an application."""
    if actor is None or application is None:
        return False
    if _same_id(application.applicant_id, actor.id):
        return True
    return owns_job(actor, job)


def can_update_application_status(
    actor: Optional[User],
    application: Optional[Application],
    job: Optional[Job]
) -> bool:
    if application is None or job is None:
        return False
    if not _same_id(application.job_id, job.id):
        return False
    return owns_job(actor, job)
