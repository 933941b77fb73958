"""Database models"""
from jobportal.models.user import User, UserRole
from jobportal.models.job import Job
from jobportal.models.application import Application, ApplicationStatus
from jobportal.models.saved_job import SavedJob

__all__ = [
    "User",
    "UserRole",
    "Job",
    "Application",
    "ApplicationStatus",
    "SavedJob",
]
