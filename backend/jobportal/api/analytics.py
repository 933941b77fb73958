"""Employer dashboard endpoint."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.database import get_db
from jobportal.models.user import User
from jobportal.api.auth import get_current_user
from jobportal.schemas.analytics import OverviewResponse
from jobportal.services.analytics import employer_overview

router = APIRouter()


@router.get("/overview", response_model=OverviewResponse)
async def overview(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Job and application counts plus recent activity for the calling employer."""
    return await employer_overview(db, current_user)
