"""
Profile management endpoints.

Provides endpoints for users to manage their own profile:
- Personal details, avatar and resume URLs
- Company details (employers only)
- Public profile lookup
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.database import get_db
from jobportal.errors import JobPortalError
from jobportal.models.user import User
from jobportal.api.auth import get_current_user
from jobportal.schemas.profile import (
    ProfileUpdateRequest,
    ProfileResponse,
    PublicProfileResponse
)
from jobportal.services.profile import (
    build_profile_response,
    build_public_profile,
    update_user_profile,
    remove_resume,
    get_user
)

logger = logging.getLogger(__name__)
router = APIRouter()


# Endpoints
@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    profile_data: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update the caller's profile (partial update)."""
    try:
        update_data = profile_data.model_dump(exclude_unset=True)
        user = await update_user_profile(current_user, update_data, db)
        logger.info(f"Profile updated for user {user.email}")
        return build_profile_response(user)
    except JobPortalError:
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"Error updating profile: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update profile")


@router.delete("/resume", response_model=ProfileResponse)
async def delete_resume(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Remove the resume link from the caller's profile.
    
    Returns:
        ProfileResponse: Updated profile with resume removed
        400: If no resume is set
    """
    user = await remove_resume(current_user, db)
    logger.info(f"Resume deleted for user {user.email}")
    return build_profile_response(user)


@router.get("/{user_id}", response_model=PublicProfileResponse)
async def get_public_profile(
    user_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Public profile of any user (no email, no credentials)."""
    user = await get_user(db, user_id)
    return build_public_profile(user)
