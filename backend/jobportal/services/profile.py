"""Profile management business logic."""
from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.errors import ValidationError, NotFound
from jobportal.models.user import User
from jobportal.schemas.profile import ProfileResponse, PublicProfileResponse

COMPANY_FIELDS = ("company_name", "company_description", "company_logo")


def build_profile_response(user: User) -> ProfileResponse:
    """Build ProfileResponse from User model."""
    return ProfileResponse(
        user_id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        avatar=user.avatar,
        resume=user.resume,
        company_name=user.company_name,
        company_description=user.company_description,
        company_logo=user.company_logo,
        created_at=user.created_at,
        updated_at=user.updated_at
    )


def build_public_profile(user: User) -> PublicProfileResponse:
    return PublicProfileResponse(
        user_id=user.id,
        name=user.name,
        role=user.role.value,
        avatar=user.avatar,
        resume=user.resume,
        company_name=user.company_name,
        company_description=user.company_description,
        company_logo=user.company_logo
    )


async def update_user_profile(user: User, update_data: dict, db: AsyncSession) -> User:
    """
    Update profile fields on the caller's own account.
    
    Company fields only apply to employers and are dropped for job
    seekers. Role is not part of the update schema and never changes.
    """
    for field, value in update_data.items():
        if field in COMPANY_FIELDS and not user.is_employer():
            continue
        if field == "name" and not value:
            raise ValidationError("Name cannot be empty")
        setattr(user, field, value)
    
    user.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(user)
    return user


async def remove_resume(user: User, db: AsyncSession) -> User:
    """Clear the resume URL from the profile."""
    if not user.resume:
        raise ValidationError("No resume to delete")
    
    user.resume = None
    user.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(user)
    return user


async def get_user(db: AsyncSession, user_id: UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise NotFound("User not found")
    return user
