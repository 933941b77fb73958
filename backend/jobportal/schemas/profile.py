"""Profile-related Pydantic schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel


class ProfileUpdateRequest(BaseModel):
    """Request body for updating the caller's profile (partial update)."""
    name: Optional[str] = None
    avatar: Optional[str] = None
    resume: Optional[str] = None
    
    # Ignored for job seekers
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    company_logo: Optional[str] = None


class ProfileResponse(BaseModel):
    """Response with the caller's own profile."""
    user_id: UUID
    name: str
    email: str
    role: str
    avatar: Optional[str] = None
    resume: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    company_logo: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PublicProfileResponse(BaseModel):
    """Profile visible to anyone (no email, no credentials)."""
    user_id: UUID
    name: str
    role: str
    avatar: Optional[str] = None
    resume: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    company_logo: Optional[str] = None
