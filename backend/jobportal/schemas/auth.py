"""Authentication-related Pydantic schemas."""
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from jobportal.models.user import UserRole


class RegisterRequest(BaseModel):
    """Request to create a new account."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)  # bcrypt limit
    role: UserRole = UserRole.JOBSEEKER
    avatar: Optional[str] = None


class LoginRequest(BaseModel):
    """Request to log in with email and password."""
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    """Response after successful registration or login."""
    access_token: str
    token_type: str = "bearer"
    user_id: UUID
    name: str
    email: str
    role: str
    avatar: Optional[str] = None
    resume: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    company_logo: Optional[str] = None
