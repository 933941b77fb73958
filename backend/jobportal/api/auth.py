"""
Authentication endpoints and dependencies.

Users register with email + password and receive a JWT, sent back on
every request as "Authorization: Bearer <token>".

Security features:
- Passwords stored as bcrypt hashes only
- Tokens signed with the configured secret and expire after
  ACCESS_TOKEN_EXPIRE_DAYS
- Role chosen at registration and never changed afterwards
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from jobportal.database import get_db
from jobportal.errors import Unauthorized, Conflict
from jobportal.models.user import User
from jobportal.schemas.auth import RegisterRequest, LoginRequest, AuthResponse
from jobportal.schemas.profile import ProfileResponse
from jobportal.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from jobportal.services.profile import build_profile_response

logger = logging.getLogger(__name__)
router = APIRouter()

# auto_error=False so a missing header becomes our own 401, not FastAPI's
bearer_scheme = HTTPBearer(auto_error=False)


def build_auth_response(user: User) -> AuthResponse:
    """Build AuthResponse (user + fresh token) from User model."""
    return AuthResponse(
        access_token=create_access_token(str(user.id)),
        user_id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        avatar=user.avatar,
        resume=user.resume,
        company_name=user.company_name,
        company_description=user.company_description,
        company_logo=user.company_logo
    )


async def _user_from_token(token: str, db: AsyncSession) -> Optional[User]:
    subject = decode_access_token(token)
    if subject is None:
        return None
    
    try:
        user_id = UUID(subject)
    except ValueError:
        return None
    
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


# Authentication Dependencies
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Dependency to get the authenticated user from the bearer token.
    
    Raises:
        Unauthorized: No token, invalid/expired token, or unknown user
    """
    if credentials is None:
        raise Unauthorized("Not authorized, no token")
    
    user = await _user_from_token(credentials.credentials, db)
    if not user:
        raise Unauthorized("Not authorized, invalid token")
    
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """
    Dependency for public endpoints that personalize results.
    
    Anonymous callers (and stale tokens) get None instead of a 401.
    """
    if credentials is None:
        return None
    
    user = await _user_from_token(credentials.credentials, db)
    if not user:
        logger.debug("Ignoring invalid bearer token on public endpoint")
    return user


# Endpoints
@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create an account and return it with an access token.
    
    Returns:
        201: Account created
        409: Email already registered
    """
    email = request.email.lower()
    
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise Conflict("User already exists")
    
    try:
        user = User(
            name=request.name,
            email=email,
            hashed_password=get_password_hash(request.password),
            role=request.role,
            avatar=request.avatar
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
    except IntegrityError:
        await db.rollback()
        raise Conflict("User already exists")
    except Exception as e:
        await db.rollback()
        logger.error(f"Error registering user: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Registration failed. Please try again."
        )
    
    logger.info(f"Registered {user.role.value} {user.email}")
    return build_auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Exchange email + password for an access token.
    
    Returns:
        200: Credentials valid
        401: Unknown email or wrong password (same message for both)
    """
    result = await db.execute(select(User).where(User.email == request.email.lower()))
    user = result.scalar_one_or_none()
    
    if not user or not verify_password(request.password, user.hashed_password):
        logger.warning(f"Failed login attempt for {request.email}")
        raise Unauthorized("Invalid email or password")
    
    logger.info(f"Successful login: {user.email}")
    return build_auth_response(user)


@router.get("/me", response_model=ProfileResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's profile."""
    return build_profile_response(current_user)
