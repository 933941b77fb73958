"""
Pytest fixtures for testing.
"""
import pytest
import pytest_asyncio
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Import database module BEFORE app to allow override
import jobportal.database
from jobportal.database import Base
# Import ALL models so Base.metadata knows about all tables
from jobportal.models.user import User, UserRole
from jobportal.models.job import Job
from jobportal.models.application import Application
from jobportal.models.saved_job import SavedJob
from jobportal.security import create_access_token, get_password_hash

# Now import app (after we can override database)
from jobportal.main import app as fastapi_app


# Test database URL (use in-memory SQLite for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "password123"
# bcrypt is slow on purpose; hash once for every fixture user
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database for each test.
    Ensures cleanup happens even if test fails.
    """
    # StaticPool keeps one connection so every session sees the same in-memory DB
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    
    # Create all tables FIRST
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    # THEN replace the app's engine and sessionmaker
    # This ensures get_db() uses sessions connected to DB with tables
    original_engine = jobportal.database.engine
    original_sessionmaker = jobportal.database.AsyncSessionLocal
    
    jobportal.database.engine = test_engine
    jobportal.database.AsyncSessionLocal = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    
    # Create session for direct test use
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    
    session = async_session()
    
    try:
        yield session
    finally:
        try:
            await session.close()
        except Exception as e:
            print(f"Warning: Failed to close session: {e}")
        
        try:
            async with test_engine.begin() as conn:
                await conn.run_sync(Base.metadata.drop_all)
        except Exception as e:
            print(f"Warning: Failed to drop tables: {e}")
        
        try:
            await test_engine.dispose()
        except Exception as e:
            print(f"Warning: Failed to dispose engine: {e}")
        
        # Restore original engine
        jobportal.database.engine = original_engine
        jobportal.database.AsyncSessionLocal = original_sessionmaker


@pytest_asyncio.fixture
async def async_client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async HTTP client for testing endpoints.
    
    The db fixture already replaced jobportal.database.engine with the test
    engine, so all endpoints will automatically use the test database.
    """
    transport = ASGITransport(app=fastapi_app)
    
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=True  # Follow 307 redirects for trailing slashes
    ) as client:
        yield client
    
    fastapi_app.dependency_overrides.clear()


async def _create_user(db: AsyncSession, **fields) -> User:
    user = User(hashed_password=TEST_PASSWORD_HASH, **fields)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    """Bearer header for a user."""
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest_asyncio.fixture
async def employer(db: AsyncSession) -> User:
    return await _create_user(
        db,
        name="Erin Employer",
        email="employer@example.com",
        role=UserRole.EMPLOYER,
        company_name="Acme Corp",
        company_logo="https://cdn.example.com/acme.png",
    )


@pytest_asyncio.fixture
async def other_employer(db: AsyncSession) -> User:
    return await _create_user(
        db,
        name="Oscar Other",
        email="other-employer@example.com",
        role=UserRole.EMPLOYER,
        company_name="Globex",
    )


@pytest_asyncio.fixture
async def jobseeker(db: AsyncSession) -> User:
    return await _create_user(
        db,
        name="Alex Applicant",
        email="seeker@example.com",
        role=UserRole.JOBSEEKER,
        resume="https://cdn.example.com/alex.pdf",
    )


@pytest_asyncio.fixture
async def other_jobseeker(db: AsyncSession) -> User:
    return await _create_user(
        db,
        name="Blair Bystander",
        email="other-seeker@example.com",
        role=UserRole.JOBSEEKER,
    )


@pytest.fixture
def employer_headers(employer: User) -> dict:
    return auth_headers(employer)


@pytest.fixture
def other_employer_headers(other_employer: User) -> dict:
    return auth_headers(other_employer)


@pytest.fixture
def jobseeker_headers(jobseeker: User) -> dict:
    return auth_headers(jobseeker)


@pytest.fixture
def other_jobseeker_headers(other_jobseeker: User) -> dict:
    return auth_headers(other_jobseeker)


@pytest_asyncio.fixture
async def job(db: AsyncSession, employer: User) -> Job:
    """An open job posted by employer."""
    job = Job(
        company_id=employer.id,
        title="Senior Python Engineer",
        description="Build APIs",
        requirements="5 years Python",
        location="Berlin",
        category="Engineering",
        job_type="Full-Time",
        salary_min=80000,
        salary_max=120000,
    )
    db.add(job)
    await db.commit()
    await db.refresh(job)
    return job


@pytest_asyncio.fixture
async def closed_job(db: AsyncSession, employer: User) -> Job:
    job = Job(
        company_id=employer.id,
        title="Legacy COBOL Maintainer",
        location="Remote",
        category="Engineering",
        job_type="Contract",
        salary_min=50000,
        salary_max=60000,
        is_closed=True,
    )
    db.add(job)
    await db.commit()
    await db.refresh(job)
    return job
