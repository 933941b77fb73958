"""
AI helper endpoints.

The OpenAI client is created once at startup (see main.lifespan) and
handed to requests through get_ai_client.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from openai import AsyncOpenAI

from jobportal.models.user import User
from jobportal.api.auth import get_current_user
from jobportal.schemas.ai import GenerateJobDescriptionRequest, GenerateJobDescriptionResponse
from jobportal.services.job_description import generate_job_description

router = APIRouter()


def get_ai_client(request: Request) -> Optional[AsyncOpenAI]:
    """Dependency returning the shared client (None when AI is not configured)."""
    return getattr(request.app.state, "ai_client", None)


@router.post("/generate-job-description", response_model=GenerateJobDescriptionResponse)
async def generate(
    body: GenerateJobDescriptionRequest,
    current_user: User = Depends(get_current_user),
    client: Optional[AsyncOpenAI] = Depends(get_ai_client)
):
    """
    Draft a job description and requirements for a job title.
    
    Returns:
        200: Generated sections
        400: Missing job title
        401/402/429: Provider rejected the key, quota exhausted, rate limited
        503: AI not configured
    """
    return await generate_job_description(
        client,
        job_title=body.job_title,
        category=body.category,
        job_type=body.job_type,
        location=body.location,
    )
