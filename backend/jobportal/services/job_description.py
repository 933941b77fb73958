"""
AI job description helper.

Sends one chat-completion request to OpenAI and splits the answer into a
description and a requirements section. No retries: a failed call is
reported straight back to the caller.
"""
import logging
import re
from typing import Optional

from openai import AsyncOpenAI, APIError

from jobportal.config import settings
from jobportal.errors import ValidationError, UpstreamFailure
from jobportal.schemas.ai import (
    GenerateJobDescriptionResponse,
    GeneratedSections,
    GenerationMetadata,
)

logger = logging.getLogger(__name__)

DEFAULT_REQUIREMENTS = "Requirements will be discussed during the interview process."

# Tried in order; the first one that splits the text wins
SECTION_MARKERS = [
    re.compile(r"\*\*SECTION 2:|REQUIREMENTS?:", re.IGNORECASE),
    re.compile(r"## Requirements?", re.IGNORECASE),
    re.compile(r"Requirements?:", re.IGNORECASE),
    re.compile(r"\n\nRequirements?:", re.IGNORECASE),
]
# Leading section labels left over after the split
DESCRIPTION_LABEL = re.compile(
    r"^\s*(?:\*\*SECTION 1:\s*JOB DESCRIPTION:?\s*\*\*|\*\*SECTION 1:|JOB DESCRIPTION:?)", re.IGNORECASE
)
REQUIREMENTS_LABEL = re.compile(
    r"^\s*(?:\*\*SECTION 2:\s*REQUIREMENTS?:?\s*\*\*|\*\*SECTION 2:|REQUIREMENTS?:?\s*\**)", re.IGNORECASE
)

# Below this length an unmarked answer is returned as one block
MIDPOINT_SPLIT_MIN_LENGTH = 500

# Provider error code -> (HTTP status, message)
UPSTREAM_ERRORS = {
    "insufficient_quota": (402, "OpenAI API quota exceeded. Please check your billing."),
    "invalid_api_key": (401, "Invalid OpenAI API key configuration."),
    "rate_limit_exceeded": (429, "Rate limit exceeded. Please try again in a moment."),
}

SYSTEM_PROMPT = (
    "You are an experienced HR professional who writes clear, engaging job postings. "
    "Use a professional tone and bullet points."
)


def create_ai_client() -> Optional[AsyncOpenAI]:
    """
    Build the process-wide OpenAI client.
    
    Called once at startup; returns None when no API key is configured.
    """
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set, AI job descriptions are disabled")
        return None
    return AsyncOpenAI(api_key=settings.openai_api_key)


def build_prompt(
    job_title: str,
    category: Optional[str] = None,
    job_type: Optional[str] = None,
    location: Optional[str] = None
) -> str:
    lines = ["Write a job posting for the following position.", f"Job Title: {job_title}"]
    if category:
        lines.append(f"Category: {category}")
    if job_type:
        lines.append(f"Job Type: {job_type}")
    if location:
        lines.append(f"Location: {location}")
    lines.append(
        "Provide two sections. Start the first with '**SECTION 1: JOB DESCRIPTION**' "
        "(introduction, key responsibilities, why the role is exciting) and the second with "
        "'**SECTION 2: REQUIREMENTS**' (essential and preferred qualifications)."
    )
    return "\n".join(lines)


def parse_job_sections(text: str) -> dict:
    """
    Split generated text into description and requirements.
    
    Best-effort heuristic:
    1. Split on the first section marker that matches
    2. Strip leftover section labels
    3. Long unmarked text is cut at the first blank line after its middle
    4. Otherwise everything is the description and requirements get a
       default sentence
    """
    description = text
    requirements = ""
    
    for marker in SECTION_MARKERS:
        parts = marker.split(text, maxsplit=1)
        if len(parts) == 2:
            description = parts[0].strip()
            requirements = parts[1].strip()
            break
    
    description = DESCRIPTION_LABEL.sub("", description, count=1).strip()
    requirements = REQUIREMENTS_LABEL.sub("", requirements, count=1).strip()
    
    if not requirements and len(description) > MIDPOINT_SPLIT_MIN_LENGTH:
        mid_point = len(description) // 2
        split_point = description.find("\n\n", mid_point)
        if split_point > 0:
            requirements = description[split_point:].strip()
            description = description[:split_point].strip()
    
    return {
        "description": description or text,
        "requirements": requirements or DEFAULT_REQUIREMENTS,
    }


def map_upstream_error(error: APIError) -> UpstreamFailure:
    """Translate an OpenAI error into the status the client should see."""
    code = getattr(error, "code", None)
    if code in UPSTREAM_ERRORS:
        status_code, message = UPSTREAM_ERRORS[code]
        return UpstreamFailure(message, status_code=status_code)
    
    message = "Failed to generate job description. Please try again."
    if settings.debug:
        message = f"{message} ({error})"
    return UpstreamFailure(message, status_code=500)


async def generate_job_description(
    client: Optional[AsyncOpenAI],
    job_title: str,
    category: Optional[str] = None,
    job_type: Optional[str] = None,
    location: Optional[str] = None
) -> GenerateJobDescriptionResponse:
    """
    Ask the model for a job posting and return it split into sections.
    
    Raises:
        ValidationError: job_title is blank
        UpstreamFailure: AI disabled (503) or the provider call failed
    """
    if not job_title or not job_title.strip():
        raise ValidationError("Job title is required")
    
    if client is None:
        raise UpstreamFailure("AI job description generation is not configured", status_code=503)
    
    try:
        completion = await client.chat.completions.create(
            model=settings.openai_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(job_title, category, job_type, location)},
            ],
            max_tokens=settings.openai_max_tokens,
            temperature=settings.openai_temperature,
            presence_penalty=0.1,
            frequency_penalty=0.1,
        )
    except APIError as e:
        logger.error(f"AI generation failed for '{job_title}': {e}", exc_info=True)
        raise map_upstream_error(e)
    
    generated_text = completion.choices[0].message.content or ""
    sections = parse_job_sections(generated_text)
    tokens_used = completion.usage.total_tokens if completion.usage else None
    
    logger.info(f"AI generated job description for '{job_title}' ({tokens_used} tokens)")
    
    return GenerateJobDescriptionResponse(
        data=GeneratedSections(
            description=sections["description"],
            requirements=sections["requirements"],
            full_text=generated_text,
        ),
        metadata=GenerationMetadata(
            model=completion.model,
            tokens_used=tokens_used,
            job_title=job_title,
        ),
    )
