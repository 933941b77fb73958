"""
Tests for the AI job description helper.

The OpenAI client is replaced with a fake through dependency_overrides,
so no request ever leaves the process.
"""
from types import SimpleNamespace

import httpx
import pytest
from httpx import AsyncClient
from openai import APIConnectionError, APIStatusError

from jobportal.api.ai import get_ai_client
from jobportal.main import app as fastapi_app
from jobportal.services.job_description import (
    DEFAULT_REQUIREMENTS,
    build_prompt,
    parse_job_sections,
)

OPENAI_URL = "https://api.openai.com/v1/chat/completions"

MARKED_TEXT = (
    "**SECTION 1: JOB DESCRIPTION**\n"
    "We build payment APIs.\n\n"
    "**SECTION 2: REQUIREMENTS**\n"
    "- 5 years Python\n"
    "- Meets the security requirements of PCI"
)


class FakeCompletions:
    """Stands in for client.chat.completions."""
    
    def __init__(self, content: str = MARKED_TEXT, error: Exception = None):
        self.content = content
        self.error = error
        self.calls = []
    
    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))],
            usage=SimpleNamespace(total_tokens=321),
            model="gpt-4o-mini",
        )


def use_fake_client(completions: FakeCompletions) -> None:
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    fastapi_app.dependency_overrides[get_ai_client] = lambda: client


def status_error(status_code: int, code: str) -> APIStatusError:
    response = httpx.Response(status_code, request=httpx.Request("POST", OPENAI_URL))
    return APIStatusError("provider error", response=response, body={"code": code})


# ============================================================
# SECTION PARSING
# ============================================================

def test_parse_section_markers():
    sections = parse_job_sections(MARKED_TEXT)
    
    assert sections["description"] == "We build payment APIs."
    assert sections["requirements"] == "- 5 years Python\n- Meets the security requirements of PCI"


def test_parse_keeps_later_requirement_labels():
    """Only the first marker splits; later labels stay in the requirements text."""
    text = "We are hiring.\n\nRequirements:\n- Python\n\nNice to have requirements:\n- Go"
    
    sections = parse_job_sections(text)
    
    assert sections["description"] == "We are hiring."
    assert sections["requirements"] == "- Python\n\nNice to have requirements:\n- Go"


def test_parse_markdown_heading():
    text = "About the role\nGreat team.\n\n## Requirements\n- Python\n- SQL"
    
    sections = parse_job_sections(text)
    
    assert sections["description"] == "About the role\nGreat team."
    assert sections["requirements"] == "- Python\n- SQL"


def test_parse_plain_label():
    sections = parse_job_sections("We are hiring.\n\nRequirements:\n- Python")
    
    assert sections["description"] == "We are hiring."
    assert sections["requirements"] == "- Python"


def test_parse_long_unmarked_text_splits_after_midpoint():
    paragraphs = [f"Paragraph {i} " + "x" * 80 for i in range(8)]
    text = "\n\n".join(paragraphs)
    
    sections = parse_job_sections(text)
    
    assert sections["requirements"] != DEFAULT_REQUIREMENTS
    assert sections["description"] + "\n\n" + sections["requirements"] == text
    assert len(sections["description"]) >= len(text) // 2


def test_parse_short_unmarked_text_passthrough():
    sections = parse_job_sections("Just a short blurb.")
    
    assert sections == {
        "description": "Just a short blurb.",
        "requirements": DEFAULT_REQUIREMENTS,
    }


def test_build_prompt_skips_missing_fields():
    prompt = build_prompt("Data Engineer", category="Engineering")
    
    assert "Job Title: Data Engineer" in prompt
    assert "Category: Engineering" in prompt
    assert "Location:" not in prompt
    assert "Job Type:" not in prompt


# ============================================================
# ENDPOINT
# ============================================================

@pytest.mark.asyncio
async def test_generate_job_description(async_client: AsyncClient, employer_headers: dict):
    completions = FakeCompletions()
    use_fake_client(completions)
    
    response = await async_client.post(
        "/api/ai/generate-job-description",
        json={"job_title": "Backend Engineer", "location": "Berlin"},
        headers=employer_headers
    )
    
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["data"]["description"] == "We build payment APIs."
    assert data["data"]["full_text"] == MARKED_TEXT
    assert data["metadata"] == {"model": "gpt-4o-mini", "tokens_used": 321, "job_title": "Backend Engineer"}
    
    # Exactly one provider call, no retries
    assert len(completions.calls) == 1
    assert "Location: Berlin" in completions.calls[0]["messages"][1]["content"]


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"job_title": ""}, {"job_title": "   "}])
async def test_generate_requires_job_title(async_client: AsyncClient, employer_headers: dict, payload: dict):
    completions = FakeCompletions()
    use_fake_client(completions)
    
    response = await async_client.post("/api/ai/generate-job-description", json=payload, headers=employer_headers)
    
    assert response.status_code == 400
    assert response.json()["detail"] == "Job title is required"
    assert completions.calls == []


@pytest.mark.asyncio
async def test_generate_not_configured(async_client: AsyncClient, employer_headers: dict):
    """Without lifespan startup there is no client on app.state."""
    response = await async_client.post(
        "/api/ai/generate-job-description",
        json={"job_title": "Backend Engineer"},
        headers=employer_headers
    )
    
    assert response.status_code == 503


@pytest.mark.asyncio
async def test_generate_requires_token(async_client: AsyncClient):
    use_fake_client(FakeCompletions())
    
    response = await async_client.post("/api/ai/generate-job-description", json={"job_title": "Backend Engineer"})
    
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code,code,expected_status,expected_detail", [
    (429, "insufficient_quota", 402, "OpenAI API quota exceeded. Please check your billing."),
    (401, "invalid_api_key", 401, "Invalid OpenAI API key configuration."),
    (429, "rate_limit_exceeded", 429, "Rate limit exceeded. Please try again in a moment."),
])
async def test_generate_maps_provider_errors(
    async_client: AsyncClient,
    jobseeker_headers: dict,
    status_code: int,
    code: str,
    expected_status: int,
    expected_detail: str
):
    completions = FakeCompletions(error=status_error(status_code, code))
    use_fake_client(completions)
    
    response = await async_client.post(
        "/api/ai/generate-job-description",
        json={"job_title": "Backend Engineer"},
        headers=jobseeker_headers
    )
    
    assert response.status_code == expected_status
    assert response.json()["detail"] == expected_detail
    assert len(completions.calls) == 1


@pytest.mark.asyncio
async def test_generate_unknown_provider_error(async_client: AsyncClient, employer_headers: dict):
    use_fake_client(FakeCompletions(error=APIConnectionError(request=httpx.Request("POST", OPENAI_URL))))
    
    response = await async_client.post(
        "/api/ai/generate-job-description",
        json={"job_title": "Backend Engineer"},
        headers=employer_headers
    )
    
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to generate job description. Please try again."
