"""AI job description schemas."""
from typing import Optional
from pydantic import BaseModel


class GenerateJobDescriptionRequest(BaseModel):
    job_title: str = ""  # validated by the service so a blank title gets a clear message
    category: Optional[str] = None
    job_type: Optional[str] = None
    location: Optional[str] = None


class GeneratedSections(BaseModel):
    description: str
    requirements: str
    full_text: str


class GenerationMetadata(BaseModel):
    model: str
    tokens_used: Optional[int] = None
    job_title: str


class GenerateJobDescriptionResponse(BaseModel):
    success: bool = True
    data: GeneratedSections
    metadata: GenerationMetadata
