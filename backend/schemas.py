"""
Pydantic Schemas for API Request/Response Models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from resume_fit.models import ComparisonResult, FactsModel, JobFacts, ResumeFacts


class JobSubmitRequest(FactsModel):
    """Request body for the job submit endpoint."""

    job_url: Optional[str] = Field(None, description="Job posting URL to scrape")
    job_text: Optional[str] = Field(None, description="Pasted job description text")


class CompareRequest(FactsModel):
    """Request body for the analyze endpoints."""

    resume: ResumeFacts = Field(..., description="Parsed resume facts")
    job: JobFacts = Field(..., description="Extracted job facts")


class HealthResponse(BaseModel):
    """Response from the health endpoint."""

    status: str
    timestamp: datetime


class ResumeUploadResponse(FactsModel):
    """Response from the resume upload endpoint."""

    success: bool = True
    filename: str
    parsed_data: ResumeFacts


class JobSubmitResponse(FactsModel):
    """Response from the job submit endpoint."""

    success: bool = True
    extracted: JobFacts


class CompareResponse(FactsModel):
    """Response from the compare endpoint."""

    success: bool = True
    comparison: ComparisonResult


class RewriteResponse(FactsModel):
    """Response from the rewrite endpoint."""

    success: bool = True
    comparison: ComparisonResult
    rewritten_resume: str = Field(..., description="Rewritten resume in Markdown")


class SuggestionsResponse(FactsModel):
    """Response from the AI suggestions endpoint."""

    success: bool = True
    suggestions: list[str]


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    detail: Optional[str] = None
