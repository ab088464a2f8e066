"""
FastAPI Backend for Resume Fit.

Provides REST API endpoints for:
- Uploading and parsing resumes
- Submitting job postings (URL or pasted text)
- Comparing resumes against jobs
- Rewriting resumes with the language model
"""

from datetime import datetime, timezone
from functools import lru_cache

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.schemas import (
    CompareRequest,
    CompareResponse,
    ErrorResponse,
    HealthResponse,
    JobSubmitRequest,
    JobSubmitResponse,
    ResumeUploadResponse,
    RewriteResponse,
    SuggestionsResponse,
)
from backend.services import Services
from resume_fit.data_extraction import SUPPORTED_MEDIA_TYPES
from resume_fit.exceptions import (
    DocumentError,
    JobScrapeError,
    LLMError,
    NavigationTimeout,
    ResumeFitError,
)
from resume_fit.logging_config import configure_logging

# * Load environment variables
load_dotenv()

# * Create FastAPI app
app = FastAPI(
    title="Resume Fit API",
    description="API for parsing resumes, extracting job requirements and scoring matches",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_services() -> Services:
    """Build the service set once per process."""
    services = Services()
    configure_logging(services.settings.log_level)
    return services


def _status_for(error: ResumeFitError) -> int:
    if isinstance(error, DocumentError):
        return 400
    if isinstance(error, NavigationTimeout):
        return 504
    if isinstance(error, JobScrapeError):
        return 422
    if isinstance(error, LLMError):
        return 502
    return 500


@app.exception_handler(ResumeFitError)
async def resume_fit_error_handler(request: Request, exc: ResumeFitError):
    """Map pipeline errors to a single descriptive message."""
    return JSONResponse(
        status_code=_status_for(exc),
        content=ErrorResponse(error=exc.message, detail=exc.hint).model_dump(),
    )


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))


@app.post("/api/resume/upload", response_model=ResumeUploadResponse)
async def upload_resume(
    file: UploadFile = File(...),
    services: Services = Depends(get_services),
):
    """
    Upload a PDF or DOCX resume and return the parsed facts.
    """
    if file.content_type not in SUPPORTED_MEDIA_TYPES:
        raise HTTPException(status_code=400, detail="Only PDF and DOCX files are allowed")

    data = await file.read()
    parsed = await services.resumes.parse_async(data, file.content_type)

    return ResumeUploadResponse(filename=file.filename or "resume", parsed_data=parsed)


@app.post("/api/job/submit", response_model=JobSubmitResponse)
async def submit_job(
    request: JobSubmitRequest,
    services: Services = Depends(get_services),
):
    """
    Submit a job posting by URL or pasted text and return the extracted facts.
    """
    if not request.job_url and not (request.job_text or "").strip():
        raise HTTPException(status_code=400, detail="Either jobUrl or jobText is required")

    extracted = await services.jobs.submit_async(request.job_url, request.job_text)
    return JobSubmitResponse(extracted=extracted)


@app.post("/api/analyze/compare", response_model=CompareResponse)
async def compare(
    request: CompareRequest,
    services: Services = Depends(get_services),
):
    """
    Score a resume against a job posting.
    """
    comparison = services.analysis.compare(request.resume, request.job)
    return CompareResponse(comparison=comparison)


@app.post("/api/analyze/rewrite", response_model=RewriteResponse)
async def rewrite(
    request: CompareRequest,
    services: Services = Depends(get_services),
):
    """
    Score a resume against a job posting and rewrite it with the language model.
    """
    result = await services.analysis.rewrite_async(request.resume, request.job)
    return RewriteResponse(
        comparison=result.comparison,
        rewritten_resume=result.rewritten_resume,
    )


@app.post("/api/analyze/suggestions", response_model=SuggestionsResponse)
async def suggestions(
    request: CompareRequest,
    services: Services = Depends(get_services),
):
    """
    Get short AI improvement suggestions for a resume and job posting.
    """
    items = await services.analysis.suggest_async(request.resume, request.job)
    return SuggestionsResponse(suggestions=items)


# * Run with: uvicorn backend.api:app --reload --port 8000
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
