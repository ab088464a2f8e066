"""
Business Logic Services for the Resume Fit API.

Services are stateless: every call runs one independent pipeline and
returns plain records. Blocking work is moved off the event loop with
``asyncio.to_thread`` in the async variants.
"""

import asyncio
import logging
import time
from typing import Optional

from resume_fit.config import Settings, get_settings
from resume_fit.entity_extraction import EntityExtractor
from resume_fit.exceptions import ConfigurationError, DecodeFailure
from resume_fit.job_scraper import JobPageFetcher
from resume_fit.llm_client import LLMClient
from resume_fit.matcher import compare_resume_to_job
from resume_fit.models import ComparisonResult, JobFacts, ResumeFacts, RewriteResult
from resume_fit.requirement_extractor import extract_job_facts
from resume_fit.resume_parser import parse_resume
from resume_fit.resume_rewriter import ResumeRewriter

# * Module logger
logger = logging.getLogger("resume_fit.services")


class LLMProvider:
    """Lazily builds the LLM client shared by the LLM-backed collaborators."""

    def __init__(self, settings: Settings, client: Optional[LLMClient] = None):
        self.settings = settings
        self._client = client

    @property
    def available(self) -> bool:
        return self._client is not None or bool(self.settings.llm.api_key)

    @property
    def client(self) -> LLMClient:
        """Get the LLM client, creating it on first use."""
        if self._client is None:
            self._client = LLMClient(self.settings.llm)
        return self._client


class ResumeService:
    """Service for parsing uploaded resumes."""

    def __init__(self, settings: Settings, llm: LLMProvider):
        self.settings = settings
        self.llm = llm

    def _entity_extractor(self, use_fallback: bool) -> Optional[EntityExtractor]:
        if not (use_fallback and self.settings.entity_fallback):
            return None

        if not self.llm.available:
            logger.info("Entity extraction fallback disabled: no LLM API key configured")
            return None

        return EntityExtractor(self.llm.client)

    def parse(self, data: bytes, media_type: str, use_fallback: bool = True) -> ResumeFacts:
        """
        Parse a resume document into ResumeFacts.

        Args:
            data: Document contents.
            media_type: PDF or DOCX media type.
            use_fallback: Allow the LLM entity fallback when no skills are found.

        Returns:
            ResumeFacts for the document.
        """
        if len(data) > self.settings.max_upload_bytes:
            raise DecodeFailure(
                f"File is too large ({len(data)} bytes, limit {self.settings.max_upload_bytes})"
            )

        start = time.perf_counter()
        logger.info("Resume parse start media_type=%s bytes=%s", media_type, len(data))

        facts = parse_resume(data, media_type, self._entity_extractor(use_fallback))

        logger.info(
            "Resume parse complete skills=%s duration=%.3fs",
            len(facts.skills),
            time.perf_counter() - start,
        )
        return facts

    async def parse_async(self, data: bytes, media_type: str, use_fallback: bool = True) -> ResumeFacts:
        """Parse a resume document without blocking the event loop."""
        return await asyncio.to_thread(self.parse, data, media_type, use_fallback)


class JobService:
    """Service for turning job URLs or pasted text into JobFacts."""

    def __init__(self, settings: Settings, fetcher: Optional[JobPageFetcher] = None):
        self.settings = settings
        self.fetcher = fetcher or JobPageFetcher(settings.scraper)

    def submit(self, job_url: Optional[str] = None, job_text: Optional[str] = None) -> JobFacts:
        """
        Extract job facts from a URL or from pasted text.

        The URL is used when both are given.

        Raises:
            ValueError: If neither a URL nor text is given.
            JobScrapeError: If scraping the URL fails.
        """
        if job_url:
            start = time.perf_counter()
            raw_text = self.fetcher.fetch(job_url)
            logger.info(
                "Job scraped url=%s length=%s duration=%.3fs",
                job_url,
                len(raw_text),
                time.perf_counter() - start,
            )
            return extract_job_facts(raw_text, source_url=job_url)

        if job_text and job_text.strip():
            return extract_job_facts(job_text)

        raise ValueError("Either job_url or job_text is required")

    async def submit_async(
        self,
        job_url: Optional[str] = None,
        job_text: Optional[str] = None,
    ) -> JobFacts:
        """Extract job facts without blocking the event loop."""
        return await asyncio.to_thread(self.submit, job_url, job_text)


class AnalysisService:
    """Service for scoring resumes against jobs and rewriting them."""

    def __init__(self, llm: LLMProvider):
        self.llm = llm
        self._rewriter: Optional[ResumeRewriter] = None

    @property
    def rewriter(self) -> ResumeRewriter:
        """Lazy-load the resume rewriter."""
        if self._rewriter is None:
            if not self.llm.available:
                raise ConfigurationError(
                    "Resume rewriting needs an LLM API key. Set OPENROUTER_API_KEY."
                )
            self._rewriter = ResumeRewriter(self.llm.client)
        return self._rewriter

    def compare(self, resume: ResumeFacts, job: JobFacts) -> ComparisonResult:
        """Score a resume against a job."""
        comparison = compare_resume_to_job(resume, job)
        logger.info(
            "Comparison complete match=%s%% matched_skills=%s missing_skills=%s",
            comparison.match_percentage,
            len(comparison.matched_skills),
            len(comparison.missing_skills),
        )
        return comparison

    def rewrite(self, resume: ResumeFacts, job: JobFacts) -> RewriteResult:
        """Score a resume against a job, then rewrite it to close the gaps."""
        start = time.perf_counter()
        comparison = self.compare(resume, job)
        result = self.rewriter.rewrite(resume.raw_text, job.raw_text, comparison)
        logger.info("Rewrite complete duration=%.3fs", time.perf_counter() - start)
        return result

    def suggest(self, resume: ResumeFacts, job: JobFacts) -> list[str]:
        """Get short AI suggestions for a resume and job."""
        return self.rewriter.quick_suggestions(resume.raw_text, job.raw_text)

    async def rewrite_async(self, resume: ResumeFacts, job: JobFacts) -> RewriteResult:
        """Rewrite a resume without blocking the event loop."""
        return await asyncio.to_thread(self.rewrite, resume, job)

    async def suggest_async(self, resume: ResumeFacts, job: JobFacts) -> list[str]:
        """Get AI suggestions without blocking the event loop."""
        return await asyncio.to_thread(self.suggest, resume, job)


class Services:
    """The service set used by the API and the CLI."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.llm = LLMProvider(self.settings)
        self.resumes = ResumeService(self.settings, self.llm)
        self.jobs = JobService(self.settings)
        self.analysis = AnalysisService(self.llm)
