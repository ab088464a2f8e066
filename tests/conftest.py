"""Shared fixtures for the Resume Fit test suite."""

import pytest

from resume_fit.config import LLMSettings, ScraperSettings, Settings
from resume_fit.models import JobFacts, ResumeFacts
from tests.helpers import build_docx

SAMPLE_RESUME_LINES = [
    "Jane Doe",
    "jane.doe@example.com | 555-123-4567",
    "Skills",
    "Python, Django, PostgreSQL",
    "Docker",
    "Experience",
    "Senior Developer at Acme, 6 years building web services",
    "Education",
    "B.Sc. Computer Science",
]

SAMPLE_JOB_TEXT = """Senior Backend Engineer

Requirements:
- 5+ years experience building web services
- Strong Python and Django skills
- Experience with Docker and Kubernetes
About the company:
We build tools for recruiters."""


@pytest.fixture
def resume_text():
    """Normalized text of a small but complete resume."""
    return "\n".join(SAMPLE_RESUME_LINES)


@pytest.fixture
def resume_docx():
    """The sample resume as DOCX bytes."""
    return build_docx(SAMPLE_RESUME_LINES)


@pytest.fixture
def job_text():
    """Job posting text with a requirements block and years of experience."""
    return SAMPLE_JOB_TEXT


@pytest.fixture
def resume_facts():
    """ResumeFacts for scenario-style scoring tests."""
    return ResumeFacts(
        raw_text="5 years of experience with React and Python",
        skills=["react", "python"],
        experience_text="5 years of experience with React and Python",
    )


@pytest.fixture
def job_facts():
    """JobFacts requiring react, python and docker with 3 years."""
    return JobFacts(
        raw_text="React, Python and Docker. 3+ years of experience.",
        skills=["react", "python", "docker"],
        requirements=[],
        years_experience=3,
    )


@pytest.fixture
def scraper_settings():
    """Scraper settings with no waits."""
    return ScraperSettings(selector_timeout=0, settle_delay=0)


@pytest.fixture
def settings(scraper_settings):
    """Settings without an LLM API key."""
    return Settings(llm=LLMSettings(api_key=None), scraper=scraper_settings)


@pytest.fixture
def no_sleep(monkeypatch):
    """Record retry delays instead of sleeping."""
    delays = []
    monkeypatch.setattr("resume_fit.llm_client.time.sleep", delays.append)
    return delays
