"""
Job Requirement Extraction Module.

Rule-based extraction of skills, requirement lines and required years of
experience from job posting text. No LLM calls are made here.
"""

import logging
import re
from typing import Optional

from resume_fit.keyword_engine import detect_skills
from resume_fit.models import MAX_REQUIREMENTS, JobFacts

REQUIREMENT_KEYWORDS = (
    "required",
    "must have",
    "responsibilities",
    "qualifications",
    "requirements",
)

REQUIREMENTS_END = re.compile(r"^(about|benefits|perks|salary)", re.IGNORECASE)
LIST_MARKER = re.compile(r"^(?:[•*\-]|\d+\.)\s+")
YEARS_EXPERIENCE = re.compile(r"(\d+)\+?\s*years?\s*(of)?\s*experience", re.IGNORECASE)

# * Exclusive bounds for un-bulleted requirement lines
MIN_LINE_LENGTH = 10
MAX_LINE_LENGTH = 200

logger = logging.getLogger("resume_fit.requirements")


def extract_requirements(text: str, limit: int = MAX_REQUIREMENTS) -> list[str]:
    """
    Collect requirement lines from a job posting.

    Capture starts after any line mentioning a requirement keyword and ends
    at an "About", "Benefits", "Perks" or "Salary" heading. Bulleted or
    numbered lines are kept without their marker, other lines only when
    their length is strictly between 10 and 200 characters.

    Args:
        text: Job posting text.
        limit: Maximum number of requirements to keep.

    Returns:
        Requirement lines in encounter order.
    """
    requirements = []
    capturing = False

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        lower_line = line.lower()

        if any(keyword in lower_line for keyword in REQUIREMENT_KEYWORDS):
            capturing = True
            continue

        if not capturing:
            continue

        if REQUIREMENTS_END.match(lower_line):
            break

        if LIST_MARKER.match(line) or MIN_LINE_LENGTH < len(line) < MAX_LINE_LENGTH:
            requirement = LIST_MARKER.sub("", line, count=1).strip()
            if requirement:
                requirements.append(requirement)

    return requirements[:limit]


def extract_years_experience(text: str) -> Optional[int]:
    """Get the first "N+ years of experience" figure, or None if absent."""
    match = YEARS_EXPERIENCE.search(text)
    return int(match.group(1)) if match else None


def extract_job_facts(text: str, source_url: Optional[str] = None) -> JobFacts:
    """
    Extract skills, requirements and years of experience from job text.

    Args:
        text: Scraped or pasted job posting text.
        source_url: URL the text was scraped from, if any.

    Returns:
        JobFacts for the posting.
    """
    facts = JobFacts(
        source_url=source_url,
        raw_text=text,
        skills=detect_skills(text),
        requirements=extract_requirements(text),
        years_experience=extract_years_experience(text),
    )

    logger.info(
        "Extracted job facts url=%s skills=%s requirements=%s years=%s",
        source_url,
        list(facts.skills),
        len(facts.requirements),
        facts.years_experience,
    )
    return facts
