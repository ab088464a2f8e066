"""
Resume Parser Module.

Structures normalized resume text into contact details, skills, experience
and education. Skills come from a "Skills" section when one exists plus a
dictionary scan of the whole text; if both are empty an optional
entity-extraction service is asked instead.
"""

import logging
import re
from typing import Optional

from resume_fit.data_extraction import extract_document_text
from resume_fit.entity_extraction import EntityExtractor
from resume_fit.exceptions import EntityExtractionFailure
from resume_fit.keyword_engine import detect_skills
from resume_fit.models import ResumeFacts, unique
from resume_fit.normalization import normalize_text

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b")
PHONE_PATTERN = re.compile(r"(?:\+?\d{1,3}[-.]?)?\(?\d{3}\)?[-.]?\d{3}[-.]?\d{4}")

# * Section header synonyms
SKILLS_HEADERS = ("skills", "technical skills", "technologies")
EXPERIENCE_HEADERS = ("experience", "work experience", "employment")
EDUCATION_HEADERS = ("education", "academic", "qualification")

SECTION_BREAK = re.compile(r"^(education|experience|skills|projects|certifications)", re.IGNORECASE)
SKILL_SEPARATORS = re.compile(r"[,\n]")

logger = logging.getLogger("resume_fit.parser")


def extract_contacts(text: str) -> tuple[list[str], list[str]]:
    """
    Find email addresses and phone numbers.

    Returns:
        Tuple of (emails, phones) in encounter order.
    """
    emails = [m.group(0) for m in EMAIL_PATTERN.finditer(text)]
    phones = [m.group(0) for m in PHONE_PATTERN.finditer(text)]
    return emails, phones


def extract_section(text: str, headers: tuple[str, ...]) -> str:
    """
    Capture the lines that follow a section header.

    A line is a header when its lowercased form contains any of the given
    synonyms; header lines themselves are never captured. Capture stops at
    the next generic section heading.

    Args:
        text: Normalized resume text.
        headers: Lowercase header synonyms for the wanted section.

    Returns:
        Captured non-empty lines (trimmed) joined by newlines, or "".
    """
    capturing = False
    section_lines = []

    for line in text.split("\n"):
        lower_line = line.lower().strip()

        if any(header in lower_line for header in headers):
            capturing = True
            continue

        if capturing and SECTION_BREAK.match(lower_line):
            break

        if capturing and line.strip():
            section_lines.append(line.strip())

    return "\n".join(section_lines)


def split_skills(section_text: str) -> list[str]:
    """Split a skills section on commas and newlines."""
    return [token.strip() for token in SKILL_SEPARATORS.split(section_text) if token.strip()]


def structure_resume(
    text: str,
    entity_extractor: Optional[EntityExtractor] = None,
) -> ResumeFacts:
    """
    Derive ResumeFacts from normalized resume text.

    Args:
        text: Normalized resume text.
        entity_extractor: Optional fallback used only when no skills are found.

    Returns:
        Final ResumeFacts, including any merged fallback entities.
    """
    emails, phones = extract_contacts(text)

    section_skills = [token.lower() for token in split_skills(extract_section(text, SKILLS_HEADERS))]
    skills = list(unique(section_skills + detect_skills(text)))

    experience = extract_section(text, EXPERIENCE_HEADERS)
    education = extract_section(text, EDUCATION_HEADERS)

    if not skills and entity_extractor is not None:
        logger.info("No skills found locally, using entity extraction fallback")
        try:
            entities = entity_extractor.extract(text)
        except EntityExtractionFailure as e:
            logger.warning("LLM resume entity extraction failed: %s", e)
        else:
            skills = list(unique(skills + entities.skills))
            if not emails:
                emails = entities.emails
            if not phones:
                phones = entities.phones

    facts = ResumeFacts(
        raw_text=text,
        emails=emails,
        phones=phones,
        skills=skills,
        experience_text=experience,
        education_text=education,
    )

    logger.info(
        "Parsed resume length=%s emails=%s phones=%s skills_preview=%s",
        len(text),
        len(facts.emails),
        len(facts.phones),
        facts.skills_text[:120],
    )
    return facts


def parse_resume(
    data: bytes,
    media_type: str,
    entity_extractor: Optional[EntityExtractor] = None,
) -> ResumeFacts:
    """
    Extract, normalize and structure a resume document.

    Args:
        data: Document contents.
        media_type: PDF or DOCX media type.
        entity_extractor: Optional skills fallback.

    Returns:
        ResumeFacts for the document.

    Raises:
        UnsupportedFormat: If the media type is not supported.
        DecodeFailure: If the document cannot be parsed.
    """
    raw_text = extract_document_text(data, media_type)
    return structure_resume(normalize_text(raw_text), entity_extractor)
