"""
Typed records passed between pipeline stages.

All records are immutable value objects. Attributes are snake_case; the JSON
form (``model_dump(by_alias=True)``) uses camelCase field names such as
``rawText`` and ``matchPercentage``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_REQUIREMENTS = 15


def unique(values) -> tuple[str, ...]:
    """Drop empty strings and duplicates, keeping first occurrences in order."""
    seen: dict[str, None] = {}
    for value in values:
        if value and value not in seen:
            seen[value] = None
    return tuple(seen)


class FactsModel(BaseModel):
    """Base for frozen records with camelCase JSON aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ResumeFacts(FactsModel):
    """Structured facts derived from one uploaded resume."""

    raw_text: str
    emails: tuple[str, ...] = ()
    phones: tuple[str, ...] = ()
    skills: tuple[str, ...] = ()
    experience_text: str = ""
    education_text: str = ""

    @field_validator("emails", "phones", mode="before")
    @classmethod
    def _dedupe_contacts(cls, value):
        if not isinstance(value, (list, tuple)):
            # * Left for tuple validation to reject
            return value
        return unique(item.strip() for item in value if isinstance(item, str))

    @field_validator("skills", mode="before")
    @classmethod
    def _normalize_skills(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        elif not isinstance(value, (list, tuple)):
            return value
        return unique(item.strip().lower() for item in value if isinstance(item, str))

    @property
    def skills_text(self) -> str:
        """Skills joined into a single comma-separated string."""
        return ", ".join(self.skills)


class JobFacts(FactsModel):
    """Skills and requirements extracted from one job posting."""

    source_url: Optional[str] = None
    raw_text: str
    skills: tuple[str, ...] = ()
    requirements: tuple[str, ...] = Field(default=(), max_length=MAX_REQUIREMENTS)
    years_experience: Optional[int] = Field(default=None, ge=0)


class ComparisonResult(FactsModel):
    """Outcome of scoring a resume against a job posting."""

    match_percentage: int = Field(ge=0, le=100)
    matched_skills: tuple[str, ...] = ()
    missing_skills: tuple[str, ...] = ()
    matched_requirements: tuple[str, ...] = ()
    missing_requirements: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()


class ResumeEntities(BaseModel):
    """Entity-extraction response from the language model."""

    skills: list[str] = Field(default_factory=list, description="Technical and professional skills")
    emails: list[str] = Field(default_factory=list, description="Email addresses")
    phones: list[str] = Field(default_factory=list, description="Phone numbers")
    roles: list[str] = Field(default_factory=list, description="Job titles held")

    @field_validator("skills", "emails", "phones", "roles", mode="before")
    @classmethod
    def _clean(cls, value):
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError("expected a list of strings")
        return list(unique(item.strip().lower() for item in value if isinstance(item, str)))


class RewriteResult(FactsModel):
    """A rewritten resume and the comparison it was generated from."""

    rewritten_resume: str
    comparison: ComparisonResult
