"""
Resume-to-Job Matching Module.

Scores a parsed resume against extracted job facts: skill overlap, fuzzy
requirement matching and a years-of-experience check, plus deterministic
suggestions, strengths and weaknesses derived from the gaps.

Everything here is pure: identical inputs always give identical results.
"""

import math
import re
from typing import Optional

from resume_fit.keyword_engine import extract_keywords
from resume_fit.models import ComparisonResult, JobFacts, ResumeFacts

REQUIREMENT_MATCH_RATIO = 0.6
RESUME_YEARS = re.compile(r"(\d+)\+?\s*years?")


def match_skills(resume: ResumeFacts, job: JobFacts) -> tuple[list[str], list[str]]:
    """
    Split job skills into matched and missing.

    A skill matches when it occurs in the resume text or skills string.

    Returns:
        Tuple of (matched, missing), both in job order.
    """
    resume_text = resume.raw_text.lower()
    resume_skills = resume.skills_text.lower()

    matched, missing = [], []
    for skill in job.skills:
        skill_lower = skill.lower()
        if skill_lower in resume_text or skill_lower in resume_skills:
            matched.append(skill)
        else:
            missing.append(skill)

    return matched, missing


def requirement_match_ratio(requirement: str, resume_text_lower: str) -> float:
    """Fraction of a requirement's keywords found in the resume text."""
    keywords = extract_keywords(requirement)
    found = sum(1 for keyword in keywords if keyword in resume_text_lower)
    return found / max(len(keywords), 1)


def match_requirements(resume: ResumeFacts, job: JobFacts) -> tuple[list[str], list[str]]:
    """
    Split job requirements into matched and missing.

    A requirement matches when at least 60% of its keywords occur in the
    resume text.

    Returns:
        Tuple of (matched, missing), both in job order.
    """
    resume_text = resume.raw_text.lower()

    matched, missing = [], []
    for requirement in job.requirements:
        if requirement_match_ratio(requirement, resume_text) >= REQUIREMENT_MATCH_RATIO:
            matched.append(requirement)
        else:
            missing.append(requirement)

    return matched, missing


def check_experience_match(experience_text: str, required_years: Optional[int]) -> bool:
    """
    Check the resume's experience section against required years.

    The largest "N years" figure in the section is compared with the
    requirement. No requirement always passes; no figure always fails.
    """
    if not required_years:
        return True

    years = [int(value) for value in RESUME_YEARS.findall(experience_text.lower())]
    if not years:
        return False

    return max(years) >= required_years


def calculate_match_percentage(matched_items: int, total_items: int) -> int:
    """Percentage of matched items, rounded half up; 100 when nothing is required."""
    if total_items == 0:
        return 100

    return int(math.floor(matched_items * 100 / total_items + 0.5))


def generate_suggestions(
    missing_skills: list[str],
    missing_requirements: list[str],
    required_years: Optional[int],
    experience_met: bool,
) -> list[str]:
    """Generate actionable suggestions based on gaps."""
    suggestions = []

    if missing_skills:
        suggestions.append(
            f"Add these key skills to your resume: {', '.join(missing_skills[:3])}"
        )

        if len(missing_skills) > 3:
            suggestions.append(
                f"Consider highlighting any experience with: {', '.join(missing_skills[3:6])}"
            )

    if missing_requirements:
        suggestions.append(f"Emphasize experience related to: {missing_requirements[0]}")

        if len(missing_requirements) > 1:
            suggestions.append(
                "Add specific examples or projects demonstrating these requirements"
            )

    if required_years and not experience_met:
        suggestions.append(
            f"Highlight {required_years}+ years of relevant experience prominently"
        )

    # * General ATS optimization
    if missing_skills or missing_requirements:
        suggestions.append("Use exact keywords from the job description to improve ATS match")
        suggestions.append(
            'Quantify achievements with metrics (e.g., "increased performance by 40%")'
        )

    return suggestions


def generate_strengths(matched_skills: list[str], matched_requirements: list[str]) -> list[str]:
    """Generate strengths based on matches."""
    strengths = []

    if matched_skills:
        strengths.append(f"Strong technical skill match: {', '.join(matched_skills[:5])}")

    if matched_requirements:
        strengths.append(
            f"Meets {len(matched_requirements)} key requirement(s) from the job description"
        )

    if len(matched_skills) >= 5:
        strengths.append("Comprehensive skill set aligned with job needs")

    return strengths


def generate_weaknesses(missing_skills: list[str], missing_requirements: list[str]) -> list[str]:
    """Generate weaknesses based on gaps."""
    weaknesses = []

    if len(missing_skills) > 3:
        weaknesses.append(
            f"Missing {len(missing_skills)} required skills - may reduce chances"
        )

    if len(missing_requirements) > 2:
        weaknesses.append("Several key requirements not clearly addressed in resume")

    if not missing_skills and not missing_requirements:
        weaknesses.append("Could add more specific examples to strengthen match")

    return weaknesses


def compare_resume_to_job(resume: ResumeFacts, job: JobFacts) -> ComparisonResult:
    """
    Compare a resume against a job posting.

    Args:
        resume: Parsed resume facts.
        job: Extracted job facts.

    Returns:
        ComparisonResult with percentage, matches, gaps and advice.
    """
    matched_skills, missing_skills = match_skills(resume, job)
    matched_requirements, missing_requirements = match_requirements(resume, job)

    required_years = job.years_experience
    experience_met = check_experience_match(resume.experience_text, required_years)

    total_items = len(job.skills) + len(job.requirements) + (1 if required_years else 0)
    matched_items = (
        len(matched_skills)
        + len(matched_requirements)
        + (1 if required_years and experience_met else 0)
    )

    return ComparisonResult(
        match_percentage=calculate_match_percentage(matched_items, total_items),
        matched_skills=matched_skills,
        missing_skills=missing_skills,
        matched_requirements=matched_requirements,
        missing_requirements=missing_requirements,
        suggestions=generate_suggestions(
            missing_skills, missing_requirements, required_years, experience_met
        ),
        strengths=generate_strengths(matched_skills, matched_requirements),
        weaknesses=generate_weaknesses(missing_skills, missing_requirements),
    )
