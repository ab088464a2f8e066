"""
Resume Rewriter Module.

Uses the language model to rewrite a resume so it closes the gaps found by
the matcher, and to produce short free-form improvement suggestions.
"""

import logging
import re

from resume_fit.exceptions import ResumeRewriteError
from resume_fit.llm_client import LLMClient
from resume_fit.models import ComparisonResult, RewriteResult

MIN_REWRITE_LENGTH = 50
MAX_QUICK_SUGGESTIONS = 5

SUGGESTION_MARKER = re.compile(r"^(?:[-*•]|\d+[.)])\s*")

logger = logging.getLogger("resume_fit.rewriter")


class ResumeRewriter:
    """
    LLM-powered resume rewriter.

    Rewrites are grounded in the original resume: the prompt forbids
    inventing skills or experience.
    """

    def __init__(self, client: LLMClient):
        """
        Initialize the rewriter.

        Args:
            client: Configured LLM client.
        """
        self.client = client

    def rewrite(
        self,
        resume_text: str,
        job_description: str,
        comparison: ComparisonResult,
    ) -> RewriteResult:
        """
        Rewrite a resume to better match a job description.

        Args:
            resume_text: Normalized resume text.
            job_description: Job posting text.
            comparison: Gap analysis for this resume and job.

        Returns:
            RewriteResult with the Markdown resume.

        Raises:
            ResumeRewriteError: If the generated resume is too short.
            LLMError: If the completion call fails.
        """
        prompt = build_rewrite_prompt(resume_text, job_description, comparison)
        completion = self.client.chat_text(prompt).strip()

        if len(completion) < MIN_REWRITE_LENGTH:
            raise ResumeRewriteError(
                f"Generated resume is too short or empty (length={len(completion)})"
            )

        logger.info(
            "Resume rewritten chars=%s missing_skills=%s",
            len(completion),
            len(comparison.missing_skills),
        )
        return RewriteResult(rewritten_resume=completion, comparison=comparison)

    def quick_suggestions(self, resume_text: str, job_description: str) -> list[str]:
        """
        Ask for up to five short improvement suggestions.

        Args:
            resume_text: Resume text (first 2000 characters are sent).
            job_description: Job text (first 1500 characters are sent).

        Returns:
            Suggestion lines with list markers removed.
        """
        prompt = f"""Analyze this resume against the job description and provide 5 specific, actionable suggestions to improve the match.

Resume:
{resume_text[:2000]}

Job Description:
{job_description[:1500]}

Provide exactly 5 bullet points with specific, actionable improvements. Format as a simple list."""

        text = self.client.chat_text(prompt)
        return parse_suggestion_lines(text)


def parse_suggestion_lines(text: str) -> list[str]:
    """Keep list-marked lines longer than 10 characters, markers stripped."""
    suggestions = []

    for line in text.split("\n"):
        stripped = line.strip()
        if not SUGGESTION_MARKER.match(stripped):
            continue

        suggestion = SUGGESTION_MARKER.sub("", stripped, count=1).strip()
        if len(suggestion) > 10:
            suggestions.append(suggestion)

    return suggestions[:MAX_QUICK_SUGGESTIONS]


def build_rewrite_prompt(
    resume_text: str,
    job_description: str,
    comparison: ComparisonResult,
) -> str:
    """Build the ATS rewrite prompt from the resume, job and gap data."""
    missing_skills = ", ".join(comparison.missing_skills) or "None"
    missing_requirements = "; ".join(comparison.missing_requirements[:3]) or "None"
    suggestions = "\n".join(comparison.suggestions)

    return f"""You are an expert resume writer and ATS optimization specialist. Your task is to rewrite a resume to better match a specific job description while maintaining authenticity and truthfulness.

# ORIGINAL RESUME:
{resume_text}

# TARGET JOB DESCRIPTION:
{job_description}

# ANALYSIS & GAPS:
Missing Skills: {missing_skills}
Missing Requirements: {missing_requirements}

# OPTIMIZATION SUGGESTIONS:
{suggestions}

# INSTRUCTIONS:
1. **Maintain Truthfulness**: Only rewrite based on existing experience in the resume. DO NOT fabricate skills or experience.
2. **Keyword Optimization**: Integrate missing skills naturally where they relate to existing experience.
3. **ATS-Friendly**: Use exact keywords from the job description in bullet points.
4. **Quantify Achievements**: Add or emphasize metrics where possible (%, numbers, scale).
5. **Reorder Content**: Prioritize the most relevant experience and skills for this job.
6. **Professional Tone**: Keep it concise, action-oriented, and impactful.
7. **Format**: Return in clean Markdown format with proper sections (Summary, Experience, Skills, Education).

# SECTIONS TO OPTIMIZE:
- **Professional Summary**: 2-3 sentences highlighting most relevant experience for this role
- **Skills**: List technical skills matching job requirements first
- **Experience**: Rewrite bullet points to emphasize relevant achievements with metrics
- **Education**: Keep as-is unless highly relevant to job

# OUTPUT FORMAT:
Return ONLY the rewritten resume in Markdown format. Do not include explanations or meta-commentary.

---

REWRITTEN RESUME:"""
