"""Unit tests for the resume rewriter."""

import pytest

from resume_fit.exceptions import LLMError, ResumeRewriteError
from resume_fit.models import ComparisonResult
from resume_fit.resume_rewriter import (
    ResumeRewriter,
    build_rewrite_prompt,
    parse_suggestion_lines,
)
from tests.helpers import make_llm_client

REWRITTEN = "# Jane Doe\n\n## Summary\nBackend engineer with 6 years of Python and Docker experience."


@pytest.fixture
def comparison():
    """Comparison with one missing skill and two missing requirements."""
    return ComparisonResult(
        match_percentage=60,
        matched_skills=["python"],
        missing_skills=["docker"],
        missing_requirements=["Own the CI pipeline", "Mentor juniors"],
        suggestions=["Add these key skills to your resume: docker"],
    )


class TestRewrite:
    """Tests for ResumeRewriter.rewrite."""

    def test_returns_rewrite_result(self, comparison):
        """Test the trimmed completion and the comparison are returned."""
        client, fake = make_llm_client([f"  {REWRITTEN}\n\n"])

        result = ResumeRewriter(client).rewrite("Jane Doe resume", "Backend job", comparison)

        assert result.rewritten_resume == REWRITTEN
        assert result.comparison == comparison

        prompt = fake.calls[0]["messages"][1]["content"]
        assert "Jane Doe resume" in prompt
        assert "Missing Skills: docker" in prompt

    def test_short_result_rejected(self, comparison):
        """Test fewer than 50 characters raise ResumeRewriteError."""
        client, _ = make_llm_client(["# Jane Doe"])

        with pytest.raises(ResumeRewriteError) as exc_info:
            ResumeRewriter(client).rewrite("resume", "job", comparison)

        assert isinstance(exc_info.value, LLMError)


class TestBuildRewritePrompt:
    """Tests for the rewrite prompt."""

    def test_gap_sections(self, comparison):
        """Test missing items and suggestions are listed."""
        prompt = build_rewrite_prompt("RESUME", "JOB", comparison)

        assert "# ORIGINAL RESUME:\nRESUME" in prompt
        assert "# TARGET JOB DESCRIPTION:\nJOB" in prompt
        assert "Missing Requirements: Own the CI pipeline; Mentor juniors" in prompt
        assert "Add these key skills to your resume: docker" in prompt
        assert "DO NOT fabricate skills or experience" in prompt

    def test_no_gaps(self):
        """Test empty gap lists render as None."""
        prompt = build_rewrite_prompt("RESUME", "JOB", ComparisonResult(match_percentage=100))

        assert "Missing Skills: None" in prompt
        assert "Missing Requirements: None" in prompt


class TestQuickSuggestions:
    """Tests for quick AI suggestions."""

    def test_parses_listed_lines(self):
        """Test the completion is parsed into suggestion lines."""
        client, fake = make_llm_client(
            ["Here are my suggestions:\n1. Add Docker to the skills section\n2. Quantify API latency gains"]
        )

        suggestions = ResumeRewriter(client).quick_suggestions("r" * 3000, "j" * 2000)

        assert suggestions == ["Add Docker to the skills section", "Quantify API latency gains"]

        prompt = fake.calls[0]["messages"][1]["content"]
        assert "r" * 2000 in prompt and "r" * 2001 not in prompt
        assert "j" * 1500 in prompt and "j" * 1501 not in prompt


class TestParseSuggestionLines:
    """Tests for parse_suggestion_lines."""

    def test_markers_and_length(self):
        """Test only marked lines longer than 10 characters are kept."""
        text = (
            "Intro without a marker that is long\n"
            "- Mention Docker experience\n"
            "* Too short\n"
            "• Tailor the summary to the role\n"
            "3) Lead with backend achievements\n"
            "4. ok"
        )

        assert parse_suggestion_lines(text) == [
            "Mention Docker experience",
            "Tailor the summary to the role",
            "Lead with backend achievements",
        ]

    def test_at_most_five(self):
        """Test the list is capped at five."""
        text = "\n".join(f"- Suggestion number {i}" for i in range(8))

        assert len(parse_suggestion_lines(text)) == 5
