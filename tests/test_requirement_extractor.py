"""Unit tests for job requirement extraction."""

import pytest

from resume_fit.requirement_extractor import (
    extract_job_facts,
    extract_requirements,
    extract_years_experience,
)


class TestExtractRequirements:
    """Tests for requirement line capture."""

    def test_capture_stops_at_about(self):
        """Test bullets are stripped and capture ends at an About heading."""
        text = "Requirements:\n- 5+ years experience\n- Strong SQL skills\nAbout the company: ..."

        assert extract_requirements(text) == ["5+ years experience", "Strong SQL skills"]

    def test_nothing_before_keyword(self):
        """Test lines before a requirement keyword are ignored."""
        text = "We are hiring a backend engineer\n- Great team culture\nQualifications\n- Python"

        assert extract_requirements(text) == ["Python"]

    @pytest.mark.parametrize("heading", ["Benefits", "Perks and rewards", "Salary: 100k", "ABOUT US"])
    def test_stop_headings(self, heading):
        """Test every stop heading ends capture."""
        text = f"Must have:\n- Docker in production\n{heading}\n- Free lunch every day"

        assert extract_requirements(text) == ["Docker in production"]

    def test_markers(self):
        """Test bullet, dash, star and numbered markers are removed."""
        text = "Responsibilities\n• Build APIs\n* Own deploys\n1. Mentor peers\n12. Review code"

        assert extract_requirements(text) == ["Build APIs", "Own deploys", "Mentor peers", "Review code"]

    def test_unmarked_line_length_bounds(self):
        """Test unmarked lines are kept only between 10 and 200 characters."""
        long_line = "x" * 200
        text = f"Requirements\nShort one\nTen chars!\nEleven char\n{long_line}\n{'y' * 199}"

        assert extract_requirements(text) == ["Eleven char", "y" * 199]

    def test_blank_lines_skipped(self):
        """Test blank lines are never collected."""
        text = "Requirements\n\n- Kubernetes\n\n"

        assert extract_requirements(text) == ["Kubernetes"]

    def test_keyword_lines_are_not_collected(self):
        """Test lines mentioning a requirement keyword restart capture without being kept."""
        text = "Requirements\n- Python\n- Docker required\n- SQL"

        assert extract_requirements(text) == ["Python", "SQL"]

    def test_capped_at_fifteen(self):
        """Test only the first 15 requirements are kept."""
        bullets = "\n".join(f"- Requirement number {i}" for i in range(20))

        result = extract_requirements(f"Requirements\n{bullets}")

        assert len(result) == 15
        assert result[0] == "Requirement number 0"
        assert result[-1] == "Requirement number 14"


class TestExtractYearsExperience:
    """Tests for years-of-experience detection."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("5+ years experience", 5),
            ("At least 3 years of experience with Go", 3),
            ("10 Years Experience required", 10),
            ("1 year experience", 1),
            ("2 years of experience, ideally 4+ years of experience", 2),
        ],
    )
    def test_found(self, text, expected):
        """Test the first match is returned as an integer."""
        assert extract_years_experience(text) == expected

    @pytest.mark.parametrize("text", ["Experience: 5 years", "No figures at all", ""])
    def test_absent(self, text):
        """Test absent figures give None, not zero."""
        assert extract_years_experience(text) is None


class TestExtractJobFacts:
    """Tests for extract_job_facts."""

    def test_sample_posting(self, job_text):
        """Test skills, requirements and years from a full posting."""
        facts = extract_job_facts(job_text, source_url="https://jobs.example.com/1")

        assert facts.source_url == "https://jobs.example.com/1"
        assert facts.raw_text == job_text
        assert facts.skills == ("python", "go", "django", "docker", "kubernetes")
        assert facts.requirements == (
            "5+ years experience building web services",
            "Strong Python and Django skills",
            "Experience with Docker and Kubernetes",
        )
        assert facts.years_experience == 5

    def test_pasted_text_has_no_url(self):
        """Test pasted text leaves source_url unset."""
        facts = extract_job_facts("Looking for a React developer")

        assert facts.source_url is None
        assert facts.skills == ("react",)
        assert facts.requirements == ()
        assert facts.years_experience is None
