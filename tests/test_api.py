"""Tests for the FastAPI endpoints.

The service set is swapped through ``app.dependency_overrides`` so that no
browser is launched and no LLM endpoint is called.
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from backend.api import app, get_services
from backend.services import AnalysisService, LLMProvider, Services
from resume_fit.data_extraction import DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE
from resume_fit.exceptions import AuthWallDetected, NavigationTimeout
from resume_fit.requirement_extractor import extract_job_facts
from resume_fit.resume_parser import structure_resume
from tests.helpers import make_llm_client

REWRITTEN = "# Jane Doe\n\n## Summary\nBackend engineer with 6 years of Python and Django."


@pytest.fixture
def services(settings):
    """Services without an LLM key and with a mocked job fetcher."""
    services = Services(settings)
    services.jobs.fetcher = Mock()
    return services


@pytest.fixture
def client(services):
    """Test client bound to the test service set."""
    app.dependency_overrides[get_services] = lambda: services
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def compare_body(resume_text, job_text):
    """Request body with the sample resume and posting."""
    return {
        "resume": structure_resume(resume_text).model_dump(by_alias=True, mode="json"),
        "job": extract_job_facts(job_text).model_dump(by_alias=True, mode="json"),
    }


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert "timestamp" in response.json()


class TestResumeUpload:
    """Tests for POST /api/resume/upload."""

    def test_upload_docx(self, client, resume_docx):
        """Test a DOCX upload returns camelCase parsed data."""
        response = client.post(
            "/api/resume/upload",
            files={"file": ("resume.docx", resume_docx, DOCX_MEDIA_TYPE)},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["filename"] == "resume.docx"
        assert data["parsedData"]["emails"] == ["jane.doe@example.com"]
        assert data["parsedData"]["educationText"] == "B.Sc. Computer Science"

    def test_unsupported_type(self, client):
        """Test non PDF/DOCX uploads are rejected."""
        response = client.post(
            "/api/resume/upload",
            files={"file": ("resume.txt", b"Jane Doe", "text/plain")},
        )

        assert response.status_code == 400

    def test_corrupt_pdf(self, client):
        """Test undecodable documents return the error and remediation hint."""
        response = client.post(
            "/api/resume/upload",
            files={"file": ("resume.pdf", b"not really a pdf", PDF_MEDIA_TYPE)},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"].startswith("Could not read PDF document")
        assert body["detail"] == "Please upload the resume again as a PDF or DOCX file."


class TestJobSubmit:
    """Tests for POST /api/job/submit."""

    def test_pasted_text(self, client, job_text):
        """Test pasted text is extracted."""
        response = client.post("/api/job/submit", json={"jobText": job_text})

        assert response.status_code == 200
        extracted = response.json()["extracted"]
        assert extracted["sourceUrl"] is None
        assert extracted["yearsExperience"] == 5
        assert len(extracted["requirements"]) == 3

    def test_url(self, client, services, job_text):
        """Test a URL is scraped through the fetcher."""
        services.jobs.fetcher.fetch.return_value = job_text

        response = client.post("/api/job/submit", json={"jobUrl": "https://jobs.example.com/1"})

        assert response.status_code == 200
        assert response.json()["extracted"]["sourceUrl"] == "https://jobs.example.com/1"

    def test_missing_input(self, client):
        """Test an empty body is rejected."""
        response = client.post("/api/job/submit", json={"jobText": "  "})

        assert response.status_code == 400

    def test_auth_wall(self, client, services):
        """Test scrape rejections are 422 with the paste-text hint."""
        services.jobs.fetcher.fetch.side_effect = AuthWallDetected("https://www.linkedin.com/jobs/view/1")

        response = client.post("/api/job/submit", json={"jobUrl": "https://www.linkedin.com/jobs/view/1"})

        assert response.status_code == 422
        assert response.json()["detail"] == "Please paste the job description text instead."

    def test_navigation_timeout(self, client, services):
        """Test navigation timeouts are 504."""
        services.jobs.fetcher.fetch.side_effect = NavigationTimeout("https://slow.example.com")

        response = client.post("/api/job/submit", json={"jobUrl": "https://slow.example.com"})

        assert response.status_code == 504
        assert "took too long" in response.json()["error"]


class TestAnalyze:
    """Tests for the /api/analyze endpoints."""

    def test_compare(self, client, compare_body):
        """Test comparison results use camelCase names."""
        response = client.post("/api/analyze/compare", json=compare_body)

        assert response.status_code == 200
        comparison = response.json()["comparison"]
        assert comparison["matchPercentage"] == 89
        assert comparison["missingSkills"] == ["kubernetes"]

    def test_compare_rejects_negative_years(self, client, compare_body):
        """Test malformed facts are rejected at the boundary."""
        compare_body["job"]["yearsExperience"] = -2

        response = client.post("/api/analyze/compare", json=compare_body)

        assert response.status_code == 422

    @pytest.mark.parametrize(
        "field, value",
        [("skills", None), ("emails", "jane.doe@example.com"), ("phones", 5551234567)],
    )
    def test_compare_rejects_malformed_resume_lists(self, client, compare_body, field, value):
        """Test null, string or number contact and skill lists are 422, not 500."""
        compare_body["resume"][field] = value

        response = client.post("/api/analyze/compare", json=compare_body)

        assert response.status_code == 422

    def test_rewrite_without_key(self, client, compare_body):
        """Test rewriting without a configured key is a server error."""
        response = client.post("/api/analyze/rewrite", json=compare_body)

        assert response.status_code == 500
        assert "OPENROUTER_API_KEY" in response.json()["error"]

    def test_rewrite(self, client, services, settings, compare_body):
        """Test the rewritten resume is returned with the comparison."""
        llm_client, _ = make_llm_client([REWRITTEN])
        services.analysis = AnalysisService(LLMProvider(settings, client=llm_client))

        response = client.post("/api/analyze/rewrite", json=compare_body)

        assert response.status_code == 200
        body = response.json()
        assert body["rewrittenResume"] == REWRITTEN
        assert body["comparison"]["matchPercentage"] == 89

    def test_llm_failure(self, client, services, settings, compare_body):
        """Test LLM failures are 502."""
        llm_client, _ = make_llm_client([RuntimeError("upstream down")])
        services.analysis = AnalysisService(LLMProvider(settings, client=llm_client))

        response = client.post("/api/analyze/suggestions", json=compare_body)

        assert response.status_code == 502

    def test_suggestions(self, client, services, settings, compare_body):
        """Test quick suggestions are returned as a list."""
        llm_client, _ = make_llm_client(["1. Add Kubernetes projects to experience\n2. Short"])
        services.analysis = AnalysisService(LLMProvider(settings, client=llm_client))

        response = client.post("/api/analyze/suggestions", json=compare_body)

        assert response.status_code == 200
        assert response.json()["suggestions"] == ["Add Kubernetes projects to experience"]
