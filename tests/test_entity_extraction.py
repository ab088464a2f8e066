"""Unit tests for LLM entity extraction."""

from unittest.mock import Mock

import pytest

from resume_fit.entity_extraction import MAX_RESUME_CHARS, EntityExtractor
from resume_fit.exceptions import EntityExtractionFailure, LLMError
from resume_fit.models import ResumeEntities
from tests.helpers import make_llm_client


class TestEntityExtractor:
    """Tests for EntityExtractor.extract."""

    def test_extracts_entities(self):
        """Test the response is parsed and cleaned."""
        client, fake = make_llm_client(
            ['{"skills": ["Leadership", "Excel"], "emails": ["Jane@Example.com"], "phones": [], "roles": ["Manager"]}']
        )

        entities = EntityExtractor(client).extract("Jane Doe, manager")

        assert entities.skills == ["leadership", "excel"]
        assert entities.emails == ["jane@example.com"]
        assert entities.roles == ["manager"]
        assert "Jane Doe, manager" in fake.calls[0]["messages"][1]["content"]

    def test_single_shot_call_parameters(self):
        """Test temperature, token limit and one attempt."""
        client = Mock()
        client.chat_structured.return_value = ResumeEntities()

        EntityExtractor(client).extract("resume")

        kwargs = client.chat_structured.call_args.kwargs
        assert kwargs["response_model"] is ResumeEntities
        assert kwargs["temperature"] == 0.1
        assert kwargs["max_tokens"] == 600
        assert kwargs["max_retries"] == 1

    def test_truncates_resume(self):
        """Test only a bounded prefix of the resume is sent."""
        client = Mock()
        client.chat_structured.return_value = ResumeEntities()
        resume = "a" * MAX_RESUME_CHARS + "TAIL"

        EntityExtractor(client).extract(resume)

        prompt = client.chat_structured.call_args.kwargs["prompt"]
        assert "a" * MAX_RESUME_CHARS in prompt
        assert "TAIL" not in prompt

    def test_invalid_json_is_a_fallback_failure(self):
        """Test unparseable output raises EntityExtractionFailure."""
        client, fake = make_llm_client(["Sure! Here are the skills: python"], max_retries=3)

        with pytest.raises(EntityExtractionFailure):
            EntityExtractor(client).extract("resume")

        assert len(fake.calls) == 1

    def test_llm_error_is_wrapped(self):
        """Test LLMError is converted."""
        client = Mock()
        client.chat_structured.side_effect = LLMError("service unavailable")

        with pytest.raises(EntityExtractionFailure) as exc_info:
            EntityExtractor(client).extract("resume")

        assert "service unavailable" in exc_info.value.message
