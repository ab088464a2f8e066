"""
Resume Entity Extraction Module.

Asks the language model for skills, contact details and roles when the
rule-based parser finds no skills at all.
"""

import logging

from resume_fit.exceptions import EntityExtractionFailure, LLMError
from resume_fit.llm_client import LLMClient
from resume_fit.models import ResumeEntities

# * Only a bounded prefix of the resume is sent
MAX_RESUME_CHARS = 5000

logger = logging.getLogger("resume_fit.entities")


class EntityExtractor:
    """Single-shot LLM entity extraction for resumes."""

    def __init__(self, client: LLMClient):
        self.client = client

    def extract(self, resume_text: str) -> ResumeEntities:
        """
        Extract structured entities from resume text.

        Args:
            resume_text: Normalized resume text.

        Returns:
            Deduplicated, lowercased skills, emails, phones and roles.

        Raises:
            EntityExtractionFailure: If the call fails or returns unusable JSON.
        """
        prompt = f"""Extract structured resume entities. Return strict JSON only.

Resume:
{resume_text[:MAX_RESUME_CHARS]}

Return JSON with keys: skills (array of strings), emails (array), phones (array), roles (array). Use lowercase for skills, strip duplicates."""

        try:
            entities = self.client.chat_structured(
                prompt=prompt,
                response_model=ResumeEntities,
                temperature=0.1,
                max_tokens=600,
                max_retries=1,
            )
        except LLMError as e:
            raise EntityExtractionFailure(
                f"Failed to extract resume entities: {e.message}"
            ) from e

        logger.info(
            "Entities extracted skills=%s emails=%s phones=%s roles=%s",
            len(entities.skills),
            len(entities.emails),
            len(entities.phones),
            len(entities.roles),
        )
        return entities
