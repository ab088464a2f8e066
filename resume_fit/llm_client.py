"""
LLM API Client Module.

Provides a wrapper around an OpenAI-compatible chat-completion endpoint
(OpenRouter by default) with support for:
- Chat completions with structured JSON output
- Plain-text completions
- Automatic retries with exponential backoff
"""

import logging
import time
from typing import Optional, Type, TypeVar

from openai import OpenAI
from pydantic import BaseModel, ValidationError

from resume_fit.config import LLMSettings
from resume_fit.exceptions import ConfigurationError, LLMError

# * Configuration
DEFAULT_SYSTEM_PROMPT = "You are a concise, accurate assistant helping with resume optimization."
DEFAULT_MAX_TOKENS = 1200
RETRY_DELAY = 1.0


T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger("resume_fit.llm")


class LLMClient:
    """
    Chat-completion client with structured output support.

    Every call is retried with exponential backoff up to ``max_retries``
    attempts; pass ``max_retries=1`` for a single-shot call.
    """

    def __init__(self, settings: LLMSettings, client: Optional[OpenAI] = None):
        """
        Initialize the LLM client.

        Args:
            settings: Endpoint, model and credentials.
            client: Optional preconfigured OpenAI client.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not settings.api_key and client is None:
            raise ConfigurationError(
                "LLM API key not found. Set OPENROUTER_API_KEY (or OPENAI_API_KEY) "
                "environment variable."
            )

        self.settings = settings
        self.model = settings.model
        self.max_retries = settings.max_retries

        if client is None:
            headers = {}
            if settings.referer:
                headers["HTTP-Referer"] = settings.referer
            if settings.title:
                headers["X-Title"] = settings.title

            client = OpenAI(
                api_key=settings.api_key,
                base_url=settings.base_url,
                default_headers=headers or None,
            )

        self.client = client

    def chat_structured(
        self,
        prompt: str,
        response_model: Type[T],
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        max_retries: Optional[int] = None,
    ) -> T:
        """
        Send a chat completion request with structured JSON output.

        Args:
            prompt: User prompt.
            response_model: Pydantic model class for the response.
            system_prompt: Optional system prompt.
            temperature: Sampling temperature (lower for more deterministic).
            max_tokens: Completion token limit.
            max_retries: Attempts before giving up (defaults to settings).

        Returns:
            Parsed response as Pydantic model instance.

        Raises:
            LLMError: If every attempt fails or the response does not validate.
        """
        messages = self._build_messages(prompt, system_prompt, response_model)
        request_kwargs = self._build_chat_kwargs(messages, temperature, max_tokens, json_mode=True)

        def call() -> T:
            content = self._complete(request_kwargs)
            try:
                return response_model.model_validate_json(content)
            except ValidationError as e:
                raise LLMError(f"LLM returned invalid JSON: {e}") from e

        return self._with_retries(call, "structured", max_retries)

    def chat_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        max_retries: Optional[int] = None,
    ) -> str:
        """
        Send a chat completion request and return the text content.

        Raises:
            LLMError: If every attempt fails or the content is empty.
        """
        messages = self._build_messages(prompt, system_prompt)
        request_kwargs = self._build_chat_kwargs(messages, temperature, max_tokens)

        return self._with_retries(lambda: self._complete(request_kwargs), "text", max_retries)

    def _with_retries(self, call, kind: str, max_retries: Optional[int]):
        """Run a call, retrying with exponential backoff."""
        attempts = max_retries or self.max_retries

        for attempt in range(attempts):
            try:
                return call()
            except Exception as e:
                if attempt < attempts - 1:
                    delay = RETRY_DELAY * (2 ** attempt)
                    logger.warning(
                        "LLM %s retry %s/%s in %.1fs due to: %s",
                        kind,
                        attempt + 1,
                        attempts,
                        delay,
                        e,
                    )
                    time.sleep(delay)
                else:
                    logger.error("LLM %s call failed after %s attempt(s): %s", kind, attempts, e)
                    if isinstance(e, LLMError):
                        raise
                    raise LLMError(f"Failed after {attempts} attempt(s): {e}") from e

        raise LLMError(f"Unexpected error in LLM {kind} call")

    def _build_messages(
        self,
        prompt: str,
        system_prompt: Optional[str],
        response_model: Optional[Type[BaseModel]] = None,
    ) -> list[dict]:
        """Build messages list for chat completion."""
        full_system_prompt = system_prompt or DEFAULT_SYSTEM_PROMPT

        if response_model is not None:
            schema_json = response_model.model_json_schema()
            full_system_prompt = (
                f"{full_system_prompt}\n\n"
                f"You must respond with valid JSON matching this schema:\n"
                f"{schema_json}\n\n"
                "Do not include any text outside the JSON object."
            )

        return [
            {"role": "system", "content": full_system_prompt},
            {"role": "user", "content": prompt},
        ]

    def _build_chat_kwargs(
        self,
        messages: list[dict],
        temperature: Optional[float],
        max_tokens: int,
        json_mode: bool = False,
    ) -> dict:
        """Build kwargs for chat completion request."""
        request_kwargs = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
        }

        if json_mode:
            request_kwargs["response_format"] = {"type": "json_object"}

        if temperature is not None:
            request_kwargs["temperature"] = temperature

        return request_kwargs

    def _complete(self, request_kwargs: dict) -> str:
        """Run one completion request and return its text content."""
        start = time.perf_counter()
        response = self.client.chat.completions.create(**request_kwargs)
        duration = time.perf_counter() - start

        text = self._extract_content(response)
        if not text.strip():
            raise LLMError("LLM response missing content")

        usage = getattr(response, "usage", None)
        token_summary = ""
        if usage:
            token_summary = (
                f" prompt={getattr(usage, 'prompt_tokens', None)}"
                f" completion={getattr(usage, 'completion_tokens', None)}"
                f" total={getattr(usage, 'total_tokens', None)}"
            )

        logger.info(
            "LLM success model=%s duration=%.3fs%s",
            self.model,
            duration,
            token_summary,
        )
        return text

    @staticmethod
    def _extract_content(response) -> str:
        """Get message content, joining content parts when a list is returned."""
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""

        content = getattr(choices[0].message, "content", None)

        if isinstance(content, str):
            return content

        if isinstance(content, list):
            parts = []
            for part in content:
                if isinstance(part, str):
                    parts.append(part)
                elif isinstance(part, dict) and isinstance(part.get("text"), str):
                    parts.append(part["text"])
                elif isinstance(getattr(part, "text", None), str):
                    parts.append(part.text)
            return "".join(parts)

        return ""
