"""Custom exceptions for the resume-fit pipeline."""

from typing import Optional


DOCUMENT_HINT = "Please upload the resume again as a PDF or DOCX file."
SCRAPE_HINT = "Please paste the job description text instead."


class ResumeFitError(Exception):
    """Base exception for all pipeline errors.

    Every error carries a human-readable message and a remediation hint that
    can be shown to the user as is.
    """

    default_hint = ""

    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint if hint is not None else self.default_hint


class ConfigurationError(ResumeFitError):
    """Invalid or missing configuration (e.g. no LLM API key)."""

    default_hint = "Check the environment variables or the .env file."


class DocumentError(ResumeFitError):
    """Base exception for document text extraction errors."""

    default_hint = DOCUMENT_HINT


class UnsupportedFormat(DocumentError):
    """The declared media type is not PDF or DOCX."""

    def __init__(self, media_type: str) -> None:
        super().__init__(f"Unsupported file type: {media_type or 'unknown'}")
        self.media_type = media_type


class DecodeFailure(DocumentError):
    """The document bytes could not be parsed."""


class JobScrapeError(ResumeFitError):
    """Scraping a job posting failed.

    Raised directly for unexpected browser failures; the subclasses cover the
    expected, user-actionable failure modes.
    """

    default_hint = SCRAPE_HINT

    def __init__(self, message: str, url: str, hint: Optional[str] = None) -> None:
        super().__init__(message, hint)
        self.url = url


class NavigationTimeout(JobScrapeError):
    """The page did not load in time or could not be reached."""

    def __init__(self, url: str) -> None:
        super().__init__(
            "Failed to load the page - the site took too long to respond. "
            "Try again or use a different URL.",
            url,
        )


class ExtractionTooShort(JobScrapeError):
    """The extracted text is too short to be a job description."""

    def __init__(self, url: str, length: int) -> None:
        super().__init__(
            "Could not extract meaningful content. "
            "The site may require authentication or block scraping.",
            url,
        )
        self.length = length


class AuthWallDetected(JobScrapeError):
    """The page shows a login, signup or captcha wall instead of the posting."""

    def __init__(self, url: str) -> None:
        super().__init__(
            "This page appears to require login or shows an auth/captcha wall.",
            url,
        )


class LLMError(ResumeFitError):
    """A chat-completion request failed or returned unusable content."""

    default_hint = "The language model service is unavailable. Try again later."


class EntityExtractionFailure(ResumeFitError):
    """The entity-extraction fallback failed.

    Recovered inside the resume parser: the failure is logged and the
    locally extracted data is kept.
    """


class ResumeRewriteError(LLMError):
    """The generated resume is too short or empty."""
