"""Test helper utilities for Resume Fit tests."""

from .documents import build_docx, build_pdf
from .fakes import FakeDriver, FakeOpenAI, make_completion, make_llm_client

__all__ = ["FakeDriver", "FakeOpenAI", "build_docx", "build_pdf", "make_completion", "make_llm_client"]
