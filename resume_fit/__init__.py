"""
Resume Fit - Source Package.

This package contains modules for:
- Text extraction from PDF and DOCX resumes
- Resume structuring (contacts, skills, experience, education)
- Job posting scraping and requirement extraction
- Resume-to-job match scoring
- LLM-backed entity extraction and resume rewriting
"""

__version__ = "1.0.0"
