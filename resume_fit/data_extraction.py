"""
Data Extraction Module.

Extracts plain text from resume documents (PDF and DOCX). PDF text is
rebuilt row by row from positioned text fragments; DOCX text is read
directly from the document body.
"""

import io
import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple

import docx
import pdfplumber

from resume_fit.exceptions import DecodeFailure, UnsupportedFormat

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

SUPPORTED_MEDIA_TYPES = (PDF_MEDIA_TYPE, DOCX_MEDIA_TYPE)

_SUFFIX_MEDIA_TYPES = {
    ".pdf": PDF_MEDIA_TYPE,
    ".docx": DOCX_MEDIA_TYPE,
}

logger = logging.getLogger("resume_fit.extraction")


class PdfFragment(NamedTuple):
    """A run of text at a position on a PDF page."""

    text: str
    x: float
    y: float
    page: int = 0


def media_type_for_path(path: str | Path) -> str:
    """
    Guess the media type of a resume file from its suffix.

    Raises:
        UnsupportedFormat: If the suffix is not .pdf or .docx.
    """
    suffix = Path(path).suffix.lower()

    if suffix not in _SUFFIX_MEDIA_TYPES:
        raise UnsupportedFormat(suffix or str(path))

    return _SUFFIX_MEDIA_TYPES[suffix]


def iter_pdf_fragments(data: bytes) -> Iterator[PdfFragment]:
    """
    Yield positioned text fragments from a PDF, page by page.

    Each call opens the document again, so the sequence can be restarted.

    Args:
        data: PDF file contents.

    Yields:
        PdfFragment for every word run on every page.
    """
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page_number, page in enumerate(pdf.pages):
            for word in page.extract_words(keep_blank_chars=True):
                yield PdfFragment(
                    text=word["text"],
                    x=word["x0"],
                    y=word["top"],
                    page=page_number,
                )


def assemble_rows(fragments: Iterable[PdfFragment]) -> str:
    """
    Rebuild text lines from positioned fragments.

    Fragments sharing the exact same page and y-coordinate form a row. Rows
    are ordered top to bottom, fragments within a row left to right.

    Args:
        fragments: Fragments in any order.

    Returns:
        Rows joined by newlines, fragments joined by single spaces.
    """
    rows: dict[tuple[int, float], list[PdfFragment]] = defaultdict(list)

    for fragment in fragments:
        if fragment.text:
            rows[(fragment.page, fragment.y)].append(fragment)

    lines = []
    for key in sorted(rows):
        row = sorted(rows[key], key=lambda fragment: fragment.x)
        lines.append(" ".join(fragment.text for fragment in row))

    return "\n".join(lines)


def extract_pdf_text(data: bytes) -> str:
    """
    Extract text from PDF bytes.

    Raises:
        DecodeFailure: If the bytes are not a readable PDF.
    """
    try:
        return assemble_rows(iter_pdf_fragments(data))
    except Exception as e:
        raise DecodeFailure(f"Could not read PDF document: {e}") from e


def extract_docx_text(data: bytes) -> str:
    """
    Extract visible text from DOCX bytes.

    Paragraphs come first, then the paragraphs inside table cells.

    Raises:
        DecodeFailure: If the bytes are not a readable DOCX document.
    """
    try:
        document = docx.Document(io.BytesIO(data))

        lines = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                for cell in row.cells:
                    lines.extend(paragraph.text for paragraph in cell.paragraphs)

    except Exception as e:
        raise DecodeFailure(f"Could not read DOCX document: {e}") from e

    return "\n".join(lines)


def extract_document_text(data: bytes, media_type: str) -> str:
    """
    Extract raw (not yet normalized) text from a resume document.

    Args:
        data: Document contents.
        media_type: Declared media type, PDF or DOCX.

    Returns:
        Extracted text.

    Raises:
        UnsupportedFormat: If the media type is neither PDF nor DOCX.
        DecodeFailure: If the document cannot be parsed.
    """
    if media_type == PDF_MEDIA_TYPE:
        text = extract_pdf_text(data)
    elif media_type == DOCX_MEDIA_TYPE:
        text = extract_docx_text(data)
    else:
        raise UnsupportedFormat(media_type)

    logger.info(
        "Document text extracted media_type=%s bytes=%s chars=%s",
        media_type,
        len(data),
        len(text),
    )
    return text
