"""
Text normalization helpers.

Turns raw extractor or scraper output into normalized text: no carriage
returns, no runs of spaces or tabs, at most one blank line between blocks,
and spaced-out capitals ("A V I S H E K") joined back into single words.
"""

import re

_HORIZONTAL_WS = re.compile(r"[ \t]+")
_LINE_EDGE_WS = re.compile(r" ?\n ?")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")

# * Three or more single letters separated by whitespace
_SPACED_LETTERS = re.compile(r"\b(?:[A-Za-z]\s+){2,}[A-Za-z]\b")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Normalize extracted document text.

    Args:
        text: Raw text from a document decoder or a scraped page.

    Returns:
        Normalized text. Normalizing it again returns it unchanged.
    """
    collapsed = text.replace("\r", "")
    collapsed = _HORIZONTAL_WS.sub(" ", collapsed)
    # * Space-only lines count as blank
    collapsed = _LINE_EDGE_WS.sub("\n", collapsed)
    collapsed = _EXCESS_NEWLINES.sub("\n\n", collapsed)
    collapsed = collapsed.strip()

    return _SPACED_LETTERS.sub(lambda m: _WHITESPACE.sub("", m.group(0)), collapsed)


def clean_scraped_text(text: str) -> str:
    """Trim every line of rendered page text, then normalize it."""
    lines = [line.strip() for line in text.replace("\r", "").split("\n")]
    return normalize_text("\n".join(lines))
