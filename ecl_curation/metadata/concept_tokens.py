"""
Concept and refset token helpers for SNOMED CT value set text.

These helpers avoid regular expressions so they can be applied to any
fragment captured by the recognizers without re-scanning the input.
"""

from typing import Optional

CONCEPT_ID_MIN_LENGTH = 6
CONCEPT_ID_MAX_LENGTH = 18

DEFAULT_CONCEPT_TERM = "SNOMED CT concept"
DEFAULT_REFSET_TERM = "SNOMED CT reference set"
DMD_CONCEPT_TERM = "dm+d concept"


def is_concept_id(token) -> bool:
    """Return True when token is an ASCII digit string of 6 to 18 characters.

    The length bound is what separates a SNOMED CT identifier from an
    unrelated number in the same text.
    """
    if not isinstance(token, str):
        return False
    return (
        CONCEPT_ID_MIN_LENGTH <= len(token) <= CONCEPT_ID_MAX_LENGTH
        and token.isascii()
        and token.isdigit()
    )


def extract_piped_term(text: Optional[str]) -> Optional[str]:
    """Return the content between the first pair of pipes, if any.

    Examples:
        extract_piped_term("71388002 |Procedure|") -> "Procedure"
        extract_piped_term("71388002") -> None
    """
    if not text:
        return None
    start = text.find("|")
    if start == -1:
        return None
    end = text.find("|", start + 1)
    if end == -1:
        return None
    return text[start + 1:end]


def _trailing_tag_start(term: str) -> int:
    """Index of the '(' opening a trailing semantic tag, or -1."""
    if not term.endswith(")"):
        return -1
    start = term.rfind("(")
    if start == -1:
        return -1
    inner = term[start + 1:-1]
    if not inner or ")" in inner:
        return -1
    return start


def strip_semantic_tag(term: Optional[str]) -> str:
    """Remove trailing "(semantic tag)" groups and surrounding whitespace.

    "Procedure (procedure)" -> "Procedure"
    """
    if not term:
        return ""
    cleaned = term.strip()
    start = _trailing_tag_start(cleaned)
    while start != -1:
        cleaned = cleaned[:start].rstrip()
        start = _trailing_tag_start(cleaned)
    return cleaned


def has_semantic_tag(term: Optional[str]) -> bool:
    """Return True when term ends with a "(semantic tag)" group."""
    if not term:
        return False
    return _trailing_tag_start(term.strip()) != -1


def clean_concept_term(term: Optional[str], default: Optional[str] = None) -> Optional[str]:
    """Normalise a display term for use inside |...|.

    Falls back to default when nothing is left after cleaning.
    """
    cleaned = strip_semantic_tag(term)
    return cleaned or default
