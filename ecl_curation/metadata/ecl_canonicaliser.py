"""
ECL text canonicalisation and the acceptance heuristic for free-text
SNOMED CT expressions captured after a "SNOMED CT:" label.
"""

import re

from .concept_tokens import has_semantic_tag, strip_semantic_tag

_LOGICAL_KEYWORDS = (
    (re.compile(r"\s+or\s+", re.IGNORECASE), " OR "),
    (re.compile(r"\s+and\s+", re.IGNORECASE), " AND "),
    (re.compile(r"\s+minus\s+", re.IGNORECASE), " MINUS "),
)

# Operator followed by exactly one space, nothing before it
_OPERATOR_SPACING = (
    re.compile(r"\s*(<{1,2})\s*"),
    re.compile(r"\s*(>{1,2})\s*"),
    re.compile(r"\s*(\^)\s*"),
)

_PIPED_TERM = re.compile(r"\|([^|]+)\|")
_WHITESPACE = re.compile(r"\s+")

_HAS_OPERATOR_OR_KEYWORD = re.compile(r"[<>^]|AND|OR|MINUS", re.IGNORECASE)
_HAS_CONCEPT_ID = re.compile(r"[0-9]{6,18}")
_LOGICAL_JOIN = re.compile(r"\s+(?:or|and|minus)\s+", re.IGNORECASE)
_OPERATOR_BEFORE_ID = re.compile(r"<{1,2}\s*[0-9]|>{1,2}\s*[0-9]|\^\s*[0-9]")

COMPLEX_EXPRESSION_MIN_LENGTH = 20


def _clean_piped_term(match: re.Match) -> str:
    term = match.group(1)
    if not has_semantic_tag(term):
        return match.group(0)
    cleaned = strip_semantic_tag(term)
    if not cleaned:
        return match.group(0)
    return f"|{cleaned}|"


def _canonical_pass(text: str) -> str:
    cleaned = text.strip()

    for pattern, replacement in _LOGICAL_KEYWORDS:
        cleaned = pattern.sub(replacement, cleaned)

    for pattern in _OPERATOR_SPACING:
        cleaned = pattern.sub(r"\1 ", cleaned)

    cleaned = _PIPED_TERM.sub(_clean_piped_term, cleaned)

    cleaned = _WHITESPACE.sub(" ", cleaned)
    return cleaned.strip()


def canonicalize(text: str) -> str:
    """Return the canonical rendering of an ECL expression.

    Uppercases or/and/minus, normalises spacing around < << > >> ^,
    removes semantic tags from |terms| and collapses whitespace. Each step
    can expose work for an earlier one (tag removal leaving an operator at
    the end of a term, operator spacing isolating a keyword), so the pass
    is repeated until the text stops changing:
    canonicalize(canonicalize(x)) == canonicalize(x).
    """
    if not text:
        return ""
    current = _canonical_pass(text)
    while True:
        following = _canonical_pass(current)
        if following == current:
            return current
        current = following


def is_plausible_complex_expression(text: str) -> bool:
    """Heuristic check that captured text looks like a whole ECL expression.

    Requires an operator or logical keyword, a 6-18 digit identifier, and
    either explicit logical structure or more than 20 characters. This is
    not a grammar check.
    """
    if not text:
        return False
    has_operators = bool(_HAS_OPERATOR_OR_KEYWORD.search(text))
    has_concept_ids = bool(_HAS_CONCEPT_ID.search(text))
    has_logical_structure = bool(_LOGICAL_JOIN.search(text) or _OPERATOR_BEFORE_ID.search(text))
    return has_operators and has_concept_ids and (
        has_logical_structure or len(text) > COMPLEX_EXPRESSION_MIN_LENGTH
    )
