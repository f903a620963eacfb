"""
Pattern plugin definitions for value set recognition.
Patterns are callable detectors that return structured results.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Optional, List

from ..metadata.concept_tokens import (
    DEFAULT_CONCEPT_TERM,
    clean_concept_term,
    extract_piped_term,
)
from ..metadata.models import (
    ConceptReference,
    EclExpression,
    EclOperator,
    RefsetReference,
)


class PluginPriority:
    """Priority tiers for recognizer execution order.

    Lower values run first and the first recognizer that matches wins,
    so these values define which convention is preferred on overlap.
    """
    COMPLEX_EXPRESSION = 10
    ALTERNATE_PREFIX = 20
    DMD_CODE = 30
    SNOMED_REFSET = 40
    EXACT_CONCEPT = 50
    DESCENDANTS_OR_SELF = 60
    DESCENDANTS = 70
    ANCESTORS_OR_SELF = 80
    ANCESTORS = 90
    FHIR_ECL_URL = 100
    FHIR_REFSET_URL = 110
    SNOMED_CONCEPT_ID = 120
    SNOMED_CONCEPT_LIST = 130
    STANDALONE_REFSET = 140
    STANDALONE_CONCEPT = 150
    DEFAULT = 1000   # Unspecified priority, runs after the built-in set


@dataclass
class PluginMetadata:
    """Metadata for a pattern plugin.

    Attributes:
        id: Unique recognizer id, reported as PatternResult.id
        description: Human-readable description
        priority: Position in the rule table (lower runs first)
        tags: Categorisation tags for filtering/grouping
    """
    id: str
    description: str = ""
    priority: int = PluginPriority.DEFAULT
    tags: List[str] = field(default_factory=list)


@dataclass
class PatternContext:
    """Input handed to every recognizer: the trimmed valueSets text."""
    value_set: str
    element_name: Optional[str] = None


@dataclass
class PatternResult:
    id: str
    description: str
    expression: EclExpression
    confidence: str = "medium"
    notes: List[str] = field(default_factory=list)

    @property
    def ecl(self) -> str:
        return self.expression.text


PatternDetector = Callable[[PatternContext], Optional[PatternResult]]


# "SNOMED CT" label variants: "SNOMED CT", "SNOMED-CT", "SNOMEDCT", "SNOMED CT(UK)" ...
SNOMED_LABEL = r"SNOMED[\s\-]*CT[\s\(UK\)]?\s*:?\s*"

# Concept or refset identifier: a whole run of 6-18 ASCII digits, never part of a longer number
CONCEPT_ID_GROUP = r"(?<![0-9])(?P<id>[0-9]{6,18})(?![0-9])"

# Optional "|display term|" immediately after an identifier
PIPED_TERM_BLOCK = r"\s*(?P<term>\|[^|]+\|)?"


def compile_pattern(pattern: str) -> "re.Pattern":
    """Compile a recognizer pattern; all value set patterns ignore case."""
    return re.compile(pattern, re.IGNORECASE)


def piped_term(match: "re.Match") -> Optional[str]:
    """Return the |term| captured by PIPED_TERM_BLOCK, without the pipes."""
    return extract_piped_term(match.group("term"))


def concept_result(
    plugin_id: str,
    description: str,
    operator: EclOperator,
    concept_id: str,
    term: Optional[str] = None,
    confidence: str = "high",
) -> PatternResult:
    """Build a single-concept result with a cleaned display term."""
    reference = ConceptReference(concept_id, clean_concept_term(term, DEFAULT_CONCEPT_TERM))
    return PatternResult(
        id=plugin_id,
        description=description,
        expression=EclExpression.from_constraint(operator, reference),
        confidence=confidence,
    )


def refset_result(
    plugin_id: str,
    description: str,
    refset_id: str,
    term: Optional[str] = None,
    confidence: str = "high",
) -> PatternResult:
    """Build a reference set member-of result; the term is trimmed only."""
    name = term.strip() if term else None
    reference = RefsetReference(refset_id, name or None)
    return PatternResult(
        id=plugin_id,
        description=description,
        expression=EclExpression.from_constraint(EclOperator.MEMBER_OF, reference),
        confidence=confidence,
    )
