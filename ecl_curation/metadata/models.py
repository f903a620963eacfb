"""
Data model for value set conversion: ECL operators, concept and refset
references, rendered expressions and per-element conversion records.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from .concept_tokens import (
    DEFAULT_CONCEPT_TERM,
    DEFAULT_REFSET_TERM,
    is_concept_id,
)

ECL_SOURCE_MARKER = "Converted from valueSets"


class EclOperator(Enum):
    """ECL constraint operators and their canonical prefix tokens."""
    SELF = ""
    DESCENDANTS = "<"
    DESCENDANTS_OR_SELF = "<<"
    ANCESTORS = ">"
    ANCESTORS_OR_SELF = ">>"
    MEMBER_OF = "^"

    @property
    def prefix(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, token: Optional[str]) -> "EclOperator":
        """Map an operator token as written in text ("", "<", "<<", ...)."""
        token = (token or "").strip()
        for operator in cls:
            if operator.value == token:
                return operator
        raise ValueError(f"Unknown ECL operator token '{token}'")


@dataclass(frozen=True)
class ConceptReference:
    id: str
    term: Optional[str] = None

    def __post_init__(self):
        if not is_concept_id(self.id):
            raise ValueError(f"'{self.id}' is not a SNOMED CT concept identifier")

    @property
    def display_term(self) -> str:
        return self.term or DEFAULT_CONCEPT_TERM


@dataclass(frozen=True)
class RefsetReference:
    id: str
    term: Optional[str] = None

    def __post_init__(self):
        if not is_concept_id(self.id):
            raise ValueError(f"'{self.id}' is not a SNOMED CT reference set identifier")

    @property
    def display_term(self) -> str:
        return self.term or DEFAULT_REFSET_TERM


Reference = Union[ConceptReference, RefsetReference]


def format_constraint(operator: EclOperator, identifier: str, term: str) -> str:
    """Render `<op> <id> |<term>|`; the self operator has no prefix."""
    body = f"{identifier} |{term}|"
    if operator is EclOperator.SELF:
        return body
    return f"{operator.prefix} {body}"


@dataclass(frozen=True)
class EclConstraint:
    """A single operator applied to one concept or reference set."""
    operator: EclOperator
    reference: Reference

    def render(self) -> str:
        return format_constraint(self.operator, self.reference.id, self.reference.display_term)


@dataclass(frozen=True)
class EclExpression:
    """Canonical ECL text plus the constraints it was built from.

    Compound expressions captured from free text keep only the text; their
    constraints tuple is empty.
    """
    text: str
    constraints: Tuple[EclConstraint, ...] = ()
    compound: bool = False

    def __str__(self) -> str:
        return self.text

    @property
    def operator(self) -> Optional[EclOperator]:
        if len(self.constraints) == 1:
            return self.constraints[0].operator
        return None

    @property
    def concept_ids(self) -> Tuple[str, ...]:
        return tuple(c.reference.id for c in self.constraints)

    @classmethod
    def from_constraint(cls, operator: EclOperator, reference: Reference) -> "EclExpression":
        constraint = EclConstraint(operator, reference)
        return cls(text=constraint.render(), constraints=(constraint,))

    @classmethod
    def any_of(cls, constraints: Sequence[EclConstraint]) -> "EclExpression":
        """Join constraints with OR."""
        constraints = tuple(constraints)
        if not constraints:
            raise ValueError("any_of needs at least one constraint")
        text = " OR ".join(c.render() for c in constraints)
        return cls(text=text, constraints=constraints, compound=len(constraints) > 1)

    @classmethod
    def from_text(cls, canonical_text: str) -> "EclExpression":
        return cls(text=canonical_text, compound=True)


class ConversionOutcome(Enum):
    CONVERTED = "converted"
    EXISTING_SKIPPED = "existing_ecl_skipped"
    NO_SNOMED_PATTERN = "no_snomed_pattern"
    ERROR = "error"


@dataclass(frozen=True)
class ConversionRecord:
    """Provenance written alongside a converted snomedECL value."""
    element_name: str
    canonical_ecl: str
    converted_on: date
    source: str = ECL_SOURCE_MARKER

    @property
    def converted_on_iso(self) -> str:
        return self.converted_on.isoformat()


@dataclass
class ElementConversionResult:
    element_name: str
    outcome: ConversionOutcome
    value_set: str = ""
    ecl: Optional[str] = None
    pattern_id: Optional[str] = None
    record: Optional[ConversionRecord] = None
    error: Optional[str] = None
    notes: list = field(default_factory=list)
