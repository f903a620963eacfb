"""
Recognizers for text introduced by a "SNOMED CT" (or SCT) label: full ECL
expressions, bare concept identifiers and identifier lists.
"""

import re

from .registry import register_pattern
from .base import (
    CONCEPT_ID_GROUP,
    SNOMED_LABEL,
    PatternContext,
    PatternResult,
    PluginMetadata,
    PluginPriority,
    compile_pattern,
    concept_result,
)
from ..metadata.concept_tokens import DEFAULT_CONCEPT_TERM
from ..metadata.ecl_canonicaliser import canonicalize, is_plausible_complex_expression
from ..metadata.models import ConceptReference, EclConstraint, EclExpression, EclOperator

COMPLEX_EXPRESSION_PATTERN = compile_pattern(
    r"SNOMED[\s\-]*CT\s*(?:\(UK\))?\s*:\s*-?\s*(?P<expression>.+)"
)
ALTERNATE_PREFIX_PATTERN = compile_pattern(
    r"(?<![\w./])(?:SCT|SNOMEDCT|SNOMED[\s\-]*CT)[\s\(UK\)]?\s*:?\s*-?\s*(?P<expression>.+)"
)
SNOMED_CONCEPT_ID_PATTERN = compile_pattern(SNOMED_LABEL + CONCEPT_ID_GROUP)
SNOMED_CONCEPT_LIST_PATTERN = compile_pattern(r"SNOMED[^:]*:\s*(?P<ids>[0-9\s,]+)")
_LIST_CONCEPT_ID = re.compile(r"(?<![0-9])[0-9]{6,18}(?![0-9])")


def _expression_result(plugin_id: str, description: str, captured: str):
    expression = captured.strip()
    if not is_plausible_complex_expression(expression):
        return None
    canonical = canonicalize(expression)
    if not canonical:
        return None
    return PatternResult(
        id=plugin_id,
        description=description,
        expression=EclExpression.from_text(canonical),
        confidence="high",
    )


@register_pattern(
    PluginMetadata(
        id="complex_expression",
        description="ECL expression after a 'SNOMED CT:' label",
        priority=PluginPriority.COMPLEX_EXPRESSION,
        tags=["snomed", "ecl", "expression"],
    )
)
def detect_complex_expression(ctx: PatternContext):
    """
    Example: "SNOMED CT :- < 127785005 |Administration| or << 713404003 |Vaccination given|"

    The captured tail is kept whole (not reduced to one concept) when the
    validity heuristic accepts it.
    """
    match = COMPLEX_EXPRESSION_PATTERN.search(ctx.value_set)
    if not match:
        return None
    return _expression_result("complex_expression", "Found complex ECL expression", match.group("expression"))


@register_pattern(
    PluginMetadata(
        id="alternate_prefix",
        description="ECL expression after an SCT or SNOMEDCT prefix",
        priority=PluginPriority.ALTERNATE_PREFIX,
        tags=["snomed", "ecl", "expression"],
    )
)
def detect_alternate_prefix(ctx: PatternContext):
    # Anything the complex_expression pattern captured is not re-read here,
    # even if its tail was rejected.
    if COMPLEX_EXPRESSION_PATTERN.search(ctx.value_set):
        return None
    match = ALTERNATE_PREFIX_PATTERN.search(ctx.value_set)
    if not match:
        return None
    return _expression_result("alternate_prefix", "Found alternative SNOMED prefix", match.group("expression"))


@register_pattern(
    PluginMetadata(
        id="snomed_concept_id",
        description="Bare concept identifier after a SNOMED CT label (descendants by default)",
        priority=PluginPriority.SNOMED_CONCEPT_ID,
        tags=["snomed", "concept", "fallback"],
    )
)
def detect_snomed_concept_id(ctx: PatternContext):
    match = SNOMED_CONCEPT_ID_PATTERN.search(ctx.value_set)
    if not match:
        return None
    return concept_result(
        "snomed_concept_id",
        "Found simple SNOMED concept ID",
        EclOperator.DESCENDANTS,
        match.group("id"),
        confidence="medium",
    )


@register_pattern(
    PluginMetadata(
        id="snomed_concept_list",
        description="Comma or space separated concept identifiers after a SNOMED label",
        priority=PluginPriority.SNOMED_CONCEPT_LIST,
        tags=["snomed", "concept", "list"],
    )
)
def detect_snomed_concept_list(ctx: PatternContext):
    match = SNOMED_CONCEPT_LIST_PATTERN.search(ctx.value_set)
    if not match:
        return None
    concept_ids = _LIST_CONCEPT_ID.findall(match.group("ids"))
    if not concept_ids:
        return None

    constraints = [
        EclConstraint(EclOperator.DESCENDANTS, ConceptReference(concept_id, DEFAULT_CONCEPT_TERM))
        for concept_id in concept_ids
    ]
    description = (
        "Found single concept in list" if len(constraints) == 1 else "Found multiple concepts"
    )
    return PatternResult(
        id="snomed_concept_list",
        description=description,
        expression=EclExpression.any_of(constraints),
        confidence="medium",
        notes=[f"concept ids: {', '.join(concept_ids)}"],
    )
