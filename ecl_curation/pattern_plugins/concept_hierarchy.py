"""
Single-concept detectors after a SNOMED CT label: self only, descendants
(<, <<) and ancestors (>, >>).
"""

from .registry import register_pattern
from .base import (
    CONCEPT_ID_GROUP,
    PIPED_TERM_BLOCK,
    SNOMED_LABEL,
    PatternContext,
    PluginMetadata,
    PluginPriority,
    compile_pattern,
    concept_result,
    piped_term,
)
from ..metadata.models import EclOperator

EXACT_CONCEPT_PATTERN = compile_pattern(
    SNOMED_LABEL + CONCEPT_ID_GROUP + PIPED_TERM_BLOCK + r"\s*(?:\(exact\)|only|self)"
)
DESCENDANTS_OR_SELF_PATTERN = compile_pattern(SNOMED_LABEL + r"-?\s*<<\s*" + CONCEPT_ID_GROUP + PIPED_TERM_BLOCK)
DESCENDANTS_PATTERN = compile_pattern(SNOMED_LABEL + r"-?\s*<\s*" + CONCEPT_ID_GROUP + PIPED_TERM_BLOCK)
ANCESTORS_OR_SELF_PATTERN = compile_pattern(SNOMED_LABEL + r"-?\s*>>\s*" + CONCEPT_ID_GROUP + PIPED_TERM_BLOCK)
ANCESTORS_PATTERN = compile_pattern(SNOMED_LABEL + r"-?\s*>\s*" + CONCEPT_ID_GROUP + PIPED_TERM_BLOCK)


def _hierarchy_result(pattern, ctx: PatternContext, plugin_id: str, description: str, operator: EclOperator):
    match = pattern.search(ctx.value_set)
    if not match:
        return None
    return concept_result(plugin_id, description, operator, match.group("id"), piped_term(match))


@register_pattern(
    PluginMetadata(
        id="exact_concept",
        description="Concept marked (exact), only or self - no operator",
        priority=PluginPriority.EXACT_CONCEPT,
        tags=["snomed", "concept", "self"],
    )
)
def detect_exact_concept(ctx: PatternContext):
    return _hierarchy_result(
        EXACT_CONCEPT_PATTERN, ctx, "exact_concept",
        "Found exact SNOMED concept (self only)", EclOperator.SELF,
    )


@register_pattern(
    PluginMetadata(
        id="descendants_or_self",
        description="<<conceptId - descendants including self",
        priority=PluginPriority.DESCENDANTS_OR_SELF,
        tags=["snomed", "concept", "descendants"],
    )
)
def detect_descendants_or_self(ctx: PatternContext):
    return _hierarchy_result(
        DESCENDANTS_OR_SELF_PATTERN, ctx, "descendants_or_self",
        "Found SNOMED concept with descendants (inclusive)", EclOperator.DESCENDANTS_OR_SELF,
    )


@register_pattern(
    PluginMetadata(
        id="descendants",
        description="<conceptId - descendants excluding self",
        priority=PluginPriority.DESCENDANTS,
        tags=["snomed", "concept", "descendants"],
    )
)
def detect_descendants(ctx: PatternContext):
    return _hierarchy_result(
        DESCENDANTS_PATTERN, ctx, "descendants",
        "Found SNOMED concept with descendants (exclusive)", EclOperator.DESCENDANTS,
    )


@register_pattern(
    PluginMetadata(
        id="ancestors_or_self",
        description=">>conceptId - ancestors including self",
        priority=PluginPriority.ANCESTORS_OR_SELF,
        tags=["snomed", "concept", "ancestors"],
    )
)
def detect_ancestors_or_self(ctx: PatternContext):
    return _hierarchy_result(
        ANCESTORS_OR_SELF_PATTERN, ctx, "ancestors_or_self",
        "Found SNOMED ancestors (inclusive)", EclOperator.ANCESTORS_OR_SELF,
    )


@register_pattern(
    PluginMetadata(
        id="ancestors",
        description=">conceptId - ancestors excluding self",
        priority=PluginPriority.ANCESTORS,
        tags=["snomed", "concept", "ancestors"],
    )
)
def detect_ancestors(ctx: PatternContext):
    return _hierarchy_result(
        ANCESTORS_PATTERN, ctx, "ancestors",
        "Found SNOMED ancestors (exclusive)", EclOperator.ANCESTORS,
    )
