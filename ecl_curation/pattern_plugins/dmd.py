"""
UK Dictionary of Medicines and Devices (dm+d) code detector.
"""

from .registry import register_pattern
from .base import (
    PatternContext,
    PatternResult,
    PluginMetadata,
    PluginPriority,
    compile_pattern,
)
from ..metadata.concept_tokens import DMD_CONCEPT_TERM, is_concept_id
from ..metadata.models import ConceptReference, EclExpression, EclOperator, format_constraint

DMD_CODE_PATTERN = compile_pattern(r"dm\+d:\s*(?P<code>[0-9]+)")


@register_pattern(
    PluginMetadata(
        id="dmd_code",
        description="dm+d code, constrained to its descendants",
        priority=PluginPriority.DMD_CODE,
        tags=["dmd", "medication"],
    )
)
def detect_dmd_code(ctx: PatternContext):
    match = DMD_CODE_PATTERN.search(ctx.value_set)
    if not match:
        return None
    code = match.group("code")

    # dm+d codes are taken at any length; only SNOMED-shaped ones carry a constraint
    if is_concept_id(code):
        expression = EclExpression.from_constraint(
            EclOperator.DESCENDANTS, ConceptReference(code, DMD_CONCEPT_TERM)
        )
        confidence = "high"
    else:
        expression = EclExpression(text=format_constraint(EclOperator.DESCENDANTS, code, DMD_CONCEPT_TERM))
        confidence = "low"

    return PatternResult(
        id="dmd_code",
        description="Found dm+d code",
        expression=expression,
        confidence=confidence,
    )
