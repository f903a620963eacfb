"""
Last-resort detector for a concept identifier written without any SNOMED label.
"""

import re

from .registry import register_pattern
from .base import (
    CONCEPT_ID_GROUP,
    PIPED_TERM_BLOCK,
    PatternContext,
    PluginMetadata,
    PluginPriority,
    compile_pattern,
    concept_result,
    piped_term,
)
from ..metadata.models import EclOperator

STANDALONE_CONCEPT_PATTERN = compile_pattern(r"(?P<operator><{1,2}|>{1,2})?\s*" + CONCEPT_ID_GROUP + PIPED_TERM_BLOCK)
NUMBER_LIST_PATTERN = re.compile(r"[0-9\s,]+")


@register_pattern(
    PluginMetadata(
        id="standalone_concept",
        description="Concept identifier with optional operator and no SNOMED label",
        priority=PluginPriority.STANDALONE_CONCEPT,
        tags=["concept", "standalone", "fallback"],
    )
)
def detect_standalone_concept(ctx: PatternContext):
    # A bare list of numbers is not treated as a concept reference
    if NUMBER_LIST_PATTERN.fullmatch(ctx.value_set):
        return None
    match = STANDALONE_CONCEPT_PATTERN.search(ctx.value_set)
    if not match:
        return None
    operator = EclOperator.from_token(match.group("operator")) if match.group("operator") else EclOperator.DESCENDANTS
    return concept_result(
        "standalone_concept",
        "Found standalone concept",
        operator,
        match.group("id"),
        piped_term(match),
        confidence="low",
    )
