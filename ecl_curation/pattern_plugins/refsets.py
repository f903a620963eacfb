"""
Reference set detectors: "SNOMED CT: ^refsetId |name|" and a bare "^refsetId".
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
    piped_term,
    refset_result,
)

SNOMED_REFSET_PATTERN = compile_pattern(SNOMED_LABEL + r"-?\s*\^" + CONCEPT_ID_GROUP + PIPED_TERM_BLOCK)
STANDALONE_REFSET_PATTERN = compile_pattern(r"^\^" + CONCEPT_ID_GROUP)


@register_pattern(
    PluginMetadata(
        id="snomed_refset",
        description="SNOMED CT reference set with caret, optional |name|",
        priority=PluginPriority.SNOMED_REFSET,
        tags=["refset", "snomed"],
    )
)
def detect_snomed_refset(ctx: PatternContext):
    match = SNOMED_REFSET_PATTERN.search(ctx.value_set)
    if not match:
        return None
    return refset_result(
        "snomed_refset",
        "Found SNOMED reference set",
        match.group("id"),
        piped_term(match),
    )


@register_pattern(
    PluginMetadata(
        id="standalone_refset",
        description="Reference set written as ^refsetId without a SNOMED label",
        priority=PluginPriority.STANDALONE_REFSET,
        tags=["refset", "standalone"],
    )
)
def detect_standalone_refset(ctx: PatternContext):
    match = STANDALONE_REFSET_PATTERN.search(ctx.value_set)
    if not match:
        return None
    return refset_result(
        "standalone_refset",
        "Found standalone reference set",
        match.group("id"),
        confidence="medium",
    )
