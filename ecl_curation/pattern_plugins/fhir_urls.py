"""
FHIR implicit value set URLs for SNOMED CT:
http://snomed.info/sct?fhir_vs=ecl/<expression> and ?fhir_vs=refset/<id>.
"""

from urllib.parse import unquote

from .registry import register_pattern
from .base import (
    CONCEPT_ID_GROUP,
    PatternContext,
    PatternResult,
    PluginMetadata,
    PluginPriority,
    compile_pattern,
    refset_result,
)
from ..metadata.ecl_canonicaliser import canonicalize
from ..metadata.models import EclExpression

FHIR_ECL_URL_PATTERN = compile_pattern(r"snomed\.info/sct\?fhir_vs=ecl/(?P<expression>.+)")
FHIR_REFSET_URL_PATTERN = compile_pattern(r"snomed\.info/sct\?fhir_vs=refset/" + CONCEPT_ID_GROUP)


@register_pattern(
    PluginMetadata(
        id="fhir_ecl_url",
        description="FHIR implicit value set URL carrying a URL-encoded ECL expression",
        priority=PluginPriority.FHIR_ECL_URL,
        tags=["fhir", "ecl", "url"],
    )
)
def detect_fhir_ecl_url(ctx: PatternContext):
    match = FHIR_ECL_URL_PATTERN.search(ctx.value_set)
    if not match:
        return None
    canonical = canonicalize(unquote(match.group("expression")))
    if not canonical:
        return None
    return PatternResult(
        id="fhir_ecl_url",
        description="Found FHIR ECL URL",
        expression=EclExpression.from_text(canonical),
        confidence="high",
    )


@register_pattern(
    PluginMetadata(
        id="fhir_refset_url",
        description="FHIR implicit value set URL for a reference set",
        priority=PluginPriority.FHIR_REFSET_URL,
        tags=["fhir", "refset", "url"],
    )
)
def detect_fhir_refset_url(ctx: PatternContext):
    match = FHIR_REFSET_URL_PATTERN.search(ctx.value_set)
    if not match:
        return None
    return refset_result("fhir_refset_url", "Found FHIR reference set URL", match.group("id"))
