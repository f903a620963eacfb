"""
Value set to ECL conversion.

Runs the registered recognizers in priority order over a valueSets
descriptor and returns the first canonical ECL expression found.
"""

from typing import List, Optional

from ..metadata.models import EclExpression
from ..pattern_plugins.base import PatternContext, PatternResult
from ..pattern_plugins.registry import PatternRegistry, pattern_registry

PATTERN_PACKAGE = "ecl_curation.pattern_plugins"


def _prepare(value_set: Optional[str]) -> Optional[str]:
    if not value_set:
        return None
    text = value_set.strip()
    return text or None


def _registry(registry: Optional[PatternRegistry]) -> PatternRegistry:
    if registry is not None:
        return registry
    pattern_registry.load_all_modules(PATTERN_PACKAGE)
    return pattern_registry


def match_value_set(
    value_set: Optional[str],
    registry: Optional[PatternRegistry] = None,
) -> Optional[PatternResult]:
    """Return the winning recognizer result for a descriptor, or None."""
    text = _prepare(value_set)
    if text is None:
        return None
    return _registry(registry).run_first(PatternContext(value_set=text))


def convert_value_set(
    value_set: Optional[str],
    registry: Optional[PatternRegistry] = None,
) -> Optional[EclExpression]:
    """
    Convert a valueSets descriptor into a canonical ECL expression.

    Args:
        value_set: Free-text descriptor; None or blank is treated as no match
        registry: Recognizer registry (defaults to the built-in recognizers)

    Returns:
        EclExpression, or None when no SNOMED CT convention is present
    """
    result = match_value_set(value_set, registry)
    return result.expression if result else None


def extract_snomed_ecl(value_set: Optional[str]) -> str:
    """Canonical ECL text for a descriptor, "" when there is none."""
    expression = convert_value_set(value_set)
    return expression.text if expression else ""


def explain_value_set(
    value_set: Optional[str],
    registry: Optional[PatternRegistry] = None,
) -> List[PatternResult]:
    """Every recognizer that matches the descriptor, in priority order.

    The first entry is the one convert_value_set uses.
    """
    text = _prepare(value_set)
    if text is None:
        return []
    return _registry(registry).run_all(PatternContext(value_set=text))
