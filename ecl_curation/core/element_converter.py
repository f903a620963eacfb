"""
Per-element conversion of valueSets into snomedECL.

Decides whether an element should be converted, writes the canonical ECL
with its provenance tags, and isolates failures so a run always reaches the
last element.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

import pandas as pd

from .converter import match_value_set
from ..metadata.conversion_stats import ConversionStats
from ..metadata.models import (
    ConversionOutcome,
    ConversionRecord,
    ElementConversionResult,
)
from ..metadata.tagged_values import (
    ECL_CONVERSION_DATE_TAG,
    ECL_SOURCE_TAG,
    SNOMED_ECL_TAG,
    VALUE_SETS_TAG,
    TaggedElement,
)
from ..pattern_plugins.registry import PatternRegistry
from ..system.conversion_config import ConversionConfig
from ..system.debug_logger import ConversionDebugLogger, get_debug_logger
from ..system.error_handling import ErrorContext, ErrorHandler

UNNAMED_ELEMENT = "<unnamed>"


def convert_data_element(
    element: TaggedElement,
    stats: ConversionStats,
    config: Optional[ConversionConfig] = None,
    today: Optional[date] = None,
    error_handler: Optional[ErrorHandler] = None,
    debug_logger: Optional[ConversionDebugLogger] = None,
    registry: Optional[PatternRegistry] = None,
) -> ElementConversionResult:
    """
    Convert one element's valueSets into snomedECL.

    Args:
        element: Element exposing name, get_tagged_value and set_tagged_value
        stats: Accumulator for this run; updated in place
        config: Policy flags (defaults to ConversionConfig())
        today: Conversion date written to eclConversionDate
        error_handler: Receives any exception raised while handling the element
        debug_logger: Per-element trace output
        registry: Recognizer registry override

    Returns:
        ElementConversionResult describing what happened; never raises
    """
    config = config or ConversionConfig()
    error_handler = error_handler or ErrorHandler()
    debug_logger = debug_logger or get_debug_logger(config)

    stats.elements_processed += 1
    element_name = UNNAMED_ELEMENT
    value_set = ""

    try:
        element_name = element.name or UNNAMED_ELEMENT
        debug_logger.log_element_start(element_name)

        notes = []
        existing_ecl = element.get_tagged_value(SNOMED_ECL_TAG) or ""
        if existing_ecl.strip():
            debug_logger.log_existing_ecl(existing_ecl, skipped=config.skip_existing_ecl)
            if config.skip_existing_ecl:
                stats.record(ConversionOutcome.EXISTING_SKIPPED)
                return ElementConversionResult(
                    element_name=element_name,
                    outcome=ConversionOutcome.EXISTING_SKIPPED,
                    ecl=existing_ecl,
                )
            notes.append(f"replaced existing snomedECL: {existing_ecl}")

        value_set = element.get_tagged_value(VALUE_SETS_TAG) or ""
        if not value_set.strip():
            debug_logger.log_non_snomed_element(element_name, "No valueSets found")
            stats.record(ConversionOutcome.NO_SNOMED_PATTERN)
            return ElementConversionResult(
                element_name=element_name,
                outcome=ConversionOutcome.NO_SNOMED_PATTERN,
                notes=notes,
            )

        debug_logger.log_value_set(value_set)
        match = match_value_set(value_set, registry)
        if match is None:
            debug_logger.log_no_match(value_set)
            debug_logger.log_non_snomed_element(element_name, "No SNOMED expression found in valueSets")
            stats.record(ConversionOutcome.NO_SNOMED_PATTERN)
            return ElementConversionResult(
                element_name=element_name,
                outcome=ConversionOutcome.NO_SNOMED_PATTERN,
                value_set=value_set,
                notes=notes,
            )

        debug_logger.log_pattern_match(match.id, match.description, match.ecl)
        record = ConversionRecord(
            element_name=element_name,
            canonical_ecl=match.ecl,
            converted_on=today or date.today(),
        )
        element.set_tagged_value(SNOMED_ECL_TAG, record.canonical_ecl)
        element.set_tagged_value(ECL_SOURCE_TAG, record.source)
        element.set_tagged_value(ECL_CONVERSION_DATE_TAG, record.converted_on_iso)

        stats.record(ConversionOutcome.CONVERTED)
        debug_logger.log_conversion(element_name, record.canonical_ecl)
        return ElementConversionResult(
            element_name=element_name,
            outcome=ConversionOutcome.CONVERTED,
            value_set=value_set,
            ecl=record.canonical_ecl,
            pattern_id=match.id,
            record=record,
            notes=notes,
        )

    except Exception as e:
        error = error_handler.log_exception(
            "convert_data_element",
            e,
            context=ErrorContext(
                operation="convert_data_element",
                element_name=element_name,
                value_set=value_set or None,
            ),
        )
        stats.record(ConversionOutcome.ERROR)
        return ElementConversionResult(
            element_name=element_name,
            outcome=ConversionOutcome.ERROR,
            value_set=value_set,
            error=error.message,
        )


@dataclass
class ConversionRun:
    """Statistics and per-element results of one conversion run."""
    stats: ConversionStats = field(default_factory=ConversionStats)
    results: List[ElementConversionResult] = field(default_factory=list)

    def converted(self) -> List[ElementConversionResult]:
        return [r for r in self.results if r.outcome is ConversionOutcome.CONVERTED]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per element for review of a run."""
        columns = ["Element", "Outcome", "valueSets", "snomedECL", "Pattern", "Error"]
        rows = [
            {
                "Element": r.element_name,
                "Outcome": r.outcome.value,
                "valueSets": r.value_set,
                "snomedECL": r.ecl,
                "Pattern": r.pattern_id,
                "Error": r.error,
            }
            for r in self.results
        ]
        return pd.DataFrame(rows, columns=columns).fillna("")


def convert_data_elements(
    elements: Iterable[TaggedElement],
    config: Optional[ConversionConfig] = None,
    today: Optional[date] = None,
    error_handler: Optional[ErrorHandler] = None,
    registry: Optional[PatternRegistry] = None,
) -> ConversionRun:
    """
    Convert a sequence of elements with a fresh statistics accumulator.

    Elements are independent; callers running several batches in parallel
    should merge the returned stats afterwards.
    """
    config = config or ConversionConfig()
    error_handler = error_handler or ErrorHandler()
    debug_logger = get_debug_logger(config)
    today = today or date.today()

    run = ConversionRun()
    for element in elements:
        run.results.append(
            convert_data_element(
                element,
                run.stats,
                config=config,
                today=today,
                error_handler=error_handler,
                debug_logger=debug_logger,
                registry=registry,
            )
        )

    debug_logger.log_summary(run.stats)
    return run
