"""
Debug Logging Utility
Provides optional per-element tracing for valueSet to ECL conversion runs.
"""

import logging
import sys
from typing import Optional, TYPE_CHECKING

from .conversion_config import ConversionConfig

if TYPE_CHECKING:
    from ..metadata.conversion_stats import ConversionStats


class ConversionDebugLogger:
    """
    Debug logger for the valueSets to snomedECL conversion process.
    Provides structured logging for audit trails and troubleshooting.
    """

    def __init__(self, enable_debug: bool = False, log_non_snomed: bool = False,
                 logger_name: str = 'ecl_curation.conversion'):
        """
        Initialise the debug logger.

        Args:
            enable_debug: Whether to trace every element
            log_non_snomed: Whether to log elements without a SNOMED valueSet
            logger_name: Name of the underlying logging.Logger
        """
        self.enable_debug = enable_debug
        self.log_non_snomed = log_non_snomed
        self.logger = logging.getLogger(logger_name)

        if self.enable_debug:
            self.logger.setLevel(logging.DEBUG)
            self.logger.propagate = False

            formatter = logging.Formatter(
                '[%(levelname)s][%(name)s] %(message)s'
            )

            # Keep a single managed handler so formatting stays consistent.
            self.logger.handlers = [
                h for h in self.logger.handlers
                if not getattr(h, '_ecl_curation_debug_handler', False)
            ]

            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.DEBUG)
            console_handler.setFormatter(formatter)
            console_handler._ecl_curation_debug_handler = True  # type: ignore[attr-defined]

            self.logger.addHandler(console_handler)

    def log_element_start(self, element_name: str) -> None:
        """Log the start of processing for one data element."""
        if not self.enable_debug:
            return

        self.logger.debug(f"Examining DataElement: {element_name}")

    def log_value_set(self, value_set: str) -> None:
        """Log the valueSets text about to be analysed."""
        if not self.enable_debug:
            return

        self.logger.debug(f"Found valueSets: {value_set}")

    def log_pattern_match(self, pattern_id: str, description: str, ecl: str) -> None:
        """Log which recognizer fired and what it produced."""
        if not self.enable_debug:
            return

        self.logger.debug(f"{description} [{pattern_id}]: {ecl}")

    def log_no_match(self, value_set: str) -> None:
        """Log a valueSet for which no SNOMED pattern matched."""
        if not self.enable_debug:
            return

        self.logger.debug(f"No SNOMED pattern matched: {value_set}")

    def log_existing_ecl(self, existing_ecl: str, skipped: bool) -> None:
        """Log an element that already carries snomedECL."""
        if skipped:
            self.logger.info(f"Skipping - already has snomedECL: {existing_ecl}")
        else:
            self.logger.info(f"Existing snomedECL will be updated: {existing_ecl}")

    def log_non_snomed_element(self, element_name: str, reason: str) -> None:
        """Log an element skipped because it has no SNOMED valueSet."""
        if not self.log_non_snomed:
            return

        self.logger.info(f"{element_name}: {reason} - skipping")

    def log_conversion(self, element_name: str, ecl: str) -> None:
        """Log a successful conversion."""
        self.logger.info(f"{element_name}: added snomedECL {ecl}")

    def log_summary(self, stats: "ConversionStats") -> None:
        """Log the run summary."""
        for line in stats.summary_lines():
            self.logger.info(line)


def get_debug_logger(config: Optional[ConversionConfig] = None) -> ConversionDebugLogger:
    """
    Get a debug logger instance based on conversion options.

    Returns:
        ConversionDebugLogger instance
    """
    config = config or ConversionConfig()
    return ConversionDebugLogger(
        enable_debug=config.debug_mode,
        log_non_snomed=config.log_non_snomed_elements,
    )
