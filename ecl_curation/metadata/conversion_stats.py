"""
Conversion statistics for valueSets to snomedECL runs.
Counters are owned by the caller of a run and returned with its results.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List

import pandas as pd

from .models import ConversionOutcome


@dataclass
class ConversionStats:
    elements_processed: int = 0
    conversions_performed: int = 0
    existing_ecl_skipped: int = 0
    non_snomed_skipped: int = 0
    errors: int = 0

    def record(self, outcome: ConversionOutcome) -> None:
        """Count one element outcome (elements_processed is counted separately)."""
        if outcome is ConversionOutcome.CONVERTED:
            self.conversions_performed += 1
        elif outcome is ConversionOutcome.EXISTING_SKIPPED:
            self.existing_ecl_skipped += 1
        elif outcome is ConversionOutcome.NO_SNOMED_PATTERN:
            self.non_snomed_skipped += 1
        elif outcome is ConversionOutcome.ERROR:
            self.errors += 1

    def merge(self, other: "ConversionStats") -> "ConversionStats":
        """Return the sum of two accumulators, e.g. from independent workers."""
        return ConversionStats(
            elements_processed=self.elements_processed + other.elements_processed,
            conversions_performed=self.conversions_performed + other.conversions_performed,
            existing_ecl_skipped=self.existing_ecl_skipped + other.existing_ecl_skipped,
            non_snomed_skipped=self.non_snomed_skipped + other.non_snomed_skipped,
            errors=self.errors + other.errors,
        )

    def __add__(self, other: "ConversionStats") -> "ConversionStats":
        if not isinstance(other, ConversionStats):
            return NotImplemented
        return self.merge(other)

    @property
    def conversion_rate(self) -> float:
        """Share of processed elements that were converted, as a percentage."""
        if self.elements_processed == 0:
            return 0.0
        return round(self.conversions_performed / self.elements_processed * 100, 2)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def summary_lines(self) -> List[str]:
        """Human-readable run summary."""
        lines = [
            "=== CONVERSION SUMMARY ===",
            f"Elements processed: {self.elements_processed}",
            f"SNOMED valueSets converted to ECL: {self.conversions_performed}",
            f"Elements with existing ECL (skipped): {self.existing_ecl_skipped}",
            f"Elements without SNOMED valueSets (skipped): {self.non_snomed_skipped}",
            f"Errors encountered: {self.errors}",
        ]
        if self.errors == 0:
            lines.append("Conversion completed successfully!")
            if self.conversions_performed > 0:
                lines.append(f"Converted {self.conversions_performed} SNOMED valueSets to ECL format")
            else:
                lines.append("No SNOMED valueSets found that needed conversion")
        else:
            lines.append("Conversion completed with errors.")
        return lines

    def to_dataframe(self) -> pd.DataFrame:
        """Two-column Metric/Count frame for reports."""
        labels = {
            "elements_processed": "Elements processed",
            "conversions_performed": "Conversions performed",
            "existing_ecl_skipped": "Existing ECL skipped",
            "non_snomed_skipped": "No SNOMED pattern",
            "errors": "Errors",
        }
        rows = [{"Metric": labels[key], "Count": value} for key, value in self.to_dict().items()]
        return pd.DataFrame(rows, columns=["Metric", "Count"])
