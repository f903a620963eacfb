"""
Conversion options for the valueSets to snomedECL converter.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .error_handling import ConfigurationError


class ConversionOptionKeys:
    """Canonical option names as they appear in model-store configuration."""

    SKIP_EXISTING_ECL = "skipExistingEcl"
    DEBUG_MODE = "debugMode"
    LOG_NON_SNOMED_ELEMENTS = "logNonSnomedElements"


_OPTION_ALIASES = {
    ConversionOptionKeys.SKIP_EXISTING_ECL: "skip_existing_ecl",
    ConversionOptionKeys.DEBUG_MODE: "debug_mode",
    ConversionOptionKeys.LOG_NON_SNOMED_ELEMENTS: "log_non_snomed_elements",
}


@dataclass(frozen=True)
class ConversionConfig:
    """Policy flags for a conversion run.

    Attributes:
        skip_existing_ecl: Leave elements that already carry snomedECL untouched
        debug_mode: Trace every element to the debug log (no effect on results)
        log_non_snomed_elements: Also log elements without a SNOMED valueSet
    """
    skip_existing_ecl: bool = True
    debug_mode: bool = False
    log_non_snomed_elements: bool = False

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "ConversionConfig":
        """Build a config from camelCase or snake_case option names.

        Raises:
            ConfigurationError: On unknown option names or non-bool values
        """
        if not options:
            return cls()

        known = {f.name for f in fields(cls)}
        values: Dict[str, bool] = {}
        for key, value in options.items():
            attr = _OPTION_ALIASES.get(key, key)
            if attr not in known:
                raise ConfigurationError(f"Unknown conversion option '{key}'", option_name=key)
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"Conversion option '{key}' must be true or false, got {value!r}",
                    option_name=key,
                )
            values[attr] = value
        return cls(**values)

    def to_mapping(self) -> Dict[str, bool]:
        """Return the options keyed by their canonical camelCase names."""
        return {key: getattr(self, attr) for key, attr in _OPTION_ALIASES.items()}
