"""
Standardized error handling for the ECL curation engine.
Element-level failures are logged and counted here so one bad element never stops a run.
"""

import logging
import traceback
from datetime import datetime
from typing import Optional, Dict, Any, List
from enum import Enum
from dataclasses import dataclass


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for better classification."""
    VALUE_SET_PARSING = "value_set_parsing"
    METADATA_ACCESS = "metadata_access"
    DATA_VALIDATION = "data_validation"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


@dataclass
class ErrorContext:
    """Context information for errors."""
    operation: str
    element_name: Optional[str] = None
    field_name: Optional[str] = None
    value_set: Optional[str] = None
    user_data: Optional[Dict[str, Any]] = None


class EclCurationError(Exception):
    """Base exception class for the ECL curation engine."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context
        self.original_exception = original_exception
        super().__init__(self.message)

    def get_user_friendly_message(self) -> str:
        friendly_messages = {
            ErrorCategory.VALUE_SET_PARSING: "The valueSets text could not be interpreted. The element was left unconverted.",
            ErrorCategory.METADATA_ACCESS: "A tagged value on the data element could not be read or written.",
            ErrorCategory.DATA_VALIDATION: "The data contains invalid or unexpected values. Please review the element.",
            ErrorCategory.CONFIGURATION: "The conversion options are invalid. Please check the option names and values.",
            ErrorCategory.SYSTEM: "A system error occurred while converting the element.",
        }
        return friendly_messages.get(self.category, self.message)

    def get_technical_details(self) -> Dict[str, Any]:
        details = {
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
        }

        if self.context:
            details["context"] = {
                "operation": self.context.operation,
                "element_name": self.context.element_name,
                "field_name": self.context.field_name,
                "value_set": self.context.value_set,
            }

        if self.original_exception:
            details["original_exception"] = {
                "type": type(self.original_exception).__name__,
                "message": str(self.original_exception),
                "traceback": "".join(
                    traceback.format_exception(
                        type(self.original_exception),
                        self.original_exception,
                        self.original_exception.__traceback__,
                    )
                ),
            }

        return details


class DataValidationError(EclCurationError):
    """Specific error for data validation issues."""

    def __init__(self, message: str, field_name: str = None, value: Any = None, **kwargs):
        self.field_name = field_name
        self.value = value
        super().__init__(message=message, category=ErrorCategory.DATA_VALIDATION, **kwargs)


class ConfigurationError(EclCurationError):
    """Specific error for invalid conversion options."""

    def __init__(self, message: str, option_name: str = None, **kwargs):
        self.option_name = option_name
        super().__init__(message=message, category=ErrorCategory.CONFIGURATION, **kwargs)


class ErrorHandler:
    """Centralised error handling and logging."""

    def __init__(self, logger_name: str = "ecl_curation.errors"):
        self.logger = logging.getLogger(logger_name)
        self._error_count = 0
        self._session_errors: List[Dict[str, Any]] = []

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def session_errors(self) -> List[Dict[str, Any]]:
        return list(self._session_errors)

    def handle_error(self, error: EclCurationError) -> None:
        technical_details = error.get_technical_details()
        self._error_count += 1
        self._session_errors.append(
            {"timestamp": datetime.now().isoformat(), "error": error, "details": technical_details}
        )

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"Critical error: {error.message}")
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"High severity error: {error.message}")
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"Medium severity error: {error.message}")
        else:
            self.logger.info(f"Low severity error: {error.message}")
        self.logger.debug(f"Error details: {technical_details}")

    def log_exception(
        self,
        operation: str,
        exception: Exception,
        context: Optional[ErrorContext] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    ) -> EclCurationError:
        if isinstance(exception, EclCurationError):
            if context is not None and exception.context is None:
                exception.context = context
            self.handle_error(exception)
            return exception

        category = self._categorize_exception(exception)
        curation_error = EclCurationError(
            message=f"Error in {operation}: {str(exception)}",
            category=category,
            severity=severity,
            context=context,
            original_exception=exception,
        )
        self.handle_error(curation_error)
        return curation_error

    def _categorize_exception(self, exception: Exception) -> ErrorCategory:
        exception_type = type(exception).__name__

        category_map = {
            "UnicodeDecodeError": ErrorCategory.VALUE_SET_PARSING,
            "UnicodeEncodeError": ErrorCategory.VALUE_SET_PARSING,
            "ValueError": ErrorCategory.DATA_VALIDATION,
            "TypeError": ErrorCategory.DATA_VALIDATION,
            "KeyError": ErrorCategory.METADATA_ACCESS,
            "AttributeError": ErrorCategory.METADATA_ACCESS,
            "IndexError": ErrorCategory.METADATA_ACCESS,
            "MemoryError": ErrorCategory.SYSTEM,
        }

        return category_map.get(exception_type, ErrorCategory.SYSTEM)
