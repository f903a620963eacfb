"""
System utilities for the ECL curation engine
Provides configuration, logging, error handling and version information
"""

from .conversion_config import ConversionConfig, ConversionOptionKeys
from .debug_logger import ConversionDebugLogger, get_debug_logger
from .error_handling import EclCurationError, ErrorHandler
from .version import __version__

__all__ = [
    # Configuration
    'ConversionConfig',
    'ConversionOptionKeys',

    # Debug and logging
    'ConversionDebugLogger',
    'get_debug_logger',

    # Errors
    'EclCurationError',
    'ErrorHandler',

    '__version__',
]
