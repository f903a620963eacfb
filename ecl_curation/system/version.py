"""
ECL Curation Version Information
Single source of truth for package version across all components
"""

# Package Version - Update this single location for all version references
__version__ = "2.0.0"

# Package metadata
APP_NAME = "ECL Curation"
APP_FULL_NAME = "ECL Curation - SNOMED CT valueSet to ECL converter"
APP_DESCRIPTION = "Converts SNOMED CT value set descriptors on clinical data elements into canonical ECL"

# Version components for programmatic access
VERSION_MAJOR = 2
VERSION_MINOR = 0
VERSION_PATCH = 0

# Build information
BUILD_DATE = "17th October 2026"
BUILD_TYPE = "stable"  # stable, beta, alpha, dev
