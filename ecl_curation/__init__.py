"""
ECL Curation
Converts SNOMED CT value set descriptors on clinical data elements into
canonical Expression Constraint Language (ECL).
"""

from .system.version import __version__

__all__ = ['__version__']
