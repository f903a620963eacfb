"""
Core conversion modules.
Contains the valueSets to ECL converter and the per-element conversion guard.
"""

from .converter import convert_value_set, explain_value_set, extract_snomed_ecl, match_value_set
from .element_converter import ConversionRun, convert_data_element, convert_data_elements

__all__ = [
    'convert_value_set',
    'explain_value_set',
    'extract_snomed_ecl',
    'match_value_set',
    'ConversionRun',
    'convert_data_element',
    'convert_data_elements',
]
