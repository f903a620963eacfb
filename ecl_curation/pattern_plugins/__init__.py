"""
Value set recognizers.
Each module registers its detectors with the shared pattern registry on import.
"""
