"""
Value set metadata: concept tokens, ECL canonicalisation, data model,
tagged value access and conversion statistics.
"""
