"""
Unit Constants

Unit tokens and fraction characters recognized when splitting a structured-data
ingredient line into amount, unit and name.
"""

# Unit tokens accepted right after the quantity (matched case-insensitively,
# optionally followed by a period). Anything else stays in the ingredient name.
UNIT_TOKENS = (
    'tbsp', 'tsp', 'sp',
    'cups', 'cup',
    'lbs', 'lb', 'oz',
    'kg', 'g',
    'ml', 'l',
)

# Unicode fraction characters mapping
UNICODE_FRACTIONS = {
    '½': 0.5,
    '⅓': 1/3,
    '⅔': 2/3,
    '¼': 0.25,
    '¾': 0.75,
    '⅛': 0.125,
    '⅜': 0.375,
    '⅝': 0.625,
    '⅞': 0.875,
}
