"""
Validation Constants

Defaults and size limits applied to imported recipe data.
"""

# Title used when nothing better can be inferred
DEFAULT_TITLE = 'Imported Recipe'

# Servings used when the source gives none (or nothing parseable)
DEFAULT_SERVINGS = 4

# Heuristic extraction limits
MAX_HEURISTIC_INGREDIENTS = 50
MAX_HEURISTIC_STEPS = 30
MAX_HEURISTIC_INGREDIENT_LENGTH = 200   # longer text is a container, not a line
MIN_HEURISTIC_STEP_LENGTH = 10          # this short or shorter is a label/number

# Maximum field lengths for imported text
MAX_LENGTHS = {
    'recipe_name': 200,
    'description': 5000,
    'ingredient_text': 500,
    'instruction': 10000,
    'source_url': 500,
}
