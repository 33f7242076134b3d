"""
Constants Package

Lookup tables and limits shared by the importer modules.
"""

from .units import UNIT_TOKENS, UNICODE_FRACTIONS
from .ingredients import NOTE_KEYWORDS
from .validation import (
    DEFAULT_TITLE,
    DEFAULT_SERVINGS,
    MAX_HEURISTIC_INGREDIENTS,
    MAX_HEURISTIC_STEPS,
    MAX_HEURISTIC_INGREDIENT_LENGTH,
    MIN_HEURISTIC_STEP_LENGTH,
    MAX_LENGTHS,
)
from .importer import (
    IMPORT_USER_AGENT,
    IMPORT_ACCEPT,
    IMPORT_TIMEOUT,
    IMPORT_MAX_REDIRECTS,
    IMPORT_MAX_RESPONSE_SIZE,
    FAULT_CONNECTION_REFUSED,
    FAULT_DNS_FAILURE,
    FAULT_CONNECTION_RESET,
    FAULT_TIMEOUT,
    FAULT_HOST_UNREACHABLE,
    FAULT_TLS_ERROR,
    TITLE_CLASS_PATTERNS,
    INGREDIENT_CLASS_PATTERNS,
    STEP_CLASS_PATTERNS,
)
