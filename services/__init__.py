"""
Services Package

Recipe import pipeline: fetching, structured-data and heuristic extraction,
and the field normalizers they share.
"""

from .parsing import (
    parse_duration,
    parse_servings,
    parse_amount,
    parse_ingredient_line,
    flatten_instructions,
)

from .fetcher import (
    ImportFault,
    NetworkFault,
    OriginHttpFault,
    UnknownFetchFault,
    FetchedPage,
    fetch_page,
    redirect_guard_hook,
)

from .structured import (
    find_recipe_node,
    extract_structured_recipe,
)

from .heuristic import (
    find_all_matching_class_substring,
    extract_heuristic_recipe,
)

from .importer import (
    import_from_html,
    import_from_url,
)

__all__ = [
    # Parsing
    'parse_duration',
    'parse_servings',
    'parse_amount',
    'parse_ingredient_line',
    'flatten_instructions',
    # Fetching
    'ImportFault',
    'NetworkFault',
    'OriginHttpFault',
    'UnknownFetchFault',
    'FetchedPage',
    'fetch_page',
    'redirect_guard_hook',
    # Extraction
    'find_recipe_node',
    'extract_structured_recipe',
    'find_all_matching_class_substring',
    'extract_heuristic_recipe',
    # Import
    'import_from_html',
    'import_from_url',
]
