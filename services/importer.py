"""
Recipe Import Service

Fetch -> structured data (first Recipe wins) -> heuristic fallback. Any page
that can be fetched yields a recipe; only fetch faults are raised.
"""

import logging

from bs4 import BeautifulSoup

from .fetcher import fetch_page
from .heuristic import extract_heuristic_recipe
from .structured import extract_structured_recipe

logger = logging.getLogger(__name__)


def parse_html(markup, encoding=None):
    """Parse page markup (str or bytes) into a BeautifulSoup document."""
    if isinstance(markup, bytes):
        return BeautifulSoup(markup, 'html.parser', from_encoding=encoding)
    return BeautifulSoup(markup or '', 'html.parser')


def import_from_html(markup, url, encoding=None):
    """
    Extract a recipe from already-fetched markup.

    The heuristic extractor only runs when no JSON-LD Recipe is found; the two
    results are never merged.
    """
    soup = parse_html(markup, encoding)

    recipe = extract_structured_recipe(soup, url)
    if recipe is not None:
        logger.info("Imported %s from structured data (%d ingredients, %d steps)",
                    url, len(recipe.ingredients), len(recipe.steps))
        return recipe

    recipe = extract_heuristic_recipe(soup, url)
    logger.info("No structured recipe data at %s, used page heuristics (%d ingredients, %d steps)",
                url, len(recipe.ingredients), len(recipe.steps))
    return recipe


def import_from_url(url, session=None, **fetch_options):
    """
    Import a recipe from a third-party URL.

    Args:
        url: Absolute http(s) URL, already validated by the caller
        session: Optional requests.Session to fetch with
        **fetch_options: timeout, max_redirects, max_size, user_agent,
            redirect_check

    Returns:
        ImportedRecipe. The source URL is the input URL unless the page
        declares a canonical recipe URL.

    Raises:
        NetworkFault, OriginHttpFault, UnknownFetchFault, or whatever
        redirect_check raises
    """
    page = fetch_page(url, session=session, **fetch_options)
    return import_from_html(page.content, url, encoding=page.encoding)
