"""
Structured Data Service

Extracts a recipe from the JSON-LD blocks embedded in a page (most recipe
sites publish schema.org/Recipe this way).
"""

import json
import logging

from constants import MAX_LENGTHS
from models import ImportedRecipe
from utils.sanitizer import clean_recipe_name, clean_source_url, clean_text

from .parsing import (
    flatten_instructions,
    has_schema_type,
    parse_duration,
    parse_ingredients,
    parse_servings,
)

logger = logging.getLogger(__name__)


def _is_jsonld_script(tag):
    script_type = tag.get('type') or ''
    return tag.name == 'script' and script_type.strip().lower() == 'application/ld+json'


def iter_jsonld_blocks(soup):
    """
    Yield every parsed JSON-LD block in document order.

    Empty or malformed blocks are skipped; one bad block never stops the scan.
    """
    for index, script in enumerate(soup.find_all(_is_jsonld_script)):
        raw = script.string if script.string is not None else script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            yield json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.debug("Skipping malformed JSON-LD block %d: %s", index, e)
            continue


def iter_candidates(data):
    """
    Yield the nodes of one JSON-LD block that may be a recipe.

    An array contributes each element. Anything else contributes itself and,
    when it carries an @graph, each graph entry.
    """
    if isinstance(data, list):
        yield from data
        return

    yield data

    if isinstance(data, dict) and '@graph' in data:
        graph = data['@graph']
        if isinstance(graph, list):
            yield from graph
        else:
            yield graph


def is_recipe_type(node):
    """True if a JSON-LD node is typed Recipe."""
    return has_schema_type(node, 'Recipe')


def find_recipe_node(soup):
    """Return the first Recipe node in document order, or None."""
    for data in iter_jsonld_blocks(soup):
        for candidate in iter_candidates(data):
            if is_recipe_type(candidate):
                return candidate
    return None


def recipe_from_node(node, url):
    """Map a schema.org Recipe node onto an ImportedRecipe."""
    ingredients = node.get('recipeIngredient')
    if ingredients is None:
        # Older markup used the "ingredients" property
        ingredients = node.get('ingredients')

    description = node.get('description')
    if not isinstance(description, str):
        description = ''

    return ImportedRecipe(
        title=clean_recipe_name(node.get('name')),
        description=clean_text(description, MAX_LENGTHS['description']),
        prep_time_minutes=parse_duration(node.get('prepTime')),
        cook_time_minutes=parse_duration(node.get('cookTime')),
        servings=parse_servings(node.get('recipeYield')),
        ingredients=parse_ingredients(ingredients),
        steps=flatten_instructions(node.get('recipeInstructions')),
        source_url=clean_source_url(node.get('url')) or url,
    )


def extract_structured_recipe(soup, url):
    """
    Extract a recipe from JSON-LD, or return None when the page has none.

    The first Recipe found wins, even if a later one is better populated.
    """
    node = find_recipe_node(soup)
    if node is None:
        return None
    return recipe_from_node(node, url)
