"""
Heuristic Extraction Service

Last-resort extraction for pages without structured recipe data. Guesses the
title, ingredients and steps from class names and a few well-known tags.
Always returns a record, however sparse.
"""

import re

from constants import (
    DEFAULT_SERVINGS,
    INGREDIENT_CLASS_PATTERNS,
    MAX_HEURISTIC_INGREDIENT_LENGTH,
    MAX_HEURISTIC_INGREDIENTS,
    MAX_HEURISTIC_STEPS,
    MAX_LENGTHS,
    MIN_HEURISTIC_STEP_LENGTH,
    STEP_CLASS_PATTERNS,
    TITLE_CLASS_PATTERNS,
)
from models import ImportedIngredient, ImportedRecipe, ImportedStep
from utils.sanitizer import clean_recipe_name, clean_text


def _class_string(tag):
    classes = tag.get('class')
    if not classes:
        return ''
    if isinstance(classes, (list, tuple)):
        classes = ' '.join(classes)
    return classes.lower()


def find_all_matching_class_substring(soup, patterns):
    """
    Return every element whose class attribute contains any of the patterns.

    Matching is a case-insensitive substring test against the whole class
    attribute. Elements come back in document order.
    """
    patterns = [p.lower() for p in patterns]

    def _matches(tag):
        class_string = _class_string(tag)
        return bool(class_string) and any(p in class_string for p in patterns)

    return soup.find_all(_matches)


def _element_text(tag):
    return clean_text(tag.get_text(' ', strip=True))


def extract_title(soup):
    """Best-guess title: a recipe-title element or <h1>, then <title>."""
    title_patterns = [p.lower() for p in TITLE_CLASS_PATTERNS]

    def _is_title(tag):
        if tag.name == 'h1':
            return True
        class_string = _class_string(tag)
        return any(p in class_string for p in title_patterns)

    for tag in soup.find_all(_is_title):
        text = _element_text(tag)
        if text:
            return clean_recipe_name(text)

    if soup.title is not None:
        # Drop the site-name suffix: "Best Pancakes - My Blog" -> "Best Pancakes"
        page_title = re.sub(r'\s[-|].*$', '', soup.title.get_text(), flags=re.DOTALL)
        return clean_recipe_name(page_title)

    return clean_recipe_name(None)


def extract_description(soup):
    meta = soup.find('meta', attrs={'name': re.compile(r'^description$', re.IGNORECASE)})
    if meta is None:
        return ''
    return clean_text(meta.get('content'), MAX_LENGTHS['description'])


def extract_ingredients(soup):
    ingredients = []
    for tag in find_all_matching_class_substring(soup, INGREDIENT_CLASS_PATTERNS):
        text = _element_text(tag)
        if not text or len(text) > MAX_HEURISTIC_INGREDIENT_LENGTH:
            continue
        ingredients.append(ImportedIngredient(name=text))
        if len(ingredients) >= MAX_HEURISTIC_INGREDIENTS:
            break
    return ingredients


def extract_steps(soup):
    steps = []
    for tag in find_all_matching_class_substring(soup, STEP_CLASS_PATTERNS):
        text = _element_text(tag)
        if len(text) <= MIN_HEURISTIC_STEP_LENGTH:
            continue
        steps.append(ImportedStep(instruction=clean_text(text, MAX_LENGTHS['instruction'])))
        if len(steps) >= MAX_HEURISTIC_STEPS:
            break
    return steps


def extract_heuristic_recipe(soup, url):
    """
    Build a best-effort recipe from page markup.

    No amount/unit parsing happens here: free text on arbitrary pages is not
    assumed to start with a quantity.
    """
    return ImportedRecipe(
        title=extract_title(soup),
        description=extract_description(soup),
        prep_time_minutes=None,
        cook_time_minutes=None,
        servings=DEFAULT_SERVINGS,
        ingredients=extract_ingredients(soup),
        steps=extract_steps(soup),
        source_url=url,
    )
