"""
Imported Text Cleaning Module

Normalizes text pulled out of third-party pages before it goes into an
ImportedRecipe. Pages routinely ship HTML entities and stray markup inside
JSON-LD strings, plus control characters and runs of whitespace.
"""

import html
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from constants import DEFAULT_TITLE, MAX_LENGTHS


def clean_text(text, max_length=10000):
    """
    Clean a piece of imported text.

    Decodes HTML entities, strips markup, removes control characters and
    collapses whitespace.

    Args:
        text: The text to clean (can be None or a non-string)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Cleaned string, possibly empty, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Entities first so encoded tags ("&lt;p&gt;") are stripped too
    text = html.unescape(text)

    if '<' in text and '>' in text:
        text = BeautifulSoup(text, 'html.parser').get_text(' ')

    # Remove control characters and null bytes
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]', '', text)

    # Collapse whitespace (including non-breaking spaces)
    text = re.sub(r'[\s\u00a0\u2000-\u200b]+', ' ', text).strip()

    if len(text) > max_length:
        text = text[:max_length].rstrip()

    return text


def clean_recipe_name(name, max_length=MAX_LENGTHS['recipe_name']):
    """Clean a recipe title, falling back to the placeholder when empty."""
    name = clean_text(name, max_length=max_length)
    if not name:
        return DEFAULT_TITLE
    return name


def clean_source_url(url):
    """
    Return the URL if it is an absolute http(s) URL, else an empty string.

    Used on metadata-declared canonical URLs, which are page-controlled.
    """
    if not url or not isinstance(url, str):
        return ''

    url = url.strip()
    if len(url) > MAX_LENGTHS['source_url']:
        return ''

    try:
        parsed = urlparse(url)
    except ValueError:
        return ''

    if parsed.scheme.lower() not in ('http', 'https') or not parsed.netloc:
        return ''

    return url
