"""
Parsing Service

Field normalizers shared by the structured-data and heuristic extractors:
durations, servings, ingredient lines and recipe instructions.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from constants import (
    DEFAULT_SERVINGS,
    MAX_LENGTHS,
    NOTE_KEYWORDS,
    UNICODE_FRACTIONS,
    UNIT_TOKENS,
)
from models import ImportedIngredient, ImportedStep
from utils.sanitizer import clean_text

_FRACTION_CHARS = ''.join(UNICODE_FRACTIONS)

# PT1H30M, PT45M, PT2H (hours and/or minutes only)
_DURATION_RE = re.compile(r'PT(?:(\d+)H)?(?:(\d+)M)?', re.IGNORECASE)

# "<quantity> [unit[.]] <name>". The unit must be followed by whitespace so
# "2 large eggs" does not read "l" as litres.
_INGREDIENT_RE = re.compile(
    r'^(?P<amount>[\d' + _FRACTION_CHARS + r'][\d' + _FRACTION_CHARS + r'.,/ ]*)'
    r'\s*(?:(?P<unit>' + '|'.join(UNIT_TOKENS) + r')\.?(?=\s))?'
    r'\s+(?P<name>\S.*)$',
    re.IGNORECASE,
)


def has_schema_type(node, type_name):
    """True if a JSON-LD node's @type is type_name or a list containing it."""
    if not isinstance(node, dict):
        return False
    node_type = node.get('@type')
    if node_type == type_name:
        return True
    return isinstance(node_type, list) and type_name in node_type


# ============================================
# DURATIONS AND SERVINGS
# ============================================

def parse_duration(value):
    """
    Parse an ISO-8601 duration of the form PT[n]H[n]M into whole minutes.

    Returns None for absent input or anything outside that form (days,
    seconds, free text).
    """
    if not isinstance(value, str):
        return None

    match = _DURATION_RE.fullmatch(value.strip())
    if not match:
        return None

    hours, minutes = match.groups()
    if hours is None and minutes is None:
        return None

    return int(hours or 0) * 60 + int(minutes or 0)


def parse_servings(value, default=DEFAULT_SERVINGS):
    """Parse a recipeYield value into a positive serving count."""
    # recipeYield is often ["4", "4 servings"]
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None

    if isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return default
        servings = int(value)
        return servings if servings > 0 else default

    if isinstance(value, str):
        match = re.search(r'\d+', value)
        if match:
            servings = int(match.group())
            if servings > 0:
                return servings

    return default


# ============================================
# INGREDIENT LINES
# ============================================

def normalize_fractions(text):
    """Replace Unicode fraction characters with decimal equivalents."""
    def _mixed(match):
        whole = float(match.group(1)) if match.group(1) else 0.0
        return str(whole + UNICODE_FRACTIONS[match.group(2)])

    # "1½" and "1 ½" become "1.5", a bare "½" becomes "0.5"
    return re.sub(r'(?:(\d+)\s*)?([' + _FRACTION_CHARS + r'])', _mixed, text)


def parse_amount(text):
    """
    Parse a quantity string into a float.

    Handles: 2, 1.5, 1,5, 1/2, 1 1/2, ½, 1½. Returns None if the text is not
    a quantity.
    """
    if text is None:
        return None

    s = normalize_fractions(str(text)).strip()
    if not s:
        return None

    mixed_match = re.match(r'^(\d+)\s+(\d+)\s*/\s*(\d+)$', s)
    frac_match = re.match(r'^(\d+)\s*/\s*(\d+)$', s)
    try:
        if mixed_match:
            # Mixed fraction like "1 1/2"
            whole, num, denom = (float(g) for g in mixed_match.groups())
            value = whole + num / denom
        elif frac_match:
            # Simple fraction like "1/2"
            num, denom = (float(g) for g in frac_match.groups())
            value = num / denom
        else:
            # Thousands separator ("1,000") vs decimal comma ("1,5")
            if re.match(r'^\d{1,3}(,\d{3})+$', s):
                s = s.replace(',', '')
            else:
                s = s.replace(',', '.')
            value = float(s)
    except (ValueError, ZeroDivisionError):
        return None

    # Digit runs too long for a float overflow to inf
    return value if math.isfinite(value) else None


def _split_notes(name):
    """Split a trailing preparation note off an ingredient name."""
    head, sep, tail = name.partition(',')
    if not sep or not head.strip():
        return name, None

    tail = tail.strip()
    if any(keyword in tail.lower() for keyword in NOTE_KEYWORDS):
        return head.strip(), tail
    return name, None


def parse_ingredient_line(value):
    """
    Parse one recipeIngredient entry into an ImportedIngredient.

    "200g flour" -> amount 200, unit "g", name "flour". Lines without a
    leading quantity keep the whole text as the name. Non-string entries are
    used as the name without parsing; a dict gives its name or text, or its
    string form when it has neither. Returns None for empty entries.
    """
    if isinstance(value, dict):
        name = clean_text(value.get('name') or value.get('text') or str(value),
                          MAX_LENGTHS['ingredient_text'])
        return ImportedIngredient(name=name) if name else None

    if not isinstance(value, str):
        name = clean_text(value, MAX_LENGTHS['ingredient_text']) if value is not None else ''
        return ImportedIngredient(name=name) if name else None

    text = clean_text(value, MAX_LENGTHS['ingredient_text'])
    if not text:
        return None

    match = _INGREDIENT_RE.match(text)
    if not match:
        return ImportedIngredient(name=text)

    amount = parse_amount(match.group('amount'))
    if amount is None:
        return ImportedIngredient(name=text)

    unit = match.group('unit')
    name, notes = _split_notes(match.group('name').strip())

    return ImportedIngredient(
        name=name,
        amount=amount,
        unit=unit.lower() if unit else None,
        notes=notes,
    )


def parse_ingredients(value):
    """Parse a recipeIngredient list, dropping empty entries."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []

    ingredients = []
    for entry in value:
        ingredient = parse_ingredient_line(entry)
        if ingredient is not None:
            ingredients.append(ingredient)
    return ingredients


# ============================================
# INSTRUCTIONS
# ============================================
# recipeInstructions elements are classified into a closed set of shapes
# before flattening.

@dataclass(frozen=True)
class TextItem:
    """A bare string step."""
    text: str


@dataclass(frozen=True)
class HowToStepItem:
    """A schema.org HowToStep."""
    text: str
    perform_time: Optional[str] = None


@dataclass(frozen=True)
class HowToSectionItem:
    """A schema.org HowToSection; only its items survive flattening."""
    items: Tuple = ()


@dataclass(frozen=True)
class OtherItem:
    """Any other element, reduced to its text/name or string form."""
    text: str


def _as_list(value):
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _node_text(node):
    return node.get('text') or node.get('name')


def classify_instruction(node):
    """Map one recipeInstructions element onto its instruction shape."""
    if isinstance(node, str):
        return TextItem(node)

    if isinstance(node, dict):
        if has_schema_type(node, 'HowToSection'):
            return HowToSectionItem(tuple(_as_list(node.get('itemListElement'))))
        if has_schema_type(node, 'HowToStep'):
            return HowToStepItem(_node_text(node) or '', node.get('performTime'))
        return OtherItem(_node_text(node) or str(node))

    if node is None:
        return OtherItem('')
    return OtherItem(str(node))


def _flatten(node):
    item = classify_instruction(node)

    if isinstance(item, TextItem):
        yield item.text, None
    elif isinstance(item, HowToStepItem):
        minutes = parse_duration(item.perform_time)
        yield item.text, minutes * 60 if minutes is not None else None
    elif isinstance(item, HowToSectionItem):
        for child in item.items:
            yield from _flatten(child)
    elif isinstance(item, OtherItem):
        yield item.text, None
    else:
        raise TypeError(f"Unhandled instruction shape: {type(item).__name__}")


def flatten_instructions(value):
    """
    Flatten recipeInstructions into an ordered list of ImportedStep.

    Accepts a single string (one step) or a list of strings, HowToStep and
    HowToSection objects. Section headings are discarded. Anything else
    yields no steps.
    """
    if isinstance(value, str):
        nodes = [value]
    elif isinstance(value, list):
        nodes = value
    else:
        return []

    steps = []
    for node in nodes:
        for text, timer_seconds in _flatten(node):
            instruction = clean_text(text, MAX_LENGTHS['instruction'])
            if instruction:
                steps.append(ImportedStep(instruction=instruction, timer_seconds=timer_seconds))
    return steps
