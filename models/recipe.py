"""
Recipe Models

Immutable records produced by the importer. They carry no database identity;
the caller assigns one when it persists the recipe.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from constants import DEFAULT_SERVINGS, DEFAULT_TITLE


@dataclass(frozen=True)
class ImportedIngredient:
    """One ingredient line, in document order."""
    name: str
    amount: Optional[float] = None
    unit: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self):
        return {
            'name': self.name,
            'amount': self.amount,
            'unit': self.unit,
            'notes': self.notes,
        }


@dataclass(frozen=True)
class ImportedStep:
    """One cooking step, in cooking order."""
    instruction: str
    timer_seconds: Optional[int] = None

    def to_dict(self):
        return {
            'instruction': self.instruction,
            'timer_seconds': self.timer_seconds,
        }


@dataclass(frozen=True)
class ImportedRecipe:
    """Normalized recipe returned by a single import call."""
    title: str = DEFAULT_TITLE
    description: str = ''
    prep_time_minutes: Optional[int] = None
    cook_time_minutes: Optional[int] = None
    servings: int = DEFAULT_SERVINGS
    ingredients: Tuple[ImportedIngredient, ...] = field(default_factory=tuple)
    steps: Tuple[ImportedStep, ...] = field(default_factory=tuple)
    source_url: str = ''

    def __post_init__(self):
        # Lists handed in by extractors are frozen into tuples
        object.__setattr__(self, 'ingredients', tuple(self.ingredients or ()))
        object.__setattr__(self, 'steps', tuple(self.steps or ()))
        if not self.title:
            object.__setattr__(self, 'title', DEFAULT_TITLE)

    def to_dict(self):
        """Serialize to the JSON shape the recipe API stores."""
        return {
            'title': self.title,
            'description': self.description,
            'prep_time_minutes': self.prep_time_minutes,
            'cook_time_minutes': self.cook_time_minutes,
            'servings': self.servings,
            'ingredients': [ing.to_dict() for ing in self.ingredients],
            'steps': [step.to_dict() for step in self.steps],
            'source_url': self.source_url,
        }
