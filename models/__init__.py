"""
Models Package

Exports the immutable records produced by the recipe importer.
"""

from .recipe import ImportedIngredient, ImportedStep, ImportedRecipe

__all__ = [
    'ImportedIngredient',
    'ImportedStep',
    'ImportedRecipe',
]
