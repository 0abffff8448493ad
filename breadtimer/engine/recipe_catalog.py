"""
Built-in recipe catalog and helpers for combining it with user recipes.

The catalog has two partitions: built-in recipes, which always exist and are
never persisted, and custom recipes, which live in the database. Reads see
their union.
"""
import logging
import re
from typing import Dict, List, Mapping

from breadtimer.models.schemas import Recipe, Step, StepType

logger = logging.getLogger(__name__)


def _builtin(recipe_id: str, name: str, steps: List[Step]) -> Recipe:
    return Recipe(id=recipe_id, name=name, steps=steps, builtin=True)


BUILTIN_RECIPES: Dict[str, Recipe] = {
    "sourdough": _builtin("sourdough", "Sourdough Bread", [
        Step(name="Feed Starter", duration=8, type=StepType.PREPARATION),
        Step(name="Autolyse", duration=1, type=StepType.WAITING),
        Step(name="Mixing", duration=0.5, type=StepType.ACTIVE),
        Step(name="Bulk Fermentation", duration=4, type=StepType.WAITING),
        Step(name="Shaping", duration=0.5, type=StepType.ACTIVE),
        Step(name="Proofing", duration=8, type=StepType.WAITING),
        Step(name="Baking", duration=1, type=StepType.ACTIVE),
    ]),
    "baguette": _builtin("baguette", "Baguette", [
        Step(name="Mixing", duration=0.5, type=StepType.ACTIVE),
        Step(name="First Rise", duration=2, type=StepType.WAITING),
        Step(name="Shaping", duration=0.5, type=StepType.ACTIVE),
        Step(name="Second Rise", duration=1, type=StepType.WAITING),
        Step(name="Baking", duration=0.5, type=StepType.ACTIVE),
    ]),
    "wholewheat": _builtin("wholewheat", "Whole Wheat Bread", [
        Step(name="Mixing", duration=0.33, type=StepType.ACTIVE),
        Step(name="Kneading", duration=0.25, type=StepType.ACTIVE),
        Step(name="First Rise", duration=1.5, type=StepType.WAITING),
        Step(name="Shaping", duration=0.25, type=StepType.ACTIVE),
        Step(name="Second Rise", duration=1, type=StepType.WAITING),
        Step(name="Baking", duration=0.66, type=StepType.ACTIVE),
    ]),
}


def is_builtin(recipe_id: str) -> bool:
    """Check whether a recipe id belongs to the built-in partition."""
    return recipe_id in BUILTIN_RECIPES


def slugify_recipe_name(name: str) -> str:
    """
    Derive a recipe key from its name.

    Lowercases the name and turns each run of whitespace into a hyphen.
    Any other character outside letters, digits, "_" and "-" becomes an
    underscore so the id is always usable as a URL path segment.

    Examples:
        >>> slugify_recipe_name("Rye  Sourdough")
        'rye-sourdough'
        >>> slugify_recipe_name("Rye/Spelt")
        'rye_spelt'
    """
    slug = re.sub(r"\s+", "-", name.strip().lower())
    return re.sub(r"[^\w\-]+", "_", slug)


def merge_catalogs(custom: Mapping[str, Recipe]) -> Dict[str, Recipe]:
    """
    Combine built-in and custom recipes into one read-only view.

    Built-in recipes come first in catalog order. A custom entry whose id
    shadows a built-in is skipped.

    Args:
        custom: Custom recipes keyed by id.

    Returns:
        The union of both partitions keyed by recipe id.
    """
    merged: Dict[str, Recipe] = {
        recipe_id: recipe.model_copy(deep=True)
        for recipe_id, recipe in BUILTIN_RECIPES.items()
    }
    for recipe_id, recipe in custom.items():
        if recipe_id in merged:
            logger.warning(f"Ignoring custom recipe '{recipe_id}' that shadows a built-in recipe")
            continue
        merged[recipe_id] = recipe
    return merged
