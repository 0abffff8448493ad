"""
Recipe catalog service with database persistence for custom recipes.
"""
import logging
from typing import Dict, List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from breadtimer.config import settings
from breadtimer.db.models import CustomRecipe
from breadtimer.engine.recipe_catalog import is_builtin, merge_catalogs, slugify_recipe_name
from breadtimer.errors import (
    BuiltinRecipeError,
    DatabaseError,
    RecipeAlreadyExistsError,
    RecipeNotFoundError,
    RecipeValidationError,
)
from breadtimer.models.schemas import Recipe, RecipeDefinition, Step, StepDefinition, total_duration

logger = logging.getLogger(__name__)


def validate_recipe_definition(definition: RecipeDefinition) -> List[Step]:
    """
    Check an authored recipe before it is accepted.

    Args:
        definition: The recipe as typed by the author.

    Returns:
        The validated steps, names trimmed.

    Raises:
        RecipeValidationError: If the recipe name or any step name is blank,
            there are no steps, or there are too many steps.
    """
    missing: List[str] = []
    if not definition.name.strip():
        missing.append("name")
    missing.extend(_blank_step_fields(definition.steps))
    if missing:
        raise RecipeValidationError(fields=missing)

    if not definition.steps:
        raise RecipeValidationError(
            fields=["steps"],
            message="A recipe needs at least one step",
        )
    _check_step_count(definition.steps)
    if len(definition.name.strip()) > settings.recipe_name_max_length:
        raise RecipeValidationError(
            fields=["name"],
            message=f"Recipe name must be at most {settings.recipe_name_max_length} characters",
        )

    return _to_steps(definition.steps)


def validate_step_definitions(steps: Sequence[StepDefinition]) -> List[Step]:
    """
    Check a step list that is scheduled without being stored as a recipe.

    An empty list is allowed and produces an empty schedule.

    Raises:
        RecipeValidationError: If a step name is blank or there are too many steps.
    """
    missing = _blank_step_fields(steps)
    if missing:
        raise RecipeValidationError(fields=missing)
    _check_step_count(steps)
    return _to_steps(steps)


def _blank_step_fields(steps: Sequence[StepDefinition]) -> List[str]:
    return [f"steps[{index}].name" for index, step in enumerate(steps) if not step.name.strip()]


def _check_step_count(steps: Sequence[StepDefinition]) -> None:
    if len(steps) > settings.recipe_max_steps:
        raise RecipeValidationError(
            fields=["steps"],
            message=f"A recipe can have at most {settings.recipe_max_steps} steps",
        )


def _to_steps(steps: Sequence[StepDefinition]) -> List[Step]:
    return [Step(name=step.name, duration=step.duration, type=step.type) for step in steps]


def db_recipe_to_schema(db_recipe: CustomRecipe) -> Recipe:
    """Convert a stored custom recipe into the schema model."""
    return Recipe(
        id=db_recipe.id,
        name=db_recipe.name,
        steps=[Step(**step) for step in db_recipe.steps],
        builtin=False,
    )


class RecipeService:
    """
    Service for recipe catalog operations.

    Reads see built-in and custom recipes together; writes only ever touch
    the custom partition stored in the database.
    """

    def __init__(self, db: Session):
        """
        Initialize the recipe service.

        Args:
            db: SQLAlchemy database session for persistence operations.
        """
        self.db = db

    def _custom_recipes(self) -> Dict[str, Recipe]:
        rows = (
            self.db.query(CustomRecipe)
            .order_by(CustomRecipe.created_at, CustomRecipe.id)
            .all()
        )
        return {row.id: db_recipe_to_schema(row) for row in rows}

    def list_recipes(self) -> List[Recipe]:
        """
        List every recipe, built-in first, then custom in creation order.
        """
        return list(merge_catalogs(self._custom_recipes()).values())

    def get_recipe(self, recipe_id: str) -> Recipe:
        """
        Get a recipe by id from either partition.

        Raises:
            RecipeNotFoundError: If no recipe has this id.
        """
        if is_builtin(recipe_id):
            return merge_catalogs({})[recipe_id]

        db_recipe = self.db.query(CustomRecipe).filter(CustomRecipe.id == recipe_id).first()
        if db_recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return db_recipe_to_schema(db_recipe)

    def create_recipe(self, definition: RecipeDefinition) -> Recipe:
        """
        Validate and store a new custom recipe.

        The id is derived from the name. A name that maps to an existing id
        is rejected.

        Raises:
            RecipeValidationError: If required fields are blank.
            RecipeAlreadyExistsError: If the derived id is already taken.
        """
        steps = validate_recipe_definition(definition)
        name = definition.name.strip()
        recipe_id = slugify_recipe_name(name)

        exists = (
            is_builtin(recipe_id)
            or self.db.query(CustomRecipe).filter(CustomRecipe.id == recipe_id).first() is not None
        )
        if exists:
            raise RecipeAlreadyExistsError(recipe_id=recipe_id, recipe_name=name)

        db_recipe = CustomRecipe(
            id=recipe_id,
            name=name,
            steps=[step.model_dump(mode="json") for step in steps],
            total_time=total_duration(steps),
        )
        self._commit(db_recipe, "create")
        logger.info(f"Created custom recipe '{recipe_id}' with {len(steps)} steps")
        return db_recipe_to_schema(db_recipe)

    def update_recipe(self, recipe_id: str, definition: RecipeDefinition) -> Recipe:
        """
        Replace the name and steps of a custom recipe. The id stays the same.

        Raises:
            BuiltinRecipeError: If the recipe is built-in.
            RecipeNotFoundError: If no custom recipe has this id.
            RecipeValidationError: If required fields are blank.
        """
        if is_builtin(recipe_id):
            raise BuiltinRecipeError(recipe_id, "modified")

        db_recipe = self.db.query(CustomRecipe).filter(CustomRecipe.id == recipe_id).first()
        if db_recipe is None:
            raise RecipeNotFoundError(recipe_id)

        steps = validate_recipe_definition(definition)
        db_recipe.name = definition.name.strip()
        db_recipe.steps = [step.model_dump(mode="json") for step in steps]
        db_recipe.total_time = total_duration(steps)
        self._commit(db_recipe, "update")
        logger.info(f"Updated custom recipe '{recipe_id}'")
        return db_recipe_to_schema(db_recipe)

    def delete_recipe(self, recipe_id: str) -> None:
        """
        Delete a custom recipe.

        Raises:
            BuiltinRecipeError: If the recipe is built-in.
            RecipeNotFoundError: If no custom recipe has this id.
        """
        if is_builtin(recipe_id):
            raise BuiltinRecipeError(recipe_id, "deleted")

        db_recipe = self.db.query(CustomRecipe).filter(CustomRecipe.id == recipe_id).first()
        if db_recipe is None:
            raise RecipeNotFoundError(recipe_id)

        try:
            self.db.delete(db_recipe)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Database error deleting recipe '{recipe_id}'")
            raise DatabaseError(
                f"Failed to delete recipe: {e}",
                details={"recipe_id": recipe_id, "operation": "delete"},
            )
        logger.info(f"Deleted custom recipe '{recipe_id}'")

    def _commit(self, db_recipe: CustomRecipe, operation: str) -> None:
        try:
            self.db.add(db_recipe)
            self.db.commit()
            self.db.refresh(db_recipe)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Database error during recipe {operation}: '{db_recipe.id}'")
            raise DatabaseError(
                f"Failed to {operation} recipe: {e}",
                details={"recipe_id": db_recipe.id, "operation": operation},
            )
