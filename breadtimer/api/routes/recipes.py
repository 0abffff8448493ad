"""
Recipe API routes: browse the catalog and author custom recipes.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from breadtimer.api.dependencies import get_recipe_service, to_http_exception
from breadtimer.errors import BreadTimerError
from breadtimer.features import Feature
from breadtimer.features.service import require_feature
from breadtimer.models.schemas import Recipe, RecipeDefinition, StepDefinition, StepType
from breadtimer.services.recipe_service import RecipeService
from breadtimer.utils.sanitization import SanitizedStr

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


# Request/Response schemas
class StepRequest(BaseModel):
    """A step submitted by a client, in a recipe or an ad-hoc schedule."""
    name: SanitizedStr = ""
    duration: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Duration in hours")
    type: StepType = StepType.ACTIVE

    def to_definition(self) -> StepDefinition:
        return StepDefinition(name=self.name, duration=self.duration, type=self.type)


class RecipeRequest(BaseModel):
    """Request to create or replace a custom recipe."""
    name: SanitizedStr = ""
    steps: List[StepRequest] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Rye Bread",
                    "steps": [
                        {"name": "Mixing", "duration": 0.25, "type": "active"},
                        {"name": "Bulk Fermentation", "duration": 3, "type": "waiting"},
                        {"name": "Baking", "duration": 1, "type": "active"}
                    ]
                }
            ]
        }
    }

    def to_definition(self) -> RecipeDefinition:
        return RecipeDefinition(
            name=self.name,
            steps=[step.to_definition() for step in self.steps],
        )


class RecipeListResponse(BaseModel):
    """Recipe catalog listing."""
    recipes: List[Recipe]
    total: int


@router.get("", response_model=RecipeListResponse)
async def list_recipes(
    recipe_service: RecipeService = Depends(get_recipe_service),
):
    """
    List all recipes, built-in first, then custom recipes in creation order.
    """
    recipes = recipe_service.list_recipes()
    return RecipeListResponse(recipes=recipes, total=len(recipes))


@router.get("/{recipe_id}", response_model=Recipe)
async def get_recipe(
    recipe_id: str,
    recipe_service: RecipeService = Depends(get_recipe_service),
):
    """
    Get a specific recipe by ID.
    """
    try:
        return recipe_service.get_recipe(recipe_id)
    except BreadTimerError as e:
        raise to_http_exception(e)


@router.post("", response_model=Recipe, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    request: RecipeRequest,
    recipe_service: RecipeService = Depends(get_recipe_service),
    _: None = Depends(require_feature(Feature.CUSTOM_RECIPES)),
):
    """
    Create a custom recipe.

    The recipe id is derived from its name (lowercased, spaces to hyphens).
    A name whose id is already taken is rejected with 409.

    **Feature flag**: Requires `custom_recipes` feature to be enabled.
    """
    try:
        return recipe_service.create_recipe(request.to_definition())
    except BreadTimerError as e:
        raise to_http_exception(e)


@router.put("/{recipe_id}", response_model=Recipe)
async def update_recipe(
    recipe_id: str,
    request: RecipeRequest,
    recipe_service: RecipeService = Depends(get_recipe_service),
    _: None = Depends(require_feature(Feature.CUSTOM_RECIPES)),
):
    """
    Replace the name and steps of a custom recipe. Built-in recipes are read-only.

    **Feature flag**: Requires `custom_recipes` feature to be enabled.
    """
    try:
        return recipe_service.update_recipe(recipe_id, request.to_definition())
    except BreadTimerError as e:
        raise to_http_exception(e)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: str,
    recipe_service: RecipeService = Depends(get_recipe_service),
    _: None = Depends(require_feature(Feature.CUSTOM_RECIPES)),
):
    """
    Delete a custom recipe. Built-in recipes cannot be deleted.

    **Feature flag**: Requires `custom_recipes` feature to be enabled.
    """
    try:
        recipe_service.delete_recipe(recipe_id)
    except BreadTimerError as e:
        raise to_http_exception(e)
