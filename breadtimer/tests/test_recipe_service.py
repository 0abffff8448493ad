"""
Tests for RecipeService: authoring validation and custom recipe persistence.
"""
import pytest

from breadtimer.config import settings
from breadtimer.db.models import CustomRecipe
from breadtimer.errors import (
    BuiltinRecipeError,
    ErrorCode,
    RecipeAlreadyExistsError,
    RecipeNotFoundError,
    RecipeValidationError,
)
from breadtimer.models.schemas import RecipeDefinition, StepDefinition, StepType
from breadtimer.services.recipe_service import (
    RecipeService,
    validate_recipe_definition,
    validate_step_definitions,
)


class TestValidateRecipeDefinition:
    """Tests for authoring validation."""

    def test_valid_definition_returns_steps(self, rye_definition):
        steps = validate_recipe_definition(rye_definition)
        assert [s.name for s in steps] == ["Mixing", "Bulk Fermentation", "Baking"]

    def test_default_definition_is_incomplete(self):
        """A fresh form (blank name, one blank step) should not validate."""
        with pytest.raises(RecipeValidationError) as exc_info:
            validate_recipe_definition(RecipeDefinition())

        error = exc_info.value
        assert error.error_code == ErrorCode.RECIPE_INVALID_DATA
        assert error.status_code == 422
        assert error.message == "Please fill in all recipe fields"
        assert error.details["fields"] == ["name", "steps[0].name"]

    def test_blank_step_name_reported_by_index(self):
        definition = RecipeDefinition(
            name="Focaccia",
            steps=[
                StepDefinition(name="Mixing", duration=0.5),
                StepDefinition(name="  ", duration=1),
            ],
        )
        with pytest.raises(RecipeValidationError) as exc_info:
            validate_recipe_definition(definition)

        assert exc_info.value.details["fields"] == ["steps[1].name"]

    def test_no_steps_rejected(self):
        with pytest.raises(RecipeValidationError) as exc_info:
            validate_recipe_definition(RecipeDefinition(name="Empty", steps=[]))

        assert exc_info.value.details["fields"] == ["steps"]

    def test_zero_duration_step_allowed(self):
        definition = RecipeDefinition(name="Flatbread", steps=[StepDefinition(name="Rest", duration=0)])
        assert validate_recipe_definition(definition)[0].duration == 0

    def test_negative_duration_rejected_by_model(self):
        with pytest.raises(ValueError):
            StepDefinition(name="Rest", duration=-0.5)

    def test_too_many_steps_rejected(self):
        steps = [StepDefinition(name=f"Fold {i}", duration=0.1) for i in range(settings.recipe_max_steps + 1)]

        with pytest.raises(RecipeValidationError) as exc_info:
            validate_recipe_definition(RecipeDefinition(name="Laminated", steps=steps))

        assert exc_info.value.details["fields"] == ["steps"]

    def test_step_limit_is_inclusive(self):
        steps = [StepDefinition(name=f"Fold {i}", duration=0.1) for i in range(settings.recipe_max_steps)]
        definition = RecipeDefinition(name="Laminated", steps=steps)

        assert len(validate_recipe_definition(definition)) == settings.recipe_max_steps

    def test_name_too_long_rejected(self):
        definition = RecipeDefinition(
            name="R" * (settings.recipe_name_max_length + 1),
            steps=[StepDefinition(name="Bake", duration=1)],
        )
        with pytest.raises(RecipeValidationError) as exc_info:
            validate_recipe_definition(definition)

        assert exc_info.value.details["fields"] == ["name"]


class TestValidateStepDefinitions:
    """Tests for validating ad-hoc step lists."""

    def test_empty_list_allowed(self):
        assert validate_step_definitions([]) == []

    def test_blank_step_name_reported(self):
        with pytest.raises(RecipeValidationError) as exc_info:
            validate_step_definitions([StepDefinition(name="Mix", duration=1), StepDefinition(duration=1)])

        assert exc_info.value.details["fields"] == ["steps[1].name"]

    def test_too_many_steps_rejected(self):
        steps = [StepDefinition(name="Fold", duration=0.1)] * (settings.recipe_max_steps + 1)

        with pytest.raises(RecipeValidationError) as exc_info:
            validate_step_definitions(steps)

        assert exc_info.value.details["fields"] == ["steps"]


class TestCreateRecipe:
    """Tests for RecipeService.create_recipe."""

    def test_create_assigns_slug_id(self, db_session, rye_definition):
        recipe = RecipeService(db_session).create_recipe(rye_definition)

        assert recipe.id == "rye-bread"
        assert recipe.name == "Rye Bread"
        assert recipe.builtin is False
        assert recipe.total_time == 4.25

    def test_create_persists_row(self, db_session, rye_definition):
        RecipeService(db_session).create_recipe(rye_definition)

        row = db_session.query(CustomRecipe).filter(CustomRecipe.id == "rye-bread").one()
        assert row.total_time == 4.25
        assert row.steps[1] == {"name": "Bulk Fermentation", "duration": 3.0, "type": "waiting"}

    def test_name_is_trimmed(self, db_session, rye_definition):
        rye_definition.name = "  Rye Bread  "
        recipe = RecipeService(db_session).create_recipe(rye_definition)
        assert recipe.name == "Rye Bread"

    def test_duplicate_slug_rejected(self, db_session, custom_recipe, rye_definition):
        """A second name mapping to the same id should not overwrite the first."""
        rye_definition.name = "rye   BREAD"

        with pytest.raises(RecipeAlreadyExistsError) as exc_info:
            RecipeService(db_session).create_recipe(rye_definition)

        assert exc_info.value.status_code == 409
        assert exc_info.value.details["recipe_id"] == "rye-bread"

    def test_builtin_slug_rejected(self, db_session, rye_definition):
        rye_definition.name = "Baguette"

        with pytest.raises(RecipeAlreadyExistsError):
            RecipeService(db_session).create_recipe(rye_definition)

    def test_invalid_definition_not_persisted(self, db_session):
        with pytest.raises(RecipeValidationError):
            RecipeService(db_session).create_recipe(RecipeDefinition(name="Nameless Steps"))

        assert db_session.query(CustomRecipe).count() == 0


class TestReadRecipes:
    """Tests for listing and fetching recipes."""

    def test_list_contains_builtins_when_empty(self, db_session):
        recipes = RecipeService(db_session).list_recipes()
        assert [r.id for r in recipes] == ["sourdough", "baguette", "wholewheat"]

    def test_list_appends_custom(self, db_session, custom_recipe):
        recipes = RecipeService(db_session).list_recipes()

        assert [r.id for r in recipes][-1] == "rye-bread"
        assert len(recipes) == 4

    def test_get_builtin(self, db_session):
        recipe = RecipeService(db_session).get_recipe("sourdough")
        assert recipe.name == "Sourdough Bread"
        assert recipe.builtin is True

    def test_get_custom_round_trips_steps(self, db_session, custom_recipe):
        recipe = RecipeService(db_session).get_recipe("rye-bread")

        assert recipe == custom_recipe
        assert recipe.steps[1].type == StepType.WAITING

    def test_get_unknown_raises(self, db_session):
        with pytest.raises(RecipeNotFoundError) as exc_info:
            RecipeService(db_session).get_recipe("pumpernickel")

        assert exc_info.value.status_code == 404


class TestUpdateRecipe:
    """Tests for RecipeService.update_recipe."""

    def test_update_recomputes_total_time(self, db_session, custom_recipe):
        definition = RecipeDefinition(
            name="Rye Bread",
            steps=[
                StepDefinition(name="Mixing", duration=0.25),
                StepDefinition(name="Proof", duration=5, type=StepType.WAITING),
            ],
        )
        updated = RecipeService(db_session).update_recipe("rye-bread", definition)

        assert updated.total_time == 5.25
        assert [s.name for s in updated.steps] == ["Mixing", "Proof"]

    def test_update_keeps_id_when_renamed(self, db_session, custom_recipe, rye_definition):
        rye_definition.name = "Dark Rye"
        updated = RecipeService(db_session).update_recipe("rye-bread", rye_definition)

        assert updated.id == "rye-bread"
        assert updated.name == "Dark Rye"

    def test_update_builtin_forbidden(self, db_session, rye_definition):
        with pytest.raises(BuiltinRecipeError) as exc_info:
            RecipeService(db_session).update_recipe("baguette", rye_definition)

        assert exc_info.value.error_code == ErrorCode.RECIPE_READ_ONLY

    def test_update_unknown_raises(self, db_session, rye_definition):
        with pytest.raises(RecipeNotFoundError):
            RecipeService(db_session).update_recipe("pumpernickel", rye_definition)

    def test_update_validates(self, db_session, custom_recipe):
        with pytest.raises(RecipeValidationError):
            RecipeService(db_session).update_recipe("rye-bread", RecipeDefinition(name=""))


class TestDeleteRecipe:
    """Tests for RecipeService.delete_recipe."""

    def test_delete_custom(self, db_session, custom_recipe):
        service = RecipeService(db_session)
        service.delete_recipe("rye-bread")

        with pytest.raises(RecipeNotFoundError):
            service.get_recipe("rye-bread")

    def test_delete_builtin_forbidden(self, db_session):
        with pytest.raises(BuiltinRecipeError):
            RecipeService(db_session).delete_recipe("sourdough")

        assert RecipeService(db_session).get_recipe("sourdough").name == "Sourdough Bread"

    def test_delete_unknown_raises(self, db_session):
        with pytest.raises(RecipeNotFoundError):
            RecipeService(db_session).delete_recipe("pumpernickel")
