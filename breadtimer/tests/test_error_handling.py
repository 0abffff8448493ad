"""
Tests for error handling and error response format.

Tests cover:
- Custom exception classes and error codes
- Structured error responses
- Translation into HTTP exceptions
"""
import pytest

from breadtimer.api.dependencies import to_http_exception
from breadtimer.errors import (
    ErrorCode,
    ErrorResponse,
    BreadTimerError,
    InvalidInputError,
    RecipeValidationError,
    RecipeNotFoundError,
    RecipeAlreadyExistsError,
    BuiltinRecipeError,
    EmptyScheduleError,
    DatabaseError,
)


class TestErrorCodeEnum:
    """Tests for ErrorCode enumeration."""

    def test_error_codes_are_strings(self):
        assert ErrorCode.RECIPE_NOT_FOUND.value == "RECIPE_NOT_FOUND"

    def test_recipe_codes_share_prefix(self):
        recipe_codes = [
            ErrorCode.RECIPE_NOT_FOUND,
            ErrorCode.RECIPE_ALREADY_EXISTS,
            ErrorCode.RECIPE_INVALID_DATA,
            ErrorCode.RECIPE_READ_ONLY,
        ]
        for code in recipe_codes:
            assert code.value.startswith("RECIPE_")


class TestExceptionClasses:
    """Tests for status codes and details carried by each exception."""

    @pytest.mark.parametrize("error, code, status", [
        (InvalidInputError("Invalid date format"), ErrorCode.VALIDATION_INVALID_INPUT, 400),
        (RecipeValidationError(["name"]), ErrorCode.RECIPE_INVALID_DATA, 422),
        (RecipeNotFoundError("rye"), ErrorCode.RECIPE_NOT_FOUND, 404),
        (RecipeAlreadyExistsError("rye", "Rye"), ErrorCode.RECIPE_ALREADY_EXISTS, 409),
        (BuiltinRecipeError("baguette", "deleted"), ErrorCode.RECIPE_READ_ONLY, 403),
        (EmptyScheduleError("Nothing"), ErrorCode.EXPORT_EMPTY_SCHEDULE, 400),
        (DatabaseError("Could not save recipe"), ErrorCode.DATABASE_QUERY_ERROR, 500),
    ])
    def test_code_and_status(self, error, code, status):
        assert isinstance(error, BreadTimerError)
        assert error.error_code == code
        assert error.status_code == status

    def test_base_error_defaults(self):
        error = BreadTimerError("boom")

        assert error.error_code == ErrorCode.INTERNAL_ERROR
        assert error.status_code == 500
        assert error.details == {}
        assert str(error) == "boom"

    def test_builtin_error_message_names_operation(self):
        error = BuiltinRecipeError("sourdough", "modified")
        assert error.message == "Built-in recipe 'sourdough' cannot be modified"

    def test_validation_error_custom_message(self):
        error = RecipeValidationError(["steps"], message="A recipe needs at least one step")

        assert error.message == "A recipe needs at least one step"
        assert error.details == {"fields": ["steps"]}


class TestErrorResponse:
    """Tests for the structured error body."""

    def test_to_response(self):
        response = RecipeNotFoundError("rye").to_response()

        assert isinstance(response, ErrorResponse)
        assert response.model_dump() == {
            "error_code": "RECIPE_NOT_FOUND",
            "message": "Recipe 'rye' not found",
            "details": {"recipe_id": "rye"},
        }

    def test_empty_details_become_none(self):
        assert InvalidInputError("Invalid date format").to_response().details is None

    def test_to_http_exception(self):
        exc = to_http_exception(BuiltinRecipeError("baguette", "deleted"))

        assert exc.status_code == 403
        assert exc.detail["error_code"] == "RECIPE_READ_ONLY"
        assert exc.detail["details"]["operation"] == "deleted"
