"""
Custom exceptions and error codes for the Bread Timer application.

This module provides:
- Structured error codes for categorized error handling
- Custom exception classes for specific failure scenarios
- Error response schema for consistent API responses
"""
from enum import Enum
from typing import Optional, Dict, Any, List
from pydantic import BaseModel


class ErrorCode(str, Enum):
    """
    Application-wide error codes for categorized error handling.

    Format: CATEGORY_SPECIFIC_ERROR
    Categories:
    - RECIPE_*: Recipe catalog and authoring errors
    - EXPORT_*: Calendar export errors
    - VALIDATION_*: Input validation errors
    - DATABASE_*: Database operation errors
    """

    # Recipe-related errors
    RECIPE_NOT_FOUND = "RECIPE_NOT_FOUND"
    RECIPE_ALREADY_EXISTS = "RECIPE_ALREADY_EXISTS"
    RECIPE_INVALID_DATA = "RECIPE_INVALID_DATA"
    RECIPE_READ_ONLY = "RECIPE_READ_ONLY"

    # Export-related errors
    EXPORT_EMPTY_SCHEDULE = "EXPORT_EMPTY_SCHEDULE"

    # Validation errors
    VALIDATION_INVALID_INPUT = "VALIDATION_INVALID_INPUT"

    # Database errors
    DATABASE_QUERY_ERROR = "DATABASE_QUERY_ERROR"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Structured error response for API errors."""
    error_code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None

    model_config = {"use_enum_values": True}


class BreadTimerError(Exception):
    """
    Base exception for all Bread Timer application errors.

    Provides structured error information for consistent error handling.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse for API output."""
        return ErrorResponse(
            error_code=self.error_code,
            message=self.message,
            details=self.details if self.details else None,
        )


class InvalidInputError(BreadTimerError):
    """Raised when the target time is missing or unparseable, or no recipe is selected."""

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_INVALID_INPUT,
            details=details,
            status_code=400,
        )


# Recipe-related exceptions

class RecipeValidationError(BreadTimerError):
    """Raised when an authored recipe is missing its name or a step name."""

    def __init__(self, fields: List[str], message: str = None):
        super().__init__(
            message=message or "Please fill in all recipe fields",
            error_code=ErrorCode.RECIPE_INVALID_DATA,
            details={"fields": fields},
            status_code=422,
        )


class RecipeNotFoundError(BreadTimerError):
    """Raised when a recipe is not found."""

    def __init__(self, recipe_id: str):
        super().__init__(
            message=f"Recipe '{recipe_id}' not found",
            error_code=ErrorCode.RECIPE_NOT_FOUND,
            details={"recipe_id": recipe_id},
            status_code=404,
        )


class RecipeAlreadyExistsError(BreadTimerError):
    """Raised when a new recipe's identifier is already taken."""

    def __init__(self, recipe_id: str, recipe_name: str):
        super().__init__(
            message=f"A recipe with identifier '{recipe_id}' already exists (from name '{recipe_name}')",
            error_code=ErrorCode.RECIPE_ALREADY_EXISTS,
            details={"recipe_id": recipe_id, "recipe_name": recipe_name},
            status_code=409,
        )


class BuiltinRecipeError(BreadTimerError):
    """Raised when trying to modify or delete a built-in recipe."""

    def __init__(self, recipe_id: str, operation: str):
        super().__init__(
            message=f"Built-in recipe '{recipe_id}' cannot be {operation}",
            error_code=ErrorCode.RECIPE_READ_ONLY,
            details={"recipe_id": recipe_id, "operation": operation},
            status_code=403,
        )


# Export-related exceptions

class EmptyScheduleError(BreadTimerError):
    """Raised when exporting a schedule with no steps."""

    def __init__(self, recipe_name: str):
        super().__init__(
            message=f"Nothing to export: the schedule for '{recipe_name}' has no steps",
            error_code=ErrorCode.EXPORT_EMPTY_SCHEDULE,
            details={"recipe_name": recipe_name},
            status_code=400,
        )


# Database-related exceptions

class DatabaseError(BreadTimerError):
    """Base exception for database-related errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.DATABASE_QUERY_ERROR,
        details: Dict[str, Any] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=500,
        )
