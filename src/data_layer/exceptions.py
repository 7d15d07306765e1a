"""Typed input-contract errors for the health rating engine.

Every error is raised at the boundary (model construction or the engine's
entry point) and never from inside the scoring math. Each carries the
offending field and value so callers can report precisely what was wrong.
"""

from typing import Any


class RatingInputError(ValueError):
    """Base class for all malformed-input errors.

    Subclasses ValueError so generic callers can still catch it as one.
    """

    def __init__(self, field: str, value: Any, message: str):
        """Initialize error with field context.

        Args:
            field: Name of the field that failed validation
            value: The invalid value that was provided
            message: Human-readable description
        """
        self.field = field
        self.value = value
        super().__init__(message)


class InvalidNutrientRangeError(RatingInputError):
    """Raised when a nutrient range is negative, inverted or not a number."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(field, value, f"Invalid nutrient range for '{field}': {reason} (got {value!r})")


class InvalidMealContextError(RatingInputError):
    """Raised when meal_context is not breakfast, lunch, dinner or snack."""

    def __init__(self, value: Any):
        super().__init__(
            "meal_context",
            value,
            f"Unknown meal context {value!r}; expected one of breakfast, lunch, dinner, snack",
        )


class InconsistentMealError(RatingInputError):
    """Raised when the meal's foods and totals contradict each other."""


class InvalidProfileError(RatingInputError):
    """Raised when a health profile has an unknown enum value or bad measurements."""
