"""Meal input loader for reading recognized meals from JSON."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from src.data_layer.exceptions import InvalidNutrientRangeError, RatingInputError
from src.data_layer.models import (
    FoodNutritionTotals,
    MealEvaluationInput,
    NutrientRange,
    RecognizedFoodItem,
)
from src.nutrition.aggregator import NUTRIENT_FIELDS, NutritionAggregator, zero_totals

logger = logging.getLogger(__name__)


def parse_nutrient_range(data: Any, nutrient: str) -> NutrientRange:
    """Parse a {"min": x, "max": y} mapping.

    Raises:
        InvalidNutrientRangeError: If the mapping or either bound is missing
    """
    if not isinstance(data, dict) or "min" not in data or "max" not in data:
        raise InvalidNutrientRangeError(nutrient, data, "expected a mapping with 'min' and 'max'")
    return NutrientRange(data["min"], data["max"], nutrient)


def parse_nutrition(data: Any, field_name: str = "total_nutrition") -> FoodNutritionTotals:
    """Parse a mapping of the five nutrient ranges."""
    if not isinstance(data, dict):
        raise InvalidNutrientRangeError(field_name, data, "expected a mapping of nutrient ranges")
    return FoodNutritionTotals(
        **{name: parse_nutrient_range(data.get(name), name) for name in NUTRIENT_FIELDS}
    )


def parse_food(data: Dict[str, Any]) -> RecognizedFoodItem:
    """Parse a single recognized food from dictionary data.

    Args:
        data: Dictionary containing food data

    Returns:
        RecognizedFoodItem object
    """
    if not isinstance(data, dict) or not data.get("name"):
        raise RatingInputError("foods", data, "Each food needs a non-empty 'name'")

    nutrition = data.get("nutrition")
    return RecognizedFoodItem(
        name=data["name"],
        name_local=data.get("name_local"),
        nutri_grade=data.get("nutri_grade"),
        gi_level=data.get("gi_level"),
        is_hawker_food=bool(data.get("is_hawker_food", False)),
        improvement_tip=data.get("improvement_tip"),
        nutrition=parse_nutrition(nutrition, "nutrition") if nutrition is not None else None,
        confidence=data.get("confidence"),
        portion=data.get("portion"),
    )


def parse_meal_input(data: Dict[str, Any]) -> MealEvaluationInput:
    """Build a MealEvaluationInput from a plain mapping.

    When total_nutrition is absent it is summed from the foods' own nutrition
    (zero when there are no foods).

    Raises:
        RatingInputError: If any part of the meal violates its contract
    """
    if not isinstance(data, dict):
        raise RatingInputError("meal", data, "Meal input must be a mapping")

    foods = [parse_food(f) for f in data.get("foods") or []]

    totals_data: Optional[Dict[str, Any]] = data.get("total_nutrition")
    if totals_data is not None:
        totals = parse_nutrition(totals_data)
    elif foods:
        totals = NutritionAggregator.aggregate_foods(foods)
        logger.debug("Derived meal totals from %d foods", len(foods))
    else:
        totals = zero_totals()

    return MealEvaluationInput(
        total_nutrition=totals,
        foods=tuple(foods),
        meal_context=data.get("meal_context"),
    )


class MealInputLoader:
    """Loader for a recognized meal stored as JSON."""

    def __init__(self, json_path: str):
        """Initialize meal loader.

        Args:
            json_path: Path to JSON file containing one meal
        """
        self.json_path = Path(json_path)

    def load(self) -> MealEvaluationInput:
        """Load the meal from the JSON file.

        Raises:
            FileNotFoundError: If JSON file doesn't exist
            RatingInputError: If the meal is malformed
        """
        with open(self.json_path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise RatingInputError("meal", str(self.json_path), f"Invalid JSON: {exc}") from exc
        return parse_meal_input(data)
