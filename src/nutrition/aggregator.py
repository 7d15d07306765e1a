"""Nutrient range arithmetic: point estimates, rounding and per-food summing."""
import math
from typing import Iterable, List

from src.data_layer.exceptions import InconsistentMealError
from src.data_layer.models import FoodNutritionTotals, NutrientRange, RecognizedFoodItem

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "sodium")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding (round(17.5) == 18 but
    round(16.5) == 16); scores and kcal figures must not depend on parity.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def zero_totals() -> FoodNutritionTotals:
    """Totals with every nutrient at [0, 0]."""
    return FoodNutritionTotals(
        **{name: NutrientRange(0.0, 0.0, name) for name in NUTRIENT_FIELDS}
    )


class NutritionAggregator:
    """Aggregator for combining nutrient ranges across foods."""

    @staticmethod
    def sum_ranges(ranges: Iterable[NutrientRange], nutrient: str = "nutrient") -> NutrientRange:
        """Sum ranges bound-wise (min with min, max with max).

        Args:
            ranges: NutrientRange values for the same nutrient
            nutrient: Nutrient name carried onto the result

        Returns:
            NutrientRange spanning the summed bounds
        """
        total_min = 0.0
        total_max = 0.0
        for r in ranges:
            total_min += r.min
            total_max += r.max
        return NutrientRange(total_min, total_max, nutrient)

    @staticmethod
    def aggregate_foods(foods: List[RecognizedFoodItem]) -> FoodNutritionTotals:
        """Aggregate per-food nutrition into meal totals.

        Args:
            foods: Recognized foods, each carrying its own nutrition

        Returns:
            FoodNutritionTotals with summed ranges

        Raises:
            InconsistentMealError: If any food has no nutrition to sum
        """
        missing = [f.name for f in foods if f.nutrition is None]
        if missing:
            raise InconsistentMealError(
                "foods",
                missing,
                f"Cannot derive meal totals: no nutrition for {', '.join(missing)}",
            )

        return FoodNutritionTotals(
            **{
                name: NutritionAggregator.sum_ranges(
                    (getattr(f.nutrition, name) for f in foods), name
                )
                for name in NUTRIENT_FIELDS
            }
        )
