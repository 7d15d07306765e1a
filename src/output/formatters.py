"""Formatters for health rating output (JSON and Markdown)."""

import json
from typing import Any, Dict, Optional

from src.data_layer.models import (
    DailyTarget,
    FactorResult,
    FactorStatus,
    HealthRating,
    MealEvaluationInput,
    RatingLevel,
    RecognizedFoodItem,
)

RATING_EMOJI = {
    RatingLevel.GREEN: "🟢",
    RatingLevel.YELLOW: "🟡",
    RatingLevel.RED: "🔴",
}

STATUS_ICONS = {
    FactorStatus.GOOD: "✅",
    FactorStatus.MODERATE: "⚠️",
    FactorStatus.POOR: "❌",
}


def _food_label(food: RecognizedFoodItem) -> str:
    if food.portion:
        return f"{food.display_name} ({food.portion})"
    return food.display_name


def format_factor_line(factor: FactorResult) -> str:
    """Format a factor as a Markdown bullet (e.g. "- ✅ **Sodium:** Low sodium content (300mg)")."""
    return f"- {STATUS_ICONS[factor.status]} **{factor.name.value}:** {factor.message}"


def format_rating_markdown(rating: HealthRating, meal: Optional[MealEvaluationInput] = None) -> str:
    """Format a HealthRating as Markdown for chat delivery.

    Args:
        rating: HealthRating from the engine
        meal: Optional evaluated meal, adds a food and calorie summary

    Returns:
        Formatted Markdown string
    """
    lines = []
    lines.append("# Health Rating\n")
    lines.append(
        f"{RATING_EMOJI[rating.overall]} **{rating.overall.value.capitalize()}** ({rating.score}/100)\n"
    )

    if meal is not None:
        calories = meal.total_nutrition.calories
        lines.append(f"**Meal:** {meal.meal_context.value.capitalize()}")
        if meal.foods:
            names = ", ".join(_food_label(food) for food in meal.foods)
            lines.append(f"**Foods:** {names}")
        lines.append(f"**Calories:** {calories.min:.0f}-{calories.max:.0f} kcal")
        lines.append("")

    lines.append("## Factors")
    for factor in rating.factors:
        lines.append(format_factor_line(factor))
    lines.append("")

    if rating.suggestions:
        lines.append("## Suggestions")
        for suggestion in rating.suggestions:
            lines.append(f"- {suggestion}")
        lines.append("")

    return "\n".join(lines)


def format_rating_json(rating: HealthRating) -> Dict[str, Any]:
    """Format a HealthRating as a JSON-ready dict (persistence shape).

    Args:
        rating: HealthRating from the engine

    Returns:
        Dictionary ready for JSON serialization
    """
    return {
        "overall": rating.overall.value,
        "score": rating.score,
        "factors": [
            {
                "name": factor.name.value,
                "status": factor.status.value,
                "message": factor.message,
                "score": factor.score,
            }
            for factor in rating.factors
        ],
        "suggestions": list(rating.suggestions),
    }


def format_rating_json_string(rating: HealthRating, indent: int = 2) -> str:
    """Format a HealthRating as a JSON string.

    Args:
        rating: HealthRating from the engine
        indent: JSON indentation (default: 2)

    Returns:
        JSON string
    """
    return json.dumps(format_rating_json(rating), indent=indent, ensure_ascii=False)


def format_daily_target_json(target: DailyTarget) -> Dict[str, Any]:
    return {
        "calories": target.calories,
        "protein_g": round(target.protein_g, 1),
        "carbs_g": round(target.carbs_g, 1),
        "fat_g": round(target.fat_g, 1),
        "sodium_mg": target.sodium_mg,
    }
