"""Factor evaluators: six independent scores in [0, 100] for one meal.

Each evaluator is pure and deterministic; none reads another's output. All
nutrient figures use the midpoint of the recognition range. Evaluators whose
optional per-food metadata is entirely absent return a neutral good/100
result instead of being omitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from src.data_layer.models import (
    DailyTarget,
    FactorName,
    FactorResult,
    FactorStatus,
    FoodNutritionTotals,
    GILevel,
    Goal,
    MealContext,
    MealEvaluationInput,
    NutriGrade,
    RecognizedFoodItem,
)
from src.nutrition.aggregator import round_half_up
from src.nutrition.calculator import KCAL_PER_G_CARBS, KCAL_PER_G_FAT, KCAL_PER_G_PROTEIN

# Expected share of the daily calorie target per meal slot, in percent
EXPECTED_MEAL_PERCENT: Mapping[MealContext, float] = MappingProxyType({
    MealContext.BREAKFAST: 25.0,
    MealContext.LUNCH: 35.0,
    MealContext.DINNER: 30.0,
    MealContext.SNACK: 10.0,
})

CALORIE_GOOD_DEVIATION = 10.0
CALORIE_MODERATE_DEVIATION = 20.0
GOAL_BONUS = 10
GOAL_BONUS_GOOD_THRESHOLD = 80

# Single-meal sodium tiers (mg); ~700 mg is 35% of the 2000 mg WHO cap
SODIUM_LOW_MG = 500.0
SODIUM_MODERATE_MG = 700.0
SODIUM_HIGH_MG = 1000.0

FAT_GOOD_PERCENT = 25.0
FAT_MODERATE_PERCENT = 35.0

PROTEIN_BAND = (15.0, 30.0)
CARBS_BAND = (45.0, 65.0)
FAT_BAND = (20.0, 35.0)

NEUTRAL_MESSAGE = "N/A"


def neutral_result(name: FactorName) -> FactorResult:
    """Pass result for a factor with no data to judge."""
    return FactorResult(name=name, status=FactorStatus.GOOD, message=NEUTRAL_MESSAGE, score=100)


# --- Calories ---


@dataclass(frozen=True)
class CaloriePosition:
    """Where a meal's calories sit against its slot's expected share."""

    avg_calories: float
    percent_of_daily: float
    expected_percent: float

    @property
    def deviation(self) -> float:
        return abs(self.percent_of_daily - self.expected_percent)

    @property
    def is_over(self) -> bool:
        return self.percent_of_daily > self.expected_percent

    @property
    def is_under(self) -> bool:
        return self.percent_of_daily < self.expected_percent


def calorie_position(meal: MealEvaluationInput, target: DailyTarget) -> CaloriePosition:
    avg_calories = meal.total_nutrition.calories.midpoint
    percent_of_daily = (avg_calories / target.calories * 100) if target.calories > 0 else 0.0
    return CaloriePosition(
        avg_calories=avg_calories,
        percent_of_daily=percent_of_daily,
        expected_percent=EXPECTED_MEAL_PERCENT[meal.meal_context],
    )


def evaluate_calories(meal: MealEvaluationInput, target: DailyTarget, goal: Goal) -> FactorResult:
    """Score calories by deviation from the meal slot's expected share of the day.

    Weight-loss meals that undershoot and muscle-gain meals that overshoot get
    a +10 bonus; the opposite directions are not penalized further.
    """
    position = calorie_position(meal, target)
    slot = meal.meal_context.value
    kcal = round_half_up(position.avg_calories)

    if position.deviation < CALORIE_GOOD_DEVIATION:
        score, status = 100, FactorStatus.GOOD
        message = f"Calorie content is appropriate for {slot} ({kcal} kcal)"
    elif position.deviation < CALORIE_MODERATE_DEVIATION:
        score, status = 70, FactorStatus.MODERATE
        direction = "high" if position.is_over else "low"
        message = f"Slightly {direction} in calories for {slot} ({kcal} kcal)"
    else:
        score, status = 40, FactorStatus.POOR
        direction = "high" if position.is_over else "low"
        message = f"Too {direction} in calories for {slot} ({kcal} kcal)"

    bonus_applies = (goal is Goal.LOSE_WEIGHT and position.is_under) or (
        goal is Goal.GAIN_MUSCLE and position.is_over
    )
    if bonus_applies:
        score = min(100, score + GOAL_BONUS)
        if score >= GOAL_BONUS_GOOD_THRESHOLD:
            status = FactorStatus.GOOD

    return FactorResult(name=FactorName.CALORIES, status=status, message=message, score=score)


# --- Sodium ---


def evaluate_sodium(meal: MealEvaluationInput) -> FactorResult:
    avg_sodium = meal.total_nutrition.sodium.midpoint
    mg = round_half_up(avg_sodium)

    if avg_sodium < SODIUM_LOW_MG:
        score, status = 100, FactorStatus.GOOD
        message = f"Low sodium content ({mg}mg)"
    elif avg_sodium < SODIUM_MODERATE_MG:
        score, status = 80, FactorStatus.GOOD
        message = f"Moderate sodium content ({mg}mg)"
    elif avg_sodium < SODIUM_HIGH_MG:
        score, status = 60, FactorStatus.MODERATE
        message = f"High sodium content ({mg}mg) - consider reducing"
    else:
        score, status = 30, FactorStatus.POOR
        message = f"Very high sodium content ({mg}mg) - exceeds recommended limit"

    return FactorResult(name=FactorName.SODIUM, status=status, message=message, score=score)


# --- Fat ---


def evaluate_fat(meal: MealEvaluationInput) -> FactorResult:
    """Score fat by its share of the meal's calories."""
    avg_fat = meal.total_nutrition.fat.midpoint
    avg_calories = meal.total_nutrition.calories.midpoint
    # zero-calorie meals report 0%
    fat_percent = (avg_fat * KCAL_PER_G_FAT / avg_calories * 100) if avg_calories > 0 else 0.0
    detail = f"({round_half_up(avg_fat)}g, {round_half_up(fat_percent)}% of calories)"

    if fat_percent < FAT_GOOD_PERCENT:
        score, status = 100, FactorStatus.GOOD
        message = f"Healthy fat content {detail}"
    elif fat_percent < FAT_MODERATE_PERCENT:
        score, status = 70, FactorStatus.MODERATE
        message = f"Moderate fat content {detail}"
    else:
        score, status = 40, FactorStatus.POOR
        message = f"High fat content {detail}"

    return FactorResult(name=FactorName.FAT, status=status, message=message, score=score)


# --- Macro balance ---


@dataclass(frozen=True)
class MacroSplit:
    """Share of macro calories from protein, carbs and fat, in percent."""

    protein_percent: float
    carbs_percent: float
    fat_percent: float

    @property
    def protein_in_range(self) -> bool:
        return PROTEIN_BAND[0] <= self.protein_percent <= PROTEIN_BAND[1]

    @property
    def carbs_in_range(self) -> bool:
        return CARBS_BAND[0] <= self.carbs_percent <= CARBS_BAND[1]

    @property
    def fat_in_range(self) -> bool:
        return FAT_BAND[0] <= self.fat_percent <= FAT_BAND[1]

    @property
    def in_range_count(self) -> int:
        return sum((self.protein_in_range, self.carbs_in_range, self.fat_in_range))

    def describe(self) -> str:
        return (
            f"P:{round_half_up(self.protein_percent)}% "
            f"C:{round_half_up(self.carbs_percent)}% "
            f"F:{round_half_up(self.fat_percent)}%"
        )


def macro_split(totals: FoodNutritionTotals) -> MacroSplit:
    """Compute the macro calorie split; all shares are 0 when there are no macro calories."""
    protein_cal = totals.protein.midpoint * KCAL_PER_G_PROTEIN
    carbs_cal = totals.carbs.midpoint * KCAL_PER_G_CARBS
    fat_cal = totals.fat.midpoint * KCAL_PER_G_FAT
    total_cal = protein_cal + carbs_cal + fat_cal
    if total_cal <= 0:
        return MacroSplit(0.0, 0.0, 0.0)
    return MacroSplit(
        protein_percent=protein_cal / total_cal * 100,
        carbs_percent=carbs_cal / total_cal * 100,
        fat_percent=fat_cal / total_cal * 100,
    )


def evaluate_balance(meal: MealEvaluationInput) -> FactorResult:
    """Score how many of the three macro bands the meal satisfies."""
    split = macro_split(meal.total_nutrition)
    count = split.in_range_count

    if count == 3:
        score, status, label = 100, FactorStatus.GOOD, "Well-balanced meal"
    elif count == 2:
        score, status, label = 70, FactorStatus.MODERATE, "Moderately balanced"
    else:
        score, status, label = 40, FactorStatus.POOR, "Unbalanced meal"

    return FactorResult(
        name=FactorName.BALANCE, status=status, message=f"{label} ({split.describe()})", score=score
    )


# --- Nutri-Grade ---


def worst_nutri_grade(foods: Iterable[RecognizedFoodItem]) -> Optional[NutriGrade]:
    """Most severe grade across foods, or None if no food is graded."""
    grades = [f.nutri_grade for f in foods if f.nutri_grade is not None]
    if not grades:
        return None
    return max(grades, key=lambda g: g.severity)


def evaluate_nutri_grade(meal: MealEvaluationInput) -> FactorResult:
    worst = worst_nutri_grade(meal.foods)
    if worst is None:
        return neutral_result(FactorName.NUTRI_GRADE)

    message = f"Nutri-Grade: {worst.value}"
    if worst is NutriGrade.C:
        return FactorResult(
            name=FactorName.NUTRI_GRADE,
            status=FactorStatus.MODERATE,
            message=f"{message} - High in sugar/saturated fat",
            score=60,
        )
    if worst is NutriGrade.D:
        return FactorResult(
            name=FactorName.NUTRI_GRADE,
            status=FactorStatus.POOR,
            message=f"{message} - Very high in sugar/saturated fat",
            score=30,
        )
    return FactorResult(name=FactorName.NUTRI_GRADE, status=FactorStatus.GOOD, message=message, score=100)


# --- Glycemic index ---


def gi_levels(foods: Iterable[RecognizedFoodItem]) -> Optional[Tuple[GILevel, ...]]:
    """GI tags present on foods, or None if no food is tagged."""
    levels = tuple(f.gi_level for f in foods if f.gi_level is not None)
    return levels or None


def evaluate_gi(meal: MealEvaluationInput) -> FactorResult:
    levels = gi_levels(meal.foods)
    if levels is None:
        return neutral_result(FactorName.GI_LEVEL)

    if GILevel.HIGH in levels:
        return FactorResult(
            name=FactorName.GI_LEVEL,
            status=FactorStatus.POOR,
            message="High Glycemic Index - may cause blood sugar spikes",
            score=40,
        )
    return FactorResult(
        name=FactorName.GI_LEVEL, status=FactorStatus.GOOD, message="Healthy GI level", score=100
    )


def evaluate_factors(
    meal: MealEvaluationInput, target: DailyTarget, goal: Goal
) -> Tuple[FactorResult, ...]:
    """Run all six evaluators in fixed order."""
    return (
        evaluate_calories(meal, target, goal),
        evaluate_sodium(meal),
        evaluate_fat(meal),
        evaluate_balance(meal),
        evaluate_nutri_grade(meal),
        evaluate_gi(meal),
    )
