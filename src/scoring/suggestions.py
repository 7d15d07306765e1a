"""Suggestion generator: turns factor diagnostics into ranked, actionable tips.

Order of precedence:
1. Factor-specific corrective tips, in factor evaluation order (good factors skipped)
2. Hawker-food tips (generic, then per-food improvement tips)
3. One closing tip for the user's goal

Duplicates are dropped and the list is cut to MAX_SUGGESTIONS, so generic
tips are the first to fall off when corrective advice fills the quota.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Tuple

from src.data_layer.models import (
    FactorName,
    FactorResult,
    FactorStatus,
    Goal,
    HealthProfile,
    MealEvaluationInput,
    NutriGrade,
)
from src.nutrition.calculator import compute_daily_target
from src.scoring.factors import calorie_position, macro_split, worst_nutri_grade

MAX_SUGGESTIONS = 4

TIP_PORTION_CONTROL = "Consider smaller portions to support your weight loss goal"
TIP_CALORIE_DENSE = "This meal is calorie-dense - balance with lighter meals today"
TIP_ADD_PROTEIN_FOR_MUSCLE = "Add protein-rich foods to support muscle growth"
TIP_REDUCE_SALTY = "Reduce soy sauce, soup, and salty condiments"
TIP_DRINK_WATER = "Drink plenty of water to help flush excess sodium"
TIP_WATCH_SODIUM = "Watch sodium intake for the rest of the day"
TIP_REMOVE_FAT = "Remove visible fat and chicken skin"
TIP_STEAMED_GRILLED = "Choose steamed or grilled options instead of fried"
TIP_LOWER_FAT_LATER = "Balance with lower-fat meals later today"
TIP_MORE_PROTEIN = "Add more protein (lean meat, tofu, eggs) for better balance"
TIP_FEWER_CARBS = "Reduce rice/noodles and add more vegetables"
TIP_LOWER_GI = "💡 Tip: Swap white rice/noodles for whole grains or add more vegetables to lower GI"
TIP_LESS_SUGAR = '💡 Tip: Choose "Siu Dai" (less sugar) or water to improve Nutri-Grade'
TIP_HAWKER = "💡 Hawker Tip: Ask for less gravy and more bean sprouts"

PROTEIN_DEFICIT_PERCENT = 15.0
CARBS_EXCESS_PERCENT = 65.0

GOAL_TIPS: Mapping[Goal, str] = MappingProxyType({
    Goal.LOSE_WEIGHT: "💡 Tip: Eat slowly and stop when 80% full",
    Goal.GAIN_MUSCLE: "💡 Tip: Ensure adequate protein intake throughout the day",
    Goal.CONTROL_SUGAR: "💡 Tip: Choose whole grains and avoid sugary drinks",
})


def _calorie_tips(factor: FactorResult, profile: HealthProfile, meal: MealEvaluationInput) -> List[str]:
    position = calorie_position(meal, compute_daily_target(profile))
    if position.is_over:
        if profile.goal is Goal.LOSE_WEIGHT:
            return [TIP_PORTION_CONTROL]
        return [TIP_CALORIE_DENSE]
    if position.is_under and profile.goal is Goal.GAIN_MUSCLE:
        return [TIP_ADD_PROTEIN_FOR_MUSCLE]
    return []


def _sodium_tips(factor: FactorResult, profile: HealthProfile, meal: MealEvaluationInput) -> List[str]:
    if factor.status is FactorStatus.POOR:
        return [TIP_REDUCE_SALTY, TIP_DRINK_WATER]
    return [TIP_WATCH_SODIUM]


def _fat_tips(factor: FactorResult, profile: HealthProfile, meal: MealEvaluationInput) -> List[str]:
    if factor.status is FactorStatus.POOR:
        return [TIP_REMOVE_FAT, TIP_STEAMED_GRILLED]
    return [TIP_LOWER_FAT_LATER]


def _balance_tips(factor: FactorResult, profile: HealthProfile, meal: MealEvaluationInput) -> List[str]:
    if factor.status is not FactorStatus.POOR:
        return []
    split = macro_split(meal.total_nutrition)
    tips = []
    # A meal with no macro calories has nothing to rebalance
    if split.protein_percent + split.carbs_percent + split.fat_percent == 0:
        return tips
    if split.protein_percent < PROTEIN_DEFICIT_PERCENT:
        tips.append(TIP_MORE_PROTEIN)
    if split.carbs_percent > CARBS_EXCESS_PERCENT:
        tips.append(TIP_FEWER_CARBS)
    return tips


def _gi_tips(factor: FactorResult, profile: HealthProfile, meal: MealEvaluationInput) -> List[str]:
    if factor.status is FactorStatus.POOR:
        return [TIP_LOWER_GI]
    return []


def _nutri_grade_tips(factor: FactorResult, profile: HealthProfile, meal: MealEvaluationInput) -> List[str]:
    if worst_nutri_grade(meal.foods) in (NutriGrade.C, NutriGrade.D):
        return [TIP_LESS_SUGAR]
    return []


FactorTipRule = Callable[[FactorResult, HealthProfile, MealEvaluationInput], List[str]]

FACTOR_TIP_RULES: Mapping[FactorName, FactorTipRule] = MappingProxyType({
    FactorName.CALORIES: _calorie_tips,
    FactorName.SODIUM: _sodium_tips,
    FactorName.FAT: _fat_tips,
    FactorName.BALANCE: _balance_tips,
    FactorName.GI_LEVEL: _gi_tips,
    FactorName.NUTRI_GRADE: _nutri_grade_tips,
})


def _hawker_tips(meal: MealEvaluationInput) -> List[str]:
    if not any(f.is_hawker_food for f in meal.foods):
        return []
    tips = [TIP_HAWKER]
    for food in meal.foods:
        if food.improvement_tip:
            tips.append(f"💡 Tip for {food.display_name}: {food.improvement_tip}")
    return tips


def _unique(tips: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for tip in tips:
        seen.setdefault(tip, None)
    return list(seen)


def generate_suggestions(
    factors: Iterable[FactorResult],
    profile: HealthProfile,
    meal: MealEvaluationInput,
) -> Tuple[str, ...]:
    """Build an ordered, de-duplicated list of at most MAX_SUGGESTIONS tips.

    Args:
        factors: Factor results in evaluation order
        profile: User health profile (goal drives tip choice)
        meal: The evaluated meal (raw totals and per-food metadata)

    Returns:
        Tuple of suggestion strings, highest priority first
    """
    candidates: List[str] = []
    for factor in factors:
        if factor.status is FactorStatus.GOOD:
            continue
        rule = FACTOR_TIP_RULES.get(factor.name)
        if rule is not None:
            candidates.extend(rule(factor, profile, meal))

    candidates.extend(_hawker_tips(meal))

    goal_tip = GOAL_TIPS.get(profile.goal)
    if goal_tip is not None:
        candidates.append(goal_tip)

    return tuple(_unique(candidates)[:MAX_SUGGESTIONS])
