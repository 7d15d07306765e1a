"""Daily target calculator: calories, macros and sodium from a health profile.

Calories use the Mifflin-St Jeor equation scaled by an activity multiplier and
shifted by a goal adjustment. Macro targets are fixed shares of the calorie
target; sodium is the WHO daily cap. Missing age/gender fall back to 30/male.
"""
from types import MappingProxyType
from typing import Mapping

from src.data_layer.models import ActivityLevel, DailyTarget, Gender, Goal, HealthProfile
from src.nutrition.aggregator import round_half_up

DEFAULT_AGE = 30
DEFAULT_GENDER = Gender.MALE

ACTIVITY_MULTIPLIERS: Mapping[ActivityLevel, float] = MappingProxyType({
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
})

GOAL_ADJUSTMENTS: Mapping[Goal, int] = MappingProxyType({
    Goal.LOSE_WEIGHT: -500,  # kcal deficit
    Goal.GAIN_MUSCLE: 300,  # kcal surplus
    Goal.CONTROL_SUGAR: 0,
    Goal.MAINTAIN: 0,
})

PROTEIN_G_PER_KG = 1.2
PROTEIN_G_PER_KG_MUSCLE_GAIN = 2.0
CARBS_CALORIE_SHARE = 0.50
FAT_CALORIE_SHARE = 0.25
KCAL_PER_G_CARBS = 4.0
KCAL_PER_G_PROTEIN = 4.0
KCAL_PER_G_FAT = 9.0
DAILY_SODIUM_MG = 2000.0  # WHO guideline

# BMI category upper bounds (exclusive)
BMI_UNDERWEIGHT = 18.5
BMI_NORMAL = 25.0
BMI_OVERWEIGHT = 30.0


def calculate_bmr(weight_kg: float, height_cm: float, age: float, gender: Gender) -> float:
    """Basal metabolic rate (kcal/day), Mifflin-St Jeor."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender is Gender.FEMALE:
        return base - 161
    return base + 5


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Total daily energy expenditure: BMR scaled by activity."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def calculate_daily_calories(profile: HealthProfile) -> int:
    """Goal-adjusted daily calorie target, rounded to the nearest kcal."""
    age = profile.age if profile.age is not None else DEFAULT_AGE
    gender = profile.gender if profile.gender is not None else DEFAULT_GENDER
    bmr = calculate_bmr(profile.weight_kg, profile.height_cm, age, gender)
    tdee = calculate_tdee(bmr, profile.activity_level)
    return round_half_up(tdee + GOAL_ADJUSTMENTS[profile.goal])


def compute_daily_target(profile: HealthProfile) -> DailyTarget:
    """Derive daily nutrition targets from a health profile.

    Computed fresh on every call; profiles may change between evaluations.

    Args:
        profile: User health profile

    Returns:
        DailyTarget with calories, protein, carbs, fat (g) and sodium (mg)
    """
    calories = calculate_daily_calories(profile)

    if profile.goal is Goal.GAIN_MUSCLE:
        protein_g = profile.weight_kg * PROTEIN_G_PER_KG_MUSCLE_GAIN
    else:
        protein_g = profile.weight_kg * PROTEIN_G_PER_KG

    return DailyTarget(
        calories=calories,
        protein_g=protein_g,
        carbs_g=(calories * CARBS_CALORIE_SHARE) / KCAL_PER_G_CARBS,
        fat_g=(calories * FAT_CALORIE_SHARE) / KCAL_PER_G_FAT,
        sodium_mg=DAILY_SODIUM_MG,
    )


def calculate_bmi(height_cm: float, weight_kg: float) -> float:
    """Body mass index from height (cm) and weight (kg)."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_category(bmi: float) -> str:
    if bmi < BMI_UNDERWEIGHT:
        return "Underweight"
    if bmi < BMI_NORMAL:
        return "Normal weight"
    if bmi < BMI_OVERWEIGHT:
        return "Overweight"
    return "Obese"
