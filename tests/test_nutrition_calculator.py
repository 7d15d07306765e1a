"""Tests for the daily target calculator."""
import pytest

from src.data_layer.models import ActivityLevel, Gender, Goal, HealthProfile
from src.nutrition.calculator import (
    ACTIVITY_MULTIPLIERS,
    DAILY_SODIUM_MG,
    GOAL_ADJUSTMENTS,
    bmi_category,
    calculate_bmi,
    calculate_bmr,
    calculate_daily_calories,
    calculate_tdee,
    compute_daily_target,
)


def _make_profile(**overrides) -> HealthProfile:
    data = dict(
        height_cm=170,
        weight_kg=70,
        age=30,
        gender="male",
        activity_level="light",
        goal="lose-weight",
    )
    data.update(overrides)
    return HealthProfile(**data)


class TestBMR:
    """Mifflin-St Jeor basal metabolic rate."""

    def test_male_bmr(self):
        # 10*70 + 6.25*170 - 5*30 + 5
        assert calculate_bmr(70, 170, 30, Gender.MALE) == pytest.approx(1617.5)

    def test_female_bmr(self):
        # 10*70 + 6.25*170 - 5*30 - 161
        assert calculate_bmr(70, 170, 30, Gender.FEMALE) == pytest.approx(1451.5)

    def test_tdee_uses_activity_multiplier(self):
        assert calculate_tdee(1617.5, ActivityLevel.LIGHT) == pytest.approx(2224.0625)
        assert calculate_tdee(1000, ActivityLevel.SEDENTARY) == pytest.approx(1200)
        assert calculate_tdee(1000, ActivityLevel.ACTIVE) == pytest.approx(1725)


class TestDailyTarget:
    """Tests for compute_daily_target."""

    def test_reference_profile(self):
        """170 cm / 70 kg / 30 y male, light, lose-weight."""
        target = compute_daily_target(_make_profile())

        # BMR 1617.5 -> TDEE 2224.0625 -> -500 -> 1724.0625
        assert target.calories == 1724
        assert isinstance(target.calories, int)
        assert target.protein_g == pytest.approx(84.0)
        assert target.carbs_g == pytest.approx(1724 * 0.5 / 4)
        assert target.fat_g == pytest.approx(1724 * 0.25 / 9)
        assert target.sodium_mg == DAILY_SODIUM_MG == 2000

    def test_muscle_gain_protein_and_surplus(self):
        target = compute_daily_target(_make_profile(goal="gain-muscle"))
        assert target.protein_g == pytest.approx(140.0)
        assert target.calories == 2524

    def test_goal_adjustments_order(self):
        lose = compute_daily_target(_make_profile(goal="lose-weight")).calories
        maintain = compute_daily_target(_make_profile(goal="maintain")).calories
        sugar = compute_daily_target(_make_profile(goal="control-sugar")).calories
        gain = compute_daily_target(_make_profile(goal="gain-muscle")).calories
        assert lose < maintain == sugar < gain
        assert maintain == 2224

    def test_female_lower_than_male(self):
        male = compute_daily_target(_make_profile()).calories
        female = compute_daily_target(_make_profile(gender="female")).calories
        assert female == 1496
        assert male > female

    def test_missing_age_and_gender_default_to_30_male(self):
        defaulted = compute_daily_target(_make_profile(age=None, gender=None))
        explicit = compute_daily_target(_make_profile(age=30, gender="male"))
        assert defaulted == explicit

    def test_activity_levels_increase_calories(self):
        calories = [
            compute_daily_target(_make_profile(activity_level=level)).calories
            for level in ("sedentary", "light", "moderate", "active")
        ]
        assert calories == sorted(calories)
        assert len(set(calories)) == 4

    def test_sodium_independent_of_profile(self):
        a = compute_daily_target(_make_profile(weight_kg=50, goal="maintain"))
        b = compute_daily_target(_make_profile(weight_kg=120, goal="gain-muscle"))
        assert a.sodium_mg == b.sodium_mg == 2000

    def test_daily_calories_rounded_to_integer(self):
        # 1617.5 * 1.55 = 2507.125
        profile = _make_profile(activity_level="moderate", goal="maintain")
        assert calculate_daily_calories(profile) == 2507

    def test_tables_cover_every_key(self):
        assert set(ACTIVITY_MULTIPLIERS) == set(ActivityLevel)
        assert set(GOAL_ADJUSTMENTS) == set(Goal)

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            ACTIVITY_MULTIPLIERS[ActivityLevel.LIGHT] = 2.0


class TestBMI:
    """Tests for BMI helpers."""

    def test_calculate_bmi(self):
        assert calculate_bmi(170, 70) == pytest.approx(24.22, abs=0.01)

    @pytest.mark.parametrize("bmi, category", [
        (17.0, "Underweight"),
        (18.5, "Normal weight"),
        (24.9, "Normal weight"),
        (25.0, "Overweight"),
        (29.9, "Overweight"),
        (30.0, "Obese"),
    ])
    def test_bmi_category(self, bmi, category):
        assert bmi_category(bmi) == category
