"""Unit tests for output formatters."""

import json

from src.data_layer.models import (
    DailyTarget,
    FactorName,
    FactorResult,
    FactorStatus,
    FoodNutritionTotals,
    HealthRating,
    MealEvaluationInput,
    NutrientRange,
    RatingLevel,
    RecognizedFoodItem,
)
from src.output.formatters import (
    format_daily_target_json,
    format_factor_line,
    format_rating_json,
    format_rating_json_string,
    format_rating_markdown,
)


def _make_rating(suggestions=("Watch sodium intake for the rest of the day",)) -> HealthRating:
    factors = (
        FactorResult(FactorName.CALORIES, FactorStatus.GOOD, "Calorie content is appropriate for lunch (550 kcal)", 100),
        FactorResult(FactorName.SODIUM, FactorStatus.MODERATE, "High sodium content (700mg) - consider reducing", 60),
        FactorResult(FactorName.FAT, FactorStatus.POOR, "High fat content (30g, 45% of calories)", 40),
        FactorResult(FactorName.BALANCE, FactorStatus.GOOD, "Well-balanced meal (P:24% C:47% F:29%)", 100),
        FactorResult(FactorName.NUTRI_GRADE, FactorStatus.GOOD, "N/A", 100),
        FactorResult(FactorName.GI_LEVEL, FactorStatus.GOOD, "N/A", 100),
    )
    return HealthRating(overall=RatingLevel.YELLOW, score=79, factors=factors, suggestions=tuple(suggestions))


def _make_meal() -> MealEvaluationInput:
    totals = FoodNutritionTotals(
        calories=NutrientRange(500, 600),
        protein=NutrientRange(30, 35),
        carbs=NutrientRange(60, 70),
        fat=NutrientRange(15, 20),
        sodium=NutrientRange(600, 800),
    )
    foods = [
        RecognizedFoodItem(name="Hainanese Chicken Rice", name_local="海南鸡饭"),
        RecognizedFoodItem(name="Iced Milo"),
    ]
    return MealEvaluationInput(total_nutrition=totals, foods=foods, meal_context="lunch")


class TestFormatFactorLine:
    """Test factor bullet formatting."""

    def test_good_factor(self):
        factor = FactorResult(FactorName.SODIUM, FactorStatus.GOOD, "Low sodium content (300mg)", 100)
        assert format_factor_line(factor) == "- ✅ **Sodium:** Low sodium content (300mg)"

    def test_moderate_and_poor_icons(self):
        rating = _make_rating()
        assert format_factor_line(rating.factors[1]).startswith("- ⚠️ **Sodium:**")
        assert format_factor_line(rating.factors[2]).startswith("- ❌ **Fat:**")


class TestFormatRatingMarkdown:
    """Test Markdown rating formatting."""

    def test_header_and_factors(self):
        markdown = format_rating_markdown(_make_rating())
        assert "# Health Rating" in markdown
        assert "🟡 **Yellow** (79/100)" in markdown
        assert "## Factors" in markdown
        assert "- ⚠️ **Sodium:** High sodium content (700mg) - consider reducing" in markdown
        assert "**Nutri-Grade:** N/A" in markdown
        assert "**Meal:**" not in markdown

    def test_suggestions_section(self):
        markdown = format_rating_markdown(_make_rating())
        assert "## Suggestions" in markdown
        assert "- Watch sodium intake for the rest of the day" in markdown

    def test_no_suggestions_section_when_empty(self):
        markdown = format_rating_markdown(_make_rating(suggestions=()))
        assert "## Suggestions" not in markdown

    def test_meal_summary(self):
        markdown = format_rating_markdown(_make_rating(), _make_meal())
        assert "**Meal:** Lunch" in markdown
        assert "**Foods:** 海南鸡饭, Iced Milo" in markdown
        assert "**Calories:** 500-600 kcal" in markdown

    def test_meal_summary_shows_portion(self):
        meal = MealEvaluationInput(
            total_nutrition=_make_meal().total_nutrition,
            foods=[RecognizedFoodItem(name="Laksa", portion="1 bowl"), RecognizedFoodItem(name="Kopi")],
            meal_context="dinner",
        )
        markdown = format_rating_markdown(_make_rating(), meal)
        assert "**Foods:** Laksa (1 bowl), Kopi" in markdown


class TestFormatRatingJson:
    """Test JSON rating formatting."""

    def test_structure(self):
        data = format_rating_json(_make_rating())
        assert data["overall"] == "yellow"
        assert data["score"] == 79
        assert len(data["factors"]) == 6
        assert data["factors"][0] == {
            "name": "Calories",
            "status": "good",
            "message": "Calorie content is appropriate for lunch (550 kcal)",
            "score": 100,
        }
        assert data["factors"][4]["name"] == "Nutri-Grade"
        assert data["factors"][5]["name"] == "GI Level"
        assert data["suggestions"] == ["Watch sodium intake for the rest of the day"]

    def test_json_string_round_trip(self):
        rating = _make_rating(suggestions=("💡 Tip for 海南鸡饭: Ask for less rice",))
        json_str = format_rating_json_string(rating)
        assert "海南鸡饭" in json_str
        assert json.loads(json_str) == format_rating_json(rating)


class TestFormatDailyTargetJson:
    """Test daily target formatting."""

    def test_rounds_grams(self):
        target = DailyTarget(calories=1724, protein_g=84.0, carbs_g=215.5, fat_g=47.888, sodium_mg=2000.0)
        assert format_daily_target_json(target) == {
            "calories": 1724,
            "protein_g": 84.0,
            "carbs_g": 215.5,
            "fat_g": 47.9,
            "sodium_mg": 2000.0,
        }
