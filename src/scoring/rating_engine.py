"""Health rating engine: meal + health profile -> traffic-light rating.

Pipeline (each stage reads only the previous stage's output):
1. Daily target from the profile
2. Six independent factor evaluators
3. Weighted score aggregation
4. Rating classification
5. Suggestion generation

Inputs are validated once here; everything downstream is pure math.
"""

from __future__ import annotations

import logging

from src.data_layer.exceptions import InconsistentMealError, RatingInputError
from src.data_layer.models import HealthProfile, HealthRating, MealEvaluationInput
from src.nutrition.calculator import compute_daily_target
from src.scoring.factors import evaluate_factors
from src.scoring.score import aggregate_score, classify_rating
from src.scoring.suggestions import generate_suggestions

logger = logging.getLogger(__name__)


def validate_meal_input(meal: MealEvaluationInput) -> None:
    """Check cross-field invariants a MealEvaluationInput cannot check on its own.

    Raises:
        RatingInputError: If meal is not a MealEvaluationInput
        InconsistentMealError: If there are no foods but totals are non-zero
    """
    if not isinstance(meal, MealEvaluationInput):
        raise RatingInputError("meal", type(meal).__name__, "Expected a MealEvaluationInput")
    if not meal.foods and not meal.total_nutrition.is_empty():
        raise InconsistentMealError(
            "foods",
            [],
            "Meal has nutrition totals but no recognized foods",
        )


class RatingEngine:
    """Evaluates a recognized meal against a user's health profile.

    Stateless: one instance may be shared across threads and requests.
    """

    def evaluate(self, meal: MealEvaluationInput, profile: HealthProfile) -> HealthRating:
        """Evaluate a meal and produce a health rating.

        Args:
            meal: Recognized meal (totals, foods, meal slot)
            profile: User health profile

        Returns:
            HealthRating with overall light, 0-100 score, six factors and
            up to four suggestions

        Raises:
            RatingInputError: If either input violates its contract
        """
        try:
            validate_meal_input(meal)
            if not isinstance(profile, HealthProfile):
                raise RatingInputError("profile", type(profile).__name__, "Expected a HealthProfile")
        except RatingInputError as exc:
            logger.warning("Rejected rating input: %s", exc)
            raise

        target = compute_daily_target(profile)
        logger.debug("Daily target for goal=%s: %s kcal", profile.goal.value, target.calories)

        factors = evaluate_factors(meal, target, profile.goal)
        score = aggregate_score(factors)
        overall = classify_rating(score)
        suggestions = generate_suggestions(factors, profile, meal)

        logger.debug(
            "Rated %s meal: score=%d overall=%s suggestions=%d",
            meal.meal_context.value, score, overall.value, len(suggestions),
        )
        return HealthRating(
            overall=overall,
            score=score,
            factors=factors,
            suggestions=suggestions,
        )


rating_engine = RatingEngine()


def evaluate(meal: MealEvaluationInput, profile: HealthProfile) -> HealthRating:
    """Evaluate with the shared engine instance."""
    return rating_engine.evaluate(meal, profile)
