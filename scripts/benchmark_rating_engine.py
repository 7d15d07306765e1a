#!/usr/bin/env python3
"""Benchmark RatingEngine.evaluate: throughput and output summary.

Run from repo root:
  python scripts/benchmark_rating_engine.py

Optional: iteration count via RATING_BENCH_ITERATIONS.
"""
from __future__ import annotations

import os
import sys
import time

# Allow importing from src when run from repo root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.data_layer.models import (
    FoodNutritionTotals,
    HealthProfile,
    MealEvaluationInput,
    NutrientRange,
    RecognizedFoodItem,
)
from src.scoring.rating_engine import RatingEngine


def make_meal(calories: float = 650.0, sodium: float = 900.0) -> MealEvaluationInput:
    totals = FoodNutritionTotals(
        calories=NutrientRange(calories - 50, calories + 50),
        protein=NutrientRange(25.0, 30.0),
        carbs=NutrientRange(80.0, 90.0),
        fat=NutrientRange(20.0, 25.0),
        sodium=NutrientRange(sodium - 100, sodium + 100),
    )
    foods = (
        RecognizedFoodItem(
            name="Char Kway Teow",
            nutri_grade="C",
            gi_level="High",
            is_hawker_food=True,
            improvement_tip="Ask for more bean sprouts and less lard",
        ),
    )
    return MealEvaluationInput(total_nutrition=totals, foods=foods, meal_context="lunch")


def main() -> None:
    iterations = int(os.environ.get("RATING_BENCH_ITERATIONS", "10000"))

    engine = RatingEngine()
    meal = make_meal()
    profile = HealthProfile(
        height_cm=170, weight_kg=70, activity_level="light", goal="lose-weight", age=30, gender="male"
    )

    t0 = time.perf_counter()
    for _ in range(iterations):
        rating = engine.evaluate(meal, profile)
    t1 = time.perf_counter()

    print("--- Rating engine benchmark ---")
    print(f"Iterations: {iterations}")
    print(f"Wall time: {t1 - t0:.3f}s")
    print(f"Time per evaluation: {(t1 - t0) / max(1, iterations) * 1e6:.1f}us")
    print(f"Score: {rating.score} ({rating.overall.value})")
    for factor in rating.factors:
        print(f"  {factor.name.value}: {factor.score} {factor.status.value} - {factor.message}")
    print(f"Suggestions: {len(rating.suggestions)}")
    print("-------------------------------")


if __name__ == "__main__":
    main()
