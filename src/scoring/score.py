"""Score aggregation and traffic-light classification.

The overall score is the weighted average of factor scores, divided by the
weight actually present so a missing factor does not drag the score down.
Pure and deterministic.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from src.data_layer.models import FactorName, FactorResult, RatingLevel
from src.nutrition.aggregator import round_half_up

FACTOR_WEIGHTS: Mapping[FactorName, float] = MappingProxyType({
    FactorName.CALORIES: 0.25,
    FactorName.SODIUM: 0.20,
    FactorName.FAT: 0.15,
    FactorName.BALANCE: 0.15,
    FactorName.NUTRI_GRADE: 0.15,
    FactorName.GI_LEVEL: 0.10,
})

GREEN_MIN_SCORE = 80
YELLOW_MIN_SCORE = 60

WEIGHT_SUM_TOLERANCE = 1e-9


def validate_weights(weights: Mapping[FactorName, float]) -> None:
    """Check weights cover every factor, are non-negative and sum to 1.0.

    Raises:
        ValueError: If any check fails
    """
    missing = set(FactorName) - set(weights)
    if missing:
        raise ValueError(f"Missing weights for factors: {sorted(m.value for m in missing)}")
    if any(w < 0 for w in weights.values()):
        raise ValueError("All factor weights must be non-negative")
    total = sum(weights.values())
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        raise ValueError(f"Factor weights must sum to 1.0, got {total}")


validate_weights(FACTOR_WEIGHTS)


def aggregate_score(
    factors: Iterable[FactorResult],
    weights: Mapping[FactorName, float] = FACTOR_WEIGHTS,
) -> int:
    """Weighted average of factor scores, rounded half-up to an integer in [0, 100].

    Raises:
        ValueError: If no weighted factor is present
    """
    total_score = 0.0
    total_weight = 0.0
    for factor in factors:
        weight = weights.get(factor.name, 0.0)
        total_score += factor.score * weight
        total_weight += weight

    if total_weight <= 0:
        raise ValueError("Cannot aggregate a score without any weighted factor")
    # 6 decimals absorbs float noise from the weight sum (92.4999999... -> 92.5)
    average = round(total_score / total_weight, 6)
    return max(0, min(100, round_half_up(average)))


def classify_rating(score: int) -> RatingLevel:
    """Map a score to green (>=80), yellow (>=60) or red."""
    if score >= GREEN_MIN_SCORE:
        return RatingLevel.GREEN
    if score >= YELLOW_MIN_SCORE:
        return RatingLevel.YELLOW
    return RatingLevel.RED
