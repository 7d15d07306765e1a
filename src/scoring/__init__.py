"""Scoring module for meal health ratings."""

from .rating_engine import RatingEngine, evaluate, rating_engine
from .score import FACTOR_WEIGHTS, aggregate_score, classify_rating
from .suggestions import MAX_SUGGESTIONS, generate_suggestions

__all__ = [
    "RatingEngine",
    "evaluate",
    "rating_engine",
    "FACTOR_WEIGHTS",
    "aggregate_score",
    "classify_rating",
    "MAX_SUGGESTIONS",
    "generate_suggestions",
]
