"""Data models for the health rating engine.

Closed sets (activity level, goal, meal slot, factor names...) are enums so
lookup tables keyed by them cannot silently miss a key. Records are frozen
dataclasses; string values for enum fields are coerced on construction and
unknown strings fail fast.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Type, TypeVar

from src.data_layer.exceptions import (
    InvalidMealContextError,
    InvalidNutrientRangeError,
    InvalidProfileError,
    RatingInputError,
)

E = TypeVar("E", bound=Enum)


class ActivityLevel(Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"


class Goal(Enum):
    LOSE_WEIGHT = "lose-weight"
    GAIN_MUSCLE = "gain-muscle"
    CONTROL_SUGAR = "control-sugar"
    MAINTAIN = "maintain"


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"


class MealContext(Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class NutriGrade(Enum):
    """Singapore front-of-pack grade, A (best) to D (worst)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @property
    def severity(self) -> int:
        """Ordinal severity: A=0 ... D=3."""
        return _NUTRI_GRADE_SEVERITY[self]


_NUTRI_GRADE_SEVERITY = {NutriGrade.A: 0, NutriGrade.B: 1, NutriGrade.C: 2, NutriGrade.D: 3}


class GILevel(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class FactorName(Enum):
    """Factor names in fixed evaluation order."""

    CALORIES = "Calories"
    SODIUM = "Sodium"
    FAT = "Fat"
    BALANCE = "Balance"
    NUTRI_GRADE = "Nutri-Grade"
    GI_LEVEL = "GI Level"


class FactorStatus(Enum):
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"


class RatingLevel(Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


def coerce_enum(
    enum_cls: Type[E],
    value: Any,
    field_name: str,
    error_cls: Type[RatingInputError] = RatingInputError,
) -> E:
    """Return value as a member of enum_cls, accepting members or their wire strings.

    Raises:
        error_cls: If value is not a member or a known wire string
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise error_cls(
            field_name, value, f"Unknown {field_name} {value!r}; expected one of {allowed}"
        ) from None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class NutrientRange:
    """Recognition uncertainty band [min, max] for one nutrient."""

    min: float
    max: float
    nutrient: str = field(default="nutrient", compare=False, repr=False)

    def __post_init__(self):
        for bound in (self.min, self.max):
            if not _is_number(bound) or not math.isfinite(bound):
                raise InvalidNutrientRangeError(self.nutrient, (self.min, self.max), "bounds must be finite numbers")
        if self.min < 0 or self.max < 0:
            raise InvalidNutrientRangeError(self.nutrient, (self.min, self.max), "bounds must be non-negative")
        if self.min > self.max:
            raise InvalidNutrientRangeError(self.nutrient, (self.min, self.max), "min is greater than max")

    @property
    def midpoint(self) -> float:
        """Point estimate used for scoring and display."""
        return (self.min + self.max) / 2


@dataclass(frozen=True)
class FoodNutritionTotals:
    """Nutrient ranges for a whole meal (or a single food item)."""

    calories: NutrientRange  # kcal
    protein: NutrientRange  # g
    carbs: NutrientRange  # g
    fat: NutrientRange  # g
    sodium: NutrientRange  # mg

    def __post_init__(self):
        for name in ("calories", "protein", "carbs", "fat", "sodium"):
            if not isinstance(getattr(self, name), NutrientRange):
                raise InvalidNutrientRangeError(name, getattr(self, name), "expected a NutrientRange")

    def is_empty(self) -> bool:
        """True when every nutrient's upper bound is zero."""
        return all(
            r.max == 0 for r in (self.calories, self.protein, self.carbs, self.fat, self.sodium)
        )


@dataclass(frozen=True)
class RecognizedFoodItem:
    """One recognized food in a meal photo, with optional grading metadata."""

    name: str
    name_local: Optional[str] = None
    nutri_grade: Optional[NutriGrade] = None
    gi_level: Optional[GILevel] = None
    is_hawker_food: bool = False
    improvement_tip: Optional[str] = None
    nutrition: Optional[FoodNutritionTotals] = None
    confidence: Optional[float] = None  # 0-100
    portion: Optional[str] = None  # e.g. "1 plate"

    def __post_init__(self):
        if self.nutri_grade is not None:
            object.__setattr__(self, "nutri_grade", coerce_enum(NutriGrade, self.nutri_grade, "nutri_grade"))
        if self.gi_level is not None:
            object.__setattr__(self, "gi_level", coerce_enum(GILevel, self.gi_level, "gi_level"))
        if self.confidence is not None and not (_is_number(self.confidence) and 0 <= self.confidence <= 100):
            raise RatingInputError("confidence", self.confidence, "confidence must be between 0 and 100")

    @property
    def display_name(self) -> str:
        return self.name_local or self.name


@dataclass(frozen=True)
class MealEvaluationInput:
    """A recognized meal ready for evaluation."""

    total_nutrition: FoodNutritionTotals
    foods: Tuple[RecognizedFoodItem, ...]
    meal_context: MealContext

    def __post_init__(self):
        if isinstance(self.meal_context, MealContext):
            context = self.meal_context
        else:
            try:
                context = MealContext(self.meal_context)
            except ValueError:
                raise InvalidMealContextError(self.meal_context) from None
        object.__setattr__(self, "meal_context", context)
        object.__setattr__(self, "foods", tuple(self.foods))


@dataclass(frozen=True)
class HealthProfile:
    """User body measurements and goal, supplied per evaluation call."""

    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    goal: Goal
    age: Optional[int] = None
    gender: Optional[Gender] = None

    def __post_init__(self):
        object.__setattr__(
            self, "activity_level",
            coerce_enum(ActivityLevel, self.activity_level, "activity_level", InvalidProfileError),
        )
        object.__setattr__(self, "goal", coerce_enum(Goal, self.goal, "goal", InvalidProfileError))
        if self.gender is not None:
            object.__setattr__(self, "gender", coerce_enum(Gender, self.gender, "gender", InvalidProfileError))
        for name in ("height_cm", "weight_kg"):
            value = getattr(self, name)
            if not _is_number(value) or not math.isfinite(value) or value <= 0:
                raise InvalidProfileError(name, value, f"{name} must be a positive number")
        if self.age is not None and (not _is_number(self.age) or self.age <= 0):
            raise InvalidProfileError("age", self.age, "age must be a positive number")


@dataclass(frozen=True)
class DailyTarget:
    """Daily nutrition targets derived from a health profile."""

    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    sodium_mg: float


@dataclass(frozen=True)
class FactorResult:
    """Outcome of a single factor evaluator."""

    name: FactorName
    status: FactorStatus
    message: str
    score: int  # 0-100


@dataclass(frozen=True)
class HealthRating:
    """Final rating for one meal."""

    overall: RatingLevel
    score: int  # 0-100
    factors: Tuple[FactorResult, ...]
    suggestions: Tuple[str, ...]

    def factor(self, name: FactorName) -> FactorResult:
        """Look up a factor result by name.

        Raises:
            KeyError: If no factor with that name is present
        """
        for result in self.factors:
            if result.name is name:
                return result
        raise KeyError(name)
