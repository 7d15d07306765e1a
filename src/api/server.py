"""FastAPI server exposing the meal health rating engine."""

import logging
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from src.data_layer.exceptions import RatingInputError
from src.data_layer.health_profile import parse_health_profile
from src.data_layer.meal_input import parse_meal_input
from src.nutrition.calculator import compute_daily_target
from src.output.formatters import format_daily_target_json, format_rating_json
from src.scoring.rating_engine import RatingEngine

logger = logging.getLogger(__name__)

app = FastAPI(title="Meal Health Rating API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Local development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

engine = RatingEngine()


class NutrientRangeModel(BaseModel):
    min: float
    max: float


class NutritionModel(BaseModel):
    calories: NutrientRangeModel
    protein: NutrientRangeModel
    carbs: NutrientRangeModel
    fat: NutrientRangeModel
    sodium: NutrientRangeModel


class FoodModel(BaseModel):
    name: str
    name_local: Optional[str] = None
    nutri_grade: Optional[str] = None
    gi_level: Optional[str] = None
    is_hawker_food: bool = False
    improvement_tip: Optional[str] = None
    nutrition: Optional[NutritionModel] = None
    confidence: Optional[float] = None
    portion: Optional[str] = None


class MealModel(BaseModel):
    meal_context: str
    total_nutrition: Optional[NutritionModel] = None
    foods: List[FoodModel] = Field(default_factory=list)


class ProfileModel(BaseModel):
    height_cm: float
    weight_kg: float
    activity_level: str
    goal: str
    age: Optional[int] = None
    gender: Optional[str] = None


class RatingRequest(BaseModel):
    meal: MealModel
    profile: ProfileModel


@app.post("/api/rating")
def rate_meal(request: RatingRequest) -> Dict[str, Any]:
    try:
        meal = parse_meal_input(request.meal.model_dump(exclude_none=True))
        profile = parse_health_profile(request.profile.model_dump())
    except RatingInputError as exc:
        logger.info("Rejected rating request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    # the engine logs its own rejections
    try:
        rating = engine.evaluate(meal, profile)
    except RatingInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return format_rating_json(rating)


@app.post("/api/daily-target")
def daily_target(profile_request: ProfileModel) -> Dict[str, Any]:
    try:
        profile = parse_health_profile(profile_request.model_dump())
    except RatingInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return format_daily_target_json(compute_daily_target(profile))


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
