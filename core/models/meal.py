from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    dessert = "dessert"


class FoodItem(BaseModel):
    name: str
    estimated_calories: int
    confidence: float = Field(ge=0, le=1)
    quantity: str | None = None     # "1 cup", "2 slices"


class MealAnalysis(BaseModel):
    meal_type: MealType
    food_items: list[FoodItem]
    total_calories: int
    analysis_confidence: float = Field(ge=0, le=1)
