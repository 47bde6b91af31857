from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from core.models.meal import MealAnalysis, MealType


class MealRecordIn(BaseModel):
    meal_type: MealType
    image_data: str             # data:image/...;base64,...


class MealRecordSummary(BaseModel):
    """Listing shape – image payload left out."""
    id: int
    meal_type: MealType
    analysis: MealAnalysis
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MealRecordOut(MealRecordSummary):
    user_id: int
    image_data: str
