from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from core.calorie_calc import CalorieInput


class CalorieInputIn(BaseModel):
    """Range + enum checks live in core.calorie_calc."""
    sex: str | None = Field(None, examples=["male", "female"])
    age: float | None = Field(None, description="years", examples=[25])
    height: float | None = Field(None, description="centimetres", examples=[175])
    weight: float | None = Field(None, description="kilograms", examples=[70])
    activity_level: str | None = Field(
        None, examples=["sedentary", "light", "moderate", "active", "very_active"]
    )

    def to_domain(self) -> CalorieInput:
        return CalorieInput(**self.model_dump())


class CalorieResultOut(BaseModel):
    bmr: int
    tdee: int
    max_calories: int


class CalorieRecordIn(BaseModel):
    input: CalorieInputIn
    result: CalorieResultOut


class CalorieRecordOut(CalorieRecordIn):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
