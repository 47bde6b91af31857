from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WeightIn(BaseModel):
    weight: float = Field(..., gt=0, description="kilograms")
    notes: str = ""


class WeightOut(WeightIn):
    id: int
    user_id: int
    recorded_at: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
