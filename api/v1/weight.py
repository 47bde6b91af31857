from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from services.db import WeightRecord, get_session
from api.v1.deps import current_user_id
from api.v1.schemas import Envelope, WeightIn, WeightOut

router = APIRouter()

HISTORY_LIMIT = 30


@router.get("", response_model=Envelope[list[WeightOut]])
async def list_weights(
    user_id: int = Depends(current_user_id),
    db: AsyncSession = Depends(get_session),
) -> Envelope[list[WeightOut]]:
    """Last 30 weigh-ins for the signed-in user, newest first."""
    rows = (
        await db.execute(
            select(WeightRecord)
            .where(WeightRecord.user_id == user_id)
            .order_by(WeightRecord.recorded_at.desc())
            .limit(HISTORY_LIMIT)
        )
    ).scalars().all()
    data = [WeightOut.model_validate(r) for r in rows]
    return Envelope(data=data, count=len(data))


@router.post("", response_model=Envelope[WeightOut])
async def add_weight(
    body: WeightIn,
    user_id: int = Depends(current_user_id),
    db: AsyncSession = Depends(get_session),
) -> Envelope[WeightOut]:
    rec = WeightRecord(user_id=user_id, weight=body.weight, notes=body.notes)
    db.add(rec)
    await db.commit()
    return Envelope(data=WeightOut.model_validate(rec), message="Weight record saved successfully")
