from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.calorie_calc import ValidationError, calculate_calories
from services.db import CalorieRecord, get_session
from api.v1.deps import current_user_id
from api.v1.schemas import CalorieInputIn, CalorieRecordIn, CalorieRecordOut, CalorieResultOut, Envelope

router = APIRouter()
_LOG = logging.getLogger(__name__)


def _compute(body: CalorieInputIn) -> CalorieResultOut:
    try:
        res = calculate_calories(body.to_domain())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return CalorieResultOut(**res.as_dict())


# ───────────────────────── stateless calc ───────────────────
@router.post("/calculate", response_model=CalorieResultOut)
async def calculate(body: CalorieInputIn) -> CalorieResultOut:
    """BMR / TDEE / max calories for the given body metrics. Nothing is stored."""
    return _compute(body)


# ───────────────────────── save ─────────────────────────────
@router.post(
    "",
    response_model=Envelope[CalorieRecordOut],
    status_code=status.HTTP_201_CREATED,
)
async def save_record(
    body: CalorieRecordIn,
    user_id: int = Depends(current_user_id),
    db: AsyncSession = Depends(get_session),
) -> Envelope[CalorieRecordOut]:
    expected = _compute(body.input)
    if expected != body.result:
        raise HTTPException(status_code=400, detail="Result does not match input")

    rec = CalorieRecord(
        user_id=user_id,
        input=body.input.model_dump(),
        result=expected.model_dump(),
    )
    db.add(rec)
    await db.commit()
    _LOG.info("calorie record %s saved for user %s", rec.id, user_id)
    return Envelope(data=CalorieRecordOut.model_validate(rec))


# ───────────────────────── list ─────────────────────────────
@router.get("", response_model=Envelope[list[CalorieRecordOut]])
async def list_records(
    limit: int = Query(10, ge=1, le=100),
    skip: int = Query(0, ge=0),
    user_id: int = Depends(current_user_id),
    db: AsyncSession = Depends(get_session),
) -> Envelope[list[CalorieRecordOut]]:
    rows = (
        await db.execute(
            select(CalorieRecord)
            .where(CalorieRecord.user_id == user_id)
            .order_by(CalorieRecord.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
    ).scalars().all()
    data = [CalorieRecordOut.model_validate(r) for r in rows]
    return Envelope(data=data, count=len(data))
