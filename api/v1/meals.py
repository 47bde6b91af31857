# api/v1/meals.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from core.meal_analysis import ImageFormatError, split_data_url
from core.models.meal import MealType
from services import gemini
from services.db import MealRecord, get_session
from api.v1.deps import current_user_id
from api.v1.schemas import Envelope, MealRecordIn, MealRecordOut, MealRecordSummary

router = APIRouter()
_LOG = logging.getLogger(__name__)


@router.post(
    "",
    response_model=Envelope[MealRecordOut],
    status_code=status.HTTP_201_CREATED,
    summary="Analyse a meal photo with Gemini and store the result",
)
async def create_meal(
    body: MealRecordIn,
    user_id: int = Depends(current_user_id),
    db: AsyncSession = Depends(get_session),
) -> Envelope[MealRecordOut]:
    try:
        split_data_url(body.image_data)
    except ImageFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        analysis = await run_in_threadpool(
            gemini.analyze_food_image, body.image_data, body.meal_type
        )
    except gemini.MealAnalysisError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    rec = MealRecord(
        user_id=user_id,
        meal_type=body.meal_type.value,
        image_data=body.image_data,
        analysis=analysis.model_dump(mode="json"),
    )
    db.add(rec)
    await db.commit()
    _LOG.info("meal record %s saved for user %s (%d kcal)", rec.id, user_id, analysis.total_calories)
    return Envelope(data=MealRecordOut.model_validate(rec))


@router.get(
    "",
    response_model=Envelope[list[MealRecordSummary]],
    summary="List the signed-in user's meals, newest first",
)
async def list_meals(
    limit: int = Query(10, ge=1, le=100),
    skip: int = Query(0, ge=0),
    meal_type: MealType | None = None,
    user_id: int = Depends(current_user_id),
    db: AsyncSession = Depends(get_session),
) -> Envelope[list[MealRecordSummary]]:
    stmt = select(MealRecord).where(MealRecord.user_id == user_id)
    if meal_type is not None:
        stmt = stmt.where(MealRecord.meal_type == meal_type.value)
    rows = (
        await db.execute(
            stmt.order_by(MealRecord.created_at.desc()).offset(skip).limit(limit)
        )
    ).scalars().all()
    data = [MealRecordSummary.model_validate(r) for r in rows]
    return Envelope(data=data, count=len(data))
