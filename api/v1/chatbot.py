# api/v1/chatbot.py
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from starlette.concurrency import run_in_threadpool

from core.fitbot import fallback_reply
from services import gemini
from api.v1.schemas import ChatIn, ChatOut

router = APIRouter()
_LOG = logging.getLogger(__name__)


@router.post("", response_model=ChatOut, summary="Ask the fitness assistant")
async def ask(body: ChatIn) -> ChatOut:
    """Gemini answer, or a keyword-matched canned reply when Gemini fails."""
    if not body.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    try:
        answer = await run_in_threadpool(gemini.chat, body.message)
    except gemini.GeminiError as exc:
        _LOG.warning("chatbot falling back: %s", exc)
        return ChatOut(success=False, response=fallback_reply(body.message), fallback=True)
    return ChatOut(success=True, response=answer)
