from __future__ import annotations

from pydantic import BaseModel


class ChatIn(BaseModel):
    message: str = ""


class ChatOut(BaseModel):
    success: bool
    response: str
    fallback: bool = False
