from __future__ import annotations
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """`{success, data, error, count}` wrapper every record route returns."""
    success: bool = True
    data: T | None = None
    error: str | None = None
    count: int | None = None
    message: str | None = None
