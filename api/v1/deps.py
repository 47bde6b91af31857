from __future__ import annotations

from fastapi import HTTPException, Request, status

from config import settings
from services.auth import InvalidToken, verify_token


def current_user_id(request: Request) -> int:
    """Resolve the signed-in user from the session cookie or answer 401."""
    token = request.cookies.get(settings.session_cookie)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    try:
        return int(verify_token(token))
    except (InvalidToken, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
