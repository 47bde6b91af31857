from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from services.auth import create_token, hash_password, verify_password
from services.db import User, get_session
from api.v1.schemas import Credentials, Envelope, UserOut

router = APIRouter()
_LOG = logging.getLogger(__name__)


# ───────────────────────── helpers ──────────────────────────
def _set_session(response: Response, user_id: int) -> None:
    response.set_cookie(
        settings.session_cookie,
        create_token(user_id),
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
        path="/",
    )


def _require(body: Credentials) -> None:
    if not body.username or not body.password:
        raise HTTPException(status_code=400, detail="Username and password are required")


async def _by_username(db: AsyncSession, username: str) -> User | None:
    return (
        await db.execute(select(User).where(User.username == username))
    ).scalar_one_or_none()


# ───────────────────────── register ─────────────────────────
@router.post(
    "/register",
    response_model=Envelope[UserOut],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: Credentials,
    response: Response,
    db: AsyncSession = Depends(get_session),
) -> Envelope[UserOut]:
    _require(body)
    if await _by_username(db, body.username):
        raise HTTPException(status_code=409, detail="Username already taken")

    user = User(username=body.username, password_hash=hash_password(body.password))
    db.add(user)
    await db.commit()
    _LOG.info("registered user %s", user.id)

    _set_session(response, user.id)
    return Envelope(data=UserOut.model_validate(user), message="Account created successfully")


# ───────────────────────── login / logout ───────────────────
@router.post("/login", response_model=Envelope[UserOut])
async def login(
    body: Credentials,
    response: Response,
    db: AsyncSession = Depends(get_session),
) -> Envelope[UserOut]:
    _require(body)
    user = await _by_username(db, body.username)
    if user is None or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    _set_session(response, user.id)
    return Envelope(data=UserOut.model_validate(user), message="Login successful")


@router.post("/logout", response_model=Envelope[None])
async def logout(response: Response) -> Envelope[None]:
    response.delete_cookie(settings.session_cookie, path="/")
    return Envelope(message="Logged out")
