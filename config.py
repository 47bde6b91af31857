"""
Centralised settings loader (pydantic-settings).

Every field maps to the upper-cased env var of the same name, e.g.
`jwt_secret` ← JWT_SECRET. A local `.env` file is read as well.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ───────────────────────────────────────────────
    env_name: str = "local"
    log_level: str = "INFO"
    database_url: str | None = None          # e.g. postgresql+asyncpg://…

    # ─── session cookie / JWT ───────────────────────────────────────
    jwt_secret: str = "changeme"
    session_ttl_minutes: int = Field(60 * 24 * 7, gt=0)   # 7 days
    session_cookie: str = "session"

    # ─── Gemini ─────────────────────────────────────────────────────
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"

    # allow other teammates’ env-vars without crashing
    model_config = {"extra": "ignore", "env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def secure_cookies(self) -> bool:
        return self.env_name != "local"


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
