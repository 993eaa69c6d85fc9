from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import Header, HTTPException

from .config import settings


def get_user_id(x_user_id: str | None = Header(None)) -> str:
    """Caller identity, set upstream by the session provider."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(401, "Missing X-User-Id header")
    return x_user_id.strip()


def get_now() -> datetime:
    # Reference instant for relative phrases; overridden in tests
    return datetime.now(ZoneInfo(settings.timezone))
