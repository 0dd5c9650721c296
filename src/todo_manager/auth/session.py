# src/todo_manager/auth/session.py

"""
Session gate.

The task list only starts when a valid session record exists in storage:
- is_authenticated is true, and
- (now - login_time) <= max age (24h by default).

An expired record is erased. A missing or unreadable record simply fails the
check; the caller hands control to the login surface.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any

from ..config import DEFAULT_SESSION_KEY
from ..core.ports import KeyValueStorage
from ..tasks.persistence import STORAGE_ERRORS
from ..tasks.task_models import now_ms

logger = logging.getLogger(__name__)

SESSION_MAX_AGE_MS = 24 * 60 * 60 * 1000


@dataclass(frozen=True, slots=True)
class UserSession:
    is_authenticated: bool
    username: str
    email: str
    login_time: int  # epoch ms

    def to_dict(self) -> dict[str, Any]:
        return {
            "isAuthenticated": self.is_authenticated,
            "username": self.username,
            "email": self.email,
            "loginTime": self.login_time,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> UserSession | None:
        if not isinstance(raw, dict):
            return None
        login_time = raw.get("loginTime")
        if not isinstance(login_time, (int, float)) or isinstance(login_time, bool):
            return None
        if not math.isfinite(login_time):
            return None
        return cls(
            is_authenticated=raw.get("isAuthenticated") is True,
            username=str(raw.get("username") or ""),
            email=str(raw.get("email") or ""),
            login_time=int(login_time),
        )


def get_current_user(
    storage: KeyValueStorage, *, key: str = DEFAULT_SESSION_KEY
) -> UserSession | None:
    try:
        raw = storage.get_item(key)
    except STORAGE_ERRORS:
        logger.exception("Failed to read session key=%s", key)
        return None
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring malformed session record key=%s", key)
        return None
    return UserSession.from_dict(data)


def clear_session(storage: KeyValueStorage, *, key: str = DEFAULT_SESSION_KEY) -> None:
    try:
        storage.remove_item(key)
    except STORAGE_ERRORS:
        logger.exception("Failed to clear session key=%s", key)


def start_session(
    storage: KeyValueStorage,
    username: str,
    email: str = "",
    *,
    key: str = DEFAULT_SESSION_KEY,
    now: int | None = None,
) -> UserSession:
    """
    Write a fresh authenticated session record.

    Unlike the gate itself this is an explicit user action, so storage errors
    propagate to the caller.
    """
    name = (username or "").strip()
    if not name:
        raise ValueError("username is required")

    session = UserSession(
        is_authenticated=True,
        username=name,
        email=(email or "").strip(),
        login_time=now_ms() if now is None else int(now),
    )
    storage.set_item(key, json.dumps(session.to_dict(), ensure_ascii=False))
    logger.info("Session started user=%s", name)
    return session


def check_authentication(
    storage: KeyValueStorage,
    *,
    key: str = DEFAULT_SESSION_KEY,
    now: int | None = None,
    max_age_ms: int = SESSION_MAX_AGE_MS,
) -> bool:
    session = get_current_user(storage, key=key)
    if session is None:
        return False

    now_ts = now_ms() if now is None else int(now)
    age = now_ts - session.login_time
    if age > max_age_ms:
        logger.info("Session expired user=%s age_ms=%d", session.username, age)
        clear_session(storage, key=key)
        return False

    return session.is_authenticated
