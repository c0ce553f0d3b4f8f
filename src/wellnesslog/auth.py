"""Mocked login: a gate in front of the entry commands, not a security boundary."""

from __future__ import annotations

import re
from typing import Any

from .entry import WellnessError

EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
MIN_PASSWORD_LEN = 6


class AuthError(WellnessError):
    pass


def login(email: str, password: str) -> dict[str, Any]:
    email = (email or "").strip()
    if not EMAIL_RE.fullmatch(email):
        raise AuthError("Enter a valid email")
    if len(password or "") < MIN_PASSWORD_LEN:
        raise AuthError(f"Password must be {MIN_PASSWORD_LEN}+ chars")
    return {"email": email}


def require_session(state: dict[str, Any]) -> dict[str, Any]:
    user = state.get("user")
    if not isinstance(user, dict) or not user.get("email"):
        raise AuthError("Not logged in. Run `wl login --email you@example.com --password ...` first.")
    return user
