from __future__ import annotations

import os
import re
from pathlib import Path

DATA_ENV = "WELLNESSLOG_DATA"

_PROFILE_RE = re.compile(r"[A-Za-z0-9_.-]+")


def config_dir() -> Path:
    return Path.home() / ".config" / "wellnesslog"


def default_data_path(profile: str | None = None) -> Path:
    """~/.config/wellnesslog/data.json, or <profile>.json beside it."""
    if not profile:
        return config_dir() / "data.json"
    # profile names become file names; keep them inside the config dir
    if not _PROFILE_RE.fullmatch(profile) or profile in (".", ".."):
        raise SystemExit(f"--profile must be letters, digits, '.', '_' or '-' (got {profile!r})")
    return config_dir() / f"{profile}.json"


def resolve_data_path(data_arg: str | None, profile: str | None) -> Path:
    """--data wins, then $WELLNESSLOG_DATA, then the per-profile default."""
    if data_arg:
        return Path(data_arg).expanduser().resolve()
    env = os.environ.get(DATA_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return default_data_path(profile).expanduser().resolve()


def data_path_reason(data_arg: str | None, profile: str | None) -> str:
    if data_arg:
        return "because you passed --data"
    if os.environ.get(DATA_ENV):
        return f"because {DATA_ENV} is set"
    if profile:
        return f"because you used --profile {profile!r}"
    return "default ~/.config/wellnesslog location"
