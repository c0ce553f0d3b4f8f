from __future__ import annotations

import copy
import json
import os
import sys
import time
from pathlib import Path
from typing import Any

STATE_DEFAULTS: dict[str, Any] = {"entries": [], "dark": False, "user": None}


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def load_json(path: Path, default: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Safe load of one JSON object.
    A missing, empty or unparsable file is reset to a copy of `default` ({} when omitted);
    unparsable text is first kept as <name>.corrupt-<unix ts>.json.
    """
    path = Path(path)
    _ensure_parent(path)
    fresh = copy.deepcopy(default) if default is not None else {}

    if not path.exists():
        save_json(path, fresh)
        return copy.deepcopy(fresh)

    txt = path.read_text(encoding="utf-8").strip()
    if not txt:
        save_json(path, fresh)
        return copy.deepcopy(fresh)

    try:
        data = json.loads(txt)
    except json.JSONDecodeError:
        backup = path.with_suffix(f".corrupt-{int(time.time())}.json")
        backup.write_text(txt, encoding="utf-8")
        print(f"⚠️ {path} was not valid JSON; saved a copy to {backup.name} and started fresh.", file=sys.stderr)
        save_json(path, fresh)
        return copy.deepcopy(fresh)
    return data if isinstance(data, dict) else copy.deepcopy(fresh)


def save_json(path: Path, data: Any) -> None:
    """
    Atomic-ish save: temp file in the same directory, fsync, os.replace, chmod 0600.
    """
    path = Path(path)
    _ensure_parent(path)

    tmp = path.with_name(path.name + ".tmp")
    payload = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"

    with open(tmp, "w", encoding="utf-8") as f:
        f.write(payload)
        f.flush()
        os.fsync(f.fileno())

    os.replace(tmp, path)

    try:
        os.chmod(path, 0o600)
    except OSError:
        pass


def load_state(path: Path) -> dict[str, Any]:
    """
    Persisted app state: {"entries": [...], "dark": bool, "user": {"email": ...} | None}.
    Missing keys are filled with defaults; wrong-typed ones are reset.
    """
    data = load_json(path, STATE_DEFAULTS)
    state = {**STATE_DEFAULTS, **data}
    if not isinstance(state["entries"], list):
        state["entries"] = []
    state["entries"] = [r for r in state["entries"] if isinstance(r, dict)]
    state["dark"] = bool(state["dark"])
    if not isinstance(state["user"], dict):
        state["user"] = None
    return state


def save_state(path: Path, state: dict[str, Any]) -> None:
    save_json(path, {**STATE_DEFAULTS, **state})
