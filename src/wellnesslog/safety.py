from __future__ import annotations

import sys
from pathlib import Path


def find_git_root(start: Path) -> Path | None:
    cur = Path(start)
    while True:
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            return None
        cur = cur.parent


def assert_safe_data_path(data_path: Path, allow_repo_data_path: bool) -> None:
    """
    Exit (status 2) when the wellness log would live inside a git checkout,
    where a stray `git add .` would publish steps, sleep, mood and notes.
    """
    git_root = find_git_root(Path(data_path).parent)
    if git_root is None or allow_repo_data_path:
        return
    try:
        inside = Path(data_path).relative_to(git_root)
    except ValueError:
        inside = Path(data_path)
    print("🚫 Refusing to keep your wellness log inside a git repo.", file=sys.stderr)
    print(f"   repo: {git_root}", file=sys.stderr)
    print(f"   file: {inside}", file=sys.stderr)
    print(
        "   Fix: drop --data/WELLNESSLOG_DATA to use ~/.config/wellnesslog/, "
        "or pass --allow-repo-data-path. `wl where` shows the active path.",
        file=sys.stderr,
    )
    raise SystemExit(2)
