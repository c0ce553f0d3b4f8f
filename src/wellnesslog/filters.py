from __future__ import annotations

from typing import Iterable

from .entry import Entry


def filter_entries(
    entries: Iterable[Entry],
    date_from: str | None = None,
    date_to: str | None = None,
) -> list[Entry]:
    """
    Inclusive date window, sorted ascending by date.
    Bounds are compared as plain strings; empty or None means unbounded.
    Entries sharing a date keep their input order.
    """
    kept = [
        e
        for e in entries
        if (not date_from or e.date >= date_from) and (not date_to or e.date <= date_to)
    ]
    return sorted(kept, key=lambda e: e.date)
