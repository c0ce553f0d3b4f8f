from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Sequence

from .dateparse import as_date
from .entry import Entry, canonical_mood


def latest(entries: Sequence[Entry]) -> Entry | None:
    # ties on date go to the entry that appears last
    best: Entry | None = None
    for e in entries:
        if best is None or e.date >= best.date:
            best = e
    return best


def last_n_days(entries: Sequence[Entry], n: int, today: date | str) -> list[Entry]:
    """Entries dated on or after today - (n - 1) days. No upper bound."""
    if n < 1:
        raise ValueError(f"n must be at least 1 (got {n})")
    cutoff = (as_date(today) - timedelta(days=n - 1)).isoformat()
    return [e for e in entries if e.date >= cutoff]


def total_steps(entries: Sequence[Entry]) -> int:
    return sum(e.steps for e in entries)


def average_sleep(entries: Sequence[Entry]) -> float:
    if not entries:
        return 0.0
    return round(sum(e.sleep for e in entries) / len(entries), 1)


def count_by_mood(entries: Sequence[Entry], mood: str) -> int:
    target = canonical_mood(mood)
    return sum(1 for e in entries if e.mood == target)


@dataclass(frozen=True)
class Summary:
    latest: Entry | None
    days: int
    window_entries: int
    total_steps: int
    average_sleep: float
    happy_days: int


def summarize(entries: Sequence[Entry], today: date | str, days: int = 7) -> Summary:
    """Dashboard numbers: latest entry overall, totals over the trailing window."""
    window = last_n_days(entries, days, today)
    return Summary(
        latest=latest(entries),
        days=days,
        window_entries=len(window),
        total_steps=total_steps(window),
        average_sleep=average_sleep(window),
        happy_days=count_by_mood(window, "Happy"),
    )
