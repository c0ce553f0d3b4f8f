from __future__ import annotations

import re
from datetime import date, datetime, timedelta


def today_str() -> str:
    # local calendar day; only read at the CLI edge
    return datetime.now().date().isoformat()


def as_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def parse_day(value: str | None, today: date | str | None = None) -> str:
    """
    Parse flexible user input into a YYYY-MM-DD day.
    Accepts:
      - None / blank / "today" -> today
      - "yesterday", "tomorrow"
      - relative: "1 day ago", "3 days ago"
      - "2026-02-25", "2026/02/25"
    Raises ValueError for anything else.
    """
    base = as_date(today) if today is not None else as_date(today_str())

    if not value or not value.strip():
        return base.isoformat()

    s = value.strip().lower()

    if s == "today":
        return base.isoformat()
    if s == "yesterday":
        return (base - timedelta(days=1)).isoformat()
    if s == "tomorrow":
        return (base + timedelta(days=1)).isoformat()

    m = re.fullmatch(r"(\d+)\s*(day|days)\s*ago", s)
    if m:
        return (base - timedelta(days=int(m.group(1)))).isoformat()

    for fmt in ("%Y-%m-%d", "%Y/%m/%d"):
        try:
            return datetime.strptime(s, fmt).date().isoformat()
        except ValueError:
            continue

    raise ValueError(
        f"Could not parse date {value!r}. Try '2026-02-25', 'today', 'yesterday' or '3 days ago'."
    )
