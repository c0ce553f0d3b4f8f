from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from datetime import date as _date
from typing import Any, Mapping

MOODS = ("Happy", "Neutral", "Tired", "Stressed")

REQUIRED_FIELDS = ("date", "steps", "sleep", "mood")

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class WellnessError(Exception):
    """Base for every error raised by wellnesslog."""


class ValidationError(WellnessError, ValueError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(WellnessError, LookupError):
    def __init__(self, entry_id: str):
        super().__init__(f"No entry with id {entry_id!r}")
        self.entry_id = entry_id


@dataclass(frozen=True)
class Entry:
    """One day's wellness observation."""

    id: str
    date: str
    steps: int
    sleep: float
    mood: str
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Entry":
        entry_id = record.get("id")
        if entry_id is None or not str(entry_id).strip():
            raise ValidationError("id is required", field="id")
        return cls(id=str(entry_id), **validate_fields(record))


def _missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_date(value: Any) -> str:
    s = str(value).strip()
    if not _DATE_RE.fullmatch(s):
        raise ValidationError(f"date must look like YYYY-MM-DD (got {value!r})", field="date")
    try:
        _date.fromisoformat(s)
    except ValueError as e:
        raise ValidationError(f"date is not a real calendar day: {s!r}", field="date") from e
    return s


def _check_steps(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("steps must be a whole number", field="steps")
    if isinstance(value, int):
        n = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"steps must be a whole number (got {value!r})", field="steps")
        n = int(value)
    else:
        s = str(value).strip()
        try:
            n = int(s)
        except ValueError:
            try:
                f = float(s)
            except ValueError:
                raise ValidationError(f"steps must be a whole number (got {value!r})", field="steps") from None
            if not f.is_integer():
                raise ValidationError(f"steps must be a whole number (got {value!r})", field="steps")
            n = int(f)
    if n < 0:
        raise ValidationError("steps must be 0 or more", field="steps")
    return n


def _check_sleep(value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError("sleep must be a number of hours", field="sleep")
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"sleep must be a number of hours (got {value!r})", field="sleep") from None
    if not math.isfinite(hours):
        raise ValidationError("sleep must be a finite number", field="sleep")
    if hours < 0:
        raise ValidationError("sleep must be 0 or more", field="sleep")
    return hours


def canonical_mood(value: Any) -> str:
    """Map a mood name (any case) to its canonical spelling."""
    s = str(value).strip().lower()
    for mood in MOODS:
        if mood.lower() == s:
            return mood
    raise ValidationError(f"mood must be one of {', '.join(MOODS)} (got {value!r})", field="mood")


def validate_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Check and normalize the mutable fields of an entry.
    Returns a dict with date/steps/sleep/mood/notes; ignores any id key.
    Raises ValidationError on the first missing or bad field.
    """
    for name in REQUIRED_FIELDS:
        if _missing(fields.get(name)):
            raise ValidationError(f"{name} is required", field=name)

    notes = fields.get("notes")
    return {
        "date": _check_date(fields["date"]),
        "steps": _check_steps(fields["steps"]),
        "sleep": _check_sleep(fields["sleep"]),
        "mood": canonical_mood(fields["mood"]),
        "notes": "" if notes is None else str(notes),
    }
