"""Tests for entry validation and the Entry record."""

from __future__ import annotations

import pytest

from wellnesslog.entry import MOODS, Entry, ValidationError, canonical_mood, validate_fields


def _fields(**over):
    base = {"date": "2024-01-01", "steps": 6500, "sleep": 7, "mood": "Happy", "notes": "Good day"}
    base.update(over)
    return base


# ---- validate_fields ----


def test_valid_fields_normalized():
    out = validate_fields(_fields())
    assert out == {"date": "2024-01-01", "steps": 6500, "sleep": 7.0, "mood": "Happy", "notes": "Good day"}
    assert isinstance(out["sleep"], float)


def test_notes_optional_defaults_empty():
    f = _fields()
    del f["notes"]
    assert validate_fields(f)["notes"] == ""


def test_notes_none_becomes_empty():
    assert validate_fields(_fields(notes=None))["notes"] == ""


@pytest.mark.parametrize("name", ["date", "steps", "sleep", "mood"])
def test_missing_required_field(name):
    f = _fields()
    del f[name]
    with pytest.raises(ValidationError) as exc:
        validate_fields(f)
    assert exc.value.field == name


def test_blank_string_counts_as_missing():
    with pytest.raises(ValidationError):
        validate_fields(_fields(mood="  "))


def test_zero_steps_and_sleep_allowed():
    out = validate_fields(_fields(steps=0, sleep=0))
    assert out["steps"] == 0
    assert out["sleep"] == 0.0


def test_negative_steps_rejected():
    with pytest.raises(ValidationError):
        validate_fields(_fields(steps=-1))


def test_fractional_steps_rejected():
    with pytest.raises(ValidationError):
        validate_fields(_fields(steps=10.5))


def test_bool_steps_rejected():
    with pytest.raises(ValidationError):
        validate_fields(_fields(steps=True))


def test_string_steps_coerced():
    assert validate_fields(_fields(steps="8000"))["steps"] == 8000


def test_negative_sleep_rejected():
    with pytest.raises(ValidationError):
        validate_fields(_fields(sleep=-0.5))


def test_nan_sleep_rejected():
    with pytest.raises(ValidationError):
        validate_fields(_fields(sleep=float("nan")))


def test_string_sleep_coerced():
    assert validate_fields(_fields(sleep="6.5"))["sleep"] == 6.5


def test_unknown_mood_rejected():
    with pytest.raises(ValidationError):
        validate_fields(_fields(mood="Ecstatic"))


def test_mood_case_insensitive_stored_canonical():
    assert validate_fields(_fields(mood="stressed"))["mood"] == "Stressed"


def test_bad_date_format_rejected():
    with pytest.raises(ValidationError):
        validate_fields(_fields(date="2024-1-1"))


def test_impossible_date_rejected():
    with pytest.raises(ValidationError):
        validate_fields(_fields(date="2024-02-30"))


def test_future_date_accepted():
    assert validate_fields(_fields(date="2999-12-31"))["date"] == "2999-12-31"


def test_id_key_ignored():
    assert "id" not in validate_fields(_fields(id="abc"))


# ---- canonical_mood ----


def test_canonical_mood_all():
    for m in MOODS:
        assert canonical_mood(m.upper()) == m


# ---- Entry ----


def test_entry_dict_roundtrip():
    e = Entry(id="a1", date="2024-01-01", steps=1, sleep=2.0, mood="Tired", notes="x")
    assert Entry.from_dict(e.to_dict()) == e


def test_entry_from_dict_requires_id():
    with pytest.raises(ValidationError):
        Entry.from_dict(_fields())


def test_entry_is_frozen():
    e = Entry(id="a1", date="2024-01-01", steps=1, sleep=2.0, mood="Tired")
    with pytest.raises(AttributeError):
        e.steps = 5  # type: ignore[misc]
