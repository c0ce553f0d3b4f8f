from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Iterable

from .entry import Entry, ValidationError

HEADER = ("id", "date", "steps", "sleep", "mood", "notes")


def _fmt_number(value: Any) -> str:
    # 7.0 -> "7", 6.5 -> "6.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode(entries: Iterable[Entry]) -> str:
    """
    CSV text: literal header row, then one row per entry in the order given.
    Every field is quoted, quotes are doubled, rows joined with "\\n" (no trailing newline).
    """
    buf = io.StringIO()
    w = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    w.writerow(HEADER)
    for e in entries:
        w.writerow([e.id, e.date, _fmt_number(e.steps), _fmt_number(e.sleep), e.mood, e.notes or ""])
    out = buf.getvalue()
    return out[:-1] if out.endswith("\n") else out


def decode(text: str) -> list[Entry]:
    """
    Parse CSV produced by encode() back into entries.
    Raises ValidationError on a wrong header, a short/long row, malformed quoting,
    or a row with bad fields.
    """
    text = text.lstrip("\ufeff")
    if not text.strip():
        return []

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    out: list[Entry] = []
    row_num = 0
    while True:
        row_num += 1
        try:
            row = next(reader, None)
        except csv.Error as e:
            raise ValidationError(f"CSV row {row_num}: {e}") from e
        if row is None:
            break

        if row_num == 1:
            if tuple(h.strip() for h in row) != HEADER:
                raise ValidationError(f"CSV header must be {','.join(HEADER)} (got {row!r})")
            continue
        if not row:
            continue
        if len(row) != len(HEADER):
            raise ValidationError(f"CSV row {row_num}: expected {len(HEADER)} fields, got {len(row)}")
        try:
            out.append(Entry.from_dict(dict(zip(HEADER, row))))
        except ValidationError as e:
            raise ValidationError(f"CSV row {row_num}: {e}", field=e.field) from e
    return out


def write_csv(out_path: Path, entries: Iterable[Entry]) -> None:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", newline="", encoding="utf-8") as f:
        f.write(encode(entries))


def read_csv(in_path: Path) -> list[Entry]:
    try:
        with Path(in_path).open("r", newline="", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ValidationError(f"{in_path} is not UTF-8 text: {e}") from e
    return decode(text)
