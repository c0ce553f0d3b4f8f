from __future__ import annotations

import uuid
from datetime import date, timedelta
from typing import Any, Iterable, Iterator, Mapping

from .dateparse import as_date
from .entry import Entry, NotFoundError, ValidationError, validate_fields


class EntryStore:
    """
    Sole owner of the entry collection.
    - keyed by id, insertion ordered (update keeps position)
    - every mutation validates first, so a failure leaves the collection as it was
    - list() hands out snapshots; Entry is frozen
    Persistence is the caller's job: from_records() at startup, to_records() after each mutation.
    """

    def __init__(self, entries: Iterable[Entry] = ()):
        self._entries: dict[str, Entry] = {}
        self._issued: set[str] = set()
        self._editing_id: str | None = None
        for e in entries:
            self._insert(e)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "EntryStore":
        return cls(Entry.from_dict(r) for r in records)

    def to_records(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self._entries.values()]

    def _insert(self, entry: Entry) -> Entry:
        if not str(entry.id).strip():
            raise ValidationError("id is required", field="id")
        if entry.id in self._entries:
            raise ValidationError(f"duplicate entry id {entry.id!r}", field="id")
        # same field rules as create(), whatever the entry's origin
        entry = Entry(id=entry.id, **validate_fields(entry.to_dict()))
        self._entries[entry.id] = entry
        self._issued.add(entry.id)
        return entry

    def _new_id(self) -> str:
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in self._issued:
                return candidate

    # ---- mutations ----

    def create(self, fields: Mapping[str, Any]) -> Entry:
        clean = validate_fields(fields)
        return self._insert(Entry(id=self._new_id(), **clean))

    def add(self, entry: Entry) -> Entry:
        """Insert an entry that already has an id (import path)."""
        return self._insert(entry)

    def update(self, entry_id: str, fields: Mapping[str, Any]) -> Entry:
        if entry_id not in self._entries:
            raise NotFoundError(entry_id)
        clean = validate_fields(fields)
        entry = Entry(id=entry_id, **clean)
        self._entries[entry_id] = entry
        if self._editing_id == entry_id:
            self._editing_id = None
        return entry

    def delete(self, entry_id: str) -> None:
        self._entries.pop(entry_id, None)
        if self._editing_id == entry_id:
            self._editing_id = None

    # ---- reads ----

    def get(self, entry_id: str) -> Entry:
        try:
            return self._entries[entry_id]
        except KeyError:
            raise NotFoundError(entry_id) from None

    def list(self) -> list[Entry]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.list())

    # ---- edit session ----

    def begin_edit(self, entry_id: str) -> Entry:
        entry = self.get(entry_id)
        self._editing_id = entry_id
        return entry

    def cancel_edit(self) -> None:
        self._editing_id = None

    @property
    def editing(self) -> Entry | None:
        if self._editing_id is None:
            return None
        return self._entries.get(self._editing_id)


def seed_entries(today: date | str) -> list[dict[str, Any]]:
    """Demo rows for a brand new data file, dated today and the three days before."""
    d = as_date(today)

    def day(offset: int) -> str:
        return (d - timedelta(days=offset)).isoformat()

    return [
        {"date": day(0), "steps": 6500, "sleep": 7, "mood": "Happy", "notes": "Good day"},
        {"date": day(1), "steps": 5200, "sleep": 6.5, "mood": "Neutral"},
        {"date": day(2), "steps": 8000, "sleep": 7.5, "mood": "Happy"},
        {"date": day(3), "steps": 3000, "sleep": 5, "mood": "Tired"},
    ]
