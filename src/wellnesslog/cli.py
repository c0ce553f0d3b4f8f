from __future__ import annotations

import argparse
import stat
from pathlib import Path
from typing import Any

from .auth import login, require_session
from .csvcodec import read_csv, write_csv
from .dateparse import parse_day, today_str
from .entry import MOODS, Entry, ValidationError, WellnessError
from .filters import filter_entries
from .paths import data_path_reason, resolve_data_path
from .safety import assert_safe_data_path
from .stats import summarize
from .storage import load_state, save_state
from .store import EntryStore, seed_entries


# -------------------------
# Load / save
# -------------------------

def _load(args: argparse.Namespace) -> tuple[dict[str, Any], EntryStore]:
    state = load_state(args.data_path)
    return state, EntryStore.from_records(state["entries"])


def _load_logged_in(args: argparse.Namespace) -> tuple[dict[str, Any], EntryStore]:
    state, store = _load(args)
    require_session(state)
    return state, store


def _save(args: argparse.Namespace, state: dict[str, Any], store: EntryStore) -> None:
    state["entries"] = store.to_records()
    save_state(args.data_path, state)


# -------------------------
# Parsing / formatting helpers
# -------------------------

def _parse_day(value: str | None, arg_name: str) -> str:
    try:
        return parse_day(value)
    except ValueError as e:
        raise SystemExit(f"{arg_name}: {e}") from e


def _parse_bound(value: str | None, arg_name: str) -> str | None:
    if not value:
        return None
    return _parse_day(value, arg_name)


def _fmt_hours(hours: float) -> str:
    if float(hours).is_integer():
        return f"{int(hours)} h"
    return f"{hours} h"


def _entry_line(e: Entry) -> str:
    line = f"{e.date} — {e.steps:,} steps, {_fmt_hours(e.sleep)}, {e.mood}"
    if e.notes:
        line += f" ({e.notes})"
    return f"{line}  [{e.id}]"


def _print_entry_block(e: Entry) -> None:
    print("```")
    print("📒 Wellness Entry")
    print(f"- 📅 Date: {e.date}")
    print(f"- 👟 Steps: {e.steps:,}")
    print(f"- 😴 Sleep: {_fmt_hours(e.sleep)}")
    print(f"- 🙂 Mood: {e.mood}")
    if e.notes:
        print(f"- 📝 Notes: {e.notes}")
    print(f"- 🆔 {e.id}")
    print("```")


def _print_entry(e: Entry, fmt: str) -> None:
    if fmt == "block":
        _print_entry_block(e)
    else:
        print(_entry_line(e))


# -------------------------
# Core commands
# -------------------------

def cmd_init(args: argparse.Namespace) -> None:
    state, store = _load(args)
    seeded = 0
    if args.seed and len(store) == 0:
        for fields in seed_entries(today_str()):
            store.create(fields)
            seeded += 1
    _save(args, state, store)
    print(f"✅ Initialized data file: {args.data_path}")
    if seeded:
        print(f"🌱 Added {seeded} demo entries.")


def cmd_where(args: argparse.Namespace) -> None:
    print(args.data_path)
    print(f"↳ using {data_path_reason(args.data_arg, args.profile)}")


def cmd_doctor(args: argparse.Namespace) -> None:
    print("=== wellnesslog doctor ===")

    assert_safe_data_path(args.data_path, args.allow_repo_data_path)
    print("✅ Data path safety guard: OK")

    state = load_state(args.data_path)
    print("✅ JSON readable: OK")

    bad = 0
    for i, record in enumerate(state["entries"]):
        try:
            Entry.from_dict(record)
        except ValidationError as e:
            bad += 1
            print(f"⚠️ entry #{i}: {e}")
    if bad:
        print(f"⚠️ {bad} of {len(state['entries'])} entries are invalid")
    else:
        print(f"✅ Entries valid: {len(state['entries'])}")

    try:
        perms = stat.S_IMODE(args.data_path.stat().st_mode)
        print(f"🔐 File permissions: {oct(perms)} (target 0o600)")
    except FileNotFoundError:
        print("⚠️ Data file missing (run `wl init`)")

    print("=== Done ===")


def cmd_theme(args: argparse.Namespace) -> None:
    state = load_state(args.data_path)
    state["dark"] = args.mode == "dark"
    save_state(args.data_path, state)
    print(f"🎨 Theme: {args.mode}")


# -------------------------
# Session commands
# -------------------------

def cmd_login(args: argparse.Namespace) -> None:
    state = load_state(args.data_path)
    state["user"] = login(args.email, args.password)
    save_state(args.data_path, state)
    print(f"🔓 Logged in as {state['user']['email']}")


def cmd_logout(args: argparse.Namespace) -> None:
    state = load_state(args.data_path)
    state["user"] = None
    save_state(args.data_path, state)
    print("🔒 Logged out.")


def cmd_whoami(args: argparse.Namespace) -> None:
    state = load_state(args.data_path)
    print(require_session(state)["email"])


# -------------------------
# Entry commands
# -------------------------

def cmd_add(args: argparse.Namespace) -> None:
    state, store = _load_logged_in(args)
    entry = store.create(
        {
            "date": _parse_day(args.date, "--date"),
            "steps": args.steps,
            "sleep": args.sleep,
            "mood": args.mood,
            "notes": args.notes,
        }
    )
    _save(args, state, store)

    if args.format == "block":
        _print_entry_block(entry)
    else:
        print(f"✅ Logged {entry.date}: {entry.steps:,} steps, {_fmt_hours(entry.sleep)}, {entry.mood}  [{entry.id}]")


def cmd_edit(args: argparse.Namespace) -> None:
    state, store = _load_logged_in(args)
    current = store.begin_edit(args.id)

    fields = current.to_dict()
    if args.date is not None:
        fields["date"] = _parse_day(args.date, "--date")
    if args.steps is not None:
        fields["steps"] = args.steps
    if args.sleep is not None:
        fields["sleep"] = args.sleep
    if args.mood is not None:
        fields["mood"] = args.mood
    if args.notes is not None:
        fields["notes"] = args.notes

    entry = store.update(args.id, fields)
    _save(args, state, store)
    print("✏️ Updated:")
    _print_entry(entry, args.format)


def cmd_delete(args: argparse.Namespace) -> None:
    state, store = _load_logged_in(args)
    existed = args.id in store
    store.delete(args.id)
    if not existed:
        print(f"Nothing to delete: no entry with id {args.id!r}.")
        return
    _save(args, state, store)
    print(f"🗑️ Deleted {args.id}")


def cmd_list(args: argparse.Namespace) -> None:
    _, store = _load_logged_in(args)
    if args.limit < 0:
        raise SystemExit("--limit must be 0 (no limit) or more")
    date_from = _parse_bound(args.date_from, "--from")
    date_to = _parse_bound(args.date_to, "--to")

    rows = filter_entries(store.list(), date_from, date_to)
    if not rows:
        print("No entries in this range.")
        return

    # keep the most recent rows when limiting, still oldest first
    if args.limit and len(rows) > args.limit:
        rows = rows[-args.limit:]

    if args.format == "block":
        for e in rows:
            _print_entry_block(e)
        return

    label = f"{date_from or '…'} → {date_to or '…'}"
    print(f"=== Entries ({label}) ===")
    for e in rows:
        print(_entry_line(e))


def cmd_stats(args: argparse.Namespace) -> None:
    _, store = _load_logged_in(args)
    if args.days < 1:
        raise SystemExit("--days must be at least 1")

    view = filter_entries(
        store.list(),
        _parse_bound(args.date_from, "--from"),
        _parse_bound(args.date_to, "--to"),
    )
    s = summarize(view, today_str(), days=args.days)

    print("=== Dashboard ===")
    if s.latest:
        print(f"- latest: {s.latest.date}")
        print(f"- latest steps: {s.latest.steps:,}")
        print(f"- latest sleep: {_fmt_hours(s.latest.sleep)}")
        print(f"- latest mood: {s.latest.mood}")
    else:
        print("- latest: —")

    print(f"\n[{s.days}-day window]")
    print(f"- entries: {s.window_entries}")
    print(f"- steps: {s.total_steps:,}")
    print(f"- avg sleep: {s.average_sleep} h")
    print(f"- happy days: {s.happy_days}")


def cmd_export(args: argparse.Namespace) -> None:
    _, store = _load_logged_in(args)
    entries = store.list()
    out_path = Path(args.csv).expanduser().resolve()
    write_csv(out_path, entries)
    if entries:
        print(f"📄 Exported {len(entries)} entries → {out_path}")
    else:
        print(f"📄 Exported header-only CSV (no entries) → {out_path}")


def cmd_import(args: argparse.Namespace) -> None:
    state, store = _load_logged_in(args)
    in_path = Path(args.csv).expanduser().resolve()
    try:
        incoming = read_csv(in_path)
    except FileNotFoundError as e:
        raise SystemExit(f"No such file: {in_path}") from e

    added = updated = 0
    for e in incoming:
        if e.id in store:
            store.update(e.id, e.to_dict())
            updated += 1
        else:
            store.add(e)
            added += 1

    _save(args, state, store)
    print(f"📥 Imported {len(incoming)} rows from {in_path} (added {added}, updated {updated}).")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="wl", description="Daily wellness log: steps, sleep, mood, notes")
    p.add_argument("--data", default=None, help="Path to data JSON (overrides env/default)")
    p.add_argument("--profile", default=None, help="Profile name (e.g. dev/test)")
    p.add_argument("--allow-repo-data-path", action="store_true", help="Override safety guard (not recommended)")

    sub = p.add_subparsers(dest="cmd", required=True)

    init = sub.add_parser("init", help="Initialize data store safely")
    init.add_argument("--seed", action="store_true", help="Add four demo entries to an empty store")
    init.set_defaults(func=cmd_init)

    sub.add_parser("where", help="Show which data file is active and why").set_defaults(func=cmd_where)
    sub.add_parser("doctor", help="Run safety + health checks").set_defaults(func=cmd_doctor)

    theme = sub.add_parser("theme", help="Store the dark/light preference")
    theme.add_argument("mode", choices=["dark", "light"])
    theme.set_defaults(func=cmd_theme)

    # ---- session ----
    lg = sub.add_parser("login", help="Mock login (any valid email, 6+ char password)")
    lg.add_argument("--email", required=True)
    lg.add_argument("--password", required=True)
    lg.set_defaults(func=cmd_login)

    sub.add_parser("logout", help="Forget the stored session").set_defaults(func=cmd_logout)
    sub.add_parser("whoami", help="Show the logged-in email").set_defaults(func=cmd_whoami)

    # ---- entries ----
    add = sub.add_parser("add", help="Add a daily entry")
    add.add_argument("--date", default=None, help="YYYY-MM-DD, today, yesterday, '3 days ago' (default today)")
    add.add_argument("--steps", required=True)
    add.add_argument("--sleep", required=True, help="Hours, e.g. 7.5")
    add.add_argument("--mood", required=True, help=f"One of: {', '.join(MOODS)}")
    add.add_argument("--notes", default=None)
    add.add_argument("--format", choices=["line", "block"], default="line")
    add.set_defaults(func=cmd_add)

    edit = sub.add_parser("edit", help="Edit an entry (omitted fields keep their value)")
    edit.add_argument("id")
    edit.add_argument("--date", default=None)
    edit.add_argument("--steps", default=None)
    edit.add_argument("--sleep", default=None)
    edit.add_argument("--mood", default=None)
    edit.add_argument("--notes", default=None)
    edit.add_argument("--format", choices=["line", "block"], default="line")
    edit.set_defaults(func=cmd_edit)

    delete = sub.add_parser("delete", help="Delete an entry (no-op if the id is unknown)")
    delete.add_argument("id")
    delete.set_defaults(func=cmd_delete)

    ls = sub.add_parser("list", help="List entries, oldest first")
    ls.add_argument("--from", dest="date_from", default=None, help="Inclusive start date")
    ls.add_argument("--to", dest="date_to", default=None, help="Inclusive end date")
    ls.add_argument("--limit", type=int, default=50, help="Show at most N most recent rows (0 = all)")
    ls.add_argument("--format", choices=["line", "block"], default="line")
    ls.set_defaults(func=cmd_list)

    st = sub.add_parser("stats", help="Dashboard: latest entry + trailing window totals")
    st.add_argument("--days", type=int, default=7, help="Trailing window in days (default 7)")
    st.add_argument("--from", dest="date_from", default=None)
    st.add_argument("--to", dest="date_to", default=None)
    st.set_defaults(func=cmd_stats)

    ex = sub.add_parser("export", help="Export every entry to CSV")
    ex.add_argument("--csv", required=True, help="Output CSV path (e.g. ~/wellness-entries.csv)")
    ex.set_defaults(func=cmd_export)

    im = sub.add_parser("import", help="Import entries from a CSV made by export")
    im.add_argument("--csv", required=True)
    im.set_defaults(func=cmd_import)

    return p


def main(argv=None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    args.data_arg = args.data
    args.data_path = resolve_data_path(args.data, args.profile)

    assert_safe_data_path(args.data_path, args.allow_repo_data_path)

    try:
        args.func(args)
    except WellnessError as e:
        raise SystemExit(f"❌ {e}") from e


if __name__ == "__main__":
    main()
