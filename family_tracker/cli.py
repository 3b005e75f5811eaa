"""CLI entry point for the family tracker backend."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone

from dotenv import load_dotenv

from .config import TrackerConfig, load_config
from .db import DietEntryStore, FamilyMemberDB, ensure_schema
from .errors import TrackerError
from .models import DietEntry, MealType


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="family-tracker",
        description="Log meals for family members in a local SQLite database",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="Path to a TOML config file"
    )
    parser.add_argument(
        "--db", type=str, default=None, help="Database file (overrides config)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # init
    init_parser = sub.add_parser("init", help="Create or migrate the database")
    init_parser.add_argument(
        "--no-seed", action="store_true", help="Do not add the default members"
    )

    # members
    members_parser = sub.add_parser("members", help="Manage family members")
    members_sub = members_parser.add_subparsers(dest="action", required=True)
    members_sub.add_parser("list", help="List members")
    m_add = members_sub.add_parser("add", help="Add a member")
    m_add.add_argument("name")
    m_add.add_argument("icon")
    m_remove = members_sub.add_parser("remove", help="Remove a member and their entries")
    m_remove.add_argument("id", type=int)

    # diet
    diet_parser = sub.add_parser("diet", help="Manage diet entries")
    diet_sub = diet_parser.add_subparsers(dest="action", required=True)

    d_add = diet_sub.add_parser("add", help="Log a meal")
    d_add.add_argument("--member", type=int, required=True, dest="member_id")
    d_add.add_argument(
        "--meal-type", required=True, choices=[m.value for m in MealType]
    )
    d_add.add_argument("--description", required=True)
    d_add.add_argument(
        "--timestamp", default=None, help="ISO-8601 time (default: now, UTC)"
    )
    d_add.add_argument("--calories", type=int, default=None)
    d_add.add_argument("--notes", default=None)

    d_list = diet_sub.add_parser("list", help="List logged meals")
    d_list.add_argument("--member", type=int, default=None, dest="member_id")
    d_list.add_argument("--start", default=None, help="Inclusive lower bound")
    d_list.add_argument("--end", default=None, help="Inclusive upper bound")
    d_list.add_argument("--json", action="store_true", help="Output as JSON")

    d_update = diet_sub.add_parser("update", help="Change fields of a meal")
    d_update.add_argument("id", type=int)
    d_update.add_argument("--member", type=int, default=None, dest="member_id")
    d_update.add_argument("--meal-type", default=None)
    d_update.add_argument("--description", default=None)
    d_update.add_argument("--timestamp", default=None)
    d_update.add_argument("--calories", type=int, default=None)
    d_update.add_argument("--notes", default=None)

    d_delete = diet_sub.add_parser("delete", help="Delete a meal")
    d_delete.add_argument("id", type=int)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    config = load_config(args.config)
    if args.db:
        config.database.path = args.db

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        match args.command:
            case "init":
                _cmd_init(config, seed=not args.no_seed)
            case "members":
                _cmd_members(config, args)
            case "diet":
                _cmd_diet(config, args)
    except TrackerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _cmd_init(config: TrackerConfig, seed: bool) -> None:
    db_path = config.database.resolved_path()
    conn = ensure_schema(db_path)
    conn.close()
    print(f"Database ready: {db_path}")

    if seed and config.database.seed_defaults:
        members = FamilyMemberDB(db_path)
        try:
            added = members.seed_defaults()
        finally:
            members.close()
        if added:
            print(f"Added {added} default members")


def _cmd_members(config: TrackerConfig, args) -> None:
    members = FamilyMemberDB(config.database.resolved_path())
    try:
        match args.action:
            case "list":
                rows = members.list()
                if not rows:
                    print("No family members yet.")
                    return
                for m in rows:
                    print(f"  {m.id:>3}  {m.icon} {m.name}")
            case "add":
                member_id = members.add(args.name, args.icon)
                print(f"Added member {member_id}: {args.icon} {args.name}")
            case "remove":
                members.delete(args.id)
                print(f"Removed member {args.id}")
    finally:
        members.close()


def _cmd_diet(config: TrackerConfig, args) -> None:
    db_path = config.database.resolved_path()
    # The store expects the tables to exist already
    ensure_schema(db_path).close()
    store = DietEntryStore(db_path)

    match args.action:
        case "add":
            timestamp = args.timestamp or _utc_now()
            entry = store.create(
                member_id=args.member_id,
                timestamp=timestamp,
                meal_type=args.meal_type,
                description=args.description,
                calories=args.calories,
                notes=args.notes,
            )
            print(f"Logged entry {entry.id}")
            print(_format_entry(entry))
        case "list":
            entries = store.list(
                member_id=args.member_id, start_date=args.start, end_date=args.end
            )
            if args.json:
                print(json.dumps([e.to_dict() for e in entries], ensure_ascii=False, indent=2))
                return
            if not entries:
                print("No diet entries found.")
                return
            print(f"{len(entries)} entries:")
            for e in entries:
                print(_format_entry(e))
        case "update":
            entry = store.update(
                args.id,
                member_id=args.member_id,
                timestamp=args.timestamp,
                meal_type=args.meal_type,
                description=args.description,
                calories=args.calories,
                notes=args.notes,
            )
            print(f"Updated entry {entry.id}")
            print(_format_entry(entry))
        case "delete":
            store.delete(args.id)
            print(f"Deleted entry {args.id}")


def _utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _format_entry(entry: DietEntry) -> str:
    kcal = f"{entry.calories} kcal" if entry.calories is not None else "-"
    line = (
        f"  {entry.id:>4}  {entry.timestamp}  member {entry.member_id}  "
        f"{entry.meal_type.value:<9} {entry.description} ({kcal})"
    )
    if entry.notes:
        line += f"\n        {entry.notes}"
    return line
