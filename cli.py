"""Lightweight CLI for NexDrive garage maintenance.

Usage:
    nexdrive init-db                 # create the documents table for the active alias
    nexdrive init-db --alias garage_prod
    nexdrive list OWNER_ID           # print an owner's saved builds
    nexdrive log-level DEBUG         # set log level in settings.toml
"""

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path
from time import perf_counter

from settings_service import SETTINGS_PATH, _load_settings, reset_settings_cache

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _make_store(alias: str | None):
    from config import DatabaseConfig
    from repositories.document_store import SqlDocumentStore

    return SqlDocumentStore(DatabaseConfig.from_settings(alias))


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create the document table for one database alias."""
    t0 = perf_counter()
    try:
        store = _make_store(args.alias)
        print(f"initializing {store.db.alias} …", end=" ", flush=True)
        store.ensure_schema()
        if not store.db.ping():
            raise RuntimeError(f"store for {store.db.alias} did not answer")
    except Exception as e:
        elapsed = round((perf_counter() - t0) * 1000)
        print(f"error ({elapsed} ms): {e}")
        return 1
    elapsed = round((perf_counter() - t0) * 1000)
    print(f"ok ({elapsed} ms)")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Print every build saved by one owner."""
    from domain.errors import STORE_ERRORS
    from repositories.build_repo import BuildRepository
    from services.persistence_gateway import PersistenceGateway
    from settings_service import SettingsService
    from ui.formatters import build_title, format_price

    settings = SettingsService()
    repo = BuildRepository(_make_store(args.alias), collection=settings.builds_collection)
    gateway = PersistenceGateway(repo, timeout=settings.store_timeout)
    try:
        builds = asyncio.run(gateway.list_for_owner(args.owner_id))
    except STORE_ERRORS as e:
        print(f"error: {e}")
        return 1

    if not builds:
        print("no builds")
        return 0
    for build in builds:
        trims = ", ".join(f"{k}={v}" for k, v in sorted(build.trim_slots.items()))
        print(
            f"{build.record_id}  {build_title(build)}  "
            f"{format_price(build.price_cents)}" + (f"  [{trims}]" if trims else "")
        )
    return 0


def cmd_log_level(args: argparse.Namespace, settings_path: Path = SETTINGS_PATH) -> int:
    """Get or set the log level in settings.toml."""
    settings = _load_settings(settings_path)
    current = settings["env"]["log_level"]

    if args.level is None:
        print(current)
        return 0

    level = args.level.upper()
    if level not in VALID_LOG_LEVELS:
        print(f"invalid level: {args.level} (expected one of {', '.join(VALID_LOG_LEVELS)})")
        return 1

    if level == current:
        print(f"already {level}")
        return 0

    content = settings_path.read_text()
    updated = re.sub(
        r'(log_level\s*=\s*)"[^"]*"',
        rf'\1"{level}"',
        content,
    )
    settings_path.write_text(updated)
    reset_settings_cache()
    print(f"{current} → {level}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nexdrive", description="NexDrive garage tools")
    sub = parser.add_subparsers(dest="command")

    init_parser = sub.add_parser("init-db", help="Create the documents table")
    init_parser.add_argument("--alias", default=None, help="Database alias (default: active env)")

    list_parser = sub.add_parser("list", help="List an owner's saved builds")
    list_parser.add_argument("owner_id", help="Principal id of the owner")
    list_parser.add_argument("--alias", default=None, help="Database alias (default: active env)")
    list_parser.add_argument("-v", "--verbose", action="store_true", help="Show store logs")

    ll_parser = sub.add_parser("log-level", help="Get or set the log level in settings.toml")
    ll_parser.add_argument("level", nargs="?", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "init-db":
        return cmd_init_db(args)
    if args.command == "list":
        if not args.verbose:
            # Keep stdout to the listing
            logging.disable(logging.INFO)
        return cmd_list(args)
    if args.command == "log-level":
        return cmd_log_level(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
