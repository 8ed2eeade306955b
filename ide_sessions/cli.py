#!/usr/bin/env python3
"""
Command line entry point for ide-sessions.

Usage:
    ide-sessions init [--force]
    ide-sessions list
    ide-sessions show NAME
    ide-sessions last

Creating, saving and loading sessions happens inside the interpreter:

    >>> import ide_sessions
    >>> ide_sessions.new("analysis")
    >>> ide_sessions.load()
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from . import __version__
from .config import SessionConfig
from .hooks import configure_logging, install
from .session_store import SessionError, SessionStore


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ide-sessions",
        description="Save and restore named sessions of open files, working directory and search path",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--store-dir",
        help="Directory holding the session files (default: ~/.ide-sessions or $IDE_SESSIONS_HOME)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create the store and install the startup hook")
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing hook")

    subparsers.add_parser("list", help="List stored sessions")

    show_parser = subparsers.add_parser("show", help="Print a stored session as JSON")
    show_parser.add_argument("name")

    subparsers.add_parser("last", help="Print the last saved session")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = SessionConfig.load()
    if args.store_dir:
        config = replace(config, store_dir=args.store_dir)
    configure_logging("DEBUG" if args.verbose else config.log_level)

    try:
        if args.command == "init":
            return 0 if install(config, force=args.force) else 1

        store = SessionStore.from_config(config)

        if args.command == "list":
            for name in store.list_records():
                print(name)
            return 0

        if args.command == "show":
            record = store.read_record(args.name)
            print(record.model_dump_json(indent=2))
            return 0

        if args.command == "last":
            name = store.read_last_session()
            if name is None:
                print("No last session recorded", file=sys.stderr)
                return 1
            print(name)
            return 0
    except (SessionError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
