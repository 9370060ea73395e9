"""
Sucoi - Clear Goals Maintenance Script
=======================================
CLI entry point that wipes the ``goals`` collection:
    1. Load settings (fail-fast on a broken ``.env``).
    2. Connect to MongoDB (fail-fast if unreachable).
    3. Ask for confirmation unless ``--yes`` is given.
    4. Delete every goal record and print how many were removed.

Users, chats and indexes are left untouched.

Flags:
    --yes   Skip the confirmation prompt.

Usage:
    python -m sucoi.scripts.clear_goals
    python -m sucoi.scripts.clear_goals --yes
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import TYPE_CHECKING, Callable

from pymongo.errors import PyMongoError

if TYPE_CHECKING:
    from sucoi.config.settings import Settings
    from sucoi.src.database.mongo import MongoDatabase


# ── CLI Argument Parsing ───────────────────────────────────────────────

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="clear_goals", description="Sucoi: delete every goal record from MongoDB.")
    parser.add_argument("--yes", action="store_true", default=False, help="Do not ask for confirmation.")
    return parser.parse_args(argv)


def confirm(ask: Callable[[str], str] = input) -> bool:
    answer = ask("Delete ALL goals for ALL users? [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


async def clear_goals(database: MongoDatabase) -> int:
    """Delete every goal through ``GoalTracker``; returns the count removed."""
    from sucoi.src.core.goals import GoalTracker
    from sucoi.src.database.stores import GoalStore

    return await GoalTracker(GoalStore(database)).clear_goals()


# ── Main Orchestration ─────────────────────────────────────────────────

async def _run(settings: Settings) -> int:
    from sucoi.src.database.mongo import MongoDatabase

    database = MongoDatabase.from_settings(settings)
    try:
        await database.connect()
        return await clear_goals(database)
    finally:
        database.close()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        from sucoi.config.settings import settings
    except Exception as exc:
        print("\n[FATAL] Configuration error, check your .env file:\n")
        print(f"  {exc}")
        print()
        return 1

    # Now that settings is loaded, we can safely import the logger
    from sucoi.src.core.errors import DatabaseConnectionError
    from sucoi.src.utils.logger import get_logger
    logger = get_logger(__name__)

    if not args.yes and not confirm():
        print("Aborted.")
        return 0

    try:
        removed = asyncio.run(_run(settings))
    except (DatabaseConnectionError, PyMongoError) as exc:
        logger.error("[DB] Clearing goals failed: %s", exc)
        return 1

    print(f"✅ All goals deleted! ({removed} removed)")
    return 0


# ── Entry point ────────────────────────────────────────────────────────

if __name__ == "__main__":
    sys.exit(main())
