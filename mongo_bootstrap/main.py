#!/usr/bin/env python3
"""
MongoDB Bootstrap Script

Idempotently creates the admin user, the service user and the base
collections of the service database. Safe to re-run on every environment
bring-up.

Usage:
    mongo-bootstrap [--uri URI] [--plan FILE] [--json] [--conflict-policy POLICY]

Environment Variables:
    MONGO_URI: MongoDB connection string
    ADMIN_USERNAME / ADMIN_PASSWORD: Root user
    SERVICE_DB_NAME / SERVICE_USERNAME / SERVICE_PASSWORD: Service user
    BOOTSTRAP_PLAN_FILE: JSON plan replacing the default steps
    BOOTSTRAP_CONFLICT_POLICY: as_no_op (default) or fatal
    LOG_LEVEL: Logging level (default: INFO)
"""
import argparse
import asyncio
import json
import logging
from typing import Optional, Sequence

from mongo_bootstrap.config import Settings, get_settings
from mongo_bootstrap.core.errors import BootstrapError
from mongo_bootstrap.database.connections import close_connections, get_mongo_client
from mongo_bootstrap.models.step import BootstrapResult, BootstrapStep, StepReport
from mongo_bootstrap.plan import resolve_steps
from mongo_bootstrap.services.bootstrap_service import BootstrapRunner, ConflictPolicy

logger = logging.getLogger("mongo_bootstrap")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mongo-bootstrap",
        description="Idempotent MongoDB user and collection bootstrap",
    )
    parser.add_argument("--uri", default=None, help="MongoDB URI (overrides MONGO_URI)")
    parser.add_argument("--plan", default=None, help="JSON plan file replacing the default steps")
    parser.add_argument("--json", action="store_true", help="Print the run result as JSON")
    parser.add_argument(
        "--conflict-policy",
        choices=[policy.value for policy in ConflictPolicy],
        default=None,
        help="How to treat a duplicate reported by a create call",
    )
    return parser


def print_event(report: StepReport) -> None:
    """Status line per step on stdout."""
    print(report.message, flush=True)


async def run_bootstrap(
    steps: Sequence[BootstrapStep],
    settings: Settings,
    uri: Optional[str] = None,
    conflict_policy: Optional[str] = None,
) -> BootstrapResult:
    """Connect, run the steps and always close the connection."""
    client = await get_mongo_client(uri)
    runner = BootstrapRunner(
        client,
        conflict_policy=ConflictPolicy(conflict_policy or settings.bootstrap_conflict_policy),
        on_event=print_event,
    )
    try:
        return await runner.run(steps)
    finally:
        await close_connections()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    print("Mongo Init Script - START", flush=True)
    try:
        steps = resolve_steps(settings, args.plan)
        result = asyncio.run(
            run_bootstrap(steps, settings, uri=args.uri, conflict_policy=args.conflict_policy)
        )
    except BootstrapError as e:
        logger.error(f"Bootstrap failed: {e}")
        return 1

    if args.json:
        print(json.dumps(result.to_json_dict(), indent=2))
    else:
        print(
            f"Ensured {len(result.reports)} steps: {result.created} created, "
            f"{result.updated} updated, {result.no_op} already present"
        )
    print("Mongo Init Script - END", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
