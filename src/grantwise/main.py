"""Application entry point and composition root."""

import argparse
import asyncio
import sys

from psycopg_pool import AsyncConnectionPool

from grantwise import __version__
from grantwise.config import Settings, get_settings
from grantwise.engine import AuthorizationEngine
from grantwise.infrastructure.logging import configure_logging
from grantwise.infrastructure.persistence.postgres.connection import create_pool
from grantwise.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from grantwise.infrastructure.scheduling import ExpirySweeper


def create_engine(settings: Settings) -> tuple[AuthorizationEngine, AsyncConnectionPool]:
    """Composition root - build the engine on a PostgreSQL grant store.

    The returned pool is closed; open it before the first call.
    """
    pool = create_pool(settings)
    return AuthorizationEngine(create_uow_factory(pool)), pool


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="grantwise", description="Authorization engine tools")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("version", help="Print version and exit")

    sweep = sub.add_parser("sweep", help="Delete expired resource permissions")
    sweep.add_argument("--once", action="store_true", help="Run a single sweep and exit")

    perms = sub.add_parser("permissions", help="List effective permissions of a user")
    perms.add_argument("user_id")

    check = sub.add_parser("check", help="Check a global or environment permission")
    check.add_argument("user_id")
    check.add_argument("permission")
    check.add_argument("--environment", default=None, help="Environment id")
    return parser


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    engine, pool = create_engine(settings)
    await pool.open()
    try:
        if args.command == "sweep":
            sweeper = ExpirySweeper(engine.cleanup, settings.sweep_interval_seconds)
            if args.once:
                deleted = await sweeper.run_once()
                if deleted is None:
                    return 1
                print(deleted)
                return 0
            await sweeper.run_forever()
            return 0

        if args.command == "permissions":
            view = await engine.list_user_permissions(args.user_id)
            for token in view.tokens:
                print(token)
            return 0

        if args.environment:
            allowed = await engine.check_environment_permission(
                args.user_id, args.permission, args.environment
            )
        else:
            allowed = await engine.check_permission(args.user_id, args.permission)
        print("allowed" if allowed else "denied")
        return 0 if allowed else 1
    finally:
        await pool.close()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    if args.command == "version":
        print(f"grantwise v{__version__}")
        return 0

    settings = get_settings()
    configure_logging(settings)
    try:
        return asyncio.run(_run(args, settings))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
