"""
user_management_reset.py — `user-management:reset` Operator Command

Resets the instance to its default user state: one unclaimed owner, no setup
flag, and every workflow / credential owned by the owner's personal project
when its previous owner is gone.

Example:
    user-management-reset --database-url postgresql://user:pw@localhost:5432/workflows

Exit codes:
    0  reset committed
    1  reset failed, nothing committed
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.database import init_db, make_engine, make_session_factory
from app.core.exceptions import ResetError
from app.core.logging import configure_logging, get_logger
from app.services.user_management.reset import UserManagementReset

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="user-management-reset",
        description="Reset the instance to its default user state (single unclaimed owner)",
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="SQLAlchemy URL of the instance store (default: DATABASE_URL setting)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL setting)",
    )
    parser.add_argument(
        "--init-schema",
        action="store_true",
        help="Create missing tables before resetting",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or settings.LOG_LEVEL)

    engine = None
    try:
        engine = make_engine(args.database_url)
        if args.init_schema:
            init_db(engine)
        report = UserManagementReset(make_session_factory(engine)).run()

    except (ResetError, SQLAlchemyError) as e:
        logger.error("Error resetting database. See log messages for details.")
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    finally:
        if engine is not None:
            engine.dispose()

    logger.info("Reset summary: %s", report.to_dict())
    print("✓ Instance reset to default user state")
    print(f"  Owner:                {report.owner_id}")
    print(f"  Personal project:     {report.personal_project_id}"
          f"{' (created)' if report.personal_project_created else ''}")
    print(f"  Users deleted:        {report.users_deleted}")
    print(f"  Workflows re-owned:   {report.workflows_reowned}")
    print(f"  Credentials re-owned: {report.credentials_reowned}")
    return 0


def run() -> None:
    """Console-script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
