#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c1f7a9e2b41
"""

import argparse
import sys
import logfire
from alembic import command
from alembic.config import Config

from roost.config import Settings
from roost.util.observability import configure_logfire


def main() -> int:
    """Upgrade the schema to the requested revision."""
    parser = argparse.ArgumentParser(description="Apply Roost database migrations")
    parser.add_argument("revision", nargs="?", default="head")
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)

    with logfire.span("migrations.upgrade", revision=args.revision):
        try:
            command.upgrade(Config("alembic.ini"), args.revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=args.revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The container must not start on a broken schema
            raise

    logfire.info("Database migrations completed", revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
