#!/usr/bin/env python3
"""Apply the forum's Alembic migrations.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a given revision
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from forum.config import Settings
from forum.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema, failing loudly so the app never starts on a stale one."""
    settings = Settings()
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)

    with logfire.span("run_migrations", target=target):
        try:
            command.upgrade(alembic_cfg, target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise
        logfire.info("Database migrations applied", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
