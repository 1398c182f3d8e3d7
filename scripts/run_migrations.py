#!/usr/bin/env python3
"""Apply Alembic migrations, reporting failures to Logfire.

Usage: run_migrations.py [REVISION]   (defaults to "head")
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from engage.config import Settings
from engage.util.logging import setup_logging
from engage.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    revision = argv[0] if argv else "head"
    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception:
            logfire.exception("Schema migration failed", revision=revision)
            # Fail the deploy rather than serve against a half-migrated schema
            raise

    logfire.info("Schema at revision", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
