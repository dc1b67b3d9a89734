#!/usr/bin/env python3
"""
Check expired domains from the terminal.

Usage:
    python check_domains.py example.com foo.org   # Spamhaus + Wayback checks
    python check_domains.py --capabilities         # What the domains table supports
    python check_domains.py --tables               # List database tables
    python check_domains.py --columns [table]      # Columns of a table (domains table by default)
"""

import asyncio
import json
import sys

from app.container import container
from app.repositories.db import close_db, db_exists
from settings import DB_PATH
from settings.logging import setup_logging
from web.api.catalog import get_capabilities, list_columns, list_tables
from web.api.errors import ApiError
from web.api.verification import check_domain

logger = setup_logging(level="INFO", to_file=False)


def print_json(data: dict):
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


async def run_checks(domains: list[str]) -> bool:
    """Check all domains concurrently; True when every check came back clean."""
    results = await asyncio.gather(*(check_domain({"domain": d}) for d in domains), return_exceptions=True)

    ok = True
    for domain, result in zip(domains, results):
        if isinstance(result, ApiError):
            logger.error("{}: {}", domain, result.message)
            ok = False
            continue
        if isinstance(result, BaseException):
            raise result
        if result.spamhaus.error or result.wayback.error:
            ok = False
        print_json(result.to_json())
    return ok


def require_db():
    if not db_exists(DB_PATH):
        logger.error("Database not found: {}", DB_PATH)
        sys.exit(1)


def main():
    args = sys.argv[1:]
    if not args or "-h" in args or "--help" in args:
        print(__doc__)
        sys.exit(0 if args else 1)

    container.init()
    try:
        if "--tables" in args:
            require_db()
            print_json(list_tables().to_json())
            return

        if "--columns" in args:
            require_db()
            rest = [a for a in args if a != "--columns"]
            print_json(list_columns(rest[0] if rest else None).to_json())
            return

        if "--capabilities" in args:
            require_db()
            print_json(get_capabilities().to_json())
            return

        domains = [a for a in args if not a.startswith("-")]
        logger.info("Checking {} domain(s)", len(domains))
        if not asyncio.run(run_checks(domains)):
            sys.exit(2)
    except ApiError as e:
        logger.error("{}", e.message)
        sys.exit(1)
    finally:
        close_db()


if __name__ == "__main__":
    main()
