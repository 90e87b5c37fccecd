#!/usr/bin/env python3
"""
Rule catalog ingest.

Load a JSON rule catalog into the rule store, skipping rules that already
exist (same title and authority).

Usage:
    python scripts/ingest_catalog.py
    python scripts/ingest_catalog.py --catalog data/rules.catalog.json --create-tables
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from regmatch.config import settings
from regmatch.db.base import Base
from regmatch.db.session import SessionLocal, engine
from regmatch.models.domain.rule import Rule  # noqa: F401  (registers the table)
from regmatch.services.rule_engine import RuleConfigurationError
from regmatch.services.rule_service import RuleService, load_catalog

logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)


async def ingest(path: Path, create_tables: bool) -> int:
    try:
        items = load_catalog(path)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Could not load catalog {path}: {e}")
        return 1

    if create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as session:
        try:
            result = await RuleService(session).ingest_catalog(items)
            await session.commit()
        except RuleConfigurationError as e:
            await session.rollback()
            logger.error(f"Catalog rejected: {e}")
            return 1

    print(
        f"Catalog ingest complete. created={result.created}, "
        f"skipped={result.skipped}, warnings={len(result.warnings)}"
    )
    return 0


async def main(args: argparse.Namespace) -> int:
    try:
        return await ingest(Path(args.catalog), args.create_tables)
    finally:
        await engine.dispose()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load a rule catalog into the database")
    parser.add_argument(
        "--catalog",
        default=settings.RULE_CATALOG_PATH,
        help="Path to the JSON catalog file",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before loading (development databases)",
    )
    return parser.parse_args()


if __name__ == "__main__":
    sys.exit(asyncio.run(main(parse_args())))
