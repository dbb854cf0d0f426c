#!/usr/bin/env python3
"""Fetch BambooHR data once and write the reconciled roster to disk.

Requires a ``.env`` file (or environment) providing BAMBOO_API_KEY and
BAMBOO_COMPANY_DOMAIN. Run from the project root:

    python3 scripts/sync_roster.py [--output-dir DIR] [--verbose]

Writes ``employees.json`` and ``hierarchy.json`` into the output directory.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from rostersync.core.config import Settings  # noqa: E402
from rostersync.core.errors import ReconciliationError  # noqa: E402
from rostersync.services.bamboo_client import BambooClient  # noqa: E402
from rostersync.services.roster_service import RosterService  # noqa: E402

logger = logging.getLogger(__name__)

ENV_INSTRUCTIONS = """
It is mandatory to create a "./.env" file containing:
BAMBOO_API_KEY={Your API Key}
BAMBOO_COMPANY_DOMAIN={Your Company Domain}
"""


def write_json(data: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile BambooHR directory and custom report data into employee and hierarchy JSON",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for employees.json and hierarchy.json (default: OUTPUT_DIR setting)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


async def sync(args: argparse.Namespace, settings: Settings | None = None) -> int:
    settings = settings or Settings()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    missing = settings.missing_credentials()
    if missing:
        print(ENV_INSTRUCTIONS)
        for name in missing:
            logger.error("%s is missing!", name)
        return 1

    output_dir = Path(args.output_dir or settings.OUTPUT_DIR)
    service = RosterService(BambooClient())
    await service.initialize(settings)

    logger.info("Fetching and building employee data...")
    try:
        snapshot = await service.refresh()
    except ReconciliationError as e:
        logger.error("Failed to build employee data: %s (%s)", e, e.__cause__)
        return 1
    finally:
        await service.close()

    employees_path = output_dir / "employees.json"
    write_json([e.model_dump(mode="json", exclude_none=True) for e in snapshot.employees], employees_path)
    logger.info("Employee JSON file created at %s", employees_path)

    hierarchy_path = output_dir / "hierarchy.json"
    write_json([n.model_dump(mode="json", exclude_none=True) for n in snapshot.hierarchy], hierarchy_path)
    logger.info("Hierarchy JSON file created at %s", hierarchy_path)
    return 0


def main() -> None:
    args = parse_args()
    sys.exit(asyncio.run(sync(args)))


if __name__ == "__main__":
    main()
