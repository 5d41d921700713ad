"""CLI entry point for the navigation data ETL.

Usage:
    python -m navroute.etl.cli --airports airports.json --navaids navaids.json \
        --airways airways.json --cycle 2604 --output /tmp/navdata
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from navroute.etl.navdata_builder import NavDataBuilder
from navroute.etl.navdata_parser import parse_navdata_json

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> Path:
    parser = argparse.ArgumentParser(description="NavRoute reference data ETL")
    parser.add_argument("--airports", type=Path, required=True, help="Airport database JSON")
    parser.add_argument("--navaids", type=Path, required=True, help="Navaid database JSON")
    parser.add_argument("--airways", type=Path, required=True, help="Airways database JSON")
    parser.add_argument("--cycle", type=str, required=True, help="AIRAC cycle ID (e.g. 2604)")
    parser.add_argument("--output", type=Path, required=True, help="Output directory")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    args.output.mkdir(parents=True, exist_ok=True)

    # 1. Parse JSON exports
    logger.info("Parsing navigation data exports")
    data = parse_navdata_json(args.airports, args.navaids, args.airways)

    # 2. Build SQLite DB
    db_path = args.output / f"navdata_{args.cycle}.db"
    logger.info("Building navigation DB: %s", db_path)
    NavDataBuilder(db_path).build(data)

    logger.info("ETL complete for cycle %s", args.cycle)
    return db_path


if __name__ == "__main__":
    main()
