#!/usr/bin/env python
"""Generate sample packing records for local testing.

Writes them as a CSV file in the sheet layout (ready for
POST /records/import), or appends them to the configured store.

Usage:
    # Write 50 records to sample_packing.csv
    python scripts/seed_sample_data.py --output sample_packing.csv

    # Reproducible data
    python scripts/seed_sample_data.py --count 20 --seed 42 --output sample.csv

    # Append to the store configured by PACKTRACK_STORE_URL
    python scripts/seed_sample_data.py --count 5 --push
"""

import argparse
import asyncio
import random
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from packtrack.core.csv_codec import dump_csv
from packtrack.core.sample_data import generate_sample_data
from packtrack.infra.logging import get_logger, setup_logging
from packtrack.services.store_client import get_store_client

setup_logging()
logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate sample packing records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--count",
        type=int,
        default=50,
        help="Number of records (default: 50)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible output",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="CSV file to write",
    )
    parser.add_argument(
        "--push",
        action="store_true",
        help="Append the records to the configured store",
    )

    return parser.parse_args()


async def push_records(records: list) -> int:
    """Append records to the store one at a time; returns the failure count."""
    client = get_store_client()
    if not client.configured:
        print("Error: PACKTRACK_STORE_URL is not set")
        return len(records)

    failures = 0
    try:
        for record in records:
            if not await client.append(record):
                failures += 1
    finally:
        await client.close()
    return failures


async def main() -> int:
    """Main entry point."""
    args = parse_args()

    if not args.output and not args.push:
        print("Error: nothing to do, pass --output and/or --push")
        return 1

    rng = random.Random(args.seed)
    records = generate_sample_data(args.count, rng=rng)
    logger.info("Sample records generated", count=len(records), seed=args.seed)

    if args.output:
        args.output.write_text(dump_csv(records), encoding="utf-8")
        print(f"Wrote {len(records)} records to {args.output}")

    if args.push:
        failures = await push_records(records)
        print(f"Pushed {len(records) - failures}/{len(records)} records")
        if failures:
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
