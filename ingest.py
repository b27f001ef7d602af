#!/usr/bin/env python3
"""
Ingest key Australian federal acts from legislation.gov.au.

Fetches each act's latest compilation (OData API for version metadata, EPUB
XHTML endpoint for the text), parses it into provisions and definitions, and
writes JSON seed files. Data is published under CC BY 4.0.

Usage:
    python ingest.py                    # Full ingestion
    python ingest.py --limit 5          # First 5 acts only
    python ingest.py --skip-fetch       # Reuse cached markup and seeds
    python ingest.py --db law.db        # Also load into a SQLite database
"""

import os
import sys
import logging
import argparse
from pathlib import Path

from leg2json.acts import KEY_AUSTRALIAN_ACTS
from leg2json.constants import DB_ENV_VAR
from leg2json.ingest import ingest_acts
from leg2json.store import LegislationStore

DATA_DIR = Path(__file__).parent / "data"


def main():
    parser = argparse.ArgumentParser(description="Ingest Australian federal legislation")
    parser.add_argument("--limit", type=int, help="Only ingest the first N acts")
    parser.add_argument("--skip-fetch", action="store_true", help="Reuse cached markup and seed files")
    parser.add_argument("--source-dir", default=str(DATA_DIR / "source"), help="Directory for raw XHTML")
    parser.add_argument("--seed-dir", default=str(DATA_DIR / "seed"), help="Directory for JSON seeds")
    parser.add_argument(
        "--db",
        default=os.environ.get(DB_ENV_VAR),
        help=f"SQLite database to load parsed acts into (default: ${DB_ENV_VAR})",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug output")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("Australian Law Ingestion Pipeline")
    print("=" * 40)
    print("  Source: Federal Register of Legislation (legislation.gov.au)")
    print("  Method: OData API + EPUB XHTML endpoint")
    print("  License: CC BY 4.0")
    if args.limit:
        print(f"  --limit {args.limit}")
    if args.skip_fetch:
        print("  --skip-fetch")

    acts = KEY_AUSTRALIAN_ACTS[: args.limit] if args.limit else KEY_AUSTRALIAN_ACTS
    print(f"\nProcessing {len(acts)} federal acts...\n")

    store = LegislationStore(args.db) if args.db else None
    try:
        summary = ingest_acts(
            acts,
            Path(args.source_dir),
            Path(args.seed_dir),
            skip_fetch=args.skip_fetch,
            store=store,
        )
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        if store is not None:
            store.close()

    print()
    print(summary.report())


if __name__ == "__main__":
    main()
