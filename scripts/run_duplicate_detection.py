"""Run one duplicate-detection pass against the configured database.

Usage:
    python scripts/run_duplicate_detection.py            # link confident matches
    python scripts/run_duplicate_detection.py --dry-run  # report only
"""

import argparse
import logging
import sys

from boardmatch.catalog.sql import SqlCatalog
from boardmatch.config import settings
from boardmatch.database import SessionLocal, init_db
from boardmatch.detection import format_summary, run_duplicate_detection

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--dry-run", action="store_true", help="report matches without linking")
    parser.add_argument("--threshold", type=float, default=None,
                        help="minimum score to report (default: auto-link confidence)")
    parser.add_argument("--same-source", action="store_true",
                        help="also compare listings from the same source")
    args = parser.parse_args()

    init_db()
    db = SessionLocal()
    try:
        catalog = SqlCatalog(db)
        summary = run_duplicate_detection(
            catalog,
            catalog,
            config=settings.matcher_config,
            threshold=args.threshold,
            cross_source_only=not args.same_source,
            dry_run=args.dry_run,
        )
    finally:
        db.close()

    print()
    print("=== Duplicate detection summary ===")
    print(format_summary(summary))
    return 1 if summary.links_failed else 0


if __name__ == "__main__":
    sys.exit(main())
