"""
ENTSO-E Generation Fetch - Main Entry Point.

Fetches actual generation for one area and production type, rebuilds the
segmented TimeSeries into one continuous dataset and writes it to CSV.

Usage:
    python main.py --domain DE_LU --psr-type B16 --start 2024-01-01 --end 2024-02-01
    python main.py --domain FR --start 2023-01-01 --end 2025-01-01 --workers 4
"""
import sys
import argparse
import logging
from pathlib import Path

import pandas as pd

from config import load_config
from provider import EntsoeAPIError, EntsoeConnector, DocumentParseError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='ENTSO-E generation fetch and reconstruction')
    parser.add_argument('--domain', required=True,
                        help="Area code (e.g. DE_LU) or EIC code")
    parser.add_argument('--start', required=True, help='Window start (UTC), e.g. 2024-01-01')
    parser.add_argument('--end', required=True, help='Window end (UTC, exclusive)')
    parser.add_argument('--psr-type', default=None,
                        help='Production type, e.g. B16 (solar). Default: all types')
    parser.add_argument('--document-type', default=None, help='Default: A75')
    parser.add_argument('--process-type', default=None, help='Default: A16')
    parser.add_argument('--workers', type=int, default=None,
                        help='Threads for per-segment reconstruction')
    parser.add_argument('--output', type=str, default='data/downloads/generation.csv',
                        help='CSV output path')
    parser.add_argument('--strict', action='store_true',
                        help='Exit non-zero if any segment failed')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # I configure logging for standalone execution
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )

    try:
        config = load_config(
            domain=args.domain,
            psr_type=args.psr_type,
            document_type=args.document_type,
            process_type=args.process_type,
            max_workers=args.workers,
        )
    except ValueError as e:
        logger.error(str(e))
        return 1

    start = pd.Timestamp(args.start, tz='UTC')
    end = pd.Timestamp(args.end, tz='UTC')

    connector = EntsoeConnector(config)
    try:
        result = connector.fetch_generation(start, end)
    except (EntsoeAPIError, DocumentParseError, ValueError) as e:
        logger.error(f"Fetch failed: {e}")
        return 1

    print("=" * 60)
    print(f"   Rows:              {len(result):,}")
    print(f"   Skipped segments:  {result.skipped_segments}")
    print(f"   Warned segments:   {result.warned_segments}")
    print(f"   Failed segments:   {len(result.errors)}")
    print("=" * 60)
    for error in result.errors:
        logger.warning(str(error))

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    connector.save_to_csv(result, str(output))

    if args.strict and not result.ok:
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
