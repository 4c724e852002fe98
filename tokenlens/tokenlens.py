#!/usr/bin/env python3
"""
TokenLens

A CLI tool for analyzing per-request LLM usage exports.

Usage:
    python -m tokenlens usage.csv [options]
    python -m tokenlens --serve
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, Optional

from tokenlens.analytics.engine import AnalyticsEngine
from tokenlens.config.loader import build_view_options, load_config
from tokenlens.etl.parser import CSVFormatError, parse_csv_file
from tokenlens.models.entities import DateRange, ViewOptions
from tokenlens.utils.timestamps import end_of_day, resolve_timezone, start_of_day


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all CLI flags."""
    parser = argparse.ArgumentParser(
        prog='tokenlens',
        description='Usage analytics for LLM usage exports'
    )

    parser.add_argument('csv_file', nargs='?', metavar='FILE',
                        help='Usage export CSV')

    # Report views (mutually exclusive group)
    views = parser.add_mutually_exclusive_group()
    views.add_argument('--models', action='store_true',
                       help='Model comparison')
    views.add_argument('--timeline', action='store_true',
                       help='Token usage over time')
    views.add_argument('--all', '-a', action='store_true',
                       help='Show all reports')

    # View modes
    parser.add_argument('--aggregated', action='store_true',
                        help='Collapse all models into one group')
    parser.add_argument('--hourly', action='store_true',
                        help='Hourly buckets for the timeline')
    parser.add_argument('--tz', metavar='ZONE',
                        help='Reference timezone for hour/day buckets (default: UTC)')

    # Date filters
    date_filters = parser.add_argument_group('date filters')
    date_filters.add_argument('--from', dest='date_from', metavar='DATE',
                              help='Start date (YYYY-MM-DD), inclusive')
    date_filters.add_argument('--to', dest='date_to', metavar='DATE',
                              help='End date (YYYY-MM-DD), inclusive')

    # Output options
    parser.add_argument('--json', action='store_true',
                        help='Output as JSON')
    parser.add_argument('--no-color', action='store_true',
                        help='Disable colors')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    # Web API
    parser.add_argument('--serve', action='store_true',
                        help='Start the web API server')
    parser.add_argument('--port', type=int,
                        help='Port for the web API (default from config: 3001)')
    parser.add_argument('--host',
                        help='Host for the web API (default from config: 127.0.0.1)')

    return parser


def parse_date_filters(args, tz_name: str) -> DateRange:
    """
    Parse --from/--to into an inclusive instant range.

    Dates expand to whole days in the reference zone.

    Raises:
        ValueError: on a malformed date or a reversed range
    """
    tz = resolve_timezone(tz_name)
    start = end = None
    if args.date_from:
        start = start_of_day(datetime.strptime(args.date_from, '%Y-%m-%d').date(), tz)
    if args.date_to:
        end = end_of_day(datetime.strptime(args.date_to, '%Y-%m-%d').date(), tz)
    return DateRange(start=start, end=end)


def build_options(args, config: Dict[str, Any]) -> ViewOptions:
    """Combine config defaults with CLI flags."""
    tz_name = args.tz or config['timezone']
    return build_view_options(
        config,
        model_view='aggregated' if args.aggregated else None,
        granularity='hourly' if args.hourly else None,
        timezone=tz_name,
        date_range=parse_date_filters(args, tz_name),
    )


def stats_to_json(stats) -> str:
    """Serialize an aggregate dataclass to JSON."""
    return json.dumps(asdict(stats), indent=2, default=str)


def main(argv: Optional[list] = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    config = load_config()
    color_enabled = config['display']['color_enabled'] and not args.no_color
    table_width = config['display'].get('table_max_width')

    if args.serve:
        _run_serve(config, args)
        return

    if not args.csv_file:
        parser.error('a usage export FILE is required unless --serve is given')

    try:
        options = build_options(args, config)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        records = parse_csv_file(args.csv_file)
    except FileNotFoundError:
        print(f"Error: File not found: {args.csv_file}")
        sys.exit(1)
    except CSVFormatError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.verbose:
        print(f"Loaded {len(records)} records from {args.csv_file}")
        print()

    stats = AnalyticsEngine().comprehensive(records, options)

    if args.json:
        print(stats_to_json(stats))
        return

    if args.all:
        from tokenlens.reports.summary import generate_summary
        from tokenlens.reports.models import generate_models
        from tokenlens.reports.timeline import generate_timeline

        print(generate_summary(stats, color_enabled))
        print()
        print(generate_models(stats, color_enabled, table_width))
        print()
        print(generate_timeline(stats, color_enabled, table_width))

    elif args.models:
        from tokenlens.reports.models import generate_models
        print(generate_models(stats, color_enabled, table_width))

    elif args.timeline:
        from tokenlens.reports.timeline import generate_timeline
        print(generate_timeline(stats, color_enabled, table_width))

    else:
        # Default: show summary
        from tokenlens.reports.summary import generate_summary
        print(generate_summary(stats, color_enabled))


def _run_serve(config, args):
    """Start the web API server."""
    try:
        import uvicorn
    except ImportError:
        print("Error: Web API requires additional dependencies.")
        print("Install them with: python -m pip install fastapi uvicorn[standard] python-multipart pydantic")
        sys.exit(1)

    from tokenlens.server.app import create_app

    host = args.host or config['server']['host']
    port = args.port or config['server']['port']
    app = create_app(config=config)

    if args.csv_file:
        try:
            app.state.records = parse_csv_file(args.csv_file)
        except (OSError, CSVFormatError) as e:
            print(f"Warning: {e}")
            print("Starting server without data...")

    print(f"\nStarting TokenLens API at http://{host}:{port}")
    print("Press Ctrl+C to stop\n")

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == '__main__':
    main()
