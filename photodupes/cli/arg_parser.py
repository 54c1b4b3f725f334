"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
photodupes command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from ..config import SIMILARITY_THRESHOLD


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance with one subparser per command
    """
    parser = argparse.ArgumentParser(
        prog='photodupes',
        description='Find exact and near-duplicate images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s scan /path/to/photos
      Scan (using the cache) and report duplicate groups

  %(prog)s scan /path/to/photos --no-recursive --json > result.json
      Scan only the top-level folder and emit JSON

  %(prog)s scan /path/to/photos --year 2021 --year 2022 --group-by-year
      Only look for duplicates among photos from 2021 and 2022

  %(prog)s delete /path/to/photos/copy.jpg
      Delete a file and drop it from the cache

  %(prog)s serve --port 5000
      Run the web API
        """
    )

    parser.add_argument(
        '--data-dir',
        default=None,
        help='Directory holding the cache database (default: ~/.photodupes)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output (debug logging)'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    # scan
    scan = subparsers.add_parser('scan', help='Scan a directory and report duplicates')
    scan.add_argument('directory', type=Path, help='Directory to scan for images')
    scan.add_argument(
        '-r', '--no-recursive',
        action='store_true',
        help='Do not scan subdirectories'
    )
    scan.add_argument(
        '-t', '--threshold',
        type=int,
        default=SIMILARITY_THRESHOLD,
        help=f'Near-duplicate distance threshold (0-64). Default: {SIMILARITY_THRESHOLD}'
    )
    scan.add_argument(
        '--year',
        action='append',
        default=[],
        metavar='YYYY',
        help='Only consider images from this year (repeatable)'
    )
    scan.add_argument(
        '--year-prefix',
        default='',
        metavar='DIGITS',
        help='Only consider images whose year starts with these digits (ignored with --year)'
    )
    scan.add_argument(
        '--group-by-year',
        action='store_true',
        help='Also report how many images fall in each year'
    )
    scan.add_argument(
        '--json',
        action='store_true',
        help='Print records and groups as JSON instead of a report'
    )
    scan.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable the progress bar'
    )

    # delete
    delete = subparsers.add_parser('delete', help='Delete files and evict them from the cache')
    delete.add_argument('paths', nargs='+', help='Files to delete')
    delete.add_argument(
        '-y', '--yes',
        action='store_true',
        help='Do not ask for confirmation'
    )

    # open
    open_cmd = subparsers.add_parser('open', help='Open a file in the default viewer')
    open_cmd.add_argument('path', help='File to open')

    # cache
    cache = subparsers.add_parser('cache', help='Inspect or clear the cache')
    cache.add_argument('cache_action', choices=['stats', 'clear'])

    # serve
    serve = subparsers.add_parser('serve', help='Run the web API')
    serve.add_argument(
        '-p', '--port',
        type=int,
        default=5000,
        help='Port to run the server on (default: 5000)'
    )
    serve.add_argument(
        '--no-browser',
        action='store_true',
        help='Do not automatically open browser'
    )
    serve.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Quiet mode - suppress all output except errors'
    )

    # config
    config = subparsers.add_parser('config', help='Show or create the user config file')
    config.add_argument(
        '-i', '--init',
        action='store_true',
        help='Create an example config file'
    )

    return parser


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments to parse; sys.argv[1:] if None

    Returns:
        Parsed argument namespace
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == 'scan':
        if not 0 <= args.threshold <= 64:
            parser.error('--threshold must be between 0 and 64')
        if any(not (y.isdigit() and len(y) == 4) for y in args.year):
            parser.error('--year must be a 4-digit year')

    return args


__all__ = ['create_parser', 'parse_arguments']
