"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
photo fingerprint command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Thread count and fuzz default to None here; the orchestrator fills them
    from the user configuration so the config file and environment apply.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='photofingerprint',
        description='Find near-duplicate photos with visual fingerprints',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -g -s /photos -d /fingerprints
      Generate fingerprints for every image under /photos

  %(prog)s -f -s /fingerprints -d /unsorted > matches.txt
      Report images under /unsorted matching a fingerprint

  %(prog)s -m -s /photos
      Print the EXIF capture time of every image under /photos

  %(prog)s -j -s matches.txt -o pairs.json
      Convert find-duplicates output to the review tool's JSON
        """
    )

    # Modes (exactly one)
    modes = parser.add_mutually_exclusive_group(required=True)
    modes.add_argument(
        '-g', '--generate',
        action='store_true',
        help='Generate fingerprints from -s into -d'
    )
    modes.add_argument(
        '-f', '--find-duplicates',
        action='store_true',
        help='Match images under -d against the fingerprints in -s'
    )
    modes.add_argument(
        '-m', '--metadata',
        action='store_true',
        help='Print the capture timestamp of images under -s'
    )
    modes.add_argument(
        '-j', '--json-pairs',
        action='store_true',
        help="Convert find-duplicates output (file -s, or '-' for stdin) to JSON pairs"
    )

    # Directories
    parser.add_argument(
        '-s', '--source',
        type=Path,
        help='Source image directory, fingerprint directory, or match file'
    )
    parser.add_argument(
        '-d', '--destination',
        type=Path,
        help='Fingerprint output directory, or directory to search'
    )

    # Performance options
    parser.add_argument(
        '-t', '--threads',
        type=int,
        default=None,
        help='Number of worker threads. Default: hardware concurrency'
    )

    # Matching options
    parser.add_argument(
        '-z', '--fuzz',
        type=float,
        default=None,
        help='Colour fuzz tolerance (0-255) applied before scoring'
    )
    parser.add_argument(
        '--exclude-similar',
        action='store_true',
        help='With -j, only export identical matches'
    )

    # Output options
    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='With -j, write JSON here instead of stdout'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )
    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable the fingerprint loading progress display'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['-g', '-s', '/photos', '-d', '/fp'])
        >>> args.generate, args.source
        (True, PosixPath('/photos'))
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
