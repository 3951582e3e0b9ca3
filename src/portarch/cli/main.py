"""Main CLI entry point for portarch."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from .. import __version__
from ..cli.report import decode_file, inspect_file
from ..config import ArchiveConfig
from ..exceptions import PortarchError


def configure_logging(verbose: bool) -> None:
    """Send structlog output to stderr, hiding debug events unless verbose."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def main() -> int:
    """Main entry point for the portarch CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="portarch: Portable Binary Archive",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  portarch --inspect data.bin                          Validate and summarize the header
  portarch --decode data.bin --types int32,float64     Decode values in order
  portarch --version                                   Show version
        """,
    )

    parser.add_argument(
        "--inspect",
        metavar="FILE",
        type=str,
        help="Validate the stream header and show its contents",
    )

    parser.add_argument(
        "--decode",
        metavar="FILE",
        type=str,
        help="Decode the values of a stream (requires --types)",
    )

    parser.add_argument(
        "--types",
        metavar="KINDS",
        type=str,
        help="Comma-separated primitive kinds in stream order, e.g. int32,uint8,float64",
    )

    parser.add_argument("--no-infnan", action="store_true", help="Reject infinite and NaN floats")
    parser.add_argument("--no-header", action="store_true", help="Stream has no magic byte/version")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug log events")

    parser.add_argument(
        "--version",
        action="version",
        version=f"portarch {__version__}",
    )

    args = parser.parse_args()
    configure_logging(args.verbose)

    if not args.inspect and not args.decode:
        # If no command specified, show help
        parser.print_help()
        return 0

    if args.decode and not args.types:
        print("Error: --decode requires --types", file=sys.stderr)
        return 1

    file_path = Path(args.inspect or args.decode)
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    try:
        config = ArchiveConfig(no_infnan=args.no_infnan, no_header=args.no_header)
        if args.inspect:
            inspect_file(file_path, config)
        else:
            decode_file(file_path, args.types, config)
        return 0
    except (PortarchError, ValidationError, OSError) as e:
        print(f"Error reading {file_path}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
