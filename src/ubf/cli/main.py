"""Main CLI entry point for ubf."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..cli.dump import dump_file, size_file
from ..exceptions import UbfError
from ..log import setup_logging


def main() -> int:
    """Main entry point for the ubf CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="ubf: compact binary tree format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ubf --dump state.ubf                  Print the decoded tree as JSON
  ubf --dump state.ubf --typed          Same, with each value's kind
  ubf --size state.ubf                  Show entry count and encoded size
  ubf --version                         Show version
        """,
    )

    parser.add_argument(
        "--dump",
        metavar="FILE",
        type=str,
        help="Decode a UBF file and print it as JSON",
    )

    parser.add_argument(
        "--size",
        metavar="FILE",
        type=str,
        help="Decode a UBF file and show its encoded size",
    )

    parser.add_argument(
        "--typed",
        action="store_true",
        help="With --dump, annotate every value with its UBF kind",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log codec debug events to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ubf {__version__}",
    )

    args = parser.parse_args()
    setup_logging(debug=args.debug)

    target = args.dump or args.size
    if target:
        file_path = Path(target)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            if args.dump:
                dump_file(file_path, typed=args.typed)
            else:
                size_file(file_path)
            return 0
        except (UbfError, OSError) as e:
            print(f"Error decoding file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
