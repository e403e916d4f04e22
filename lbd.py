#!/usr/bin/env python3
"""
Unified CLI for the Light Bar Detector.

Usage:
    lbd detect <path>                 # Detect light bars in an image or directory
    lbd detect <path> -o results/     # Choose where result images are written
    lbd detect <path> --config x.yaml # Override thresholds from a YAML file
    lbd info <path>                   # Show image size and channel count
"""

import argparse
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from cli.detect import add_detect_subparser
from cli.info import add_info_subparser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lbd",
        description="Light Bar Detector - find colored light bars in images",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_detect_subparser(subparsers)
    add_info_subparser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet, args.log_file)

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
