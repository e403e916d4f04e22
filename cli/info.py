"""Info command: print basic facts about an image."""

from __future__ import annotations

import argparse
import logging

from sources import describe_raster, load_raster

logger = logging.getLogger(__name__)


def add_info_subparser(subparsers: argparse._SubParsersAction) -> None:
    info_parser = subparsers.add_parser(
        "info",
        help="Show size and channel count of an image",
    )
    info_parser.add_argument("path", help="Image file")
    info_parser.set_defaults(_cmd=cmd_info)


def cmd_info(args: argparse.Namespace) -> int:
    try:
        raster = load_raster(args.path)
    except OSError as exc:
        logger.error("Cannot load %s: %s", args.path, exc)
        return 1

    info = describe_raster(raster, args.path)
    logger.info("=== Image Info ===")
    for line in info.lines():
        logger.info("%s", line)
    return 0
