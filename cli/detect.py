"""Detect command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from config import DEFAULT_OUTPUT_DIR
from detection import DetectionConfig, load_config_file
from errors import InvalidParameterError
from preprocessing import PreprocessConfig
from scan import run_scan

logger = logging.getLogger(__name__)


def add_detect_subparser(subparsers: argparse._SubParsersAction) -> None:
    detect_parser = subparsers.add_parser(
        "detect",
        help="Detect light bars in an image file or directory",
    )
    detect_parser.add_argument(
        "source",
        help="Image file or directory of images",
    )
    detect_parser.add_argument(
        "-o", "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for result images and reports (default: {DEFAULT_OUTPUT_DIR})",
    )
    detect_parser.add_argument(
        "--no-artifacts",
        action="store_true",
        help="Do not write any files, only log results",
    )
    detect_parser.add_argument(
        "--config",
        metavar="YAML",
        help="YAML file with 'detection' and/or 'preprocess' settings",
    )
    detect_parser.add_argument(
        "--morph-size",
        type=int,
        help="Structuring element size for mask cleaning (odd)",
    )
    detect_parser.add_argument(
        "--blur-kernel",
        type=int,
        help="Mean blur preview kernel size (odd)",
    )
    detect_parser.add_argument(
        "--gaussian-kernel",
        type=int,
        help="Gaussian blur preview kernel size (odd)",
    )
    detect_parser.add_argument(
        "--gaussian-sigma",
        type=float,
        help="Gaussian blur preview sigma (0 derives it from the kernel size)",
    )
    detect_parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Maximum number of images to process (default: all)",
    )
    detect_parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first image that fails instead of skipping it",
    )
    detect_parser.set_defaults(_cmd=cmd_detect)


def resolve_configs(args: argparse.Namespace) -> tuple[DetectionConfig, PreprocessConfig]:
    """Load the optional config file, then apply command line overrides."""
    if args.config:
        detection_config, preprocess_config = load_config_file(args.config)
    else:
        detection_config, preprocess_config = DetectionConfig(), PreprocessConfig()

    if args.morph_size is not None:
        detection_config = replace(detection_config, morph_kernel_size=args.morph_size)
    if args.blur_kernel is not None:
        preprocess_config = replace(preprocess_config, mean_blur_kernel_size=args.blur_kernel)
    if args.gaussian_kernel is not None:
        preprocess_config = replace(preprocess_config, gaussian_kernel_size=args.gaussian_kernel)
    if args.gaussian_sigma is not None:
        preprocess_config = replace(preprocess_config, gaussian_sigma=args.gaussian_sigma)

    return detection_config, preprocess_config


def cmd_detect(args: argparse.Namespace) -> int:
    try:
        detection_config, preprocess_config = resolve_configs(args)
        stats = run_scan(
            args.source,
            output_dir=None if args.no_artifacts else args.output_dir,
            detection_config=detection_config,
            preprocess_config=preprocess_config,
            limit=args.limit,
            fail_fast=args.fail_fast,
        )
    except (InvalidParameterError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    logger.info("%s", "=" * 50)
    logger.info("Detection Complete!")
    logger.info("%s", "=" * 50)
    logger.info("Images found:     %s", stats.images_found)
    logger.info("Images processed: %s", stats.images_processed)
    logger.info("Images failed:    %s", stats.images_failed)
    logger.info("Light bars found: %s", stats.regions_accepted)
    if not args.no_artifacts:
        logger.info("Results saved to %s", args.output_dir)
    return 0 if stats.images_failed == 0 else 2
