#!/usr/bin/env python3
"""
icedb command line entry point.

Usage:
    icedb fetch-issues
    icedb build-fingerprints --issues-file db/issues.jsonl
    icedb find-duplicates --duplicates-file db/duplicates.jsonl --verbose
"""

import argparse
import logging
import sys
from typing import List, Optional

from common.config import Config
from common.exceptions import IcedbError
from Utils.log_utils import setup_logging
from Utils.workflow_utils import PipelineStage
from workflow import pipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="icedb",
        description="Fingerprint compiler crash reports and find duplicate issues",
    )
    parser.add_argument(
        "stage",
        choices=PipelineStage.get_all_stage_names(),
        help="Pipeline stage to run",
    )
    parser.add_argument("--config", default=None, help="Path to icedb YAML config")
    parser.add_argument("--issues-file", default=None, help="Override ISSUES_FILE_PATH")
    parser.add_argument("--fingerprints-file", default=None, help="Override FINGERPRINTS_FILE_PATH")
    parser.add_argument("--duplicates-file", default=None, help="Override DUPLICATES_FILE_PATH")
    parser.add_argument("--workers", type=int, default=None, help="Override EXTRACTION_WORKERS")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def _apply_overrides(config: Config, args: argparse.Namespace) -> None:
    if args.issues_file:
        config.ISSUES_FILE_PATH = args.issues_file
    if args.fingerprints_file:
        config.FINGERPRINTS_FILE_PATH = args.fingerprints_file
    if args.duplicates_file:
        config.DUPLICATES_FILE_PATH = args.duplicates_file
    if args.workers is not None:
        config.EXTRACTION_WORKERS = args.workers


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # Config loading can fail, so log at a fixed level until it is read
    setup_logging("DEBUG" if args.verbose else "INFO")

    stage = PipelineStage(args.stage)

    try:
        config = Config(args.config)
        _apply_overrides(config, args)
        if not args.verbose:
            setup_logging(config.LOG_LEVEL)

        logger.info(f"Running stage: {stage.value}")
        if stage is PipelineStage.FETCH_ISSUES:
            issues = pipeline.fetch_issues(config)
            logger.info(f"Stored {len(issues)} issues in {config.ISSUES_FILE_PATH}")
        elif stage is PipelineStage.BUILD_FINGERPRINTS:
            groups = pipeline.build_fingerprints(config)
            logger.info(f"Stored {len(groups)} fingerprint groups in {config.FINGERPRINTS_FILE_PATH}")
        else:
            signals = pipeline.find_duplicates(config)
            logger.info(f"{len(signals)} possible duplicate groups")
    except (IcedbError, OSError) as e:
        logger.error(f"Stage {stage.value} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
