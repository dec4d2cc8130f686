"""
Run summary reporting for the CLI interface.

Results themselves go to stdout as they are found; the summary is logged so
it stays out of redirected output.
"""

from __future__ import annotations

import logging

from ..models import PipelineStats, WorkerMode
from ..utils.formatters import format_number


def print_run_summary(mode: WorkerMode, stats: PipelineStats, logger: logging.Logger) -> None:
    """
    Log the counters of a finished run.

    Args:
        mode: Mode that was run
        stats: Counters from the worker pool
        logger: Logger to report through
    """
    logger.info(f"Processed {format_number(stats.processed)} of "
                f"{format_number(stats.attempted)} images")

    if mode == WorkerMode.GENERATE:
        logger.info(f"Fingerprints written: {format_number(stats.written)}")
    elif mode == WorkerMode.FIND_DUPLICATES:
        logger.info(f"Matches reported: {format_number(stats.matches)}")
    elif mode == WorkerMode.EXTRACT_METADATA:
        logger.info(f"Timestamps found: {format_number(stats.extracted)}")

    if stats.skipped:
        logger.warning(f"Skipped {format_number(stats.skipped)} unreadable files")


__all__ = ['print_run_summary']
