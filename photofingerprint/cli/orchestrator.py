"""
CLI workflow orchestration for Photo Fingerprint.

Provides the CLIOrchestrator class that coordinates a CLI run from argument
parsing through validation, the worker pool, and the final summary.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from ..config import default_thread_count
from ..models import WorkerMode, WorkerOptions
from ..scanner import dispatch
from ..user_config import get_user_config
from ..utils.exporters import export_pairs
from ..utils.validators import (
    validate_fuzz,
    validate_mode_directories,
    validate_thread_count,
)
from .arg_parser import parse_arguments
from .reporting import print_run_summary


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Log records go to stderr so stdout carries only results.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stderr,
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates one CLI run.

    Every startup problem is reported before any traversal starts.
    """

    def __init__(self, argv: Optional[list[str]] = None):
        """Initialize the orchestrator."""
        self.argv = argv
        self.logger = logging.getLogger(__name__)
        self.args = None
        self.mode: Optional[WorkerMode] = None
        self.options: Optional[WorkerOptions] = None
        self.stats = None

    def run(self) -> int:
        """
        Execute the CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error)

        Workflow phases:
        1. Setup & argument parsing
        2. Validation
        3. Configuration
        4. Worker pool run (or JSON conversion)
        5. Summary
        """
        # Phase 1: Setup
        self._setup_phase()

        if self.args.json_pairs:
            return self._json_phase()

        # Phase 2: Validation
        exit_code = self._validate_phase()
        if exit_code != 0:
            return exit_code

        # Phase 3: Configuration
        self._configure_phase()

        # Phase 4: Run
        self.stats = dispatch(self.options)

        # Phase 5: Summary
        print_run_summary(self.mode, self.stats, self.logger)
        return 0

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

        if self.args.generate:
            self.mode = WorkerMode.GENERATE
        elif self.args.find_duplicates:
            self.mode = WorkerMode.FIND_DUPLICATES
        elif self.args.metadata:
            self.mode = WorkerMode.EXTRACT_METADATA

    def _validate_phase(self) -> int:
        """
        Phase 2: Validate arguments and directories.

        Returns:
            0 for success, 1 for validation error
        """
        config = get_user_config()

        if self.args.threads is None:
            self.args.threads = config.default_threads
        if self.args.fuzz is None:
            self.args.fuzz = config.default_fuzz

        is_valid, error = validate_thread_count(self.args.threads)
        if not is_valid:
            self.logger.error(error)
            return 1

        is_valid, error = validate_fuzz(self.args.fuzz)
        if not is_valid:
            self.logger.error(error)
            return 1

        is_valid, error = validate_mode_directories(
            self.mode, self.args.source, self.args.destination
        )
        if not is_valid:
            self.logger.error(error)
            return 1

        return 0

    def _configure_phase(self) -> None:
        """Phase 3: Build the worker options shared by the pool."""
        config = get_user_config()
        num_threads = int(self.args.threads)

        self.logger.info(
            f"Using {num_threads} threads of maximum {default_thread_count()}"
        )

        self.options = WorkerOptions(
            mode=self.mode,
            num_threads=num_threads,
            fuzz=float(self.args.fuzz),
            source_directory=self.args.source,
            destination_directory=self.args.destination,
            low_threshold=config.low_distortion_threshold,
            high_threshold=config.high_distortion_threshold,
            poll_interval=config.poll_interval,
            show_progress=not self.args.no_progress,
        )

    def _json_phase(self) -> int:
        """
        Convert find-duplicates output to the review tool's JSON.

        Returns:
            0 for success, 1 if the input cannot be read
        """
        source = self.args.source
        include_similar = not self.args.exclude_similar

        try:
            if source is None or str(source) == '-':
                lines = sys.stdin.readlines()
            else:
                with open(source, 'r', encoding='utf-8') as f:
                    lines = f.readlines()
        except OSError as e:
            self.logger.error(f"Cannot read match file: {e}")
            return 1

        try:
            if self.args.output:
                with open(self.args.output, 'w', encoding='utf-8') as f:
                    count = export_pairs(lines, f, include_similar=include_similar)
                self.logger.info(f"Wrote {count:,} pairs to {self.args.output}")
            else:
                export_pairs(lines, sys.stdout, include_similar=include_similar)
        except OSError as e:
            self.logger.error(f"Cannot write JSON output: {e}")
            return 1

        return 0


__all__ = ['CLIOrchestrator', 'setup_logging']
