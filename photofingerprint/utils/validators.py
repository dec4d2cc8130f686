"""
Input validation for Photo Fingerprint.

Each validator returns (is_valid, error_message) so the CLI can report every
startup problem before any traversal starts.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..config import MAX_FUZZ
from ..models import WorkerMode


def validate_directory(directory: Optional[str | Path]) -> tuple[bool, str]:
    """
    Validate that a directory exists and is readable.

    Args:
        directory: Directory path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_directory('/nonexistent/directory')
        (False, '/nonexistent/directory is not a directory')
    """
    if directory is None or str(directory) == "":
        return False, "Directory path is required"

    directory = str(directory)
    if not os.path.isdir(directory):
        return False, f"{directory} is not a directory"

    if not os.access(directory, os.R_OK):
        return False, f"Cannot read directory (permission denied): {directory}"

    return True, ""


def validate_thread_count(threads) -> tuple[bool, str]:
    """
    Validate the worker thread count.

    Examples:
        >>> validate_thread_count(0)
        (False, 'Thread count must be at least 1')
    """
    try:
        threads = int(threads)
    except (ValueError, TypeError):
        return False, "Thread count must be an integer"
    if threads < 1:
        return False, "Thread count must be at least 1"
    return True, ""


def validate_fuzz(fuzz) -> tuple[bool, str]:
    """Validate the fuzz tolerance (0-255)."""
    try:
        fuzz = float(fuzz)
    except (ValueError, TypeError):
        return False, "Fuzz must be a number"
    if not 0 <= fuzz <= MAX_FUZZ:
        return False, f"Fuzz must be between 0 and {MAX_FUZZ}"
    return True, ""


def validate_mode_directories(
    mode: WorkerMode,
    source: Optional[Path],
    destination: Optional[Path],
) -> tuple[bool, str]:
    """
    Validate the directories a mode requires.

    Generate and find-duplicates need both a source and a destination;
    metadata extraction needs only the source.
    """
    if mode in (WorkerMode.GENERATE, WorkerMode.FIND_DUPLICATES):
        if source is None or destination is None:
            return False, f"{mode.value} requires both -s and -d directories"
        for directory in (source, destination):
            is_valid, error = validate_directory(directory)
            if not is_valid:
                return False, error
        return True, ""

    if source is None:
        return False, f"{mode.value} requires a -s directory"
    return validate_directory(source)


__all__ = [
    'validate_directory',
    'validate_thread_count',
    'validate_fuzz',
    'validate_mode_directories',
]
