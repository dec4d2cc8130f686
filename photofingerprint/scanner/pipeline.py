"""
Pipeline operations for the scanner package.

Every worker thread runs consume() against a shared DirectoryWalker and
hands each supported image to one of three handlers:

- generate_fingerprint: write a normalized, tagged fingerprint file
- find_duplicates: score the image against a loaded FingerprintStore
- extract_metadata: print the EXIF capture time

Handlers deal with their own per-file failures; one bad file never stops
the batch.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from ..config import POLL_INTERVAL, LOW_DISTORTION_THRESHOLD, HIGH_DISTORTION_THRESHOLD
from ..models import MatchResult, PipelineStats
from ..utils.formatters import convert_exif_timestamp, format_metadata_line
from .backend import (
    load_image,
    normalize_image,
    fingerprint_path,
    write_fingerprint,
    read_capture_time,
    to_pixels,
)
from .dependencies import _logger
from .file_discovery import is_supported_image
from .store import FingerprintStore
from .walker import DirectoryWalker


def emit(line: str) -> None:
    """Write one output line to stdout in a single write."""
    print(line + "\n", end="", flush=True)


def consume(
    walker: DirectoryWalker,
    handler: Callable[[Path], None],
    poll_interval: float = POLL_INTERVAL,
    stats: Optional[PipelineStats] = None,
) -> None:
    """
    Pull paths from the walker until it reports completion.

    Unsupported paths are dropped. When the queue is empty but traversal is
    still running, the worker waits up to poll_interval and asks again.

    Args:
        walker: Started walker shared by all workers
        handler: Mode handler called with each supported image path
        poll_interval: Longest idle wait between pulls
        stats: Optional counters shared by the pool
    """
    while True:
        path, done = walker.get_next(timeout=poll_interval)

        if path is None:
            if done:
                break
            continue

        if not is_supported_image(path):
            continue

        if stats is not None:
            stats.increment('attempted')
        try:
            handler(path)
        except Exception as e:
            # Handlers catch expected failures themselves; anything else is
            # still confined to this file
            _logger.error(f"skipping {path} unexpected error: {e}")
            if stats is not None:
                stats.increment('skipped')


def generate_fingerprint(
    path: Path,
    destination: str | Path,
    stats: Optional[PipelineStats] = None,
) -> Optional[Path]:
    """
    Write the fingerprint for one source image.

    The source path is printed as progress and stored in the fingerprint's
    comment so later matches can name the original.

    Args:
        path: Source image
        destination: Fingerprint directory
        stats: Optional counters

    Returns:
        Path of the written fingerprint, or None if the file was skipped
    """
    source = str(path)
    emit(source)

    result = load_image(path)
    if not result.ok:
        _logger.warning(f"skipping {source} {result.error}")
        if stats is not None:
            stats.increment('skipped')
        return None

    output_path = fingerprint_path(path, destination)
    try:
        image = normalize_image(result.image)
        write_fingerprint(image, output_path, comment=source)
    except Exception as e:
        # Seen: unsupported modes on convert, encoder errors, full disks
        _logger.warning(f"skipping {source} {e}")
        if stats is not None:
            stats.increment('skipped')
        return None

    if stats is not None:
        stats.increment('processed')
        stats.increment('written')
    return output_path


def find_duplicates(
    path: Path,
    store: FingerprintStore,
    fuzz: float,
    low: float = LOW_DISTORTION_THRESHOLD,
    high: float = HIGH_DISTORTION_THRESHOLD,
    stats: Optional[PipelineStats] = None,
) -> list[MatchResult]:
    """
    Compare one image against every fingerprint and print the matches.

    The probe is normalized exactly like a fingerprint. Unreadable probes are
    skipped quietly since large collections contain many of them.

    Returns:
        The identical and similar matches that were printed
    """
    candidate = str(path)
    result = load_image(path)
    if not result.ok:
        _logger.debug(f"skipping {candidate} {result.error}")
        if stats is not None:
            stats.increment('skipped')
        return []

    pixels = to_pixels(normalize_image(result.image))
    matches = store.find_matches(pixels, candidate, fuzz, low, high)
    for match in matches:
        emit(match.to_line())

    if stats is not None:
        stats.increment('processed')
        if matches:
            stats.increment('matches', len(matches))
    return matches


def extract_metadata(path: Path, stats: Optional[PipelineStats] = None) -> Optional[str]:
    """
    Print the capture time of one image, if it has one.

    Files without a DateTimeOriginal value, unreadable files and malformed
    values produce no output; most non-camera files lack the tag.

    Returns:
        The printed line, or None
    """
    filename = str(path)
    result = load_image(path)
    if not result.ok:
        _logger.debug(f"no metadata for {filename}: {result.error}")
        if stats is not None:
            stats.increment('skipped')
        return None

    try:
        created_at = read_capture_time(result.image)
        if created_at is None:
            return None
        timestamp = convert_exif_timestamp(created_at)
    except Exception as e:
        _logger.debug(f"no metadata for {filename}: {e}")
        return None
    finally:
        if stats is not None:
            stats.increment('processed')

    line = format_metadata_line(filename, timestamp)
    emit(line)
    if stats is not None:
        stats.increment('extracted')
    return line


__all__ = [
    'emit',
    'consume',
    'generate_fingerprint',
    'find_duplicates',
    'extract_metadata',
]
