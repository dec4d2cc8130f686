"""
Data models for Photo Fingerprint.

Contains dataclasses for worker configuration, loaded fingerprints, match
results and per-run statistics.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from .config import (
    DEFAULT_FUZZ,
    LOW_DISTORTION_THRESHOLD,
    HIGH_DISTORTION_THRESHOLD,
    POLL_INTERVAL,
)


class WorkerMode(Enum):
    """The three pipeline operations a worker pool can run."""
    GENERATE = "generate"
    FIND_DUPLICATES = "find-duplicates"
    EXTRACT_METADATA = "extract-metadata"


class MatchType(Enum):
    """Classification of a (probe, fingerprint) distortion score."""
    IDENTICAL = "identical"
    SIMILAR = "similar"
    NO_MATCH = "none"


def classify(
    score: float,
    low: float = LOW_DISTORTION_THRESHOLD,
    high: float = HIGH_DISTORTION_THRESHOLD,
) -> MatchType:
    """
    Classify a distortion score against the two ordered thresholds.

    Args:
        score: Distortion score (0 means identical)
        low: Scores strictly below are identical
        high: Scores strictly below (and >= low) are similar

    Returns:
        MatchType for the score

    Examples:
        >>> classify(0)
        <MatchType.IDENTICAL: 'identical'>
        >>> classify(HIGH_DISTORTION_THRESHOLD)
        <MatchType.NO_MATCH: 'none'>
    """
    if score < low:
        return MatchType.IDENTICAL
    if score < high:
        return MatchType.SIMILAR
    return MatchType.NO_MATCH


@dataclass(frozen=True)
class WorkerOptions:
    """
    Configuration for one run, shared read-only by every worker.

    Attributes:
        mode: Pipeline operation to run
        num_threads: Worker pool size (>= 1)
        fuzz: Fuzz tolerance for distortion scoring
        source_directory: Images to fingerprint (generate), fingerprint
            directory (find duplicates) or images to inspect (metadata)
        destination_directory: Fingerprint output (generate) or the
            directory searched for duplicates (find duplicates)
        low_threshold: Identical/similar boundary
        high_threshold: Similar/no-match boundary
        poll_interval: Idle wait before asking the walker again
        show_progress: Show preload progress on stdout
    """
    mode: WorkerMode
    num_threads: int = 1
    fuzz: float = DEFAULT_FUZZ
    source_directory: Optional[Path] = None
    destination_directory: Optional[Path] = None
    low_threshold: float = LOW_DISTORTION_THRESHOLD
    high_threshold: float = HIGH_DISTORTION_THRESHOLD
    poll_interval: float = POLL_INTERVAL
    show_progress: bool = True

    @property
    def search_directory(self) -> Optional[Path]:
        """The directory the worker pool walks for this mode."""
        if self.mode == WorkerMode.FIND_DUPLICATES:
            return self.destination_directory
        return self.source_directory


@dataclass(frozen=True, eq=False)
class Fingerprint:
    """
    A loaded fingerprint image.

    Attributes:
        path: Fingerprint file on disk
        name: Source path stored in the comment, or the file stem
        pixels: Read-only uint8 array of shape (height, width, 3)
    """
    path: str
    name: str
    pixels: Any

    @property
    def stem(self) -> str:
        return Path(self.path).stem


@dataclass
class MatchResult:
    """A candidate image that matched a fingerprint."""
    candidate: str
    name: str
    score: float
    match_type: MatchType

    def to_line(self) -> str:
        """Render as a tab separated output line (no newline)."""
        if self.match_type == MatchType.IDENTICAL:
            relation = "is identical to"
        elif self.match_type == MatchType.SIMILAR:
            relation = "is similar to"
        else:
            raise ValueError(f"No output line for {self.match_type.name} result")
        return f"{self.candidate}\t{relation}\t{self.name}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'candidate': self.candidate,
            'name': self.name,
            'score': self.score,
            'match_type': self.match_type.value,
        }


@dataclass
class PipelineStats:
    """
    Counters for one worker pool run.

    Workers update these concurrently, so all updates go through increment().

    Attributes:
        attempted: Supported images handed to a mode handler
        processed: Images the handler completed without error
        skipped: Images that failed to load or process
        written: Fingerprint files written (generate)
        matches: Match lines printed (find duplicates)
        extracted: Timestamp lines printed (metadata)
    """
    attempted: int = 0
    processed: int = 0
    skipped: int = 0
    written: int = 0
    matches: int = 0
    extracted: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def increment(self, counter: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + amount)

    def to_dict(self) -> dict:
        return {
            'attempted': self.attempted,
            'processed': self.processed,
            'skipped': self.skipped,
            'written': self.written,
            'matches': self.matches,
            'extracted': self.extracted,
        }
