"""
Photo Fingerprint
=================
Find near-duplicate photographs across large, unsorted collections.

Features:
- Small uncompressed fingerprint images tagged with their source path
- Fuzz-tolerant pixel distortion matching (identical / similar)
- EXIF capture time extraction
- Background directory traversal feeding a pool of worker threads
- JSON export of match pairs for manual review
"""

__version__ = "1.0.0"
__author__ = "Zedidence"

from .models import (
    WorkerMode,
    WorkerOptions,
    Fingerprint,
    MatchType,
    MatchResult,
    PipelineStats,
    classify,
)
from .config import (
    IMAGE_EXTENSIONS,
    FINGERPRINT_SIZE,
    FINGERPRINT_EXTENSION,
    LOW_DISTORTION_THRESHOLD,
    HIGH_DISTORTION_THRESHOLD,
)
from .scanner import (
    is_supported_image,
    DirectoryWalker,
    FingerprintStore,
    generate_fingerprint,
    find_duplicates,
    extract_metadata,
    run_workers,
    dispatch,
)

__all__ = [
    "WorkerMode",
    "WorkerOptions",
    "Fingerprint",
    "MatchType",
    "MatchResult",
    "PipelineStats",
    "classify",
    "IMAGE_EXTENSIONS",
    "FINGERPRINT_SIZE",
    "FINGERPRINT_EXTENSION",
    "LOW_DISTORTION_THRESHOLD",
    "HIGH_DISTORTION_THRESHOLD",
    "is_supported_image",
    "DirectoryWalker",
    "FingerprintStore",
    "generate_fingerprint",
    "find_duplicates",
    "extract_metadata",
    "run_workers",
    "dispatch",
]
