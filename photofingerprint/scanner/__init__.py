"""
Scanner package for Photo Fingerprint.

Provides concurrent directory traversal, the fingerprint pipelines and the
in-memory fingerprint store.

Public API:
- is_supported_image: Decide by extension whether a path is an image
- DirectoryWalker: Background directory traversal with a shared queue
- FingerprintStore: Loaded fingerprints, scanned linearly against probes
- generate_fingerprint, find_duplicates, extract_metadata: Mode handlers
- consume: The worker loop shared by all modes
- run_workers, dispatch: Worker pool orchestration
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .file_discovery import is_supported_image
from .walker import DirectoryWalker
from .backend import (
    LoadResult,
    load_image,
    normalize_image,
    write_fingerprint,
    read_comment,
    read_capture_time,
    to_pixels,
    distortion,
)
from .store import FingerprintStore
from .pipeline import consume, generate_fingerprint, find_duplicates, extract_metadata
from .parallel import run_workers, dispatch

from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    # File discovery
    'is_supported_image',
    'DirectoryWalker',
    # Image backend
    'LoadResult',
    'load_image',
    'normalize_image',
    'write_fingerprint',
    'read_comment',
    'read_capture_time',
    'to_pixels',
    'distortion',
    # Fingerprints and pipelines
    'FingerprintStore',
    'consume',
    'generate_fingerprint',
    'find_duplicates',
    'extract_metadata',
    'run_workers',
    'dispatch',
    # Feature detection
    'has_heif_support',
]
