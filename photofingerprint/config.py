"""
Configuration constants for Photo Fingerprint.

This module contains all configurable settings including:
- Supported image extensions
- The fingerprint specification (size, file format)
- Distortion thresholds used to classify matches
"""

import os

# Image extensions Pillow can decode (HEIC/HEIF need pillow-heif)
IMAGE_EXTENSIONS = {
    # Common formats
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tiff', '.tif',
    # Other formats
    '.heic', '.heif',
    '.pbm', '.pgm', '.ppm', '.pnm',
    '.tga', '.jp2', '.j2k', '.pcx', '.sgi',
}

HEIF_EXTENSIONS = {'.heic', '.heif'}

# Fingerprint specification
# Every fingerprint and every probe image is resized to exactly this size
# (aspect ratio is not preserved) before comparison.
FINGERPRINT_SIZE = (100, 100)
FINGERPRINT_MODE = 'RGB'

# Fingerprints are written as uncompressed TIFF
FINGERPRINT_EXTENSION = '.tif'
FINGERPRINT_FORMAT = 'TIFF'
FINGERPRINT_COMPRESSION = 'raw'

# Distortion is the count of pixels differing by more than the fuzz
# tolerance, so it ranges 0-10000 for a 100x100 fingerprint.
# These thresholds only hold for FINGERPRINT_SIZE above.
LOW_DISTORTION_THRESHOLD = 100    # below: identical
HIGH_DISTORTION_THRESHOLD = 1000  # below: similar, at or above: no match

# Default fuzz tolerance (per-pixel RMS channel difference, 0-255 scale)
DEFAULT_FUZZ = 10
MAX_FUZZ = 255

# How long an idle worker waits for the walker before retrying (seconds)
POLL_INTERVAL = 1.0

# EXIF tags used for metadata extraction
EXIF_IFD_TAG = 0x8769
EXIF_DATETIME_ORIGINAL = 0x9003  # 36867
EXIF_TIMESTAMP_FORMAT = '%Y:%m:%d %H:%M:%S'
OUTPUT_TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

# Decompression bomb limit for large scans and panoramas
MAX_IMAGE_PIXELS = 500_000_000


def default_thread_count() -> int:
    """Detected hardware concurrency, at least 1."""
    return os.cpu_count() or 1
