"""
File discovery module for the scanner package.

Decides which discovered paths name a supported image. Purely suffix based;
the filesystem is never touched.
"""

from __future__ import annotations

from pathlib import Path

from ..config import IMAGE_EXTENSIONS, HEIF_EXTENSIONS
from .dependencies import HAS_HEIF_SUPPORT


def supported_extensions() -> set[str]:
    """Extensions that can be decoded with the installed plugins."""
    if HAS_HEIF_SUPPORT:
        return set(IMAGE_EXTENSIONS)
    return {ext for ext in IMAGE_EXTENSIONS if ext not in HEIF_EXTENSIONS}


_SUPPORTED = frozenset(supported_extensions())


def is_supported_image(path: str | Path) -> bool:
    """
    Check whether a path names a supported image, by extension.

    Args:
        path: Filesystem path (need not exist)

    Returns:
        True if the lower-cased suffix is a supported image extension

    Examples:
        >>> is_supported_image('/photos/IMG_0001.JPG')
        True
        >>> is_supported_image('/photos/notes.txt')
        False
    """
    return Path(path).suffix.lower() in _SUPPORTED


__all__ = ['is_supported_image', 'supported_extensions']
