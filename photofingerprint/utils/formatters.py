"""
Formatting utilities for Photo Fingerprint.

Provides output line formatting and timestamp conversion.
"""

from __future__ import annotations

from datetime import datetime

from ..config import EXIF_TIMESTAMP_FORMAT, OUTPUT_TIMESTAMP_FORMAT


def format_number(n: int) -> str:
    """
    Format large numbers with commas for readability.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
    """
    return f"{n:,}"


def convert_exif_timestamp(timestamp: str) -> str:
    """
    Convert an EXIF timestamp to an ISO-like one.

    Args:
        timestamp: EXIF value, 'YYYY:MM:DD HH:MM:SS'

    Returns:
        'YYYY-MM-DD HH:MM:SS'

    Raises:
        ValueError: If the value does not parse

    Examples:
        >>> convert_exif_timestamp('2021:05:04 10:00:00')
        '2021-05-04 10:00:00'
    """
    parsed = datetime.strptime(timestamp.strip(), EXIF_TIMESTAMP_FORMAT)
    return parsed.strftime(OUTPUT_TIMESTAMP_FORMAT)


def format_metadata_line(path: str, timestamp: str) -> str:
    """Metadata output line: '<path>\\t<timestamp>'"""
    return f"{path}\t{timestamp}"


__all__ = ['format_number', 'convert_exif_timestamp', 'format_metadata_line']
