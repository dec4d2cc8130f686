"""
Utilities package for Photo Fingerprint.

Provides:
- formatters: Output line and timestamp formatting
- validators: Startup argument validation
- exporters: Conversion of match output to the review tool's JSON
"""

from __future__ import annotations

from . import formatters
from . import validators
from . import exporters

from .formatters import format_number, convert_exif_timestamp, format_metadata_line
from .validators import (
    validate_directory,
    validate_thread_count,
    validate_fuzz,
    validate_mode_directories,
)
from .exporters import parse_match_line, collect_pairs, export_pairs

__all__ = [
    # Submodules
    'formatters',
    'validators',
    'exporters',
    # Formatters
    'format_number',
    'convert_exif_timestamp',
    'format_metadata_line',
    # Validators
    'validate_directory',
    'validate_thread_count',
    'validate_fuzz',
    'validate_mode_directories',
    # Exporters
    'parse_match_line',
    'collect_pairs',
    'export_pairs',
]
