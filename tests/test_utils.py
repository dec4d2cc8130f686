"""
Unit tests for formatters, validators, exporters and user configuration.
"""

import io
import json

import pytest

from photofingerprint.config import (
    HIGH_DISTORTION_THRESHOLD,
    LOW_DISTORTION_THRESHOLD,
    MAX_IMAGE_PIXELS,
)
from photofingerprint.models import MatchType, WorkerMode
from photofingerprint.user_config import get_user_config
from photofingerprint.utils import (
    collect_pairs,
    convert_exif_timestamp,
    export_pairs,
    format_metadata_line,
    format_number,
    parse_match_line,
    validate_directory,
    validate_fuzz,
    validate_mode_directories,
    validate_thread_count,
)


class TestFormatters:
    """Test formatting helpers."""

    def test_convert_exif_timestamp(self):
        assert convert_exif_timestamp("2021:05:04 10:00:00") == "2021-05-04 10:00:00"

    def test_convert_malformed(self):
        with pytest.raises(ValueError):
            convert_exif_timestamp("    :  :     :  :  ")

    def test_metadata_line(self):
        assert format_metadata_line("/a/b.jpg", "2021-05-04 10:00:00") == "/a/b.jpg\t2021-05-04 10:00:00"

    def test_format_number(self):
        assert format_number(1234567) == "1,234,567"


class TestValidators:
    """Test startup validators."""

    def test_directory(self, temp_dir):
        assert validate_directory(temp_dir) == (True, "")
        assert not validate_directory(temp_dir / "missing")[0]
        assert not validate_directory(None)[0]

    def test_file_is_not_directory(self, corrupt_image):
        is_valid, error = validate_directory(corrupt_image)
        assert not is_valid
        assert "is not a directory" in error

    def test_thread_count(self):
        assert validate_thread_count(1) == (True, "")
        assert not validate_thread_count(0)[0]
        assert not validate_thread_count(-4)[0]
        assert not validate_thread_count("many")[0]

    def test_fuzz(self):
        assert validate_fuzz(0)[0]
        assert validate_fuzz(255)[0]
        assert not validate_fuzz(-1)[0]
        assert not validate_fuzz("fuzzy")[0]

    def test_mode_directories(self, temp_dir):
        assert validate_mode_directories(WorkerMode.GENERATE, temp_dir, temp_dir)[0]
        assert not validate_mode_directories(WorkerMode.GENERATE, temp_dir, None)[0]
        assert not validate_mode_directories(WorkerMode.FIND_DUPLICATES, None, temp_dir)[0]
        assert validate_mode_directories(WorkerMode.EXTRACT_METADATA, temp_dir, None)[0]
        assert not validate_mode_directories(WorkerMode.EXTRACT_METADATA, None, None)[0]


class TestExporters:
    """Test match line parsing and JSON export."""

    def test_parse_identical(self):
        assert parse_match_line("/c/dup.jpg\tis identical to\t/a/p.jpg\n") == (
            "/c/dup.jpg", "/a/p.jpg", MatchType.IDENTICAL
        )

    def test_parse_ignores_other_lines(self):
        assert parse_match_line("Loading fingerprints into memory...") is None
        assert parse_match_line("/a/p.jpg\t2021-05-04 10:00:00") is None
        assert parse_match_line("") is None

    def test_reverse_pairs_collapse(self):
        lines = [
            "/x.jpg\tis identical to\t/y.jpg",
            "/y.jpg\tis identical to\t/x.jpg",
            "/x.jpg\tis identical to\t/y.jpg",
        ]
        assert collect_pairs(lines) == [["/x.jpg", "/y.jpg"]]

    def test_self_match_dropped(self):
        assert collect_pairs(["/x.jpg\tis identical to\t/x.jpg"]) == []

    def test_export(self):
        handle = io.StringIO()
        count = export_pairs(["/x.jpg\tis similar to\t/y.jpg"], handle)
        assert count == 1
        assert json.loads(handle.getvalue()) == [["/x.jpg", "/y.jpg"]]


class TestUserConfig:
    """Test layered configuration."""

    def test_defaults(self):
        config = get_user_config()
        assert config.default_threads >= 1
        assert config.default_fuzz == 10
        assert config.low_distortion_threshold < config.high_distortion_threshold

    def test_config_file(self):
        config = get_user_config()
        config.config_dir.mkdir(parents=True, exist_ok=True)
        config.config_file_path.write_text(json.dumps({"default_fuzz": 20}))
        config.reload()

        assert config.default_fuzz == 20

    def test_environment_wins(self, monkeypatch):
        config = get_user_config()
        config.config_dir.mkdir(parents=True, exist_ok=True)
        config.config_file_path.write_text(json.dumps({"default_threads": 2}))
        config.reload()
        monkeypatch.setenv('PHOTOFINGERPRINT_THREADS', '6')

        assert config.default_threads == 6

    def test_create_example_config(self):
        config = get_user_config()
        assert config.create_example_config()
        data = json.loads(config.config_file_path.read_text())
        assert data["default_fuzz"] == 10

    def test_threshold_defaults_match_constants(self):
        config = get_user_config()
        assert config.low_distortion_threshold == LOW_DISTORTION_THRESHOLD
        assert config.high_distortion_threshold == HIGH_DISTORTION_THRESHOLD
        assert config.max_image_pixels == MAX_IMAGE_PIXELS

    def test_threshold_environment(self, monkeypatch):
        monkeypatch.setenv('PHOTOFINGERPRINT_LOW_THRESHOLD', '50')
        monkeypatch.setenv('PHOTOFINGERPRINT_HIGH_THRESHOLD', '500')
        monkeypatch.setenv('PHOTOFINGERPRINT_MAX_PIXELS', '1000')

        config = get_user_config()
        assert config.low_distortion_threshold == 50
        assert config.high_distortion_threshold == 500
        assert config.max_image_pixels == 1000
