"""
Unit tests for the image backend and match classification.
"""

import numpy as np
import pytest
from PIL import Image

from photofingerprint.config import (
    FINGERPRINT_SIZE,
    LOW_DISTORTION_THRESHOLD,
    HIGH_DISTORTION_THRESHOLD,
    EXIF_IFD_TAG,
    EXIF_DATETIME_ORIGINAL,
)
from photofingerprint.models import MatchType, classify
from photofingerprint.scanner import (
    load_image,
    normalize_image,
    write_fingerprint,
    read_comment,
    read_capture_time,
    to_pixels,
    distortion,
)


def solid(color, size=FINGERPRINT_SIZE):
    return to_pixels(Image.new('RGB', size, color=color))


class TestLoadImage:
    """Test load_image result values."""

    def test_valid_image(self, photo_dir):
        result = load_image(photo_dir / "photo1.jpg")
        assert result.ok
        assert result.error is None
        assert result.image.size == (200, 200)

    def test_corrupt_file(self, corrupt_image):
        result = load_image(corrupt_image)
        assert not result.ok
        assert result.image is None
        assert result.error

    def test_missing_file(self, temp_dir):
        result = load_image(temp_dir / "missing.jpg")
        assert not result.ok
        assert result.error


class TestNormalizeImage:
    """Test normalization to the fingerprint spec."""

    def test_size_and_mode(self):
        img = Image.new('L', (640, 480), color=128)
        normalized = normalize_image(img)
        assert normalized.size == FINGERPRINT_SIZE
        assert normalized.mode == 'RGB'

    def test_deterministic(self, photo_dir):
        first = normalize_image(load_image(photo_dir / "photo1.jpg").image)
        second = normalize_image(load_image(photo_dir / "photo1.jpg").image)
        assert np.array_equal(to_pixels(first), to_pixels(second))


class TestComment:
    """Test the comment attribute round trip."""

    def test_fingerprint_comment(self, temp_dir):
        output = temp_dir / "fp.tif"
        write_fingerprint(Image.new('RGB', FINGERPRINT_SIZE), output, comment="/photos/a.jpg")

        loaded = load_image(output)
        assert loaded.ok
        assert read_comment(loaded.image) == "/photos/a.jpg"

    def test_fingerprint_is_uncompressed(self, temp_dir):
        output = temp_dir / "fp.tif"
        write_fingerprint(Image.new('RGB', FINGERPRINT_SIZE), output, comment="x")

        with Image.open(output) as img:
            assert img.info.get('compression') == 'raw'

    def test_missing_comment(self, temp_dir):
        output = temp_dir / "plain.png"
        Image.new('RGB', (10, 10)).save(output)
        assert read_comment(load_image(output).image) == ""


class TestCaptureTime:
    """Test EXIF DateTimeOriginal lookup."""

    def test_present(self, exif_photo):
        assert read_capture_time(load_image(exif_photo).image) == "2021:05:04 10:00:00"

    def test_exif_sub_ifd(self, camera_photo):
        img = load_image(camera_photo).image
        assert EXIF_DATETIME_ORIGINAL not in img.getexif()
        assert read_capture_time(img) == "2019:12:31 23:59:58"

    def test_sub_ifd_preferred_over_base(self):
        exif = Image.Exif()
        exif[EXIF_DATETIME_ORIGINAL] = "2000:01:01 00:00:00"
        exif[EXIF_IFD_TAG] = {EXIF_DATETIME_ORIGINAL: "2019:12:31 23:59:58"}
        img = Image.new('RGB', (8, 8))
        img.info['exif'] = exif.tobytes()

        assert read_capture_time(img) == "2019:12:31 23:59:58"

    def test_absent(self, photo_dir):
        assert read_capture_time(load_image(photo_dir / "photo1.jpg").image) is None


class TestDistortion:
    """Test the pixel distortion score."""

    def test_identical_is_zero(self):
        assert distortion(solid('red'), solid('red'), fuzz=0) == 0

    def test_bounded_by_pixel_count(self):
        width, height = FINGERPRINT_SIZE
        assert distortion(solid('black'), solid('white'), fuzz=10) == width * height

    def test_fuzz_absorbs_small_shifts(self):
        a = solid((100, 100, 100))
        b = solid((105, 105, 105))
        assert distortion(a, b, fuzz=10) == 0
        assert distortion(a, b, fuzz=0) == FINGERPRINT_SIZE[0] * FINGERPRINT_SIZE[1]

    def test_counts_changed_pixels(self):
        base = Image.new('RGB', FINGERPRINT_SIZE, color='black')
        changed = base.copy()
        changed.paste((255, 255, 255), (0, 0, 10, 10))
        assert distortion(to_pixels(base), to_pixels(changed), fuzz=10) == 100

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            distortion(solid('red'), solid('red', size=(50, 50)))

    def test_pixels_stay_eight_bit(self):
        pixels = solid('red')
        width, height = FINGERPRINT_SIZE
        assert pixels.dtype == np.uint8
        assert pixels.nbytes == width * height * 3

    def test_no_wraparound_on_uint8(self):
        # 0 - 255 must score as a full difference, not wrap to 1
        assert distortion(solid('black'), solid('white'), fuzz=254) == FINGERPRINT_SIZE[0] * FINGERPRINT_SIZE[1]

    def test_grayscale_pixels_have_three_channels(self):
        pixels = to_pixels(Image.new('L', (4, 4)))
        assert pixels.shape == (4, 4, 3)
        assert not pixels.flags.writeable


class TestClassify:
    """Test the threshold policy."""

    def test_zero_is_identical(self):
        assert classify(0) == MatchType.IDENTICAL

    def test_boundaries(self):
        assert classify(LOW_DISTORTION_THRESHOLD - 1) == MatchType.IDENTICAL
        assert classify(LOW_DISTORTION_THRESHOLD) == MatchType.SIMILAR
        assert classify(HIGH_DISTORTION_THRESHOLD - 1) == MatchType.SIMILAR
        assert classify(HIGH_DISTORTION_THRESHOLD) == MatchType.NO_MATCH

    def test_custom_thresholds(self):
        assert classify(5, low=10, high=20) == MatchType.IDENTICAL
        assert classify(15, low=10, high=20) == MatchType.SIMILAR
        assert classify(25, low=10, high=20) == MatchType.NO_MATCH
