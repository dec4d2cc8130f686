"""
Image backend for the scanner package.

Wraps Pillow and numpy behind the handful of operations the pipelines need:
load, normalize to the fingerprint spec, read/write the comment attribute,
read the capture timestamp, and score the distortion between two images.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import (
    FINGERPRINT_SIZE,
    FINGERPRINT_MODE,
    FINGERPRINT_FORMAT,
    FINGERPRINT_COMPRESSION,
    FINGERPRINT_EXTENSION,
    EXIF_IFD_TAG,
    EXIF_DATETIME_ORIGINAL,
)
from .dependencies import Image, np, _logger

# TIFF ImageDescription tag, where fingerprints keep their source path
TIFF_IMAGE_DESCRIPTION = 270

RESAMPLE_FILTER = Image.Resampling.LANCZOS


@dataclass
class LoadResult:
    """
    Outcome of loading one image.

    Exactly one of image/error is set. Handlers check ok and log the error
    instead of relying on exceptions.
    """
    path: str
    image: Optional[Image.Image] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.image is not None and self.error is None


def load_image(filepath: str | Path) -> LoadResult:
    """
    Load an image fully into memory.

    Args:
        filepath: Path to the image file

    Returns:
        LoadResult with the decoded image, or with an error message for
        missing, unreadable, corrupt or unsupported files
    """
    filepath = str(filepath)
    try:
        with Image.open(filepath) as img:
            # Force decode so truncated files fail here, not later
            img.load()
            return LoadResult(path=filepath, image=img)
    except Image.UnidentifiedImageError as e:
        return LoadResult(path=filepath, error=f"Not a valid image file: {e}")
    except Exception as e:
        # Corrupt files surface as anything from OSError to struct.error
        return LoadResult(path=filepath, error=f"Failed to open image: {e}")


def normalize_image(img: Image.Image) -> Image.Image:
    """
    Bring an image to the fingerprint spec.

    Converts to 8-bit RGB and resizes to exactly FINGERPRINT_SIZE. The same
    input always yields the same pixels, so fingerprints and probes compare
    like for like.

    Args:
        img: Decoded image in any mode

    Returns:
        New FINGERPRINT_SIZE RGB image
    """
    if img.mode != FINGERPRINT_MODE:
        img = img.convert(FINGERPRINT_MODE)
    return img.resize(FINGERPRINT_SIZE, RESAMPLE_FILTER)


def fingerprint_path(source: str | Path, destination: str | Path) -> Path:
    """Fingerprint file for a source image: <destination>/<stem>.tif"""
    return Path(destination) / Path(source).with_suffix(FINGERPRINT_EXTENSION).name


def write_fingerprint(img: Image.Image, output_path: str | Path, comment: str) -> None:
    """
    Write a normalized image as an uncompressed TIFF fingerprint.

    Args:
        img: Normalized image
        output_path: Destination file
        comment: Stored in the ImageDescription tag (the source path)

    Raises:
        OSError: If the file cannot be written
    """
    img.save(
        output_path,
        format=FINGERPRINT_FORMAT,
        compression=FINGERPRINT_COMPRESSION,
        description=comment,
    )


def read_comment(img: Image.Image) -> str:
    """
    Read the comment attribute of an image.

    Checks the TIFF ImageDescription tag first, then the 'comment' info key
    that Pillow fills for PNG text chunks and JPEG COM segments.

    Returns:
        The comment, or an empty string
    """
    tags = getattr(img, 'tag_v2', None)
    if tags is not None:
        description = tags.get(TIFF_IMAGE_DESCRIPTION)
        if description:
            return str(description).strip('\x00')

    comment = img.info.get('comment')
    if isinstance(comment, bytes):
        comment = comment.decode('utf-8', errors='replace')
    return comment or ""


def read_capture_time(img: Image.Image) -> Optional[str]:
    """
    Read the EXIF DateTimeOriginal value, in its raw 'YYYY:MM:DD HH:MM:SS' form.

    Looks in the Exif sub-IFD, where cameras write it, then in the base IFD.

    Returns:
        The raw timestamp string, or None if absent
    """
    exif = img.getexif()
    value = exif.get_ifd(EXIF_IFD_TAG).get(EXIF_DATETIME_ORIGINAL)
    if value is None:
        value = exif.get(EXIF_DATETIME_ORIGINAL)
    if isinstance(value, bytes):
        value = value.decode('ascii', errors='replace')
    if not value:
        return None
    return str(value).strip('\x00 ')


def to_pixels(img: Image.Image):
    """
    Convert a normalized image to a compact pixel array.

    Pixels stay 8-bit; distortion() widens them to float32 while scoring.

    Returns:
        Read-only uint8 numpy array of shape (height, width, 3)
    """
    pixels = np.array(img, dtype=np.uint8)
    if pixels.ndim == 2:
        pixels = np.repeat(pixels[:, :, np.newaxis], 3, axis=2)
    pixels.flags.writeable = False
    return pixels


def distortion(a, b, fuzz: float = 0) -> int:
    """
    Count the pixels that differ between two same-shape images.

    A pixel differs when the RMS of its channel differences exceeds fuzz,
    so fuzz absorbs small colour and compression shifts. The score ranges
    from 0 (identical) to width * height (every pixel differs).

    Args:
        a: Pixel array (height, width, channels), as from to_pixels()
        b: Pixel array of the same shape
        fuzz: Tolerance on the 0-255 channel scale

    Returns:
        Number of differing pixels

    Raises:
        ValueError: If the shapes differ
    """
    if a.shape != b.shape:
        raise ValueError(f"Cannot compare images of shape {a.shape} and {b.shape}")

    diff = a.astype(np.float32) - b.astype(np.float32)
    per_pixel = np.sqrt(np.mean(diff * diff, axis=-1))
    return int(np.count_nonzero(per_pixel > fuzz))


__all__ = [
    'LoadResult',
    'load_image',
    'normalize_image',
    'fingerprint_path',
    'write_fingerprint',
    'read_comment',
    'read_capture_time',
    'to_pixels',
    'distortion',
]
