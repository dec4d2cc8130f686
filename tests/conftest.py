"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

import numpy as np
from PIL import Image


def make_gradient(width=200, height=200, channel=0):
    """RGB image with a gradient along one axis in a single channel."""
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    if channel == 0:
        ramp = np.linspace(0, 255, width, dtype=np.uint8)
        pixels[:, :, 0] = ramp[np.newaxis, :]
    else:
        ramp = np.linspace(0, 255, height, dtype=np.uint8)
        pixels[:, :, channel] = ramp[:, np.newaxis]
    return Image.fromarray(pixels, 'RGB')


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.photofingerprint/config.json."""
    from photofingerprint.user_config import get_user_config

    monkeypatch.setenv('PHOTOFINGERPRINT_CONFIG_DIR', str(tmp_path / 'config'))
    for var in ('PHOTOFINGERPRINT_THREADS', 'PHOTOFINGERPRINT_FUZZ',
                'PHOTOFINGERPRINT_POLL_INTERVAL', 'PHOTOFINGERPRINT_LOW_THRESHOLD',
                'PHOTOFINGERPRINT_HIGH_THRESHOLD', 'PHOTOFINGERPRINT_MAX_PIXELS'):
        monkeypatch.delenv(var, raising=False)
    get_user_config().reload()
    yield
    get_user_config().reload()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def photo_dir(temp_dir):
    """
    Directory 'A' with two photos and a text file.

    Returns:
        Path to the directory, containing:
        - photo1.jpg (horizontal red gradient)
        - photo2.jpg (vertical green gradient)
        - notes.txt (not an image)
    """
    source = temp_dir / "A"
    source.mkdir()

    make_gradient(channel=0).save(source / "photo1.jpg", 'JPEG', quality=95)
    make_gradient(channel=1).save(source / "photo2.jpg", 'JPEG', quality=95)
    (source / "notes.txt").write_text("not an image")

    return source


@pytest.fixture
def fingerprint_dir(temp_dir):
    """Empty directory 'B' for fingerprints."""
    destination = temp_dir / "B"
    destination.mkdir()
    return destination


@pytest.fixture
def search_dir(temp_dir, photo_dir):
    """
    Directory 'C' to search for duplicates.

    Returns:
        Path to the directory, containing:
        - dup.jpg (byte-identical copy of photo1.jpg)
        - edited.png (photo1.jpg with a white square pasted in)
        - unrelated.png (solid blue)
    """
    target = temp_dir / "C"
    target.mkdir()

    shutil.copyfile(photo_dir / "photo1.jpg", target / "dup.jpg")

    with Image.open(photo_dir / "photo1.jpg") as img:
        edited = img.convert('RGB')
    edited.paste((255, 255, 255), (80, 80, 120, 120))
    edited.save(target / "edited.png", 'PNG')

    Image.new('RGB', (200, 200), color='blue').save(target / "unrelated.png", 'PNG')

    return target


@pytest.fixture
def exif_photo(temp_dir):
    """JPEG carrying an EXIF DateTimeOriginal of 2021:05:04 10:00:00."""
    path = temp_dir / "dated.jpg"
    exif = Image.Exif()
    exif[0x9003] = "2021:05:04 10:00:00"
    make_gradient(channel=2).save(path, 'JPEG', exif=exif.tobytes())
    return path


@pytest.fixture
def camera_photo(temp_dir):
    """JPEG with DateTimeOriginal in the Exif sub-IFD, as cameras write it."""
    path = temp_dir / "camera.jpg"
    exif = Image.Exif()
    exif[0x0110] = "Test Camera"
    exif[0x8769] = {0x9003: "2019:12:31 23:59:58"}
    make_gradient(channel=1).save(path, 'JPEG', exif=exif.tobytes())
    return path


@pytest.fixture
def corrupt_image(temp_dir):
    """A .jpg file that is not an image."""
    path = temp_dir / "broken.jpg"
    path.write_bytes(b"this is not a jpeg")
    return path
