"""Shared pytest fixtures for SocialShots tests."""
import io

import pytest
from PIL import Image

from socialshots.codec import RasterImage
from socialshots.jobs import SourceImage


def make_image_bytes(width, height, color=(200, 30, 30), fmt="PNG", mode="RGB"):
    """Encode a solid-color image in memory."""
    img = Image.new(mode, (width, height), color)
    buf = io.BytesIO()
    img.save(buf, fmt)
    return buf.getvalue()


def make_source(name="photo.png", width=64, height=32, color=(200, 30, 30), fmt="PNG"):
    mime = {"PNG": "image/png", "JPEG": "image/jpeg", "WEBP": "image/webp"}[fmt]
    return SourceImage(name, make_image_bytes(width, height, color, fmt), mime)


def open_bytes(data):
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


@pytest.fixture
def wide_raster():
    """400x200 raster, left half red, right half blue."""
    img = Image.new("RGBA", (400, 200), (255, 0, 0, 255))
    img.paste((0, 0, 255, 255), (200, 0, 400, 200))
    return RasterImage.from_pil(img)


@pytest.fixture
def square_raster():
    return RasterImage.from_pil(Image.new("RGB", (50, 50), (0, 128, 0)))


@pytest.fixture
def corrupt_source():
    return SourceImage("broken.png", b"\x89PNG\r\n\x1a\nnot really a png", "image/png")


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Isolated config location with SOCIALSHOTS_* env vars cleared."""
    for var in ("SOCIALSHOTS_BACKGROUND", "SOCIALSHOTS_WORKERS",
                "SOCIALSHOTS_RESIZE_QUALITY", "SOCIALSHOTS_OUTPUT_DIR"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path / "config.yaml"
