"""Shared fixtures for core unit tests"""

import io
from pathlib import Path

import pytest
from PIL import Image

from sitecontent.core.images import Dimensions, UploadedFile


FIXTURES = Path(__file__).parent.parent.parent / "fixtures"

VALID_GPX = """\
<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="Test">
  <trk>
    <name>Test Track</name>
    <trkseg>
      <trkpt lat="51.5074" lon="-0.1278"><ele>10</ele></trkpt>
      <trkpt lat="51.5075" lon="-0.1279"><ele>11</ele></trkpt>
      <trkpt lat="51.5076" lon="-0.1280"><ele>12</ele></trkpt>
    </trkseg>
  </trk>
</gpx>
"""

EMPTY_GPX = """\
<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="Test">
  <metadata>
    <name>Empty GPX</name>
  </metadata>
</gpx>
"""


class FakeImage:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height


class FakeCodec:
    """ImageCodec stand-in: payload bytes are b'<width>x<height>'."""

    def __init__(self):
        self.resized_to: list[Dimensions] = []

    def decode(self, data: bytes) -> FakeImage:
        w, _, h = data.decode().partition("x")
        return FakeImage(int(w), int(h))

    def size(self, image: FakeImage) -> tuple[int, int]:
        return image.width, image.height

    def resize(self, image: FakeImage, dims: Dimensions) -> FakeImage:
        self.resized_to.append(dims)
        return FakeImage(*dims)

    def encode_jpeg(self, image: FakeImage, quality: float) -> bytes:
        return f"jpeg:{image.width}x{image.height}:{quality}".encode()


@pytest.fixture(name="fake_codec")
def fake_codec_fixture():
    return FakeCodec()


@pytest.fixture(name="route_gpx")
def route_gpx_fixture():
    return FIXTURES / "route.gpx"


@pytest.fixture(name="valid_gpx")
def valid_gpx_fixture():
    return VALID_GPX


@pytest.fixture(name="empty_gpx")
def empty_gpx_fixture():
    return EMPTY_GPX


@pytest.fixture(name="make_upload")
def make_upload_fixture():
    """Factory for in-memory UploadedFile handles."""
    def _make(name="photo.png", content_type="image/png", data=b"1600x1200"):
        return UploadedFile(filename=name, content_type=content_type, data=data)
    return _make


@pytest.fixture(name="png_bytes")
def png_bytes_fixture():
    """Factory producing a real PNG of the given size and mode."""
    def _png(size: tuple[int, int], mode: str = "RGB") -> bytes:
        color = (200, 100, 50) if mode == "RGB" else (200, 100, 50, 128)
        buf = io.BytesIO()
        Image.new(mode, size, color=color).save(buf, format="PNG")
        return buf.getvalue()
    return _png
