"""Image resizing: bounded dimensions and JPEG data-URI compression"""

import base64
import io
import math
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NamedTuple, Optional, Protocol

from PIL import Image


DEFAULT_MAX_WIDTH = 800
DEFAULT_MAX_HEIGHT = 600
DEFAULT_QUALITY = 0.7

NO_FILE = "No file provided"
NOT_AN_IMAGE = "File is not an image"
INVALID_DIMENSIONS = "Invalid dimensions"
INVALID_QUALITY = "Quality must be between 0 and 1"
LOAD_FAILED = "Failed to load image"
READ_FAILED = "Failed to read image file"


class ImageCompressionError(ValueError):
    """Raised with a user-facing message when an image cannot be compressed."""


class Dimensions(NamedTuple):
    width: int
    height: int


@dataclass
class UploadedFile:
    """An uploaded file handle: declared MIME type plus in-memory bytes or a path."""
    filename:     str
    content_type: str
    data:         Optional[bytes] = None
    path:         Optional[Path] = None

    @classmethod
    def from_path(cls, path: Path, content_type: Optional[str] = None) -> "UploadedFile":
        """Build a handle for a file on disk, guessing the MIME type from its name."""
        path = Path(path)
        guessed = content_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(filename=path.name, content_type=guessed, path=path)

    def read_bytes(self) -> bytes:
        if self.data is not None:
            return self.data
        if self.path is None:
            raise OSError(f"No data or path for {self.filename}")
        return self.path.read_bytes()


class ImageCodec(Protocol):
    """Raster capability: decode bytes, report size, resize, encode to JPEG."""

    def decode(self, data: bytes) -> Any: ...
    def size(self, image: Any) -> tuple[int, int]: ...
    def resize(self, image: Any, dims: Dimensions) -> Any: ...
    def encode_jpeg(self, image: Any, quality: float) -> bytes: ...


class PillowCodec:
    """ImageCodec backed by Pillow."""

    def decode(self, data: bytes) -> Image.Image:
        img = Image.open(io.BytesIO(data))
        img.load()
        return img

    def size(self, image: Image.Image) -> tuple[int, int]:
        return image.size

    def resize(self, image: Image.Image, dims: Dimensions) -> Image.Image:
        if image.size == tuple(dims):
            return image
        return image.resize(tuple(dims), Image.Resampling.LANCZOS)

    def encode_jpeg(self, image: Image.Image, quality: float) -> bytes:
        if image.mode != "RGB":
            image = image.convert("RGB")
        buf = io.BytesIO()
        image.save(buf, format="JPEG", quality=round(quality * 100))
        return buf.getvalue()


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_compressed_dimensions(
    width: float,
    height: float,
    max_width: float,
    max_height: float,
    ) -> Dimensions:
    """Scale (width, height) down to fit the bound of its larger side, keeping aspect ratio.

    Only the bound matching the larger original side is checked: a landscape
    image is compared against max_width alone and a portrait or square one
    against max_height alone. Images already inside that bound are returned
    unchanged (no upscaling). Results are rounded half up.
    """
    new_width, new_height = width, height
    if width > height:
        if width > max_width:
            new_height = height * (max_width / width)
            new_width = max_width
    elif height > max_height:
        new_width = width * (max_height / height)
        new_height = max_height
    return Dimensions(_round_half_up(new_width), _round_half_up(new_height))


def to_data_uri(data: bytes, mime: str = "image/jpeg") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def compress_image(
    file: Optional[UploadedFile],
    max_width: float = DEFAULT_MAX_WIDTH,
    max_height: float = DEFAULT_MAX_HEIGHT,
    quality: float = DEFAULT_QUALITY,
    codec: Optional[ImageCodec] = None,
    ) -> str:
    """Resize an uploaded image within the bounds and return it as a JPEG data URI."""
    if not file:
        raise ImageCompressionError(NO_FILE)
    if not (file.content_type or "").startswith("image/"):
        raise ImageCompressionError(NOT_AN_IMAGE)
    if max_width <= 0 or max_height <= 0:
        raise ImageCompressionError(INVALID_DIMENSIONS)
    if quality < 0 or quality > 1:
        raise ImageCompressionError(INVALID_QUALITY)

    codec = codec or PillowCodec()
    try:
        data = file.read_bytes()
    except OSError as e:
        raise ImageCompressionError(READ_FAILED) from e

    try:
        image = codec.decode(data)
    except (OSError, ValueError) as e:
        raise ImageCompressionError(LOAD_FAILED) from e

    width, height = codec.size(image)
    dims = calculate_compressed_dimensions(width, height, max_width, max_height)
    try:
        encoded = codec.encode_jpeg(codec.resize(image, dims), quality)
    except (OSError, ValueError) as e:
        raise ImageCompressionError(READ_FAILED) from e
    return to_data_uri(encoded)
