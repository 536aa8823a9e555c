"""Walk upload preparation: validate photos, extract the route, compress images"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from sitecontent.core.gpx import GpxParser, RoutePoint, parse_gpx_file
from sitecontent.core.images import (
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MAX_WIDTH,
    DEFAULT_QUALITY,
    ImageCodec,
    UploadedFile,
    compress_image,
)
from sitecontent.core.photos import DEFAULT_MAX_PHOTOS, validate_photos


logger = logging.getLogger("sitecontent")

INVALID_GPX_FILE = "Please upload a valid GPX file"


class WalkUploadError(ValueError):
    """Raised with a user-facing message when a walk cannot be prepared."""


class Difficulty(str, Enum):
    easy = "Easy"
    moderate = "Moderate"
    hard = "Hard"


class WalkDetails(BaseModel):
    """Form fields describing a walk."""
    model_config = ConfigDict(populate_by_name=True)

    title:          str = Field(min_length=1)
    distance:       str = ""
    duration:       str = ""
    start_location: str = Field(default="", alias="startLocation")
    difficulty:     Difficulty = Difficulty.easy
    description:    str = ""


class WalkPayload(WalkDetails):
    """Walk document as handed to the external document store."""
    route:  list[RoutePoint]
    photos: list[str]                   # JPEG data URIs


def prepare_walk(
    details: WalkDetails,
    gpx_path: Path,
    photos: Sequence[UploadedFile],
    max_photos: int = DEFAULT_MAX_PHOTOS,
    max_width: int = DEFAULT_MAX_WIDTH,
    max_height: int = DEFAULT_MAX_HEIGHT,
    quality: float = DEFAULT_QUALITY,
    parser: Optional[GpxParser] = None,
    codec: Optional[ImageCodec] = None,
    ) -> WalkPayload:
    """Build a WalkPayload; photos are compressed one at a time, in order.

    Raises WalkUploadError for a bad GPX filename or photo batch. GPX and
    image errors from the steps themselves propagate unchanged.
    """
    gpx_path = Path(gpx_path)
    if gpx_path.suffix != ".gpx":
        raise WalkUploadError(INVALID_GPX_FILE)

    check = validate_photos(photos, max_photos)
    if not check.valid:
        raise WalkUploadError(check.error)

    route = parse_gpx_file(gpx_path, parser=parser)
    logger.info("Parsed %d route point(s) from %s", len(route), gpx_path.name)

    compressed = []
    for photo in photos:
        compressed.append(compress_image(photo, max_width, max_height, quality, codec=codec))
        logger.debug("Compressed %s", photo.filename)

    return WalkPayload(**details.model_dump(), route=route, photos=compressed)
