"""GPX route extraction: first-track coordinates as pairs or {lat, lng} records"""

from pathlib import Path
from typing import Optional, Protocol, Union

import gpxpy
from gpxpy.gpx import GPXException


Coordinate = tuple[float, float]
RoutePoint = dict[str, float]

NO_TRACKS = "No track data found in GPX file"
READ_FAILED = "Failed to read file"
GPX_READ_FAILED = "Failed to read GPX file"


class GpxError(ValueError):
    """Raised for GPX input that cannot be turned into a route."""


class GpxParseError(GpxError):
    """Raised when the GPX text is not well-formed XML or not valid GPX."""


class GpxReadError(GpxError):
    """Raised when the GPX file itself cannot be read."""


class GpxParser(Protocol):
    """Structural GPX parser: returns each track's points as (lat, lon) in document order."""

    def tracks(self, text: str) -> list[list[Coordinate]]:
        ...


class GpxpyParser:
    """GpxParser backed by gpxpy; a track's segments are concatenated."""

    def tracks(self, text: str) -> list[list[Coordinate]]:
        try:
            gpx = gpxpy.parse(text)
        except GPXException as e:
            raise GpxParseError(f"Invalid GPX data: {e}") from e
        return [
            [(p.latitude, p.longitude) for seg in track.segments for p in seg.points]
            for track in gpx.tracks
        ]


def to_route_points(coords: list[Coordinate]) -> list[RoutePoint]:
    """Convert (lat, lon) pairs to {lat, lng} records for document stores without nested arrays."""
    return [{"lat": lat, "lng": lon} for lat, lon in coords]


def parse_gpx_text(
    text: str,
    as_objects: bool = False,
    parser: Optional[GpxParser] = None,
    ) -> Union[list[Coordinate], list[RoutePoint]]:
    """Return the first track's points; any further tracks are ignored."""
    tracks = (parser or GpxpyParser()).tracks(text)
    if not tracks:
        raise GpxError(NO_TRACKS)
    return to_route_points(tracks[0]) if as_objects else list(tracks[0])


def read_text_file(path: Path) -> str:
    """Read a UTF-8 text file, raising GpxReadError on I/O failure."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise GpxReadError(READ_FAILED) from e


def parse_gpx_file(path: Path, parser: Optional[GpxParser] = None) -> list[RoutePoint]:
    """Read a GPX file and return its first track as {lat, lng} records."""
    try:
        text = read_text_file(path)
    except GpxReadError as e:
        raise GpxReadError(GPX_READ_FAILED) from e.__cause__
    return parse_gpx_text(text, as_objects=True, parser=parser)
