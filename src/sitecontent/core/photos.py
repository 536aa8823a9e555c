"""Photo batch validation"""

from typing import Any, NamedTuple, Optional


DEFAULT_MAX_PHOTOS = 6


class PhotoValidation(NamedTuple):
    valid: bool
    error: Optional[str] = None


def validate_photos(photos: Any, max_photos: int = DEFAULT_MAX_PHOTOS) -> PhotoValidation:
    """Check a batch of uploaded files as a unit: count limits and image MIME types."""
    if not isinstance(photos, (list, tuple)):
        return PhotoValidation(False, "Photos must be an array")
    if len(photos) == 0:
        return PhotoValidation(False, "At least one photo is required")
    if len(photos) > max_photos:
        return PhotoValidation(False, f"Maximum {max_photos} photos allowed")
    if any(not (getattr(f, "content_type", None) or "").startswith("image/") for f in photos):
        return PhotoValidation(False, "Only image files are allowed")
    return PhotoValidation(True)
