"""Gallery build: image discovery, metadata merge, asset copy -> gallery-images.json"""

import json
import logging
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from sitecontent.core.models import (
    DEFAULT_IMAGE_ORDER,
    GalleryArtifact,
    GalleryImage,
    GalleryMeta,
    GalleryMetaEntry,
)
from sitecontent.util.fs import read_text_bom_safe, write_json


logger = logging.getLogger("sitecontent")

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
META_FILE = "gallery.json"

YEAR_RE = re.compile(r"20\d{2}")
MONTH_YEAR_RE = re.compile(r"^([A-Za-z]+)\.?\s+(\d{4})$")
DATE_FORMATS = ("%d/%m/%Y", "%B %d, %Y", "%b %d, %Y", "%d %B %Y", "%d %b %Y")


def discover_images(images_dir: Path) -> list[Path]:
    """Return sorted image files in images_dir with an allowed extension."""
    return sorted(
        p for p in images_dir.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    )


def load_metadata(images_dir: Path) -> dict[str, tuple[int, GalleryMetaEntry]]:
    """Read gallery.json into {filename: (file position, entry)}; empty on any parse failure."""
    meta_path = images_dir / META_FILE
    if not meta_path.exists():
        return {}
    try:
        meta = GalleryMeta.model_validate(json.loads(read_text_bom_safe(meta_path)))
    except ValueError as e:  # JSONDecodeError, UnicodeDecodeError, ValidationError
        logger.warning("Could not parse %s, continuing without metadata: %s", meta_path, e)
        return {}

    entries = {}
    for i, raw in enumerate(meta.images):
        try:
            entry = GalleryMetaEntry.model_validate(raw)
        except ValidationError as e:
            logger.warning("Ignoring entry %d in %s: %s", i, meta_path, e)
            continue
        entries[entry.filename] = (i, entry)
    return entries


def extract_year(date: Optional[str]) -> Optional[int]:
    """Return the first 20xx year found in date, or None."""
    if not date:
        return None
    m = YEAR_RE.search(date)
    return int(m.group(0)) if m else None


def _naive(dt: datetime) -> datetime:
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def parse_date(date: Optional[str]) -> datetime:
    """Parse a display date for sorting; unparseable or absent dates give datetime.min.

    "Month YYYY" (full or abbreviated month) is tried first, then ISO-8601 and
    a few common day-first and month-name forms.
    """
    if not date:
        return datetime.min
    text = date.strip()
    m = MONTH_YEAR_RE.match(text)
    if m:
        for fmt in ("%B %Y", "%b %Y"):
            try:
                return datetime.strptime(f"{m.group(1)} {m.group(2)}", fmt)
            except ValueError:
                pass
    iso = text[:-1] + "+00:00" if text[-1:] in ("Z", "z") else text
    try:
        return _naive(datetime.fromisoformat(iso))
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            pass
    return datetime.min


def copy_image(src: Path, public_dir: Path) -> bool:
    """Copy src into public_dir; log and return False on failure."""
    try:
        shutil.copy2(src, public_dir / src.name)
    except OSError as e:
        logger.warning("Failed to copy %s: %s", src.name, e)
        return False
    return True


def make_image(path: Path, public_url: str, meta: Optional[tuple[int, GalleryMetaEntry]]) -> GalleryImage:
    """Merge file and metadata into a GalleryImage."""
    position, entry = meta if meta else (None, None)
    date = entry.date if entry else None
    if entry and entry.order is not None:
        order = entry.order
    elif position is not None:
        order = position
    else:
        order = DEFAULT_IMAGE_ORDER
    return GalleryImage(
        id=path.stem,
        filename=path.name,
        src=f"{public_url.rstrip('/')}/{path.name}",
        caption=entry.caption if entry else None,
        date=date,
        location=entry.location if entry else None,
        year=extract_year(date),
        order=order,
    )


def build_gallery(
    images_dir: Path,
    output_file: Path,
    public_dir: Path,
    public_url: str = "/images/gallery",
    ) -> Optional[GalleryArtifact]:
    """Build the gallery artifact and copy images into public_dir.

    Returns None (and writes nothing) when the images directory is missing or
    holds no images. Per-file copy failures skip that image only.
    """
    logger.info("Building gallery from %s", images_dir)
    if not images_dir.exists():
        images_dir.mkdir(parents=True, exist_ok=True)
        logger.warning("No gallery images found. Add images to %s", images_dir)
        return None

    files = discover_images(images_dir)
    if not files:
        logger.warning("No image files found in %s", images_dir)
        return None
    logger.info("Found %d image file(s)", len(files))

    metadata = load_metadata(images_dir)
    candidates = [make_image(p, public_url, metadata.get(p.name)) for p in files]

    public_dir.mkdir(parents=True, exist_ok=True)
    images = [
        image for path, image in zip(files, candidates)
        if copy_image(path, public_dir)
    ]

    images.sort(key=lambda image: (parse_date(image.date), image.order))
    artifact = GalleryArtifact(images=images)
    write_json(output_file, artifact.to_json())
    logger.info("Generated %s (%d image(s))", output_file, len(images))
    return artifact
