"""Content models for the blog and gallery JSON artifacts"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sitecontent.core.frontmatter import Scalar


DEFAULT_ICON = "📄"
DEFAULT_DATE = "Unknown date"
DEFAULT_IMAGE_ORDER = 999


def generated_at() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ArtifactModel(BaseModel):
    """Base for artifact models: populated by field name, dumped by alias."""
    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class BlogPost(ArtifactModel):
    id:           Scalar
    title:        Scalar
    date:         Scalar = DEFAULT_DATE
    icon:         Scalar = DEFAULT_ICON
    order:        Scalar
    content:      str                                  # raw body text
    content_html: str = Field(alias="contentHtml")     # rendered body


class BlogArtifact(ArtifactModel):
    generated_at: str = Field(default_factory=generated_at, alias="generatedAt")
    posts:        list[BlogPost] = []


class GalleryMetaEntry(BaseModel):
    """One entry of the optional gallery.json metadata file."""
    model_config = ConfigDict(extra="ignore")

    filename: str
    caption:  Optional[str] = None
    date:     Optional[str] = None
    location: Optional[str] = None
    order:    Optional[Union[int, float]] = None


class GalleryMeta(BaseModel):
    """Top-level shape of gallery.json; entries are validated one by one."""
    images: list[dict[str, Any]] = []


class GalleryImage(ArtifactModel):
    id:       str
    filename: str
    src:      str
    caption:  Optional[str] = None
    date:     Optional[str] = None
    location: Optional[str] = None
    year:     Optional[int] = None
    order:    Union[int, float] = DEFAULT_IMAGE_ORDER


class GalleryArtifact(ArtifactModel):
    generated_at: str = Field(default_factory=generated_at, alias="generatedAt")
    images:       list[GalleryImage] = []


def build_post(
    metadata: dict[str, Any],
    body: str,
    renderer: Callable[[str], str],
    default_icon: str = DEFAULT_ICON,
    default_date: str = DEFAULT_DATE,
    ) -> BlogPost:
    """Build a BlogPost from parsed frontmatter, applying explicit fallbacks.

    date and icon fall back when missing or empty; order falls back to id
    only when absent. Callers are expected to have checked id and title.
    """
    order = metadata.get("order")
    return BlogPost(
        id=metadata["id"],
        title=metadata["title"],
        date=metadata.get("date") or default_date,
        icon=metadata.get("icon") or default_icon,
        order=metadata["id"] if order is None else order,
        content=body,
        content_html=renderer(body),
    )
