"""Build orchestration: blog phase then gallery phase"""

from pathlib import Path
from typing import Optional

from sitecontent.config import Settings
from sitecontent.core.blog import build_blog
from sitecontent.core.gallery import build_gallery
from sitecontent.core.models import BlogArtifact, GalleryArtifact


def run_blog(settings: Settings) -> Optional[BlogArtifact]:
    """Run the blog phase with paths and fallbacks from settings."""
    return build_blog(
        Path(settings.blog_dir),
        Path(settings.blog_output),
        preset=settings.markdown_preset,
        default_icon=settings.default_icon,
        default_date=settings.default_date,
    )


def run_gallery(settings: Settings) -> Optional[GalleryArtifact]:
    """Run the gallery phase with paths from settings."""
    return build_gallery(
        Path(settings.images_dir),
        Path(settings.gallery_output),
        Path(settings.public_images_dir),
        settings.public_images_url,
    )


def run_build(
    settings: Settings,
    blog: bool = True,
    gallery: bool = True,
    ) -> tuple[Optional[BlogArtifact], Optional[GalleryArtifact]]:
    """Run the enabled phases in order. Blog output is written before the gallery phase starts.

    Per-file problems are logged and skipped inside each phase; anything else
    propagates and aborts the build.
    """
    blog_artifact = run_blog(settings) if blog else None
    gallery_artifact = run_gallery(settings) if gallery else None
    return blog_artifact, gallery_artifact
