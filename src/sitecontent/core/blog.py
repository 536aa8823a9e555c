"""Blog build: markdown sources -> frontmatter + HTML -> blog-posts.json"""

import logging
from functools import partial
from numbers import Number
from pathlib import Path
from typing import Optional

from sitecontent.core.frontmatter import parse_frontmatter
from sitecontent.core.markdown import BASIC_PRESET, render_html
from sitecontent.core.models import DEFAULT_DATE, DEFAULT_ICON, BlogArtifact, BlogPost, build_post
from sitecontent.util.fs import write_json


logger = logging.getLogger("sitecontent")

README_NAME = "readme.md"


def discover_posts(source_dir: Path) -> list[Path]:
    """Return sorted .md files in source_dir, excluding any README."""
    return sorted(
        p for p in source_dir.iterdir()
        if p.is_file() and p.name.endswith(".md") and p.name.lower() != README_NAME
    )


def _order_key(post: BlogPost) -> tuple:
    """Numeric orders first by value, then everything else by string value."""
    if isinstance(post.order, Number):
        return (0, post.order, "")
    return (1, 0, str(post.order))


def load_post(
    path: Path,
    preset: str = BASIC_PRESET,
    default_icon: str = DEFAULT_ICON,
    default_date: str = DEFAULT_DATE,
    ) -> Optional[BlogPost]:
    """Parse one markdown file into a BlogPost, or None when id/title is missing."""
    metadata, body = parse_frontmatter(path.read_text(encoding="utf-8", errors="replace"))
    for field in ("id", "title"):
        if not metadata.get(field):
            logger.warning("Skipping %s: missing '%s' in frontmatter", path.name, field)
            return None
    return build_post(
        metadata, body,
        renderer=partial(render_html, preset=preset),
        default_icon=default_icon,
        default_date=default_date,
    )


def build_blog(
    source_dir: Path,
    output_file: Path,
    preset: str = BASIC_PRESET,
    default_icon: str = DEFAULT_ICON,
    default_date: str = DEFAULT_DATE,
    ) -> Optional[BlogArtifact]:
    """Build the blog artifact from source_dir and write it to output_file.

    Returns None (and writes nothing) when the source directory is missing or
    holds no markdown; a missing directory is created for the next run.
    """
    logger.info("Building blog content from %s", source_dir)
    if not source_dir.exists():
        source_dir.mkdir(parents=True, exist_ok=True)
        logger.warning("No blog content found. Add markdown files to %s", source_dir)
        return None

    files = discover_posts(source_dir)
    if not files:
        logger.warning("No markdown files found in %s", source_dir)
        return None
    logger.info("Found %d markdown file(s)", len(files))

    posts = []
    for path in files:
        post = load_post(path, preset, default_icon, default_date)
        if post is None:
            continue
        posts.append(post)
        logger.info("  %s -> %r", path.name, post.title)

    posts.sort(key=_order_key)
    artifact = BlogArtifact(posts=posts)
    write_json(output_file, artifact.to_json())
    logger.info("Generated %s (%d blog post(s))", output_file, len(posts))
    return artifact
