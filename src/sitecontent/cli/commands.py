"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from sitecontent.config import Settings, load_config
from sitecontent.core.gpx import GpxError
from sitecontent.core.images import ImageCompressionError, UploadedFile, calculate_compressed_dimensions
from sitecontent.core.pipeline import run_blog, run_build, run_gallery
from sitecontent.core.walks import Difficulty, WalkDetails, WalkUploadError, prepare_walk


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _setup_logging(settings: Settings, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("sitecontent").setLevel(level)


def build_cmd(
    blog_dir: Annotated[Optional[str], typer.Option("--blog-dir", help="Markdown source directory")] = None,
    images_dir: Annotated[Optional[str], typer.Option("--images-dir", help="Gallery image directory")] = None,
    preset: Annotated[Optional[str], typer.Option("--markdown-preset", help="'basic' or a MarkdownIt preset")] = None,
    blog_only: Annotated[bool, typer.Option("--blog-only", help="Skip the gallery phase")] = False,
    gallery_only: Annotated[bool, typer.Option("--gallery-only", help="Skip the blog phase")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Build blog-posts.json and gallery-images.json from the content directories."""
    if blog_only and gallery_only:
        _fail("--blog-only and --gallery-only are mutually exclusive")
    settings = _settings(overrides={
        "blog_dir": blog_dir, "images_dir": images_dir, "markdown_preset": preset,
    })
    _setup_logging(settings, verbose)

    try:
        blog, gallery = run_build(settings, blog=not gallery_only, gallery=not blog_only)
    except Exception as e:
        _fail("Build failed", e)

    if blog is not None:
        typer.echo(f"Blog: {len(blog.posts)} post(s) -> {settings.blog_output}")
    if gallery is not None:
        typer.echo(f"Gallery: {len(gallery.images)} image(s) -> {settings.gallery_output}")


def blog_cmd(
    blog_dir: Annotated[Optional[str], typer.Option("--blog-dir", help="Markdown source directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out", help="Blog JSON output file")] = None,
    preset: Annotated[Optional[str], typer.Option("--markdown-preset", help="'basic' or a MarkdownIt preset")] = None,
    ):
    """Build only the blog artifact."""
    settings = _settings(overrides={"blog_dir": blog_dir, "blog_output": out, "markdown_preset": preset})
    _setup_logging(settings)
    try:
        blog = run_blog(settings)
    except Exception as e:
        _fail("Blog build failed", e)
    if blog is not None:
        typer.echo(f"Blog: {len(blog.posts)} post(s) -> {settings.blog_output}")


def gallery_cmd(
    images_dir: Annotated[Optional[str], typer.Option("--images-dir", help="Gallery image directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out", help="Gallery JSON output file")] = None,
    public_dir: Annotated[Optional[str], typer.Option("--public-dir", help="Copy target for images")] = None,
    ):
    """Build only the gallery artifact and copy images."""
    settings = _settings(overrides={
        "images_dir": images_dir, "gallery_output": out, "public_images_dir": public_dir,
    })
    _setup_logging(settings)
    try:
        gallery = run_gallery(settings)
    except Exception as e:
        _fail("Gallery build failed", e)
    if gallery is not None:
        typer.echo(f"Gallery: {len(gallery.images)} image(s) -> {settings.gallery_output}")


def walk_cmd(
    gpx: Annotated[Path, typer.Argument(help="GPX route file")],
    title: Annotated[str, typer.Option("--title", help="Walk title")],
    photo: Annotated[Optional[list[Path]], typer.Option("--photo", "-p", help="Photo file (repeatable)")] = None,
    distance: Annotated[str, typer.Option("--distance")] = "",
    duration: Annotated[str, typer.Option("--duration")] = "",
    start_location: Annotated[str, typer.Option("--start-location")] = "",
    difficulty: Annotated[Difficulty, typer.Option("--difficulty")] = Difficulty.easy,
    description: Annotated[str, typer.Option("--description")] = "",
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write payload JSON here instead of stdout")] = None,
    ):
    """Prepare a walk upload payload (route + compressed photos) as JSON."""
    settings = _settings()
    _setup_logging(settings)
    try:
        details = WalkDetails(
            title=title, distance=distance, duration=duration,
            start_location=start_location, difficulty=difficulty, description=description,
        )
        payload = prepare_walk(
            details, gpx, [UploadedFile.from_path(p) for p in photo or []],
            max_photos=settings.max_photos, max_width=settings.max_width,
            max_height=settings.max_height, quality=settings.quality,
        )
    except (ValidationError, WalkUploadError, GpxError, ImageCompressionError) as e:
        _fail(str(e))

    payload_json = payload.model_dump_json(by_alias=True, indent=2)
    if out is None:
        typer.echo(payload_json)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(payload_json, encoding="utf-8")
    typer.echo(f"Walk '{payload.title}': {len(payload.route)} point(s), {len(payload.photos)} photo(s) -> {out}")


def dimensions_cmd(
    width: Annotated[int, typer.Argument(help="Original width")],
    height: Annotated[int, typer.Argument(help="Original height")],
    max_width: Annotated[Optional[int], typer.Option("--max-width")] = None,
    max_height: Annotated[Optional[int], typer.Option("--max-height")] = None,
    ):
    """Print the dimensions an image would be compressed to."""
    settings = _settings(overrides={"max_width": max_width, "max_height": max_height})
    dims = calculate_compressed_dimensions(width, height, settings.max_width, settings.max_height)
    typer.echo(f"{dims.width}x{dims.height}")
