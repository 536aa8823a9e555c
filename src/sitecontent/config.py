"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:          str = "sitecontent"
    blog_dir:          str = Field(default="content/blog",   description="Markdown source directory")
    images_dir:        str = Field(default="content/images", description="Gallery image source directory")
    blog_output:       str = Field(default="src/data/blog-posts.json",     description="Blog JSON artifact")
    gallery_output:    str = Field(default="src/data/gallery-images.json", description="Gallery JSON artifact")
    public_images_dir: str = Field(default="public/images/gallery", description="Copy target for gallery images")
    public_images_url: str = Field(default="/images/gallery",       description="Public path prefix for image src")
    markdown_preset:   str = Field(default="basic", description="'basic' or a MarkdownIt preset name")
    default_icon:      str = Field(default="📄", description="Icon used when a post has none")
    default_date:      str = Field(default="Unknown date", description="Date used when a post has none")
    max_photos:        int = Field(default=6,   ge=1, description="Max photos per walk upload")
    max_width:         int = Field(default=800, gt=0, description="Max compressed image width")
    max_height:        int = Field(default=600, gt=0, description="Max compressed image height")
    quality:         float = Field(default=0.7, ge=0, le=1, description="JPEG quality in [0, 1]")
    log_level:         str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    @field_validator("markdown_preset")
    @classmethod
    def _known_preset(cls, value: str) -> str:
        """Accept "basic" or any preset name MarkdownIt can load."""
        if value != "basic":
            try:
                MarkdownIt(value)
            except KeyError as e:
                raise ValueError(f"Unknown markdown preset: {value!r}") from e
        return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SITECONTENT_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"SITECONTENT_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
