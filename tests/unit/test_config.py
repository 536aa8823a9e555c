"""Unit tests for config.py"""

import pytest

from sitecontent.config import load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray config.yaml is read."""
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults(monkeypatch):
    """Defaults point at the fixed content and output locations."""
    monkeypatch.delenv("SITECONTENT_BLOG_DIR", raising=False)
    settings = load_config()
    assert settings.blog_dir == "content/blog"
    assert settings.images_dir == "content/images"
    assert settings.blog_output == "src/data/blog-posts.json"
    assert settings.gallery_output == "src/data/gallery-images.json"
    assert settings.max_photos == 6
    assert (settings.max_width, settings.max_height, settings.quality) == (800, 600, 0.7)


def test_load_config_env_blog_dir(monkeypatch):
    monkeypatch.setenv("SITECONTENT_BLOG_DIR", "posts")
    assert load_config().blog_dir == "posts"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """SITECONTENT_MAX_PHOTOS takes precedence over config.yaml and is coerced to int."""
    (tmp_path / "config.yaml").write_text("max_photos: 4\n")
    monkeypatch.setenv("SITECONTENT_MAX_PHOTOS", "2")
    assert load_config().max_photos == 2


def test_load_config_reads_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("markdown_preset: commonmark\nquality: 0.5\n")
    settings = load_config()
    assert settings.markdown_preset == "commonmark"
    assert settings.quality == 0.5


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("SITECONTENT_IMAGES_DIR", "env-images")
    assert load_config(overrides={"images_dir": "cli-images"}).images_dir == "cli-images"
    assert load_config(overrides={"images_dir": None}).images_dir == "env-images"


def test_load_config_invalid_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


@pytest.mark.parametrize("field,value", [
    ("quality", 1.5),
    ("max_width", 0),
    ("max_photos", 0),
    ("log_level", "LOUD"),
])
def test_load_config_rejects_out_of_range(field, value):
    with pytest.raises(ValueError):
        load_config(overrides={field: value})


@pytest.mark.parametrize("preset", ["basic", "commonmark", "gfm-like", "zero"])
def test_load_config_accepts_known_presets(preset):
    assert load_config(overrides={"markdown_preset": preset}).markdown_preset == preset


def test_load_config_rejects_unknown_preset(monkeypatch):
    monkeypatch.setenv("SITECONTENT_MARKDOWN_PRESET", "github")
    with pytest.raises(ValueError, match="Unknown markdown preset"):
        load_config()
