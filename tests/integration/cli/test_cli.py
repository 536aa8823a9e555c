"""Integration tests for the CLI commands"""

import json

import pytest
from typer.testing import CliRunner

from sitecontent.cli.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def _write_site(root):
    blog = root / "content" / "blog"
    images = root / "content" / "images"
    blog.mkdir(parents=True)
    images.mkdir(parents=True)
    (blog / "hello.md").write_text("---\nid: 1\ntitle: Hello\n---\n\nWorld\n")
    (images / "a.png").write_bytes(b"png")


def test_no_args_runs_full_build(tmp_path):
    """Invoking with no arguments builds from the fixed relative directories."""
    _write_site(tmp_path)
    result = runner.invoke(app, [])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "src" / "data" / "blog-posts.json").exists()
    assert (tmp_path / "src" / "data" / "gallery-images.json").exists()
    assert (tmp_path / "public" / "images" / "gallery" / "a.png").exists()


def test_build_blog_only(tmp_path):
    _write_site(tmp_path)
    result = runner.invoke(app, ["build", "--blog-only"])
    assert result.exit_code == 0, result.output
    assert "Blog: 1 post(s)" in result.output
    assert not (tmp_path / "src" / "data" / "gallery-images.json").exists()


def test_build_conflicting_flags():
    result = runner.invoke(app, ["build", "--blog-only", "--gallery-only"])
    assert result.exit_code == 1


def test_build_failure_exits_nonzero(tmp_path, monkeypatch):
    """A blog output path that is a directory aborts the build before the gallery phase."""
    _write_site(tmp_path)
    (tmp_path / "taken").mkdir()
    monkeypatch.setenv("SITECONTENT_BLOG_OUTPUT", "taken")
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 1
    assert "Build failed" in result.output
    assert not (tmp_path / "src" / "data" / "gallery-images.json").exists()


def test_build_skips_badly_encoded_post(tmp_path):
    """A post that is not valid UTF-8 does not stop the build."""
    _write_site(tmp_path)
    (tmp_path / "content" / "blog" / "latin.md").write_bytes(b"---\nid: 2\ntitle: Caf\xe9\n---\n\nMenu\n")
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "src" / "data" / "gallery-images.json").exists()


def test_blog_command_custom_output(tmp_path):
    _write_site(tmp_path)
    result = runner.invoke(app, ["blog", "--out", "out/posts.json"])
    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "out" / "posts.json").read_text(encoding="utf-8"))
    assert data["posts"][0]["title"] == "Hello"


def test_gallery_command(tmp_path):
    _write_site(tmp_path)
    result = runner.invoke(app, ["gallery", "--public-dir", "static"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "static" / "a.png").exists()


@pytest.mark.parametrize("args,expected", [
    (["1600", "1200"], "800x600"),
    (["1000", "1000"], "600x600"),
    (["400", "300", "--max-width", "200"], "200x150"),
])
def test_dimensions_command(args, expected):
    result = runner.invoke(app, ["dimensions", *args])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == expected


def test_walk_command_requires_photos(tmp_path):
    gpx = tmp_path / "route.gpx"
    gpx.write_text('<gpx version="1.1"><trk><trkseg><trkpt lat="1" lon="2"/></trkseg></trk></gpx>')
    result = runner.invoke(app, ["walk", str(gpx), "--title", "Loop"])
    assert result.exit_code == 1
    assert "At least one photo is required" in result.output


def test_walk_command_writes_payload(tmp_path):
    from PIL import Image

    gpx = tmp_path / "route.gpx"
    gpx.write_text('<gpx version="1.1"><trk><trkseg><trkpt lat="1.5" lon="2.5"/></trkseg></trk></gpx>')
    Image.new("RGB", (1200, 1600)).save(tmp_path / "view.jpg")
    out = tmp_path / "walk.json"

    result = runner.invoke(app, [
        "walk", str(gpx), "--title", "Loop", "--photo", str(tmp_path / "view.jpg"),
        "--difficulty", "Hard", "--start-location", "Car park", "--out", str(out),
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["route"] == [{"lat": 1.5, "lng": 2.5}]
    assert data["difficulty"] == "Hard"
    assert data["startLocation"] == "Car park"
    assert data["photos"][0].startswith("data:image/jpeg;base64,")
