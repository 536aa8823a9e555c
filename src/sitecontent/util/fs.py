"""Filesystem helpers shared by the build phases"""

from pathlib import Path


def write_json(path: Path, payload: str) -> Path:
    """Write serialized JSON to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload + "\n", encoding="utf-8")
    return path


def read_text_bom_safe(path: Path) -> str:
    """Read UTF-8 text with any leading byte-order mark removed."""
    return path.read_text(encoding="utf-8-sig").lstrip("\ufeff")
