"""Frontmatter extraction: flat key/value header and body text"""

import re
from typing import Union


Scalar = Union[int, float, str]

FRONTMATTER_RE = re.compile(r'^---\n(.*?)\n---\n(.*)\Z', re.DOTALL)
INT_RE = re.compile(r'^[+-]?\d+$')
FLOAT_RE = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')


def normalize_newlines(text: str) -> str:
    """Convert \\r\\n and lone \\r line endings to \\n."""
    return text.replace('\r\n', '\n').replace('\r', '\n')


def _unquote(value: str) -> str:
    """Strip one layer of matching double or single quotes."""
    if len(value) >= 1 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def coerce_scalar(value: str) -> Scalar:
    """Return value as int or float when it is entirely numeric, else unchanged."""
    if INT_RE.match(value):
        return int(value)
    if FLOAT_RE.match(value):
        return float(value)
    return value


def parse_frontmatter(text: str) -> tuple[dict[str, Scalar], str]:
    """Return (metadata, body) from a document with an optional leading --- block.

    Only a block opening on the very first line is recognized. Lines without a
    colon are ignored and later keys overwrite earlier ones. Without a block the
    metadata is empty and the whole (newline-normalized) text is the body.
    """
    text = normalize_newlines(text)
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text

    metadata: dict[str, Scalar] = {}
    for line in m.group(1).split('\n'):
        key, sep, value = line.partition(':')
        if not sep:
            continue
        value = _unquote(value.strip())
        metadata[key.strip()] = coerce_scalar(value) if value else value
    return metadata, m.group(2).strip()
