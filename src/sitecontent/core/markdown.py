"""Markdown to HTML rendering: a fixed, ordered set of substitution rules"""

import re

from markdown_it import MarkdownIt


BASIC_PRESET = 'basic'

HEADER_RES = [
    (level, re.compile(rf'^{"#" * level}\s+(.*)$', re.MULTILINE))
    for level in range(6, 0, -1)
]

# Longest delimiter first so *** is not consumed as ** + *.
EMPHASIS_RES = [
    (re.compile(r'\*\*\*(.+?)\*\*\*'), r'<strong><em>\1</em></strong>'),
    (re.compile(r'\*\*(.+?)\*\*'),     r'<strong>\1</strong>'),
    (re.compile(r'\*(.+?)\*'),         r'<em>\1</em>'),
    (re.compile(r'___(.+?)___'),       r'<strong><em>\1</em></strong>'),
    (re.compile(r'__(.+?)__'),         r'<strong>\1</strong>'),
    (re.compile(r'_(.+?)_'),           r'<em>\1</em>'),
]

LINK_RE = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
LINK_SUB = r'<a href="\2" target="_blank" rel="noopener noreferrer">\1</a>'

UL_ITEM_RE = re.compile(r'^[-*]\s+(.*)$', re.MULTILINE)
OL_ITEM_RE = re.compile(r'^\d+\.\s+(.*)$', re.MULTILINE)
LI_RUN_RE = re.compile(r'(?:<li>.*</li>\n?)+')
# A wrapped <ul> run, or a bare <li> run left over from ordered items.
LIST_BLOCK_RE = re.compile(r'<ul>(?:<li>.*</li>\n?)+</ul>|(?:<li>.*</li>\n?)+')

BLOCK_TAG_RE = re.compile(r'^<(h[1-6]|ul|ol|li|p|div|blockquote)')


def escape_html(text: str) -> str:
    """Escape &, < and > (ampersand first)."""
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def _wrap_ordered(m: re.Match) -> str:
    block = m.group(0)
    return block if block.startswith('<ul>') else f'<ol>{block}</ol>'


def _paragraph(block: str) -> str:
    block = block.strip()
    if not block:
        return ''
    if BLOCK_TAG_RE.match(block):
        return block
    return '<p>' + block.replace('\n', '<br>') + '</p>'


def render_basic(markdown: str) -> str:
    """Render the supported markdown subset to HTML.

    Handles headers, bold/italic, inline links, flat unordered and ordered
    lists and paragraphs. No tables, code fences, blockquotes or nesting.
    """
    html = escape_html(markdown)

    for level, pattern in HEADER_RES:
        html = pattern.sub(rf'<h{level}>\1</h{level}>', html)

    for pattern, repl in EMPHASIS_RES:
        html = pattern.sub(repl, html)

    html = LINK_RE.sub(LINK_SUB, html)

    html = UL_ITEM_RE.sub(r'<li>\1</li>', html)
    html = LI_RUN_RE.sub(lambda m: f'<ul>{m.group(0)}</ul>', html)

    html = OL_ITEM_RE.sub(r'<li>\1</li>', html)
    html = LIST_BLOCK_RE.sub(_wrap_ordered, html)

    html = '\n'.join(_paragraph(block) for block in html.split('\n\n'))

    html = html.replace('<p><p>', '<p>').replace('</p></p>', '</p>')
    return html.strip()


def render_html(markdown: str, preset: str = BASIC_PRESET) -> str:
    """Render markdown with the basic rules, or with a MarkdownIt preset by name."""
    if preset == BASIC_PRESET:
        return render_basic(markdown)
    return MarkdownIt(preset, options_update={"linkify": False}).render(markdown).strip()
