"""Markdown rendering and HTML sanitization for user-supplied text."""
from __future__ import annotations

import html

import bleach
from markdown_it import MarkdownIt
from markupsafe import Markup

__all__ = ["ALLOWED_TAGS", "render_markup", "strip_all_tags"]

# Tags that survive rendering; every attribute is dropped.
ALLOWED_TAGS = frozenset({
    "p", "br", "ul", "ol", "li",
    "em", "i", "strong", "bold",
    "h1", "h2", "h3", "h4", "h5",
})

_md = MarkdownIt("commonmark")


def render_markup(raw: str | None) -> Markup:
    """Expand Markdown and keep only the allow-listed tags.

    Args:
        raw: Stored post text. ``None`` renders as an empty string.

    Returns:
        Sanitized HTML marked safe for direct template output.
    """
    html = _md.render(raw or "")
    cleaned = bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes={},
        strip=True,
    )
    return Markup(cleaned)


def strip_all_tags(raw: str | None) -> str:
    """Remove every HTML tag and attribute, keeping the enclosed text.

    The result is plain text: entities bleach escapes are decoded again, so
    ``&``, ``<`` and ``>`` are stored as typed. Output is escaped at render time.
    """
    cleaned = bleach.clean(raw or "", tags=set(), attributes={}, strip=True)
    return html.unescape(cleaned)
