"""Pattern matching utilities for HTML metadata extraction.

Everything here is textual: no DOM is built. Each helper returns the first
match in document order, or None when the pattern does not occur.
"""

from __future__ import annotations

import html
import re
from typing import Optional

TITLE_RE = re.compile(r"<title\b[^>]*>(.*?)</title\s*>", re.IGNORECASE | re.DOTALL)
H1_RE = re.compile(r"<h1\b[^>]*>(.*?)</h1\s*>", re.IGNORECASE | re.DOTALL)
PARAGRAPH_RE = re.compile(r"<p\b[^>]*>(.*?)</p\s*>", re.IGNORECASE | re.DOTALL)
META_TAG_RE = re.compile(r"<meta\b[^>]*>", re.IGNORECASE | re.DOTALL)
ATTRIBUTE_RE = re.compile(
    r"""([a-zA-Z_:][-a-zA-Z0-9_:.]*)\s*=\s*(?:"([^"]*)"|'([^']*)')""",
    re.DOTALL,
)
TAG_RE = re.compile(r"<[^>]+>")

# Sentinel comments are single-line; the text runs up to the closing marker.
SENTINEL_TEMPLATE = r"<!-- {name}:[ \t]*([^\n]*?)-->"

HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

ELLIPSIS = "..."


def first_element_text(content: str, pattern: re.Pattern) -> Optional[str]:
    """Return the inner text of the first element matched by pattern.

    Args:
        content: Raw HTML text.
        pattern: Compiled element pattern with the inner markup as group 1.

    Returns:
        Inner text with nested tags stripped, entities decoded and runs of
        whitespace collapsed to single spaces, or None if no element matches.
    """
    match = pattern.search(content)
    if not match:
        return None
    return collapse_whitespace(html.unescape(strip_tags(match.group(1))))


def parse_attributes(tag: str) -> dict[str, str]:
    """Parse quoted attributes of a single tag into a dict.

    Attribute names are lowercased; the first occurrence of a name wins.
    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_RE.finditer(tag):
        name = match.group(1).lower()
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attributes.setdefault(name, value)
    return attributes


def meta_content(content: str, name: str) -> Optional[str]:
    """Return the content attribute of the first <meta name="..."> tag.

    Args:
        content: Raw HTML text.
        name: Meta name to look for (case-insensitive).

    Returns:
        The content attribute with entities decoded and whitespace
        collapsed, or None if no such tag exists.
    """
    wanted = name.lower()
    for match in META_TAG_RE.finditer(content):
        attributes = parse_attributes(match.group(0))
        if attributes.get("name", "").strip().lower() != wanted:
            continue
        if "content" in attributes:
            return collapse_whitespace(html.unescape(attributes["content"]))
    return None


def sentinel_comment(content: str, name: str) -> Optional[str]:
    """Return the text of the first <!-- name: TEXT --> comment."""
    pattern = SENTINEL_TEMPLATE.format(name=re.escape(name))
    match = re.search(pattern, content)
    if not match:
        return None
    return match.group(1).strip()


def strip_tags(text: str) -> str:
    """Remove every tag from a fragment of markup."""
    return TAG_RE.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Trim text and replace every run of whitespace with one space."""
    return " ".join(text.split())


def truncate(text: str, limit: int = 100) -> str:
    """Cut text to limit characters, appending an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def capitalize_words(text: str) -> str:
    """Uppercase the first letter of every whitespace-separated word."""
    return re.sub(r"(^|\s)(\w)", lambda m: m.group(1) + m.group(2).upper(), text)


def escape_html(text: str) -> str:
    """Escape &, <, >, " and ' as HTML entities."""
    for char, entity in HTML_ESCAPES:
        text = text.replace(char, entity)
    return text
