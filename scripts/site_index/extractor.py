"""Metadata extraction with ordered fallback chains.

Each field (title, description, category) is resolved by a tuple of rules.
A rule is a pure function returning a string or None; the first non-blank
result wins and the last rule of every chain always succeeds, so extraction
never fails.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from scripts.site_index.patterns import (
    H1_RE,
    PARAGRAPH_RE,
    TITLE_RE,
    capitalize_words,
    escape_html,
    first_element_text,
    meta_content,
    sentinel_comment,
    truncate,
)

DEFAULT_DESCRIPTION = "Click to view this project."
DEFAULT_CATEGORY = "Other"
DESCRIPTION_LIMIT = 100
UNTITLED = "Untitled"


@dataclass(frozen=True)
class PageSource:
    """Inputs a rule may consult for one page."""

    content: str
    stem: str  # filename without extension
    parent_dir: Optional[str] = None  # None when the page sits in the content root


@dataclass(frozen=True)
class ExtractedMetadata:
    """Resolved, HTML-escaped metadata for one page."""

    title: str
    description: str
    category: str


Rule = Callable[[PageSource], Optional[str]]


# Title rules

def title_from_title_tag(source: PageSource) -> Optional[str]:
    return first_element_text(source.content, TITLE_RE)


def title_from_meta_description(source: PageSource) -> Optional[str]:
    return meta_content(source.content, "description")


def title_from_h1(source: PageSource) -> Optional[str]:
    return first_element_text(source.content, H1_RE)


def title_from_filename(source: PageSource) -> Optional[str]:
    """Turn "my-cool_tool" into "My Cool Tool"."""
    words = re.sub(r"[-_]+", " ", source.stem).strip()
    return capitalize_words(words) or source.stem or UNTITLED


# Description rules

def description_from_meta(source: PageSource) -> Optional[str]:
    return meta_content(source.content, "description")


def description_from_sentinel(source: PageSource) -> Optional[str]:
    return sentinel_comment(source.content, "desc")


def description_from_paragraph(source: PageSource) -> Optional[str]:
    return first_element_text(source.content, PARAGRAPH_RE)


def description_default(source: PageSource) -> Optional[str]:
    return DEFAULT_DESCRIPTION


# Category rules

def category_from_meta(source: PageSource) -> Optional[str]:
    return meta_content(source.content, "category")


def category_from_keywords(source: PageSource) -> Optional[str]:
    keywords = meta_content(source.content, "keywords")
    if keywords is None:
        return None
    return keywords.split(",")[0].strip()


def category_from_sentinel(source: PageSource) -> Optional[str]:
    return sentinel_comment(source.content, "category")


def category_from_parent_dir(source: PageSource) -> Optional[str]:
    if not source.parent_dir:
        return None
    return capitalize_words(source.parent_dir)


def category_default(source: PageSource) -> Optional[str]:
    return DEFAULT_CATEGORY


TITLE_RULES: tuple[Rule, ...] = (
    title_from_title_tag,
    title_from_meta_description,
    title_from_h1,
    title_from_filename,
)

DESCRIPTION_RULES: tuple[Rule, ...] = (
    description_from_meta,
    description_from_sentinel,
    description_from_paragraph,
    description_default,
)

CATEGORY_RULES: tuple[Rule, ...] = (
    category_from_meta,
    category_from_keywords,
    category_from_sentinel,
    category_from_parent_dir,
    category_default,
)


def resolve(rules: tuple[Rule, ...], source: PageSource) -> str:
    """Evaluate rules in order and return the first non-blank result.

    Args:
        rules: Ordered fallback chain; the last rule must always succeed.
        source: The page being described.

    Returns:
        The winning value with surrounding whitespace trimmed.

    Raises:
        ValueError: If every rule, including the last, came back blank.
    """
    for rule in rules:
        value = rule(source)
        if value and value.strip():
            return value.strip()
    raise ValueError(f"No rule produced a value for {source.stem!r}")


def extract(
    content: str,
    stem: str,
    parent_dir: Optional[str] = None,
) -> ExtractedMetadata:
    """Extract title, description and category from one HTML page.

    Args:
        content: Raw page text.
        stem: Filename without the .html extension.
        parent_dir: Name of the page's parent directory, or None if the page
            sits directly in the content root.

    Returns:
        ExtractedMetadata with every field non-empty and HTML-escaped.
    """
    source = PageSource(content=content, stem=stem, parent_dir=parent_dir)
    return ExtractedMetadata(
        title=escape_html(resolve(TITLE_RULES, source)),
        description=escape_html(
            truncate(resolve(DESCRIPTION_RULES, source), DESCRIPTION_LIMIT)
        ),
        category=escape_html(resolve(CATEGORY_RULES, source)),
    )
