"""Render a Catalog into the self-contained index page."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from scripts.site_index.catalog import Catalog, Record
from scripts.site_index.page_template import CATALOG_SCRIPT, PAGE_STYLE, PAGE_TEMPLATE
from scripts.site_index.patterns import escape_html

# Keep "</script>" and friends out of the embedded JSON block.
JSON_SCRIPT_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
)


@dataclass(frozen=True)
class PageOptions:
    """Page chrome and interface labels."""

    title: str = "Utilities"
    subtitle: str = "A collection of small web tools"
    author: str = ""
    lang: str = "en"
    description: str = "Catalog of standalone HTML utilities."
    keywords: str = "utilities, tools, html"
    search_placeholder: str = "Search projects..."
    filter_label: str = "Filter by category"
    all_categories: str = "All categories"
    theme_label: str = "Toggle dark mode"
    back_to_top: str = "Back to top"
    no_results: str = "No projects found."
    opens_in_new_tab: str = "opens in a new tab"
    hash_label: str = "File hash"


def record_data(record: Record) -> dict[str, Any]:
    """Embedded representation of one record."""
    return {
        "id": record.id,
        "title": record.title,
        "description": record.description,
        "icon": record.icon,
        "category": record.category,
        "path": record.absolute_url,
        "lastModified": record.last_modified,
        "fileHash": record.content_hash,
    }


def catalog_data(catalog: Catalog) -> list[dict[str, Any]]:
    """Embedded record list, in category order then discovery order."""
    return [record_data(record) for record in catalog.records()]


def dump_catalog_json(catalog: Catalog) -> str:
    """Serialize the catalog for a <script type="application/json"> block."""
    text = json.dumps(catalog_data(catalog), ensure_ascii=False, indent=2)
    for char, escape in JSON_SCRIPT_ESCAPES:
        text = text.replace(char, escape)
    return text


def _footer(catalog: Catalog, options: PageOptions) -> str:
    count = len(catalog)
    noun = "project" if count == 1 else "projects"
    text = f"{count} {noun}"
    if options.author:
        text += f" &middot; {escape_html(options.author)}"
    return text


def render_page(catalog: Catalog, options: PageOptions = PageOptions()) -> str:
    """Render the full catalog page.

    Args:
        catalog: Records grouped by category.
        options: Page chrome and labels.

    Returns:
        Complete HTML document. An empty catalog still renders a valid page;
        its script shows the no-results state.
    """
    labels = {
        "__NO_RESULTS__": options.no_results,
        "__OPENS_IN_NEW_TAB__": options.opens_in_new_tab,
        "__HASH_LABEL__": options.hash_label,
    }
    script = CATALOG_SCRIPT
    for marker, value in labels.items():
        # Labels land inside single-quoted JS strings and HTML text.
        script = script.replace(marker, escape_html(value))

    replacements = {
        "__LANG__": options.lang,
        "__TITLE__": options.title,
        "__SUBTITLE__": options.subtitle,
        "__AUTHOR__": options.author,
        "__DESCRIPTION__": options.description,
        "__KEYWORDS__": options.keywords,
        "__SEARCH_PLACEHOLDER__": options.search_placeholder,
        "__FILTER_LABEL__": options.filter_label,
        "__ALL_CATEGORIES__": options.all_categories,
        "__THEME_LABEL__": options.theme_label,
        "__BACK_TO_TOP__": options.back_to_top,
    }
    page = PAGE_TEMPLATE
    for marker, value in replacements.items():
        page = page.replace(marker, escape_html(value))

    page = page.replace("__FOOTER__", _footer(catalog, options))
    page = page.replace("__STYLE__", PAGE_STYLE)
    page = page.replace("__SCRIPT__", script)
    # Data goes in last so record text is never scanned for markers.
    return page.replace("__CATALOG_DATA__", dump_catalog_json(catalog))
