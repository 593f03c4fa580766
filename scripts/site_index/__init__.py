"""Site index - catalog generator for a collection of standalone HTML pages.

This package provides tools for:
- Extracting title, description and category from each HTML page
- Choosing a display icon for each page from an ordered keyword table
- Fingerprinting pages (content hash + last-modified stamp)
- Rendering a searchable, filterable catalog page
- Staging the pages and publishing them to a git hosting branch

Usage:
    python -m scripts.site_index init      # Write a starter site-index.yaml
    python -m scripts.site_index build     # Generate the catalog page
    python -m scripts.site_index list      # Print the catalog without writing
    python -m scripts.site_index publish   # Stage, build, commit and push
"""

__version__ = "1.0.0"
