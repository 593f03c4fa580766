"""Shared fixtures for site index tests."""

import pytest

from scripts.site_index.logs import init_context

LONG_PARAGRAPH = "x" * 140

PAGES = {
    "barbershop-queue.html": (
        "<html><head>\n"
        "<title>Barbershop Queue</title>\n"
        '<meta name="description" content="Join the queue at your barber.">\n'
        '<meta name="category" content="Services">\n'
        "</head><body><h1>Queue</h1></body></html>\n"
    ),
    "my-cool_tool.html": (
        "<html><body>\n"
        f"<p>{LONG_PARAGRAPH}</p>\n"
        "</body></html>\n"
    ),
    "finance/budget.html": (
        "<html><head>\n"
        "<title>Budget & Bills</title>\n"
        '<meta name="keywords" content="Finance, money">\n'
        "</head><body><p>Track <b>monthly</b> spending.</p></body></html>\n"
    ),
    "tools/pdf-merge.html": (
        "<html><head><title>PDF Merge</title></head>\n"
        "<!-- desc: Merge several PDFs into one -->\n"
        "<!-- category: Documents -->\n"
        "<body></body></html>\n"
    ),
}


@pytest.fixture(autouse=True)
def quiet_logging():
    """Reset logging so tests never inherit a log file or quiet flag."""
    init_context(quiet=False, log_file=None)
    yield
    init_context(quiet=False, log_file=None)


@pytest.fixture
def sample_site(tmp_path):
    """Create a repository with a utilities/ tree of known pages.

    Also contains files discovery must skip: a hidden page, a non-HTML
    file and a page inside a hidden directory.
    """
    repo = tmp_path / "repo"
    content = repo / "utilities"
    for rel_path, text in PAGES.items():
        page = content / rel_path
        page.parent.mkdir(parents=True, exist_ok=True)
        page.write_text(text, encoding="utf-8")

    (content / ".draft.html").write_text("<title>Draft</title>")
    (content / "notes.txt").write_text("not a page")
    (content / ".cache").mkdir()
    (content / ".cache" / "cached.html").write_text("<title>Cached</title>")
    return repo


@pytest.fixture
def content_root(sample_site):
    """The utilities/ directory of the sample site."""
    return sample_site / "utilities"
