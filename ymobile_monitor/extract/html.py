"""
ymobile_monitor.extract.html
============================
BeautifulSoup parsing shared by the form-token and usage extractors.
"""

from bs4 import BeautifulSoup

from ..errors import ExtractError

try:
    import lxml  # noqa: F401 – used as BeautifulSoup parser backend
    _BS4_PARSER = "lxml"
except ImportError:
    _BS4_PARSER = "html.parser"


def parse_html(html: str | bytes | None) -> BeautifulSoup:
    """
    Parse *html* into a soup.  ``None`` is treated as an empty document.

    Raises:
        ExtractError: if the parser itself gives up on the input
    """
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")
    try:
        return BeautifulSoup(html or "", _BS4_PARSER)
    except Exception as exc:
        raise ExtractError(f"Unparsable HTML: {exc}") from exc
