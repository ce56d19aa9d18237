"""Recorded-style portal pages and response stubs shared by the tests."""

from unittest.mock import MagicMock

import requests

from ymobile_monitor.network import PortalEndpoints

ENDPOINTS = PortalEndpoints.for_domain()

CONTAINER_CLASS = "list-toggle-content js-toggle-content m-top-20"

TICKET_PAGE = """
<html><body>
<form method="post" action="https://id.my.ymobile.jp/sbid_auth/type1/2.0/login.php">
  <input type="hidden" name="ticket" value="TICKET-123">
  <input type="hidden" name="lang" value="ja">
  <input type="text" name="telnum">
  <input type="password" name="password">
</form>
</body></html>
"""

TOKEN_PAGE = """
<html><body onload="document.forms[0].submit()">
<form method="post" action="https://re61.my.ymobile.jp/resfe/top/">
  <input type="hidden" name="mfiv" value="IV-value">
  <input type="hidden" name="mfym" value="YM-value">
  <input type="hidden" name="extra" value="ignored">
</form>
</body></html>
"""

# carry-over / base / purchased extra / used, one list of row texts per table
SAMPLE_TABLES = [["1.23GB"], ["x", "1.5GB"], ["0.00GB"], ["2.73GB"]]


def _table(rows: list[str]) -> str:
    body = "".join(f"<tr><td>\n\t\t{text}\n\t</td></tr>" for text in rows)
    return (
        "<table class=\"tbl-data\">"
        "<thead><tr><th>項目</th></tr></thead>"
        f"<tbody>{body}</tbody>"
        "</table>"
    )


def usage_page(tables=None, container_class: str = CONTAINER_CLASS) -> str:
    """Build a usage summary page holding *tables* inside the toggle container."""
    tables = SAMPLE_TABLES if tables is None else tables
    inner = "\n".join(_table(rows) for rows in tables)
    return f"""
<html><head><title>データ量</title></head><body>
<div class="list-toggle-title js-toggle-title">内訳</div>
<div class="{container_class}">
{inner}
</div>
</body></html>
"""


def make_response(url: str, text: str = "", status_code: int = 200):
    resp = MagicMock(spec=requests.Response)
    resp.url = url
    resp.text = text
    resp.status_code = status_code
    resp.headers = {"Content-Type": "text/html; charset=UTF-8"}
    resp.cookies = requests.cookies.RequestsCookieJar()
    return resp
