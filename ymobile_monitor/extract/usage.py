"""
ymobile_monitor.extract.usage
=============================
Extracts data usage figures from the portal's usage summary page.

The figures live in four unlabelled tables inside one toggle container.
Their roles are fixed by position:

* table[0] – carry-over (繰越), every body cell
* table[1] – base allowance (基本), second body row
* table[2] – purchased extra (有料), every body cell
* table[3] – used, every body cell

Missing structure (container, tables) is an error; an unreadable number in an
otherwise intact page is read as 0.0.
"""

import math
import re
from datetime import datetime

from bs4 import Tag

from ..config import USAGE_CONTAINER_SELECTOR, USAGE_TABLE_COUNT
from ..errors import ContainerNotFound, InsufficientTables
from ..logging_setup import log
from ..models import UsageSnapshot
from .html import parse_html

# ASCII digits only: no "_" separators, no full-width or other Unicode digits
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_gb(text: str | None) -> float:
    """
    Convert a cell text such as ``"\\t1.23GB\\n"`` to ``1.23``.

    Tabs, newlines and the ``GB`` suffix are removed before parsing.  Anything
    that is not a finite, non-negative number yields 0.0.
    """
    if not text:
        return 0.0
    cleaned = text.replace("\t", "").replace("\n", "").replace("GB", "").strip()
    if not _NUMBER_RE.fullmatch(cleaned):
        return 0.0
    value = float(cleaned)
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _body_rows(table: Tag) -> list[Tag]:
    # lxml does not synthesise <tbody> the way browsers do; rows outside
    # <thead>/<tfoot> are the implied body
    rows = table.select("tbody tr")
    if rows:
        return rows
    return [
        tr for tr in table.find_all("tr")
        if tr.parent.name not in ("thead", "tfoot")
    ]


def _cells_text(rows: list[Tag]) -> str:
    return " ".join(
        td.get_text(strip=True) for row in rows for td in row.find_all("td")
    )


def extract_usage_snapshot(
    html: str | bytes | None, now: datetime | None = None
) -> UsageSnapshot:
    """
    Build a UsageSnapshot from the usage summary page.

    Parameters
    ----------
    html : Raw page text.
    now  : Capture time; defaults to the current local time.

    Raises
    ------
    ContainerNotFound  : the usage container is absent.
    InsufficientTables : the container holds fewer than four tables.
    """
    soup = parse_html(html)
    container = soup.select_one(USAGE_CONTAINER_SELECTOR)
    if container is None:
        raise ContainerNotFound(USAGE_CONTAINER_SELECTOR)

    tables = container.select("table")
    if len(tables) < USAGE_TABLE_COUNT:
        raise InsufficientTables(found=len(tables), required=USAGE_TABLE_COUNT)

    carry_over = parse_gb(_cells_text(_body_rows(tables[0])))

    base_rows = _body_rows(tables[1])
    base = parse_gb(_cells_text(base_rows[1:2])) if len(base_rows) >= 2 else 0.0

    extra = parse_gb(_cells_text(_body_rows(tables[2])))
    used = parse_gb(_cells_text(_body_rows(tables[3])))

    log.debug(
        "Parsed usage: carry_over=%s base=%s extra=%s used=%s",
        carry_over, base, extra, used,
    )
    return UsageSnapshot(
        carry_over_gb=carry_over,
        base_allowance_gb=base,
        purchased_extra_gb=extra,
        used_gb=used,
        observed_at=now or datetime.now(),
    )
