from __future__ import annotations

import re
from typing import List

from lxml import html

from .models import RawTable

# pollofpolls.no and infact.no both render their poll tables inside #content
CONTENT_TABLES_XPATH = "//*[@id='content']//table"


def _clean_ws(s: str) -> str:
    """Collapse all whitespace to single spaces and trim."""
    return re.sub(r"\s+", " ", s or "").strip()


def _safe_text(node) -> str:
    return _clean_ws(node.text_content())


def _table_rows(table) -> list[tuple[str, ...]]:
    # Only this table's own rows; nested tables are extracted separately
    rows = []
    for tr in table.xpath("./tr | ./thead/tr | ./tbody/tr | ./tfoot/tr"):
        rows.append(tuple(_safe_text(cell) for cell in tr.xpath("./th | ./td")))
    return rows


def extract_tables(page_html: str, xpath: str = CONTENT_TABLES_XPATH) -> List[RawTable]:
    """
    Extract every table matched by `xpath` into a RawTable.

    The first row of each table becomes the header (for InFact that is the
    <thead> row). Row and cell order are kept; cell text is whitespace
    collapsed. A table without rows comes back with an empty header and no
    rows, so list positions match the page's table order.
    """
    doc = html.fromstring(page_html)

    out: List[RawTable] = []
    for table in doc.xpath(xpath):
        rows = _table_rows(table)
        if not rows:
            out.append(RawTable(header=(), rows=()))
            continue
        header, *body = rows
        out.append(RawTable(header=header, rows=tuple(body)))
    return out


def first_table(page_html: str, xpath: str = CONTENT_TABLES_XPATH) -> RawTable:
    for table in extract_tables(page_html, xpath):
        if table.header:
            return table
    raise ValueError(f"No table found in page (xpath={xpath!r})")
