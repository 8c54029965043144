from __future__ import annotations

import re

from .errors import MalformedCellError
from .models import ParsedCell

# "27,4 (51)" -> percentage 27,4 with 51 mandates; the mandate part is optional.
# Anything after the mandate count (footnote markers) is ignored.
_CELL_RE = re.compile(r"^(\d+(?:,\d+)?)(?:\s*\((\d+)\).*|\s*)$")

# InFact grid cells: "27,4" or "27,4 %"
_SHARE_RE = re.compile(r"^(\d+(?:,\d+)?)\s*%?$")


def _to_percentage(raw_number: str, cell: str) -> float:
    value = float(raw_number.replace(",", "."))
    if value > 100.0:
        raise MalformedCellError(cell, reason="percentage above 100")
    return value


def parse_cell(raw: str) -> ParsedCell:
    """Parse a pollofpolls cell: percentage with a decimal comma and optional seat count."""
    cell = (raw or "").strip()
    m = _CELL_RE.match(cell)
    if not m:
        raise MalformedCellError(cell)

    mandates = int(m.group(2)) if m.group(2) is not None else None
    return ParsedCell(percentage=_to_percentage(m.group(1), cell), mandates=mandates)


def parse_share_cell(raw: str) -> ParsedCell:
    """Parse a month-grid cell (percentage only, optional trailing %)."""
    cell = (raw or "").strip()
    m = _SHARE_RE.match(cell)
    if not m:
        raise MalformedCellError(cell)
    return ParsedCell(percentage=_to_percentage(m.group(1), cell))
