import pytest

from NorwayPolls.cells import parse_cell, parse_share_cell
from NorwayPolls.errors import MalformedCellError


@pytest.mark.parametrize(
    "raw, percentage, mandates",
    [
        ("12,3 (4)", 12.3, 4),
        ("30,1 (55)", 30.1, 55),
        ("0,4 (0)", 0.4, 0),
        ("7 (1)", 7.0, 1),
        ("25,0", 25.0, None),
        ("  4,9 (8) ", 4.9, 8),
    ],
)
def test_parse_cell(raw, percentage, mandates):
    cell = parse_cell(raw)
    assert cell.percentage == percentage
    assert cell.mandates == mandates


@pytest.mark.parametrize("raw", ["", "-", "n/a", "12.3 (4)", "12,3 (x)", "(4)", "12,3 *"])
def test_parse_cell_rejects_malformed_text(raw):
    with pytest.raises(MalformedCellError) as excinfo:
        parse_cell(raw)
    assert excinfo.value.cell == raw.strip()


def test_parse_cell_rejects_percentage_above_100():
    with pytest.raises(MalformedCellError, match="above 100"):
        parse_cell("100,1 (3)")


def test_parse_share_cell_accepts_percent_sign():
    assert parse_share_cell("31,2 %").percentage == 31.2
    assert parse_share_cell("31,2%").percentage == 31.2
    assert parse_share_cell("5").mandates is None


def test_parse_share_cell_rejects_seat_counts():
    with pytest.raises(MalformedCellError):
        parse_share_cell("30,1 (55)")


@pytest.mark.parametrize(
    "raw, percentage, mandates",
    [("30,1 (55)*", 30.1, 55), ("12,3 (4) *", 12.3, 4), ("8,0 (14) 1)", 8.0, 14)],
)
def test_parse_cell_ignores_footnotes_after_mandates(raw, percentage, mandates):
    cell = parse_cell(raw)
    assert (cell.percentage, cell.mandates) == (percentage, mandates)
