from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable, Literal, Optional

import pandas as pd

Election = Literal["municipality", "county", "parliament", "snitt"]
CellPolicy = Literal["strict", "lenient"]
SchemaVariant = Literal["fixed", "party_columns"]
TableLayout = Literal["week_rows", "month_grid"]
IssueKind = Literal["RowShapeMismatch", "UnresolvableDate", "MalformedCell"]

ELECTIONS: tuple[str, ...] = ("municipality", "county", "parliament", "snitt")

# Column order of the fixed `polls` table
POLL_COLUMNS = [
    "startDate",
    "endDate",
    "source",
    "election",
    "region",
    "party",
    "percentage",
    "comment",
    "mandates",
]


@dataclass(frozen=True)
class RawTable:
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class DateRange:
    """A poll period. `start` is None when the source only carries one date."""

    end: date
    start: Optional[date] = None

    def __post_init__(self) -> None:
        if self.start is not None and self.start > self.end:
            raise ValueError(f"start {self.start} is after end {self.end}")


@dataclass(frozen=True)
class ParsedCell:
    percentage: float
    mandates: Optional[int] = None


@dataclass(frozen=True)
class PollRecord:
    region: str
    source: str
    election: Election
    party: str
    percentage: float
    comment: str
    end_date: date
    start_date: Optional[date] = None
    mandates: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.percentage <= 100.0:
            raise ValueError(f"percentage out of range: {self.percentage}")
        if self.mandates is not None and self.mandates < 0:
            raise ValueError(f"negative mandates: {self.mandates}")
        if self.start_date is not None and self.start_date > self.end_date:
            raise ValueError(f"startDate {self.start_date} is after endDate {self.end_date}")

    def as_row(self) -> dict:
        """Columns of the fixed `polls` table, dates as ISO strings."""
        return {
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat(),
            "source": self.source,
            "election": self.election,
            "region": self.region,
            "party": self.party,
            "percentage": self.percentage,
            "comment": self.comment,
            "mandates": self.mandates,
        }


@dataclass(frozen=True)
class Issue:
    kind: IssueKind
    row_index: int
    raw: str
    message: str


@dataclass(frozen=True)
class SourceMeta:
    source: str
    region: str
    election: Optional[Election] = None  # None: classify each record by date

    @property
    def label(self) -> str:
        return f"{self.source}/{self.region}/{self.election or 'classified'}"


@dataclass(frozen=True)
class NormalizeOptions:
    cell_policy: CellPolicy = "strict"
    literal_date: Optional[date] = None


@dataclass(frozen=True)
class NormalizeResult:
    parties: tuple[str, ...]
    records: tuple[PollRecord, ...]
    issues: tuple[Issue, ...]


@dataclass(frozen=True)
class PollSource:
    url: str
    meta: SourceMeta
    layout: TableLayout = "week_rows"
    encoding: Optional[str] = None  # None: trust the response headers


def records_to_dataframe(records: Iterable[PollRecord]) -> pd.DataFrame:
    """
    Convert PollRecord objects into a DataFrame with the `polls` column order.
    """
    rows = [r.as_row() for r in records]
    return pd.DataFrame.from_records(rows, columns=POLL_COLUMNS)


def issues_to_dataframe(issues: Iterable[Issue]) -> pd.DataFrame:
    return pd.DataFrame([asdict(i) for i in issues], columns=["kind", "row_index", "raw", "message"])
