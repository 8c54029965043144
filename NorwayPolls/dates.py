from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Iterable, Mapping, Optional

from .config import LabelCorrection
from .errors import TableCountError
from .models import DateRange

# "Uke 37-2015"
_WEEK_RE = re.compile(r"^Uke\s+(\d{1,2})-(\d{4})")

# "Aug '15", "Sept ’14", "Mars '11"
_MONTH_YEAR_RE = re.compile(r"^([A-Za-zÆØÅæøå]+)\.?\s+['’](\d{2})$")

# Half-month columns used by InFact in August
_AUGUST_SPLITS = {"Aug I": 1, "Aug II": 15}


def month_range(year: int, month: int) -> DateRange:
    """First to last day of a month (last day = next month's first day - 1)."""
    first = date(year, month, 1)
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return DateRange(start=first, end=next_first - timedelta(days=1))


def week_range(week: int, year: int) -> Optional[DateRange]:
    """Monday-Sunday range of ISO week `week` in `year`, or None if that week does not exist."""
    try:
        end = date.fromisocalendar(year, week, 7)
    except ValueError:
        return None
    return DateRange(start=end - timedelta(days=6), end=end)


class DateLabelResolver:
    """
    Turn row and column labels into DateRanges.

    Row labels come in three families, tried in order:
      1. "Uke <week>-<yyyy>"  -> ISO week, Monday to Sunday
      2. "<Month> '<yy>"      -> the whole month
      3. a literal date passed in by the caller (page-level date)

    Anything else resolves to None and the caller decides what to skip.
    """

    def __init__(
        self,
        months: Mapping[str, int],
        corrections: Iterable[LabelCorrection] = (),
        table_years: Iterable[int] = (),
    ) -> None:
        self._months = {k.lower(): v for k, v in months.items()}
        self._corrections = {(c.label, c.after): c.replacement for c in corrections}
        self._table_years = list(table_years)

    # ------------------------------------------------------------------
    # Row labels
    # ------------------------------------------------------------------

    def correct_label(self, label: str, previous_label: Optional[str]) -> str:
        """
        Undo known publisher typos that are only visible from the previous row,
        e.g. "Uke 1-2014" listed right after "Uke 2-2015" is really week 1 of 2015.
        """
        if previous_label is None:
            return label
        return self._corrections.get((label, previous_label), label)

    def month_number(self, name: str) -> Optional[int]:
        return self._months.get(name.strip().rstrip(".").lower())

    def resolve(
        self,
        raw_label: str,
        previous_label: Optional[str] = None,
        literal_date: Optional[date] = None,
    ) -> Optional[DateRange]:
        label = self.correct_label((raw_label or "").strip(), previous_label)

        m = _WEEK_RE.match(label)
        if m:
            return week_range(int(m.group(1)), int(m.group(2)))

        m = _MONTH_YEAR_RE.match(label)
        if m:
            month = self.month_number(m.group(1))
            if month is not None:
                return month_range(2000 + int(m.group(2)), month)

        if literal_date is not None:
            return DateRange(end=literal_date)

        return None

    # ------------------------------------------------------------------
    # Month-grid column headers
    # ------------------------------------------------------------------

    def table_year(self, table_index: int) -> int:
        """Year of the n-th table on a grid page; tables are listed newest first."""
        if not 0 <= table_index < len(self._table_years):
            raise TableCountError(table_index, len(self._table_years))
        return self._table_years[table_index]

    def resolve_column(self, header: str, year: int) -> Optional[DateRange]:
        label = (header or "").strip()

        day = _AUGUST_SPLITS.get(label)
        if day is not None:
            return DateRange(end=date(year, 8, day))

        month = self.month_number(label)
        if month is None:
            return None
        return month_range(year, month)
