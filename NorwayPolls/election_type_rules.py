from __future__ import annotations

from bisect import bisect_right
from datetime import date, timedelta
from typing import Iterable

from .config import ElectionPeriod
from .errors import UnclassifiableDateError


# ----------------------------
# Election type classification
# ----------------------------

class ElectionClassifier:
    """
    Classify a poll date into the election it was tracking.

    Used for sources that publish one running series (InFact) without saying
    which election a month's figures were aimed at. Periods are closed
    intervals and must follow each other day by day: a gap or an overlap in
    the config is rejected when the classifier is built.
    """

    def __init__(self, periods: Iterable[ElectionPeriod]) -> None:
        self._periods = sorted(periods, key=lambda p: p.start)
        if not self._periods:
            raise ValueError("At least one election period is required.")

        for p in self._periods:
            if p.start > p.end:
                raise ValueError(f"Election period starts after it ends: {p}")
            if p.election is None:
                raise ValueError(f"Election period has no election type: {p}")

        for prev, cur in zip(self._periods, self._periods[1:]):
            if cur.start != prev.end + timedelta(days=1):
                raise ValueError(
                    f"Election periods must tile without gaps or overlaps: "
                    f"{prev.end.isoformat()} is followed by {cur.start.isoformat()}"
                )

        self._starts = [p.start for p in self._periods]

    @property
    def first_date(self) -> date:
        return self._periods[0].start

    @property
    def last_date(self) -> date:
        return self._periods[-1].end

    def classify(self, d: date) -> str:
        i = bisect_right(self._starts, d) - 1
        if i < 0 or d > self._periods[i].end:
            raise UnclassifiableDateError(d)
        return self._periods[i].election
