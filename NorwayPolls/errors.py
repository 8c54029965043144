from __future__ import annotations

from datetime import date


class UnknownPartyError(ValueError):
    """A party label that is missing from the configured party mapping."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Unknown party label: {label!r}")


class MalformedCellError(ValueError):
    """A cell whose text does not look like a poll figure."""

    def __init__(self, cell: str, reason: str = "unable to parse cell") -> None:
        self.cell = cell
        super().__init__(f"{reason}: {cell!r}")


class UnclassifiableDateError(ValueError):
    """A date that no configured election period covers."""

    def __init__(self, d: date) -> None:
        self.date = d
        super().__init__(
            f"No election period covers {d.isoformat()}; extend election_periods in the config."
        )


class TableCountError(ValueError):
    """A page carries more tables than there are configured years for."""

    def __init__(self, index: int, known: int) -> None:
        self.index = index
        super().__init__(
            f"Table #{index} has no configured year ({known} known); extend grid_table_years in the config."
        )
