from __future__ import annotations

from typing import Optional

from .cells import parse_cell, parse_share_cell
from .config import PollsConfig, get_config
from .dates import DateLabelResolver
from .election_type_rules import ElectionClassifier
from .errors import MalformedCellError
from .models import (
    DateRange,
    Issue,
    IssueKind,
    NormalizeOptions,
    NormalizeResult,
    PollRecord,
    RawTable,
    SourceMeta,
)
from .parties import PartyResolver

_CELL_POLICIES = ("strict", "lenient")

# Issue.row_index for problems found in the header row
HEADER_ROW = -1


def _issue(kind: IssueKind, row_index: int, raw: str, message: str) -> Issue:
    """Build a diagnostic and print it, so every skipped row/cell leaves a trace."""
    print(f"[Polls] WARNING: {message}")
    return Issue(kind=kind, row_index=row_index, raw=raw, message=message)


def _check_policy(options: NormalizeOptions) -> None:
    if options.cell_policy not in _CELL_POLICIES:
        raise ValueError(
            f"Unknown cell_policy {options.cell_policy!r}. Available: {list(_CELL_POLICIES)}"
        )


class TableNormalizer:
    """
    Turn one extracted RawTable into PollRecords plus skip diagnostics.

    Two layouts are supported:
      - normalize():             one row per poll week/month, one column per party (pollofpolls)
      - normalize_month_grid():  one row per party, one column per month (InFact archive)

    Structural surprises that mean the config is stale (unknown party,
    date outside every election period, unexpected table count) raise.
    Row-level oddities are recorded as Issues and skipped.
    """

    def __init__(self, config: Optional[PollsConfig] = None) -> None:
        cfg = config or get_config()
        self.config = cfg
        self.parties = PartyResolver(cfg.parties)
        self.dates = DateLabelResolver(
            months=cfg.months,
            corrections=cfg.label_corrections,
            table_years=cfg.grid_table_years,
        )
        self.classifier = ElectionClassifier(cfg.election_periods)
        self._grid_skip_rows = set(cfg.grid_skip_rows)

    def _election_for(self, meta: SourceMeta, period: DateRange) -> str:
        return meta.election or self.classifier.classify(period.end)

    # =========================================================
    # Week/month rows (pollofpolls)
    # =========================================================

    def normalize(
        self,
        table: RawTable,
        meta: SourceMeta,
        options: Optional[NormalizeOptions] = None,
    ) -> NormalizeResult:
        options = options or NormalizeOptions()
        _check_policy(options)

        # Resolve every party column before touching rows: one unknown label aborts the table
        parties = self.parties.resolve_all(table.header[1:])

        records: list[PollRecord] = []
        issues: list[Issue] = []

        # Corrected label of the last correctly shaped row; fixes are keyed on it
        previous_label: Optional[str] = None

        for i, row in enumerate(table.rows):
            label, cells = (row[0], row[1:]) if row else ("", ())

            if len(cells) != len(parties):
                issues.append(
                    _issue(
                        "RowShapeMismatch",
                        i,
                        repr(row),
                        f"skipping invalid row ({len(cells)} cells, expected {len(parties)}): {row!r}",
                    )
                )
                continue

            corrected = self.dates.correct_label(label, previous_label)
            previous_label = corrected

            period = self.dates.resolve(corrected, literal_date=options.literal_date)
            if period is None:
                issues.append(
                    _issue("UnresolvableDate", i, label, f"unable to parse date from name: {label!r}")
                )
                continue

            election = self._election_for(meta, period)

            for party, cell in zip(parties, cells):
                try:
                    parsed = parse_cell(cell)
                except MalformedCellError as e:
                    if options.cell_policy == "strict":
                        raise
                    issues.append(
                        _issue("MalformedCell", i, cell, f"skipping {party} in row {label!r}: {e}")
                    )
                    continue

                records.append(
                    PollRecord(
                        region=meta.region,
                        source=meta.source,
                        election=election,
                        party=party,
                        percentage=parsed.percentage,
                        mandates=parsed.mandates,
                        comment=label,
                        start_date=period.start,
                        end_date=period.end,
                    )
                )

        return NormalizeResult(parties=parties, records=tuple(records), issues=tuple(issues))

    # =========================================================
    # Month grid (InFact)
    # =========================================================

    def normalize_month_grid(
        self,
        table: RawTable,
        table_index: int,
        meta: SourceMeta,
        options: Optional[NormalizeOptions] = None,
    ) -> NormalizeResult:
        options = options or NormalizeOptions()
        _check_policy(options)

        # The page never prints the year; it follows from the table's position
        year = self.dates.table_year(table_index)
        columns = table.header[1:]

        issues: list[Issue] = []
        periods: list[Optional[DateRange]] = []
        for header in columns:
            period = self.dates.resolve_column(header, year)
            if period is None:
                issues.append(
                    _issue(
                        "UnresolvableDate",
                        HEADER_ROW,
                        header,
                        f"unable to parse date from column {header!r} ({year})",
                    )
                )
            periods.append(period)

        party_rows = [
            (i, row) for i, row in enumerate(table.rows) if row and row[0] not in self._grid_skip_rows
        ]
        parties = self.parties.resolve_all(row[0] for _, row in party_rows)

        records: list[PollRecord] = []
        for (i, row), party in zip(party_rows, parties):
            label, cells = row[0], row[1:]
            if len(cells) != len(columns):
                issues.append(
                    _issue(
                        "RowShapeMismatch",
                        i,
                        repr(row),
                        f"skipping invalid row ({len(cells)} cells, expected {len(columns)}): {row!r}",
                    )
                )
                continue

            for header, period, cell in zip(columns, periods, cells):
                # Empty cell: no figure published for that month
                if period is None or not cell.strip():
                    continue

                try:
                    parsed = parse_share_cell(cell)
                except MalformedCellError as e:
                    if options.cell_policy == "strict":
                        raise
                    issues.append(
                        _issue("MalformedCell", i, cell, f"skipping {party} in column {header!r}: {e}")
                    )
                    continue

                records.append(
                    PollRecord(
                        region=meta.region,
                        source=meta.source,
                        election=self._election_for(meta, period),
                        party=party,
                        percentage=parsed.percentage,
                        comment=header,
                        start_date=period.start,
                        end_date=period.end,
                    )
                )

        return NormalizeResult(parties=parties, records=tuple(records), issues=tuple(issues))


# =========================================================
# Public API
# =========================================================

def normalize_table(
    table: RawTable,
    meta: SourceMeta,
    options: Optional[NormalizeOptions] = None,
    config: Optional[PollsConfig] = None,
) -> NormalizeResult:
    return TableNormalizer(config).normalize(table, meta, options)


def normalize_month_grid(
    table: RawTable,
    table_index: int,
    meta: SourceMeta,
    options: Optional[NormalizeOptions] = None,
    config: Optional[PollsConfig] = None,
) -> NormalizeResult:
    return TableNormalizer(config).normalize_month_grid(table, table_index, meta, options)
