from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from .config import PollsConfig, get_config
from .models import (
    CellPolicy,
    Issue,
    NormalizeOptions,
    NormalizeResult,
    PollRecord,
    PollSource,
    SchemaVariant,
    issues_to_dataframe,
    records_to_dataframe,
)
from .normalize import TableNormalizer
from .polls_client import HttpConfig, PollsHttpClient
from .sinks import RecordSink, make_sink
from .tables import extract_tables, first_table


def _elections_in_order(records: Iterable[PollRecord]) -> list[str]:
    seen: dict[str, None] = {}
    for r in records:
        seen.setdefault(r.election, None)
    return list(seen)


class PollsPipeline:
    """
    Fetch -> extract -> normalize -> persist, one source at a time.

    Sources run strictly in order. Skipped rows/cells are reported and the
    run goes on; fatal errors (HTTP failure, unknown party, unclassifiable
    date, strict-mode malformed cell) propagate and stop the run. Sources
    that finished before the failure stay committed in the sink.
    """

    def __init__(
        self,
        sink: RecordSink,
        client: Optional[PollsHttpClient] = None,
        options: Optional[NormalizeOptions] = None,
        config: Optional[PollsConfig] = None,
    ) -> None:
        self.config = config or get_config()
        self.sink = sink
        self.client = client or PollsHttpClient()
        self.options = options or NormalizeOptions()
        self.normalizer = TableNormalizer(self.config)

    def normalize_page(self, page_html: str, source: PollSource) -> list[NormalizeResult]:
        if source.layout == "week_rows":
            return [self.normalizer.normalize(first_table(page_html), source.meta, self.options)]

        if source.layout == "month_grid":
            # Empty tables still count towards the position that fixes each grid's year
            tables = extract_tables(page_html)
            if not any(table.header for table in tables):
                raise ValueError(f"No table found in page: {source.url}")
            return [
                self.normalizer.normalize_month_grid(table, idx, source.meta, self.options)
                for idx, table in enumerate(tables)
                if table.header
            ]

        raise ValueError(f"Unknown layout {source.layout!r} for {source.url}")

    def _persist(self, result: NormalizeResult) -> int:
        n = 0
        for election in _elections_in_order(result.records):
            self.sink.prepare(election, result.parties)
            n += self.sink.insert_many(r for r in result.records if r.election == election)
        return n

    def _scrape_one(self, source: PollSource) -> tuple[list[PollRecord], list[Issue]]:
        page_html = self.client.get_html(source.url, encoding=source.encoding)
        results = self.normalize_page(page_html, source)

        records: list[PollRecord] = []
        issues: list[Issue] = []
        for result in results:
            self._persist(result)
            records.extend(result.records)
            issues.extend(result.issues)
        self.sink.flush()

        print(
            f"[Polls] NOTE: {source.meta.label} -> "
            f"{len(records):,} record(s), {len(issues)} skipped row/cell(s)"
        )
        return records, issues

    def run(self, sources: Optional[Iterable[PollSource]] = None) -> tuple[pd.DataFrame, pd.DataFrame]:
        """
        Scrape every source (default: the configured list).

        Returns (records_df, issues_df); records are also written to the sink.
        """
        sources = list(sources) if sources is not None else list(self.config.sources)

        all_records: list[PollRecord] = []
        all_issues: list[Issue] = []
        for source in sources:
            print(f"[Polls] Scraping {source.meta.label} ({source.url})", flush=True)
            records, issues = self._scrape_one(source)
            all_records.extend(records)
            all_issues.extend(issues)

        return records_to_dataframe(all_records), issues_to_dataframe(all_issues)


# =========================================================
# Public API
# =========================================================

def scrape_polls(
    db_path: str | Path,
    schema: SchemaVariant = "fixed",
    cell_policy: CellPolicy = "strict",
    sources: Optional[Iterable[PollSource]] = None,
    http_config: Optional[HttpConfig] = None,
    reset: bool = True,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Scrape the configured poll sources into a SQLite database.

    Parameters
    ----------
    db_path : str | Path
        SQLite file to write.
    schema : {'fixed', 'party_columns'}
        'fixed' writes one shared `polls` table; 'party_columns' writes one
        table per election with a column pair per party.
    cell_policy : {'strict', 'lenient'}
        'strict' aborts on the first unparseable cell; 'lenient' skips it.
    sources : iterable of PollSource, optional
        Defaults to the sources in polls_config.json.
    http_config : HttpConfig, optional
        Timeout / delay / user agent for the HTTP client.
    reset : bool
        Delete an existing database file first (default: True).
    """
    path = Path(db_path)
    if reset and path.exists():
        print(f"[Polls] NOTE: removing existing database {path}")
        path.unlink()

    client = PollsHttpClient(http_config)
    options = NormalizeOptions(cell_policy=cell_policy)

    with make_sink(path, schema) as sink:
        pipeline = PollsPipeline(sink, client=client, options=options)
        return pipeline.run(sources)
