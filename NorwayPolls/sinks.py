from __future__ import annotations

import re
import sqlite3
from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from .models import POLL_COLUMNS, PollRecord, SchemaVariant

_POLLS_DDL = """
CREATE TABLE IF NOT EXISTS polls (
    startDate date,
    endDate date NOT NULL,
    source varchar(255) NOT NULL,
    election varchar(50),
    region varchar(255) NOT NULL,
    party varchar(10) NOT NULL,
    percentage float NOT NULL,
    comment varchar(255),
    mandates integer
)
"""


def party_slug(code: str) -> str:
    """'KrF' -> 'krf', 'Andre partier' -> 'andre_partier'."""
    slug = re.sub(r"[^a-z0-9]+", "_", code.lower()).strip("_")
    if not slug:
        raise ValueError(f"Party code {code!r} has no usable characters for a column name.")
    return slug


def party_columns(parties: Sequence[str]) -> list[str]:
    cols: list[str] = []
    for p in parties:
        s = party_slug(p)
        cols += [f"{s}_percent", f"{s}_mandates"]
    return cols


class RecordSink:
    """
    Base SQLite sink. Subclasses decide the table layout.

    Usage:
        with SqlitePollsSink("data.sqlite") as sink:
            sink.prepare("parliament", parties)
            for r in records:
                sink.insert(r)
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.con = sqlite3.connect(str(self.db_path))

    def prepare(self, election: str, parties: Sequence[str]) -> None:
        """Called before the records of one normalized table are inserted."""

    def insert(self, record: PollRecord) -> None:
        raise NotImplementedError

    def insert_many(self, records: Iterable[PollRecord]) -> int:
        n = 0
        for r in records:
            self.insert(r)
            n += 1
        return n

    def flush(self) -> None:
        self.con.commit()

    def close(self) -> None:
        try:
            self.flush()
        finally:
            self.con.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            # Keep whatever earlier sources committed; drop the half-written one
            self.con.rollback()
            self.con.close()
            return
        self.close()


class SqlitePollsSink(RecordSink):
    """Fixed schema: every record is one row of the shared `polls` table."""

    def __init__(self, db_path: str | Path) -> None:
        super().__init__(db_path)
        self.con.execute(_POLLS_DDL)

    def insert(self, record: PollRecord) -> None:
        row = record.as_row()
        placeholders = ", ".join("?" for _ in POLL_COLUMNS)
        sql = f"INSERT INTO polls ({', '.join(POLL_COLUMNS)}) VALUES ({placeholders})"
        self.con.execute(sql, [row[c] for c in POLL_COLUMNS])


class SqlitePartyColumnsSink(RecordSink):
    """
    Dynamic schema: one table per election, one row per poll label, and a
    `<party>_percent` / `<party>_mandates` column pair per party.

    Column order follows the party order given to prepare(). Parties seen
    later for the same election are appended with ALTER TABLE. Rows are
    buffered and written on flush() because one poll row arrives as several
    party records.
    """

    BASE_COLUMNS = ["name", "date", "region"]

    def __init__(self, db_path: str | Path) -> None:
        super().__init__(db_path)
        self._schemas: dict[str, list[str]] = {}
        self._pending: dict[str, list[dict[str, object]]] = {}
        # (region, label, end date) -> index of the row that is still being filled
        self._open_rows: dict[str, dict[tuple, int]] = {}

    def _create_schema(self, election: str, parties: Sequence[str]) -> None:
        cols = ["name varchar(255)", "date date NOT NULL", "region varchar(255)"]
        for p in parties:
            s = party_slug(p)
            cols += [f"{s}_percent float", f"{s}_mandates integer"]
        self.con.execute(f'CREATE TABLE IF NOT EXISTS "{election}" ({", ".join(cols)})')

    def _existing_columns(self, election: str) -> set[str]:
        return {row[1] for row in self.con.execute(f'PRAGMA table_info("{election}")')}

    def prepare(self, election: str, parties: Sequence[str]) -> None:
        if election not in self._schemas:
            self._schemas[election] = []
            self._pending.setdefault(election, [])
            self._open_rows.setdefault(election, {})
            self._create_schema(election, parties)

        known = self._schemas[election]
        existing = self._existing_columns(election)
        for p in parties:
            if p in known:
                continue
            s = party_slug(p)
            # Table may predate this run (kept database) or this table's party set
            if f"{s}_percent" not in existing:
                self.con.execute(f'ALTER TABLE "{election}" ADD COLUMN {s}_percent float')
                self.con.execute(f'ALTER TABLE "{election}" ADD COLUMN {s}_mandates integer')
            known.append(p)

    def schema_columns(self, election: str) -> list[str]:
        return self.BASE_COLUMNS + party_columns(self._schemas[election])

    def insert(self, record: PollRecord) -> None:
        if record.election not in self._schemas:
            raise ValueError(f"prepare() was not called for election {record.election!r}")
        if record.party not in self._schemas[record.election]:
            raise ValueError(
                f"Party {record.party!r} is not part of the {record.election!r} schema; call prepare() first."
            )

        s = party_slug(record.party)
        rows = self._pending[record.election]
        open_rows = self._open_rows[record.election]
        key = (record.region, record.comment, record.end_date)

        idx = open_rows.get(key)
        if idx is not None and f"{s}_percent" in rows[idx]:
            # Same label listed twice: keep both polls as separate rows
            print(
                f"[Polls] WARNING: repeated row {record.comment!r} ({record.region}) "
                f"in {record.election!r}; writing it as a new row"
            )
            idx = None
        if idx is None:
            rows.append(
                {"name": record.comment, "date": record.end_date.isoformat(), "region": record.region}
            )
            idx = open_rows[key] = len(rows) - 1

        row = rows[idx]
        row[f"{s}_percent"] = record.percentage
        row[f"{s}_mandates"] = record.mandates

    def party_row(self, election: str, row: dict[str, object]) -> tuple:
        """Positional tuple in schema column order (missing parties -> None)."""
        return tuple(row.get(c) for c in self.schema_columns(election))

    def flush(self) -> None:
        for election, rows in self._pending.items():
            if not rows:
                continue
            columns = self.schema_columns(election)
            df = pd.DataFrame(
                [self.party_row(election, r) for r in rows],
                columns=columns,
            )
            df.to_sql(election, self.con, if_exists="append", index=False)
            rows.clear()
            self._open_rows[election].clear()
        self.con.commit()


def make_sink(db_path: str | Path, schema: SchemaVariant = "fixed") -> RecordSink:
    if schema == "fixed":
        return SqlitePollsSink(db_path)
    if schema == "party_columns":
        return SqlitePartyColumnsSink(db_path)
    raise ValueError(f"Unknown schema {schema!r}. Available: ['fixed', 'party_columns']")


def read_table(db_path: str | Path, table: str = "polls") -> pd.DataFrame:
    """Read a sink table back as a DataFrame."""
    con = sqlite3.connect(str(db_path))
    try:
        return pd.read_sql_query(f'SELECT * FROM "{table}"', con)
    finally:
        con.close()
