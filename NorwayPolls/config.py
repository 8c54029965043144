from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from .models import ELECTIONS, PollSource, SourceMeta

_DEFAULT_CONFIG_PATH = Path(__file__).with_name("polls_config.json")

# =========================================================
# Config model + loader
# =========================================================

@dataclass(frozen=True)
class LabelCorrection:
    """Rewrite `label` to `replacement` when it directly follows `after`."""
    label: str
    after: str
    replacement: str


@dataclass(frozen=True)
class ElectionPeriod:
    start: date
    end: date  # inclusive
    election: str


@dataclass(frozen=True)
class PollsConfig:
    parties: dict[str, str]
    months: dict[str, int]
    label_corrections: list[LabelCorrection]
    grid_table_years: list[int]
    grid_skip_rows: list[str]
    election_periods: list[ElectionPeriod]
    sources: list[PollSource]


def _parse_iso_date(s: str) -> date:
    return datetime.strptime(s, "%Y-%m-%d").date()


def _parse_election(value: object) -> str | None:
    if value is None:
        return None
    s = str(value)
    if s not in ELECTIONS:
        raise ValueError(f"Unknown election type: {s!r}. Available: {list(ELECTIONS)}")
    return s


def load_polls_config(config_path: str | Path) -> PollsConfig:
    """
    Load the scraper configuration from JSON.

    Party labels, month names and election periods change whenever a source
    changes its format, so they live here instead of in the code.
    """
    p = Path(config_path)
    data = json.loads(p.read_text(encoding="utf-8"))

    parties = {str(k): str(v) for k, v in data["parties"].items()}
    months = {str(k).lower(): int(v) for k, v in data["months"].items()}

    bad_months = sorted(k for k, v in months.items() if not 1 <= v <= 12)
    if bad_months:
        raise ValueError(f"Month numbers must be 1-12: {bad_months}")

    corrections = [
        LabelCorrection(
            label=str(item["label"]),
            after=str(item["after"]),
            replacement=str(item["replacement"]),
        )
        for item in data.get("label_corrections", [])
    ]

    periods = [
        ElectionPeriod(
            start=_parse_iso_date(item["start"]),
            end=_parse_iso_date(item["end"]),
            election=_parse_election(item["election"]),
        )
        for item in data["election_periods"]
    ]

    sources: list[PollSource] = []
    for item in data.get("sources", []):
        sources.append(
            PollSource(
                url=str(item["url"]),
                meta=SourceMeta(
                    source=str(item["source"]),
                    region=str(item["region"]),
                    election=_parse_election(item.get("election")),
                ),
                layout=str(item.get("layout", "week_rows")),
                encoding=item.get("encoding"),
            )
        )

    return PollsConfig(
        parties=parties,
        months=months,
        label_corrections=corrections,
        grid_table_years=[int(y) for y in data.get("grid_table_years", [])],
        grid_skip_rows=[str(s) for s in data.get("grid_skip_rows", [])],
        election_periods=periods,
        sources=sources,
    )


def get_config() -> PollsConfig:
    return load_polls_config(_DEFAULT_CONFIG_PATH)
