from .cells import parse_cell, parse_share_cell
from .config import PollsConfig, get_config, load_polls_config
from .dates import DateLabelResolver
from .election_type_rules import ElectionClassifier
from .errors import (
    MalformedCellError,
    TableCountError,
    UnclassifiableDateError,
    UnknownPartyError,
)
from .models import (
    DateRange,
    Issue,
    NormalizeOptions,
    NormalizeResult,
    PollRecord,
    PollSource,
    RawTable,
    SourceMeta,
)
from .normalize import TableNormalizer, normalize_month_grid, normalize_table
from .parties import PartyResolver
from .pipeline import PollsPipeline, scrape_polls
from .polls_client import HttpConfig, PollsHttpClient
from .sinks import SqlitePartyColumnsSink, SqlitePollsSink, make_sink
from .tables import extract_tables, first_table

__all__ = [
    "parse_cell",
    "parse_share_cell",
    "PollsConfig",
    "get_config",
    "load_polls_config",
    "DateLabelResolver",
    "ElectionClassifier",
    "MalformedCellError",
    "TableCountError",
    "UnclassifiableDateError",
    "UnknownPartyError",
    "DateRange",
    "Issue",
    "NormalizeOptions",
    "NormalizeResult",
    "PollRecord",
    "PollSource",
    "RawTable",
    "SourceMeta",
    "TableNormalizer",
    "normalize_month_grid",
    "normalize_table",
    "PartyResolver",
    "PollsPipeline",
    "scrape_polls",
    "HttpConfig",
    "PollsHttpClient",
    "SqlitePartyColumnsSink",
    "SqlitePollsSink",
    "make_sink",
    "extract_tables",
    "first_table",
]
