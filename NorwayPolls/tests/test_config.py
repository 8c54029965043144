import json
from datetime import date

import pytest

from NorwayPolls.config import get_config, load_polls_config


def _write(tmp_path, **overrides):
    data = {
        "parties": {"Ap": "A"},
        "months": {"jan": 1},
        "election_periods": [{"start": "2015-01-01", "end": "2015-12-31", "election": "parliament"}],
    }
    data.update(overrides)
    path = tmp_path / "polls_config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_packaged_config_loads(config):
    assert config.parties["Høyre"] == "H"
    assert config.parties["Andre partier"] == "Andre"
    assert config.months["sept"] == 9
    assert config.grid_table_years[0] == 2015
    assert config.election_periods[0].start == date(2009, 1, 1)
    assert config.sources[0].encoding == "ISO-8859-1"
    assert get_config() == config


def test_minimal_config_defaults(tmp_path):
    cfg = load_polls_config(_write(tmp_path, months={"JAN": 1}))
    assert cfg.months == {"jan": 1}
    assert cfg.sources == []
    assert cfg.label_corrections == []
    assert cfg.grid_table_years == []


def test_month_numbers_are_validated(tmp_path):
    with pytest.raises(ValueError, match="1-12"):
        load_polls_config(_write(tmp_path, months={"jan": 1, "smarch": 13}))


def test_unknown_election_is_rejected(tmp_path):
    periods = [{"start": "2015-01-01", "end": "2015-12-31", "election": "referendum"}]
    with pytest.raises(ValueError, match="referendum"):
        load_polls_config(_write(tmp_path, election_periods=periods))


def test_label_corrections_and_sources(tmp_path):
    cfg = load_polls_config(
        _write(
            tmp_path,
            label_corrections=[{"label": "Uke 1-2014", "after": "Uke 2-2015", "replacement": "Uke 1-2015"}],
            sources=[{"url": "http://x.test/", "source": "InFact", "region": "Norge", "layout": "month_grid"}],
        )
    )
    assert cfg.label_corrections[0].replacement == "Uke 1-2015"
    src = cfg.sources[0]
    assert src.meta.election is None
    assert src.meta.label == "InFact/Norge/classified"
    assert src.layout == "month_grid"
    assert src.encoding is None
