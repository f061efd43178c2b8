"""Command-line front end."""

import json

import pytest

from kundali_calc.cli import build_parser, main

CHART_ARGS = ["chart", "--date", "1990-06-15", "--time", "10:30",
              "--lat", "28.6139", "--lon", "77.2090", "--tz", "Asia/Kolkata"]


def test_chart_text(capsys):
    assert main(CHART_ARGS) == 0
    out = capsys.readouterr().out
    for heading in ("LAGNA", "PLANETS", "PANCHANG", "VIMSHOTTARI DASHA"):
        assert heading in out
    assert "Ketu" in out


def test_chart_json(capsys):
    assert main(CHART_ARGS + ["--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["input"]["timezone"] == "Asia/Kolkata"
    assert len(data["planets"]) == 9


def test_transits_json(capsys):
    assert main(["transits", "--at", "2024-01-01T00:00:00", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["calculated_at"] == "2024-01-01T00:00:00+00:00"


def test_transits_table(capsys):
    assert main(["transits", "--at", "2024-01-01T00:00:00"]) == 0
    out = capsys.readouterr().out
    assert "TRANSITS  2024-01-01 00:00 UTC" in out
    assert "Saturn" in out


def test_invalid_input_exit_code(capsys):
    args = ["chart", "--date", "1990-06-15", "--time", "10:30", "--lat", "95", "--lon", "0"]
    assert main(args) == 2
    assert "latitude" in capsys.readouterr().err


def test_subcommand_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
