# tests/test_cli.py

import json

import pytest

from easterizer.cli import main


def test_date_shortcut_describes_rule(capsys):
    assert main(["2024-03-31"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == (
        "2024-03-31 (Sunday) is the first Sunday after the first Full Moon following the March equinox"
    )
    assert "2024-03-25T" in out


def test_rule_json(capsys):
    assert main(["rule", "2024-03-31", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["date"] == "2024-03-31"
    assert data["weekday"] == 0
    assert data["solar"]["label"] == "spring"


def test_next_and_previous(capsys):
    assert main(["next", "2024-03-31"]) == 0
    assert capsys.readouterr().out.strip() == "2025-04-20 (Sunday)"
    assert main(["next", "2024-03-31", "--backward"]) == 0
    assert capsys.readouterr().out.strip() == "2023-04-09 (Sunday)"


def test_observe(capsys):
    assert main(["observe", "2024-03-31", "--from", "2022-01-01", "--count", "3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Observed on the first Sunday")
    assert [ln.strip() for ln in lines[1:]] == [
        "2022-04-17 (Sunday)",
        "2023-04-09 (Sunday)",
        "2024-03-31 (Sunday)",
    ]


def test_seasons_and_phases(capsys):
    assert main(["seasons", "2024"]) == 0
    out = capsys.readouterr().out
    assert "March equinox" in out and "December solstice" in out
    assert "2024-03-20T" in out

    assert main(["phases", "2024-03-20"]) == 0
    out = capsys.readouterr().out
    assert "Full Moon" in out and "2024-03-25T" in out
    assert "Next New Moon" in out


def test_jd_both_ways(capsys):
    assert main(["jd", "2000-01-01T12:00"]) == 0
    assert capsys.readouterr().out.strip() == "2451545.000000"
    assert main(["jd", "2451545.0"]) == 0
    assert capsys.readouterr().out.strip() == "2000-01-01T12:00:00Z"


@pytest.mark.parametrize("argv", [["3001-01-01"], ["next", "2023-02-29"], ["jd", "yesterday"]])
def test_errors_exit_with_status_2(capsys, argv):
    assert main(argv) == 2
    assert capsys.readouterr().err.startswith("easterizer: error:")


def test_diag_round_trip(capsys):
    assert main(["diag", "round-trip", "--N", "200", "--seed", "1"]) == 0
    assert "All round-trip tests passed." in capsys.readouterr().out

