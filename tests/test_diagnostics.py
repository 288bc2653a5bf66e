# tests/test_diagnostics.py

import pytest

from easterizer.core.time import UTCDateTime
from easterizer.diagnostics import feast_scatter, round_trip


def test_round_trip_has_no_failures(capsys):
    assert round_trip.roundtrip_test(500, -1000, 3000, seed=42, max_failures=1) == 0
    assert "worst error" in capsys.readouterr().out


def test_random_instant_stays_in_range():
    for _ in range(200):
        ts = round_trip.random_instant(1582, 1582)
        assert ts.year == 1582
        assert ts.microsecond % 1000 == 0


def test_scatter_metrics():
    assert feast_scatter.day_of_year(UTCDateTime(2024, 3, 31)) == 91
    assert feast_scatter.day_of_year(UTCDateTime(2023, 12, 31)) == 365
    assert 10.0 < feast_scatter.days_since_solar_event(UTCDateTime(2024, 3, 31), 0) < 11.0
    assert feast_scatter.days_since_solar_event(UTCDateTime(2024, 3, 1), 0) > 340.0


def test_build_series(easter_rule):
    np = pytest.importorskip("numpy")
    x, y = feast_scatter.build_series(np, easter_rule, 2022, 2025, metric="doy")
    assert x.tolist() == [2022.0, 2023.0, 2024.0, 2025.0]
    # Apr 17, Apr 9, Mar 31 (leap year), Apr 20
    assert y.tolist() == [107.0, 99.0, 91.0, 110.0]


def test_scatter_writes_png(tmp_path):
    pytest.importorskip("numpy")
    mpl = pytest.importorskip("matplotlib")
    mpl.use("Agg")
    outbase = str(tmp_path / "easter")
    assert feast_scatter.main(["2024-03-31", "--from-year", "2020", "--to-year", "2024", "--outbase", outbase]) == 0
    assert (tmp_path / "easter.png").exists()
