# tests/test_api.py

from datetime import date
from unittest.mock import patch

import pytest

import easterizer
from easterizer.reference.moon_phases import MeeusPhaseOracle


class CountingOracle:
    """Delegates to the Meeus series and records how often it is asked."""

    def __init__(self):
        self.inner = MeeusPhaseOracle()
        self.calls = 0

    def phase_set(self, jd):
        self.calls += 1
        return self.inner.phase_set(jd)

    def phase_range(self, start_jd, end_jd, phase):
        self.calls += 1
        return self.inner.phase_range(start_jd, end_jd, phase)


def test_accepts_strings_dates_and_instants():
    a = easterizer.derive_rule("2024-03-31")
    b = easterizer.derive_rule(date(2024, 3, 31))
    c = easterizer.derive_rule(easterizer.UTCDateTime(2024, 3, 31))
    assert a == b == c


def test_project_and_observations():
    rule = easterizer.derive_rule("2024-03-31")
    assert easterizer.project("2024-03-31", rule) == easterizer.UTCDateTime(2025, 4, 20)
    assert easterizer.project("2024-03-31", rule, forward=False) == easterizer.UTCDateTime(2023, 4, 9)

    out = easterizer.observations(rule, "2022-01-01")
    assert len(out) == 5
    assert out[0] == easterizer.UTCDateTime(2022, 4, 17)
    assert out == sorted(out)


def test_observations_count_from_environment(monkeypatch):
    monkeypatch.setenv("EASTERIZER_OBSERVATIONS", "2")
    easterizer.config.get_settings.cache_clear()
    rule = easterizer.derive_rule("2024-03-31")
    assert len(easterizer.observations(rule, "2022-01-01")) == 2
    assert len(easterizer.observations(rule, "2022-01-01", count=3)) == 3


def test_year_range_is_checked():
    with pytest.raises(easterizer.YearRangeError):
        easterizer.derive_rule("3001-01-01")
    with pytest.raises(easterizer.YearRangeError):
        easterizer.derive_rule("-1001-12-31")
    with pytest.raises(easterizer.YearRangeError):
        easterizer.season_start(0, 3001)
    with pytest.raises(easterizer.YearRangeError):
        easterizer.phase_set("3001-01-01")


def test_errors_share_a_base():
    with pytest.raises(easterizer.EasterizerError):
        easterizer.derive_rule("2023-02-29")
    with pytest.raises(ValueError):
        easterizer.derive_rule("not a date")


def test_injected_oracle_is_used():
    oracle = CountingOracle()
    rule = easterizer.derive_rule("2024-03-31", oracle=oracle)
    assert oracle.calls > 0
    assert rule == easterizer.derive_rule("2024-03-31")


def test_set_oracle_replaces_default():
    oracle = CountingOracle()
    easterizer.set_oracle(oracle)
    assert easterizer.get_oracle() is oracle
    easterizer.phase_set("2024-03-20")
    assert oracle.calls == 1

    easterizer.set_oracle(None)
    assert isinstance(easterizer.get_oracle(), MeeusPhaseOracle)


def test_astronomical_primitives():
    evs = easterizer.seasons(2024)
    assert evs[0].season == "spring"
    assert easterizer.season_start(4, 2024) == evs[1].jd

    ps = easterizer.phase_set("2024-03-20")
    fulls = easterizer.phase_range("2024-03-01", "2024-04-30", 2)
    assert fulls == (ps.full, easterizer.phase_set("2024-04-20").full)


def test_explain():
    out = easterizer.explain("2024-03-31")
    assert out["date"] == "2024-03-31"
    assert out["description"] == "the first Sunday after the first Full Moon following the March equinox"
    assert out["solar"]["label"] == "spring"
    assert out["lunar"]["instant"].startswith("2024-03-25T")


def test_default_oracle_is_loaded_from_settings(monkeypatch):
    monkeypatch.setenv("EASTERIZER_ORACLE", "somewhere.oracles:Fancy")
    easterizer.config.get_settings.cache_clear()
    sentinel = CountingOracle()
    with patch("easterizer.api.load_oracle") as mock:
        mock.return_value = sentinel
        assert easterizer.get_oracle() is sentinel
        assert easterizer.get_oracle() is sentinel
    mock.assert_called_once_with("somewhere.oracles:Fancy")


def test_time_of_day_is_dropped():
    assert easterizer.derive_rule("2024-03-25T12:00") == easterizer.derive_rule("2024-03-25")
    rule = easterizer.derive_rule("2024-03-31T23:59:59Z")
    assert rule == easterizer.derive_rule("2024-03-31")
    assert easterizer.project("2024-03-31T18:00", rule) == easterizer.UTCDateTime(2025, 4, 20)
    assert easterizer.observations(rule, "2024-03-31T06:00", count=1, forward=False) == [
        easterizer.UTCDateTime(2023, 4, 9)
    ]
    assert easterizer.explain("2024-03-25T12:00")["date"] == "2024-03-25"
