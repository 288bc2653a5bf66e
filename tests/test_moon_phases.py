# tests/test_moon_phases.py

import pytest

from easterizer.core.time import UTCDateTime, from_day
from easterizer.reference.moon_phases import true_phase


def test_meeus_example_49a_new_moon():
    """1977 February 18, 3h37m42s TD: JDE 2443192.65118."""
    assert true_phase(-283, 0) == pytest.approx(2443192.65118, abs=5e-4)


def test_meeus_example_49b_last_quarter():
    """First last quarter of 2044: January 21, 23h48m TD, JDE 2467636.49186."""
    assert true_phase(544, 3) == pytest.approx(2467636.49186, abs=1e-3)


def test_2024_spring_lunation(oracle):
    ps = oracle.phase_set(UTCDateTime(2024, 3, 20).jd)
    assert from_day(ps.new).date_key() == (2024, 3, 10)
    assert from_day(ps.first_quarter).date_key() == (2024, 3, 17)
    assert from_day(ps.full).date_key() == (2024, 3, 25)
    assert from_day(ps.last_quarter).date_key() == (2024, 4, 2)
    assert from_day(ps.next_new).date_key() == (2024, 4, 8)

    # full moon of 2024-03-25 at about 07:00 UTC
    assert ps.full == pytest.approx(UTCDateTime(2024, 3, 25, 7, 0).jd, abs=0.01)


@pytest.mark.parametrize("year", [-1000, -500, 0, 800, 1582, 1900, 2024, 2999])
def test_phase_set_contains_instant(oracle, year):
    for month in (1, 4, 7, 10):
        jd = UTCDateTime(year, month, 3, 6).jd
        ps = oracle.phase_set(jd)
        assert ps.new <= jd < ps.next_new
        seq = list(ps.phases()) + [ps.next_new]
        assert seq == sorted(seq)
        assert 29.2 < ps.next_new - ps.new < 29.9


def test_phase_set_at_exact_new_moon(oracle):
    t = true_phase(300, 0)
    assert oracle.phase_set(t).new == t
    assert oracle.phase_set(t - 1e-6).next_new == t


def test_phase_range(oracle):
    start = UTCDateTime(2024, 1, 1).jd
    end = UTCDateTime(2024, 12, 31).jd
    fulls = oracle.phase_range(start, end, 2)
    assert len(fulls) == 12
    assert list(fulls) == sorted(fulls)
    assert all(start <= t <= end for t in fulls)
    assert from_day(fulls[2]).date_key() == (2024, 3, 25)

    # inclusive bounds
    t = fulls[0]
    assert oracle.phase_range(t, t, 2) == (t,)


def test_phase_range_rejects_bad_phase(oracle):
    with pytest.raises(ValueError):
        oracle.phase_range(2460000.0, 2460100.0, 4)
