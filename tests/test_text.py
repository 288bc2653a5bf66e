# tests/test_text.py

import pytest

from easterizer.core.time import UTCDateTime
from easterizer.text import describe_rule, format_date, ordinal


@pytest.mark.parametrize(
    "n, word",
    [(1, "first"), (3, "third"), (12, "twelfth"), (13, "13th"), (21, "21st"), (22, "22nd"), (111, "111th")],
)
def test_ordinal(n, word):
    assert ordinal(n) == word


def test_describe_easter(easter_rule):
    assert describe_rule(easter_rule) == "the first Sunday after the first Full Moon following the March equinox"


def test_describe_fallback_rule(oracle):
    from easterizer.engines.deriver import derive_rule

    rule = derive_rule(UTCDateTime(2024, 3, 21), oracle)
    assert describe_rule(rule) == (
        "the first Thursday after the third First-Quarter Moon following the December solstice"
    )


def test_format_date():
    assert format_date(UTCDateTime(2024, 3, 31, 9)) == "2024-03-31 (Sunday)"
    # proleptic Julian calendar before the reform
    assert format_date(UTCDateTime(-44, 3, 15)) == "-0044-03-15 (Tuesday)"


def test_describe_rule_without_lunar_occurrence(oracle):
    from easterizer.engines.deriver import derive_rule
    from easterizer.text import WEEKDAYS

    rule = derive_rule(UTCDateTime(-933, 1, 2), oracle)
    assert describe_rule(rule) == (
        f"the {ordinal(rule.weekday_count)} {WEEKDAYS[rule.weekday]} following the December solstice"
    )
