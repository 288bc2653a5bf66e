# tests/conftest.py

import pytest

import easterizer
from easterizer.config import get_settings
from easterizer.reference.moon_phases import MeeusPhaseOracle


@pytest.fixture
def oracle():
    return MeeusPhaseOracle()


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test sees defaults unless it sets EASTERIZER_* itself."""
    for name in ("EASTERIZER_ORACLE", "EASTERIZER_OBSERVATIONS", "EASTERIZER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    easterizer.set_oracle(None)
    yield
    get_settings.cache_clear()
    easterizer.set_oracle(None)


@pytest.fixture
def easter_rule(oracle):
    """First Sunday after the first Full Moon following the March equinox."""
    return easterizer.derive_rule("2024-03-31", oracle=oracle)
