# tests/conftest.py
from __future__ import annotations

"""
Pytest configuration for the astropos suite.

- Registers Hypothesis profiles for local dev and CI.
- Builds small synthetic VSOP87 tables so no real coefficient data is needed.
- Resets cached settings around tests that touch the environment.
"""

import math
import os
from datetime import datetime, timezone

import pytest
from hypothesis import settings, HealthCheck

from astropos.core.constants import Body
from astropos.core.vsop87 import CoefficientTable, PeriodicSeriesTerm
from astropos.utils.config import get_settings


# ──────────────────────────────────────────────────────────────────────────────
# Hypothesis profiles
# ──────────────────────────────────────────────────────────────────────────────
settings.register_profile(
    "dev",
    settings(
        deadline=None,           # avoid flaky timeouts on slower runners
        max_examples=60,         # fast local runs
        suppress_health_check=[HealthCheck.too_slow],
    ),
)
settings.register_profile(
    "ci",
    settings(
        deadline=None,
        max_examples=120,        # a bit more coverage in CI
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
settings.load_profile(_profile)


def pytest_report_header(config: pytest.Config) -> str:
    return f"Hypothesis profile: '{_profile}'"


# ──────────────────────────────────────────────────────────────────────────────
# Synthetic coefficient tables
# ──────────────────────────────────────────────────────────────────────────────
J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

# one revolution per Julian year, T in millennia
EARTH_FREQ = 6283.07585
MARS_FREQ = 3340.61243


def term(a: float, b: float = 0.0, c: float = 0.0) -> PeriodicSeriesTerm:
    return PeriodicSeriesTerm(amplitude=a, phase=b, frequency=c)


def circular_orbit(radius: float, phase: float, freq: float):
    """X = r·cos(φ + νT), Y = r·sin(φ + νT), Z = 0."""
    return (
        ((term(radius, phase, freq),),),
        ((term(radius, phase - math.pi / 2.0, freq),),),
        ((),),
    )


def build_table() -> CoefficientTable:
    return CoefficientTable.from_series(
        {
            Body.EARTH: circular_orbit(1.0, 1.7534857, EARTH_FREQ),
            Body.MARS: circular_orbit(1.5237, 6.2034809, MARS_FREQ),
            Body.JUPITER: (
                ((term(5.2, 0.5995, 529.69),), (term(0.01),)),
                ((term(5.2, 0.5995 - math.pi / 2.0, 529.69),),),
                ((term(0.1, 1.0, 529.69),),),
            ),
        },
        source="<synthetic>",
    )


@pytest.fixture(scope="session")
def table() -> CoefficientTable:
    return build_table()


@pytest.fixture
def fresh_settings(monkeypatch):
    """Clear env-driven settings before and after the test."""
    for name in ("ASTROPOS_VSOP87_PATH", "ASTROPOS_CONFIG", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def ensure_erfa():
    """
    Fail early if pyERFA isn't importable or missing the oracle functions.
    """
    import erfa  # pyERFA exposes the ERFA namespace as 'erfa'
    assert hasattr(erfa, "cal2jd"), "ERFA.cal2jd not available"
    assert hasattr(erfa, "a2tf"), "ERFA.a2tf not available"
    assert hasattr(erfa, "a2af"), "ERFA.a2af not available"
    return erfa
