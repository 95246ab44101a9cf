# astropos/core/constants.py
# -*- coding: utf-8 -*-
"""
astropos: core constants

Purpose
-------
Single source of truth for:
- body catalogue (VSOP87 numbering + the Sun)
- ecliptic / unit constants
- time constants (J2000 epoch, century, millennium, sidereal rate)
- the mean sidereal time polynomial at 0h UT

Design
------
- Pure-Python, no external dependencies.
- Safe to import from any core module.
- Constants are immutable by convention.
"""

from __future__ import annotations
from enum import Enum
from typing import Tuple

__all__ = [
    # bodies
    "Body", "PLANETS",
    # geometry / units
    "OBLIQUITY_DEG", "KM_PER_AU",
    # time
    "JD_J2000", "DAYS_PER_CENTURY", "DAYS_PER_MILLENNIUM", "SIDEREAL_RATE",
    "GMST0_COEFFS", "DEGREES_PER_HOUR",
]

# ── bodies ────────────────────────────────────────────────────────────────────
class Body(Enum):
    """Bodies covered by the series tables; values follow VSOP87 numbering."""

    SUN = (0, "sun")
    MERCURY = (1, "mer")
    VENUS = (2, "ven")
    EARTH = (3, "ear")
    MARS = (4, "mar")
    JUPITER = (5, "jup")
    SATURN = (6, "sat")
    URANUS = (7, "ura")
    NEPTUNE = (8, "nep")

    def __init__(self, number: int, abbreviation: str) -> None:
        self.number = number
        self.abbreviation = abbreviation

    @classmethod
    def from_abbreviation(cls, abbreviation: str) -> "Body":
        key = (abbreviation or "").strip().lower()
        for body in cls:
            if body.abbreviation == key:
                return body
        raise ValueError(f"unknown body abbreviation '{abbreviation}'")


# Bodies a Planet facade may be built for (Earth is the observer's platform).
PLANETS: Tuple[Body, ...] = (
    Body.MERCURY, Body.VENUS, Body.MARS, Body.JUPITER,
    Body.SATURN, Body.URANUS, Body.NEPTUNE,
)

# ── geometry / units ─────────────────────────────────────────────────────────
OBLIQUITY_DEG: float = 23.44          # mean obliquity of the ecliptic (rounded)
KM_PER_AU: float = 149597870.7

# ── time ─────────────────────────────────────────────────────────────────────
JD_J2000: float = 2451545.0           # 2000-01-01 12:00 TT
DAYS_PER_CENTURY: float = 36525.0
DAYS_PER_MILLENNIUM: float = 365250.0
DEGREES_PER_HOUR: float = 15.0

# Mean solar day → sidereal rotation
SIDEREAL_RATE: float = 1.00273790935

# GMST at 0h UT, degrees: c0 + c1·T + c2·T² − T³/c3
GMST0_COEFFS: Tuple[float, float, float, float] = (
    100.46061837,
    36000.770053608,
    0.000387933,
    38710000.0,
)
