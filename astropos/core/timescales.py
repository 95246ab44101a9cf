# astropos/core/timescales.py
# -----------------------------------------------------------------------------
# Calendar → Julian Day and mean sidereal time
#
# Public API:
#   julian_day(year, month, day_with_fraction)        -> float
#   julian_day_from_datetime(instant)                 -> float
#   julian_centuries_j2000(jd) / julian_millennia_j2000(jd) -> float
#   sidereal_time(geo_longitude, instant)             -> HourAngle
#   local_sidereal_degrees(geo_longitude, instant)    -> float
#   to_utc(instant) / utc_now() / resolve_instant(instant) -> datetime
#
# Conventions:
#   • Instants are datetimes; naive values are treated as UTC, aware values
#     are converted to UTC before any calendar field is read.
#   • Gregorian calendar throughout (no Julian-calendar switch before 1582).
#   • Sidereal time: GMST at 0h UT from the IAU 1982 polynomial, plus the
#     elapsed UT scaled to sidereal rate, plus the east longitude.
# -----------------------------------------------------------------------------
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
import math

from astropos.core.angles import HourAngle, wrap360
from astropos.core.constants import (
    DAYS_PER_CENTURY,
    DAYS_PER_MILLENNIUM,
    GMST0_COEFFS,
    JD_J2000,
    SIDEREAL_RATE,
)

__all__ = [
    "to_utc",
    "utc_now",
    "resolve_instant",
    "julian_day",
    "julian_day_from_datetime",
    "julian_centuries_j2000",
    "julian_millennia_j2000",
    "sidereal_time",
    "local_sidereal_degrees",
]


# ───────────────────────────── Instants ─────────────────────────────
def to_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_instant(instant: Optional[datetime]) -> datetime:
    """None means now; anything else is normalised to UTC."""
    return utc_now() if instant is None else to_utc(instant)


# ───────────────────────────── Julian Day ─────────────────────────────
def julian_day(year: int, month: int, day: float) -> float:
    """
    Julian Day for a Gregorian calendar date.

    `day` is the day of the month and may carry a fraction for the time of
    day (0.5 == 12:00 UT). January and February count as months 13 and 14 of
    the previous year.
    """
    if month > 2:
        y, m = year, month
    else:
        y, m = year - 1, month + 12
    b = 2 - math.floor(y / 100) + math.floor(y / 400)
    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + day + b - 1524.5


def julian_day_from_datetime(instant: datetime) -> float:
    """Julian Day of an instant, time of day (down to µs) folded into the day."""
    dt = to_utc(instant)
    day = (
        dt.day
        + dt.hour / 24.0
        + dt.minute / 60.0 / 24.0
        + dt.second / 60.0 / 60.0 / 24.0
        + dt.microsecond / 1e6 / 60.0 / 60.0 / 24.0
    )
    return julian_day(dt.year, dt.month, day)


def julian_centuries_j2000(jd: float) -> float:
    """Time since 2000-01-01 12h in Julian centuries."""
    return (jd - JD_J2000) / DAYS_PER_CENTURY


def julian_millennia_j2000(jd: float) -> float:
    """Time since 2000-01-01 12h in Julian millennia."""
    return (jd - JD_J2000) / DAYS_PER_MILLENNIUM


# ───────────────────────────── Sidereal time ─────────────────────────────
def _gmst0_degrees(t: float) -> float:
    c0, c1, c2, c3 = GMST0_COEFFS
    return c0 + c1 * t + c2 * t ** 2 - (t ** 3 / c3)


def sidereal_time(geo_longitude: float, instant: Optional[datetime] = None) -> HourAngle:
    """
    Local mean sidereal time for an east longitude (degrees) at an instant.
    `None` means now.
    """
    return HourAngle.from_degrees(local_sidereal_degrees(geo_longitude, instant))


def local_sidereal_degrees(geo_longitude: float, instant: Optional[datetime] = None) -> float:
    """Local mean sidereal time in degrees, [0, 360)."""
    dt = resolve_instant(instant)

    jd0 = julian_day(dt.year, dt.month, dt.day)
    t = julian_centuries_j2000(jd0)
    elapsed = HourAngle(dt.hour, dt.minute, dt.second + dt.microsecond / 1e6).to_degrees()

    greenwich = _gmst0_degrees(t) + elapsed * SIDEREAL_RATE
    return wrap360(greenwich + geo_longitude)
