# astropos/core/angles.py
# -*- coding: utf-8 -*-
"""
Degree-based trigonometry and angle unit systems.

Public API:
    sin_deg / cos_deg / tan_deg / asin_deg / acos_deg / atan_deg
    HourAngle, SexagesimalDegrees
    wrap360, div, resolve_quadrant, toggle_azimuth_reference, pad0

Numeric policy: out-of-domain arguments yield NaN (IEEE style) instead of
raising, so a bad input surfaces as NaN at the end of a pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union
import math
import re

from astropos.core.constants import DEGREES_PER_HOUR

__all__ = [
    "sin_deg", "cos_deg", "tan_deg", "asin_deg", "acos_deg", "atan_deg",
    "wrap360", "div", "resolve_quadrant", "toggle_azimuth_reference", "pad0",
    "SINE_AXIS", "COSINE_AXIS",
    "HourAngle", "SexagesimalDegrees",
]

Number = Union[int, float]


# ───────────────────────────── Trigonometry in degrees ─────────────────────
def sin_deg(degrees: float) -> float:
    return math.sin(math.radians(degrees)) if math.isfinite(degrees) else math.nan


def cos_deg(degrees: float) -> float:
    return math.cos(math.radians(degrees)) if math.isfinite(degrees) else math.nan


def tan_deg(degrees: float) -> float:
    return math.tan(math.radians(degrees)) if math.isfinite(degrees) else math.nan


def asin_deg(value: float) -> float:
    """Arcsine in degrees; |value| > 1 gives NaN."""
    if not -1.0 <= value <= 1.0:
        return math.nan
    return math.degrees(math.asin(value))


def acos_deg(value: float) -> float:
    """Arccosine in degrees; |value| > 1 gives NaN."""
    if not -1.0 <= value <= 1.0:
        return math.nan
    return math.degrees(math.acos(value))


def atan_deg(value: float) -> float:
    return math.degrees(math.atan(value))


# ───────────────────────────── Small helpers ───────────────────────────────
def wrap360(x: float) -> float:
    r = float(x) % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if r >= 360.0 else r


def div(num: float, den: float) -> float:
    """IEEE-754 division: x/0 gives ±inf, 0/0 gives nan."""
    if den != 0.0:
        return num / den
    if num == 0.0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def toggle_azimuth_reference(azimuth: float) -> float:
    """Swap between north- and south-referenced azimuth."""
    azimuth = azimuth + 180.0
    if azimuth >= 360.0:
        azimuth -= 360.0
    return azimuth


# ───────────────────────────── Quadrant disambiguation ─────────────────────
SINE_AXIS = "sine"      # result and reference share the sign of their sine
COSINE_AXIS = "cosine"  # result and reference share the sign of their cosine


def resolve_quadrant(
    primary: float,
    reference: float,
    *,
    axis: str = SINE_AXIS,
    denominator: Optional[float] = None,
) -> float:
    """
    Pick the right branch of an arctangent result.

    `primary` is atan(num/den) in degrees (-90..90); the true angle is either
    it (wrapped into [0, 360)) or the angle opposite to it. The candidate lying
    in the same 90° quadrant as `reference` wins. If neither does, the result
    and the reference straddle a quadrant boundary and the candidate on the
    reference's side of `axis` is returned.

    An exactly zero `primary` lies on the boundary itself; when `denominator`
    is given its sign picks 0 (den > 0) or 180 (den < 0).
    """
    if primary == 0.0 and denominator is not None and not math.isnan(denominator):
        return 0.0 if denominator > 0.0 else 180.0

    first = wrap360(primary) if primary < 0.0 else primary
    second = first - 180.0 if first >= 180.0 else first + 180.0

    quadrant = math.floor(wrap360(reference) / 90.0) if math.isfinite(reference) else None
    if math.isfinite(first):
        if math.floor(first / 90.0) == quadrant:
            return first
        if math.floor(second / 90.0) == quadrant:
            return second

    side = sin_deg if axis == SINE_AXIS else cos_deg
    return first if side(first) * side(reference) > 0.0 else second


# ───────────────────────────── Formatting ──────────────────────────────────
_NUM_RE = re.compile(r"^(-)?(\d+)(\.(\d+))?$")


def pad0(num: Number, count_int: int = 0, count_dec: int = 0) -> str:
    """
    Zero-pad the integer part to `count_int` digits and the decimals to
    `count_dec` digits.

        pad0(5, 2)          -> "05"
        pad0(20, 5)         -> "00020"
        pad0(1337, 3)       -> "1337"
        pad0(3.14, 3, 4)    -> "003.1400"
    """
    m = _NUM_RE.match(str(num))
    if not m:
        return "NaN"
    sign, integer, dec = m.group(1), m.group(2), m.group(4)
    integer = integer.rjust(count_int, "0")
    if count_dec > 0:
        dec = "0" * count_dec if dec is None else dec.ljust(count_dec, "0")
    out = ("-" if sign else "") + integer
    if dec is not None:
        out += "." + dec
    return out


# ───────────────────────────── Unit systems ────────────────────────────────
def _split_signed(value: float, unit: float) -> Tuple[int, float, float, float]:
    """
    Decompose |value| into (sign, whole units, whole minutes, seconds), where
    `unit` is the size of one whole unit in degrees. Sign is applied by the
    caller to all three fields at once.
    """
    sign = 1 if value >= 0 else -1
    # divmod keeps each remainder in [0, step)
    whole, rest = divmod(abs(value), unit)
    minutes, rest = divmod(rest, unit / 60.0)
    seconds = rest / (unit / 3600.0)
    return sign, float(whole), float(minutes), seconds


def _format_signed(values: Tuple[float, float, float], marks: Tuple[str, str, str]) -> str:
    sign = "-" if any(v < 0 for v in values) else ""
    a, b, c = (abs(v) for v in values)
    # round before printing so 59.999s carries into the minutes
    c = round(c, 2)
    if c >= 60.0:
        c -= 60.0
        b += 1
    if b >= 60.0:
        b -= 60.0
        a += 1
    return (
        f"{sign}{pad0(int(a), 2)}{marks[0]} "
        f"{pad0(int(b), 2)}{marks[1]} "
        f"{pad0(f'{c:.2f}', 2, 2)}{marks[2]}"
    )


@dataclass(frozen=True)
class HourAngle:
    """
    Angle in hour units: 05h 14m 56s -> HourAngle(5, 14, 56).
    One hour is 15 degrees.
    """
    hours: float
    minutes: float
    seconds: float

    def to_degrees(self) -> float:
        return (
            self.hours * DEGREES_PER_HOUR
            + self.minutes * (DEGREES_PER_HOUR / 60.0)
            + self.seconds * (DEGREES_PER_HOUR / 3600.0)
        )

    @classmethod
    def from_degrees(cls, degrees: float) -> "HourAngle":
        sign, h, m, s = _split_signed(degrees, DEGREES_PER_HOUR)
        return cls(h * sign, m * sign, s * sign)

    def __str__(self) -> str:
        return _format_signed((self.hours, self.minutes, self.seconds), ("h", "m", "s"))


@dataclass(frozen=True)
class SexagesimalDegrees:
    """Angle in degrees, arcminutes and arcseconds: 245° 14' 56"."""
    degrees: float
    minutes: float
    seconds: float

    def to_degrees(self) -> float:
        return self.degrees + self.minutes / 60.0 + self.seconds / 3600.0

    @classmethod
    def from_degrees(cls, degrees: float) -> "SexagesimalDegrees":
        sign, d, m, s = _split_signed(degrees, 1.0)
        return cls(d * sign, m * sign, s * sign)

    def __str__(self) -> str:
        return _format_signed((self.degrees, self.minutes, self.seconds), ("°", "'", '"'))
