# -*- coding: utf-8 -*-
"""
Coordinate systems and the conversions between them.

    HeliocentricCartesian ⇄ GeocentricCartesian → Ecliptical → Equatorial ⇄ Azimuthal

All angles are degrees, distances AU. Every value is immutable and every
conversion returns a new value. The heliocentric/geocentric shift needs
Earth's position, so those two methods take the coefficient table.

Azimuth is returned referenced from north (0 = N, 90 = E). The spherical
triangle formulas work from the south point; `toggle_azimuth_reference`
converts between the two.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import math

from astropos.core.angles import (
    COSINE_AXIS,
    SINE_AXIS,
    asin_deg,
    atan_deg,
    cos_deg,
    div,
    resolve_quadrant,
    sin_deg,
    tan_deg,
    toggle_azimuth_reference,
    wrap360,
)
from astropos.core.constants import Body, KM_PER_AU, OBLIQUITY_DEG
from astropos.core.series import evaluate_body
from astropos.core.timescales import local_sidereal_degrees, resolve_instant
from astropos.core.vsop87 import CoefficientTable

__all__ = [
    "Equatorial",
    "Azimuthal",
    "HeliocentricCartesian",
    "GeocentricCartesian",
    "Ecliptical",
]


# ───────────────────────────── Equatorial ─────────────────────────────
@dataclass(frozen=True)
class Equatorial:
    right_ascension: float
    declination: float

    def to_azimuthal(
        self,
        geo_latitude: float,
        geo_longitude: float,
        instant: Optional[datetime] = None,
    ) -> "Azimuthal":
        """Horizontal position seen from (latitude, east longitude) at `instant`."""
        instant = resolve_instant(instant)
        lst = local_sidereal_degrees(geo_longitude, instant)
        hour_angle = lst - self.right_ascension

        height = asin_deg(
            sin_deg(geo_latitude) * sin_deg(self.declination)
            + cos_deg(geo_latitude) * cos_deg(self.declination) * cos_deg(hour_angle)
        )
        num = sin_deg(hour_angle)
        den = (
            sin_deg(geo_latitude) * cos_deg(hour_angle)
            - cos_deg(geo_latitude) * tan_deg(self.declination)
        )
        azimuth_south = resolve_quadrant(
            atan_deg(div(num, den)), hour_angle, axis=SINE_AXIS, denominator=den
        )

        return Azimuthal(toggle_azimuth_reference(azimuth_south), height, instant)


# ───────────────────────────── Azimuthal ─────────────────────────────
@dataclass(frozen=True)
class Azimuthal:
    azimuth: float
    height: float
    instant: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "instant", resolve_instant(self.instant))

    def to_equatorial(self, geo_latitude: float, geo_longitude: float) -> Equatorial:
        lst = local_sidereal_degrees(geo_longitude, self.instant)
        azimuth_south = toggle_azimuth_reference(self.azimuth)

        declination = asin_deg(
            sin_deg(geo_latitude) * sin_deg(self.height)
            - cos_deg(geo_latitude) * cos_deg(self.height) * cos_deg(azimuth_south)
        )
        num = sin_deg(azimuth_south)
        den = (
            sin_deg(geo_latitude) * cos_deg(azimuth_south)
            + cos_deg(geo_latitude) * tan_deg(self.height)
        )
        hour_angle = resolve_quadrant(
            atan_deg(div(num, den)), azimuth_south, axis=SINE_AXIS, denominator=den
        )

        return Equatorial(wrap360(lst - hour_angle), declination)


# ───────────────────────────── Cartesian ─────────────────────────────
def _earth(table: Optional[CoefficientTable], instant: datetime):
    return evaluate_body(table, Body.EARTH, instant)


@dataclass(frozen=True)
class HeliocentricCartesian:
    """Rectangular coordinates centred on the Sun, ecliptic of date."""
    x: float
    y: float
    z: float
    instant: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "instant", resolve_instant(self.instant))

    @property
    def distance_au(self) -> float:
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    @property
    def distance_km(self) -> float:
        return self.distance_au * KM_PER_AU

    def to_geocentric(self, table: Optional[CoefficientTable]) -> "GeocentricCartesian":
        ex, ey, ez = _earth(table, self.instant)
        return GeocentricCartesian(self.x - ex, self.y - ey, self.z - ez, self.instant)


@dataclass(frozen=True)
class GeocentricCartesian:
    """Same axes as HeliocentricCartesian, origin moved to Earth."""
    x: float
    y: float
    z: float
    instant: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "instant", resolve_instant(self.instant))

    @property
    def distance_au(self) -> float:
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    @property
    def distance_km(self) -> float:
        return self.distance_au * KM_PER_AU

    def to_heliocentric(self, table: Optional[CoefficientTable]) -> HeliocentricCartesian:
        ex, ey, ez = _earth(table, self.instant)
        return HeliocentricCartesian(self.x + ex, self.y + ey, self.z + ez, self.instant)

    def to_ecliptical(self) -> "Ecliptical":
        longitude = math.degrees(math.atan2(self.y, self.x))
        latitude = atan_deg(div(self.z, math.sqrt(self.x ** 2 + self.y ** 2)))
        return Ecliptical(longitude, latitude, self.instant)


# ───────────────────────────── Ecliptical ─────────────────────────────
@dataclass(frozen=True)
class Ecliptical:
    """Geocentric ecliptic longitude (-180..180) and latitude."""
    longitude: float
    latitude: float
    instant: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "instant", resolve_instant(self.instant))

    def to_equatorial(self) -> Equatorial:
        e = OBLIQUITY_DEG
        declination = asin_deg(
            cos_deg(e) * sin_deg(self.latitude)
            + sin_deg(e) * cos_deg(self.latitude) * sin_deg(self.longitude)
        )

        # cos(longitude) == 0: the arctangent form is singular
        if wrap360(self.longitude) in (90.0, 270.0):
            right_ascension = self.longitude
        else:
            num = cos_deg(e) * sin_deg(self.longitude) - sin_deg(e) * tan_deg(self.latitude)
            den = cos_deg(self.longitude)
            right_ascension = resolve_quadrant(
                atan_deg(div(num, den)), self.longitude, axis=COSINE_AXIS, denominator=den
            )

        return Equatorial(wrap360(right_ascension), declination)
