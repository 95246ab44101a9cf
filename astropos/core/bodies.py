# astropos/core/bodies.py
"""
Body façades: one call from a body to its place in the observer's sky.

    Star(ra, dec).calculate_azimuthal(lat, lon, instant)
    Planet(Body.SATURN, table).calculate_azimuthal(lat, lon, instant)
    Sun(table).calculate_azimuthal(lat, lon, instant)

`table` is the CoefficientTable returned by load_coefficient_table(); it is
passed explicitly, never looked up globally. A façade built with
`table=None` raises DataNotLoadedError on every position request.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from astropos.core.constants import Body, PLANETS
from astropos.core.coordinates import (
    Azimuthal,
    Equatorial,
    GeocentricCartesian,
    HeliocentricCartesian,
)
from astropos.core.series import evaluate_body
from astropos.core.timescales import resolve_instant
from astropos.core.vsop87 import CoefficientTable

__all__ = ["Star", "Planet", "Sun"]


@dataclass(frozen=True)
class Star:
    """Fixed star at a catalogue right ascension / declination (degrees)."""
    right_ascension: float
    declination: float

    @property
    def equatorial(self) -> Equatorial:
        return Equatorial(self.right_ascension, self.declination)

    def calculate_azimuthal(
        self,
        geo_latitude: float,
        geo_longitude: float,
        instant: Optional[datetime] = None,
    ) -> Azimuthal:
        return self.equatorial.to_azimuthal(geo_latitude, geo_longitude, resolve_instant(instant))


class Planet:
    """One of the planets other than Earth, positioned with VSOP87."""

    def __init__(self, body: Body, table: Optional[CoefficientTable] = None):
        if body not in PLANETS:
            raise ValueError(
                f"{body.name.title()} is not a planet that can be observed from Earth; "
                f"expected one of {', '.join(p.name.title() for p in PLANETS)}"
            )
        self.body = body
        self.table = table

    def __repr__(self) -> str:
        return f"Planet({self.body.name.title()})"

    def calculate_heliocentric_cartesian(self, instant: Optional[datetime] = None) -> HeliocentricCartesian:
        instant = resolve_instant(instant)
        x, y, z = evaluate_body(self.table, self.body, instant)
        return HeliocentricCartesian(x, y, z, instant)

    def calculate_equatorial(self, instant: Optional[datetime] = None) -> Equatorial:
        return (
            self.calculate_heliocentric_cartesian(instant)
            .to_geocentric(self.table)
            .to_ecliptical()
            .to_equatorial()
        )

    def calculate_azimuthal(
        self,
        geo_latitude: float,
        geo_longitude: float,
        instant: Optional[datetime] = None,
    ) -> Azimuthal:
        instant = resolve_instant(instant)
        return self.calculate_equatorial(instant).to_azimuthal(geo_latitude, geo_longitude, instant)


class Sun:
    """The Sun: origin of the heliocentric frame."""

    def __init__(self, table: Optional[CoefficientTable] = None):
        self.table = table

    def __repr__(self) -> str:
        return "Sun()"

    def calculate_geocentric_cartesian(self, instant: Optional[datetime] = None) -> GeocentricCartesian:
        return HeliocentricCartesian(0.0, 0.0, 0.0, resolve_instant(instant)).to_geocentric(self.table)

    def calculate_equatorial(self, instant: Optional[datetime] = None) -> Equatorial:
        return self.calculate_geocentric_cartesian(instant).to_ecliptical().to_equatorial()

    def calculate_azimuthal(
        self,
        geo_latitude: float,
        geo_longitude: float,
        instant: Optional[datetime] = None,
    ) -> Azimuthal:
        # Equatorial.to_azimuthal already returns a north-referenced azimuth;
        # no second reference flip here.
        instant = resolve_instant(instant)
        return self.calculate_equatorial(instant).to_azimuthal(geo_latitude, geo_longitude, instant)
