# tests/test_angles.py
from __future__ import annotations

import math

import pytest
from hypothesis import assume, given, strategies as st

from astropos.core.angles import (
    COSINE_AXIS,
    SINE_AXIS,
    HourAngle,
    SexagesimalDegrees,
    acos_deg,
    asin_deg,
    atan_deg,
    cos_deg,
    div,
    pad0,
    resolve_quadrant,
    sin_deg,
    tan_deg,
    toggle_azimuth_reference,
    wrap360,
)

EPS = 1e-9

degrees = st.floats(min_value=-1000.0, max_value=1000.0, allow_nan=False, allow_infinity=False)


# ─────────────────────────────────────────────────────────────────────────────
# Trigonometry
# ─────────────────────────────────────────────────────────────────────────────
def test_degree_trig_known_values():
    assert sin_deg(30.0) == pytest.approx(0.5, abs=1e-15)
    assert cos_deg(60.0) == pytest.approx(0.5, abs=1e-15)
    assert tan_deg(45.0) == pytest.approx(1.0, abs=1e-15)
    assert asin_deg(0.5) == pytest.approx(30.0, abs=1e-12)
    assert acos_deg(0.5) == pytest.approx(60.0, abs=1e-12)
    assert atan_deg(1.0) == pytest.approx(45.0, abs=1e-12)
    assert atan_deg(math.inf) == pytest.approx(90.0)


@pytest.mark.parametrize("value", [1.0000001, -2.0, math.nan])
def test_inverse_trig_out_of_domain_is_nan(value):
    assert math.isnan(asin_deg(value))
    assert math.isnan(acos_deg(value))


def test_trig_of_non_finite_is_nan():
    for fn in (sin_deg, cos_deg, tan_deg):
        assert math.isnan(fn(math.inf))
        assert math.isnan(fn(math.nan))


def test_div_follows_ieee():
    assert div(1.0, 4.0) == 0.25
    assert div(1.0, 0.0) == math.inf
    assert div(-1.0, 0.0) == -math.inf
    assert div(1.0, -0.0) == -math.inf
    assert math.isnan(div(0.0, 0.0))


def test_wrap_and_toggle():
    assert wrap360(-10.0) == 350.0
    assert wrap360(725.0) == 5.0
    assert wrap360(-1e-17) == 0.0
    assert toggle_azimuth_reference(0.0) == 180.0
    assert toggle_azimuth_reference(180.0) == 0.0
    assert toggle_azimuth_reference(270.0) == 90.0


# ─────────────────────────────────────────────────────────────────────────────
# Quadrant disambiguation
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "primary, reference, expected",
    [
        (45.0, 45.0, 45.0),
        (45.0, 225.0, 225.0),
        (-45.0, 315.0, 315.0),
        (-45.0, 135.0, 135.0),
        (-45.0, -45.0, 315.0),        # negative reference is wrapped
        (0.0, 0.0, 0.0),
        (0.0, 180.0, 180.0),
        (90.0, 90.0, 90.0),
        (-90.0, 270.0, 270.0),
        (-90.0, 90.0, 90.0),
    ],
)
def test_resolve_quadrant_exact_quadrants(primary, reference, expected):
    assert resolve_quadrant(primary, reference) == pytest.approx(expected, abs=1e-12)


@pytest.mark.parametrize("reference", [90.0, 270.0])
def test_resolve_quadrant_does_not_jump_at_boundaries(reference):
    # result just before the boundary the reference sits on
    eps = 1e-7
    primary = ((reference - eps + 90.0) % 180.0) - 90.0
    got = resolve_quadrant(primary, reference)
    assert abs(((got - (reference - eps)) + 180.0) % 360.0 - 180.0) < 1e-9


def test_resolve_quadrant_axis_fallback():
    # neither candidate shares the reference quadrant
    assert resolve_quadrant(30.0, 100.0, axis=SINE_AXIS) == pytest.approx(30.0)
    assert resolve_quadrant(30.0, 100.0, axis=COSINE_AXIS) == pytest.approx(210.0)
    assert resolve_quadrant(-30.0, 10.0, axis=SINE_AXIS) == pytest.approx(150.0)
    assert resolve_quadrant(-30.0, 10.0, axis=COSINE_AXIS) == pytest.approx(330.0)


@given(
    angle=st.floats(min_value=0.0, max_value=359.999, allow_nan=False),
    offset=st.floats(min_value=-89.0, max_value=89.0, allow_nan=False),
)
def test_resolve_quadrant_matches_atan2_on_sine_axis(angle, offset):
    # reference within 90° of the answer and on the same side of the meridian
    reference = angle + offset
    assume(sin_deg(angle) * sin_deg(reference) > 0.0)
    assume(abs(sin_deg(angle)) > 1e-6)
    primary = atan_deg(div(sin_deg(angle), cos_deg(angle)))
    got = resolve_quadrant(primary, reference)
    assert abs(((got - angle) + 180.0) % 360.0 - 180.0) < 1e-9


def test_resolve_quadrant_nan_propagates():
    assert math.isnan(resolve_quadrant(math.nan, 10.0))


@pytest.mark.parametrize(
    "primary, reference, denominator, expected",
    [
        (0.0, 0.0, 1.0, 0.0),
        (0.0, 0.0, -1.0, 180.0),
        (-0.0, 0.0, -0.4, 180.0),
        (-0.0, 180.0, 2.0, 0.0),
        (0.0, 360.0, -2.0, 180.0),
    ],
)
def test_resolve_quadrant_zero_numerator_uses_denominator(primary, reference, denominator, expected):
    # atan2(±0, den) semantics: the reference sits on the boundary and cannot decide
    assert resolve_quadrant(primary, reference, denominator=denominator) == expected


def test_resolve_quadrant_denominator_ignored_off_boundary():
    assert resolve_quadrant(30.0, 100.0, denominator=-1.0) == pytest.approx(30.0)
    assert resolve_quadrant(0.0, 0.0, denominator=math.nan) == 0.0


# ─────────────────────────────────────────────────────────────────────────────
# Unit systems
# ─────────────────────────────────────────────────────────────────────────────
def test_hour_angle_to_degrees():
    assert HourAngle(18, 36, 56.34).to_degrees() == pytest.approx(279.23475, abs=EPS)
    assert HourAngle(1, 0, 0).to_degrees() == 15.0
    assert HourAngle(0, 1, 0).to_degrees() == 0.25


def test_sexagesimal_to_degrees():
    assert SexagesimalDegrees(38, 47, 1.3).to_degrees() == pytest.approx(38.78369444, abs=1e-8)
    assert SexagesimalDegrees(-12, -30, 0).to_degrees() == -12.5


def test_from_degrees_sign_is_uniform():
    ha = HourAngle.from_degrees(-279.23475)
    assert ha.hours == -18 and ha.minutes == -36
    assert ha.seconds == pytest.approx(-56.34, abs=1e-7)

    sd = SexagesimalDegrees.from_degrees(-0.5)
    assert (sd.degrees, sd.minutes) == (0.0, -30.0)
    assert sd.seconds == pytest.approx(0.0, abs=1e-9)


@given(d=degrees)
def test_hour_angle_round_trip(d):
    assert HourAngle.from_degrees(d).to_degrees() == pytest.approx(d, abs=EPS)


@given(d=degrees)
def test_sexagesimal_round_trip(d):
    assert SexagesimalDegrees.from_degrees(d).to_degrees() == pytest.approx(d, abs=EPS)


@given(d=degrees)
def test_components_within_unit_ranges(d):
    for value in (HourAngle.from_degrees(d), SexagesimalDegrees.from_degrees(d)):
        fields = (value.minutes, value.seconds)
        assert all(-60.0 < f < 60.0 + 1e-9 for f in fields)
        signs = {math.copysign(1.0, f) for f in fields if abs(f) > 1e-9}
        assert len(signs) <= 1


@pytest.mark.parametrize("deg", [279.23475, 83.63308, 10.684708, 344.4125])
def test_hour_angle_matches_erfa(ensure_erfa, deg):
    sign, ihmsf = ensure_erfa.a2tf(4, math.radians(deg))
    h, m, s, f = (int(v) for v in ihmsf.item())
    ha = HourAngle.from_degrees(deg)
    assert (ha.hours, ha.minutes) == (h, m)
    assert ha.seconds == pytest.approx(s + f / 1e4, abs=1e-4)


@pytest.mark.parametrize("deg", [38.78369444, 7.407064, 41.269065, 0.5])
def test_sexagesimal_matches_erfa(ensure_erfa, deg):
    sign, idmsf = ensure_erfa.a2af(4, math.radians(deg))
    d, m, s, f = (int(v) for v in idmsf.item())
    sd = SexagesimalDegrees.from_degrees(deg)
    assert (sd.degrees, sd.minutes) == (d, m)
    assert sd.seconds == pytest.approx(s + f / 1e4, abs=1e-4)


def test_string_forms():
    assert str(HourAngle(5, 14, 56)) == "05h 14m 56.00s"
    assert str(HourAngle(-5, -14, -56)) == "-05h 14m 56.00s"
    assert str(SexagesimalDegrees(245, 14, 56.5)) == "245° 14' 56.50\""


def test_string_forms_carry_rounded_seconds():
    assert str(HourAngle(0, 0, 59.999)) == "00h 01m 00.00s"
    assert str(HourAngle(-1, -59, -59.996)) == "-02h 00m 00.00s"
    assert str(SexagesimalDegrees(10, 59, 59.999)) == "11° 00' 00.00\""
    assert str(SexagesimalDegrees(10, 14, 59.994)) == "10° 14' 59.99\""


# ─────────────────────────────────────────────────────────────────────────────
# pad0
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "args, expected",
    [
        ((5, 2), "05"),
        ((20, 5), "00020"),
        ((1337, 3), "1337"),
        ((3.14, 3, 4), "003.1400"),
        ((-7, 3), "-007"),
        ((2.5,), "2.5"),
        (("abc", 2), "NaN"),
    ],
)
def test_pad0(args, expected):
    assert pad0(*args) == expected
