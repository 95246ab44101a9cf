# astropos/core/series.py
"""
VSOP87 series evaluation.

A coordinate is Σ_i T^i · Σ_terms a·cos(b + c·T), with T in Julian millennia
from J2000. Summation runs in table order so results are reproducible.

Public API:
    evaluate_variable(rows, t)              -> float
    evaluate_body(table, body, instant)     -> (x, y, z)  [AU]
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence, Tuple
import logging
import math

from astropos.core.constants import Body
from astropos.core.errors import DataNotLoadedError
from astropos.core.timescales import julian_day_from_datetime, julian_millennia_j2000
from astropos.core.vsop87 import CoefficientTable, PeriodicSeriesTerm

log = logging.getLogger(__name__)

__all__ = ["evaluate_variable", "evaluate_body"]


def _row_value(row: Sequence[PeriodicSeriesTerm], t: float) -> float:
    total = 0.0
    for term in row:
        total += term.amplitude * math.cos(term.phase + term.frequency * t)
    return total


def evaluate_variable(rows: Sequence[Sequence[PeriodicSeriesTerm]], t: float) -> float:
    """Value of one coordinate; rows[i] is the coefficient of t**i."""
    total = 0.0
    for power, row in enumerate(rows):
        total += _row_value(row, t) * t ** power
    return total


def evaluate_body(
    table: Optional[CoefficientTable],
    body: Body,
    instant: datetime,
) -> Tuple[float, float, float]:
    """Heliocentric rectangular coordinates (AU) of `body` at `instant`."""
    if table is None:
        raise DataNotLoadedError(
            "VSOP87 coefficient table not loaded; call load_coefficient_table() "
            "before calculating planet/sun positions",
            body=body.abbreviation,
        )

    t = julian_millennia_j2000(julian_day_from_datetime(instant))
    xs, ys, zs = table.series(body)
    if log.isEnabledFor(logging.DEBUG):
        log.debug("evaluate %s at T=%.12f (%d terms)", body.abbreviation, t, table.term_count(body))
    return evaluate_variable(xs, t), evaluate_variable(ys, t), evaluate_variable(zs, t)
