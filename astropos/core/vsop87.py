# astropos/core/vsop87.py
# -----------------------------------------------------------------------------
# VSOP87 coefficient tables (version C: rectangular, ecliptic of date)
#
# Highlights
# • Immutable CoefficientTable: body → (X, Y, Z) → power rows → terms
# • Two sources: parsed JSON ({"ear": [[[{"a":..,"b":..,"c":..}]]]}) or a
#   directory of raw VSOP87 files (VSOP87C.ear, VSOP87C.mar, ...)
# • Fixed-column parser for the raw VSOP87 text format
# • Thread-safe lazy loader (at most one load per loader instance)
# • Every failure surfaces as CoefficientLoadError (no partial tables)
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple
import asyncio
import json
import logging
import os
import threading

from astropos.core.constants import Body
from astropos.core.errors import CoefficientLoadError, DataNotLoadedError

log = logging.getLogger(__name__)

__all__ = [
    "PeriodicSeriesTerm",
    "PowerRows",
    "CoefficientTable",
    "parse_vsop87",
    "load_coefficient_table",
    "load_coefficient_table_async",
    "CoefficientTableLoader",
]

# ─────────────────────────────────────────────────────────────────────────────
# Types
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class PeriodicSeriesTerm:
    """One term amplitude·cos(phase + frequency·T) of a VSOP87 series."""
    amplitude: float
    phase: float
    frequency: float
    multipliers: Tuple[int, ...] = ()   # mean-longitude multipliers (12 tags)
    s: float = 0.0                      # raw S column (informational)
    k: float = 0.0                      # raw K column (informational)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "PeriodicSeriesTerm":
        return cls(
            amplitude=float(raw["a"]),
            phase=float(raw["b"]),
            frequency=float(raw["c"]),
            multipliers=tuple(int(x) for x in raw.get("ai", ()) or ()),
            s=float(raw.get("s", 0.0) or 0.0),
            k=float(raw.get("k", 0.0) or 0.0),
        )


# rows[i] holds the terms multiplying T**i
PowerRows = Tuple[Tuple[PeriodicSeriesTerm, ...], ...]
BodySeries = Tuple[PowerRows, PowerRows, PowerRows]


@dataclass(frozen=True, eq=False)
class CoefficientTable:
    """Series of every loaded body; built once and shared read-only."""
    _series: Mapping[Body, BodySeries] = field(repr=False)
    source: str = "<memory>"

    def __post_init__(self) -> None:
        object.__setattr__(self, "_series", MappingProxyType(dict(self._series)))

    @property
    def bodies(self) -> Tuple[Body, ...]:
        return tuple(b for b in Body if b in self._series)

    def series(self, body: Body) -> BodySeries:
        try:
            return self._series[body]
        except KeyError:
            raise DataNotLoadedError(
                f"no series for {body.name.title()} in coefficient table ({self.source})",
                body=body.abbreviation,
            ) from None

    def term_count(self, body: Optional[Body] = None) -> int:
        bodies = (body,) if body is not None else self.bodies
        return sum(
            len(row)
            for b in bodies
            for rows in self.series(b)
            for row in rows
        )

    # ── construction ────────────────────────────────────────────────────────
    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], *, source: str = "<memory>") -> "CoefficientTable":
        """
        Build from the parsed JSON shape:
            {abbreviation: [variable][power][term] -> {"a", "b", "c", ["ai", "s", "k"]}}
        """
        series: Dict[Body, BodySeries] = {}
        for key, variables in mapping.items():
            body = Body.from_abbreviation(key)
            if len(variables) != 3:
                raise ValueError(f"{key}: expected 3 variables, got {len(variables)}")
            series[body] = tuple(  # type: ignore[assignment]
                tuple(
                    tuple(PeriodicSeriesTerm.from_dict(t) for t in row)
                    for row in rows
                )
                for rows in variables
            )
        return cls(series, source=source)

    @classmethod
    def from_series(cls, series: Mapping[Body, Sequence[Sequence[Sequence[PeriodicSeriesTerm]]]],
                    *, source: str = "<memory>") -> "CoefficientTable":
        frozen: Dict[Body, BodySeries] = {}
        for body, variables in series.items():
            if len(variables) != 3:
                raise ValueError(f"{body.name}: expected 3 variables, got {len(variables)}")
            frozen[body] = tuple(tuple(tuple(row) for row in rows) for rows in variables)  # type: ignore[assignment]
        return cls(frozen, source=source)


# ─────────────────────────────────────────────────────────────────────────────
# Raw VSOP87 text format
# ─────────────────────────────────────────────────────────────────────────────
# Column slices on the stripped record line
_COL_MULTIPLIERS = slice(9, 45)
_COL_S = slice(45, 60)
_COL_K = slice(60, 78)
_COL_A = slice(78, 96)
_COL_B = slice(96, 110)
_COL_C = slice(110, None)


def _parse_record(line: str) -> Tuple[int, int, PeriodicSeriesTerm]:
    variable = int(line[2])
    power = int(line[3])
    tags = line[_COL_MULTIPLIERS]
    term = PeriodicSeriesTerm(
        amplitude=float(line[_COL_A].strip()),
        phase=float(line[_COL_B].strip()),
        frequency=float(line[_COL_C].strip()),
        multipliers=tuple(int(tags[i:i + 3]) for i in range(0, len(tags), 3) if tags[i:i + 3].strip()),
        s=float(line[_COL_S].strip()),
        k=float(line[_COL_K].strip()),
    )
    return variable, power, term


def parse_vsop87(text: str) -> BodySeries:
    """
    Parse one body file of the raw VSOP87 distribution.

    Header records (starting with "VSOP87") are skipped. Records must come
    grouped by variable and in ascending power, as in the published files.
    """
    out: List[List[List[PeriodicSeriesTerm]]] = [[], [], []]
    for lineno, raw in enumerate(text.strip().splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("VSOP87"):
            continue
        try:
            variable, power, term = _parse_record(line)
        except (ValueError, IndexError) as e:
            raise ValueError(f"line {lineno}: malformed VSOP87 record ({e})") from e
        if not 1 <= variable <= 3:
            raise ValueError(f"line {lineno}: variable index {variable} out of range 1..3")
        rows = out[variable - 1]
        if len(rows) == power:
            rows.append([term])
        elif power < len(rows):
            rows[power].append(term)
        else:
            raise ValueError(f"line {lineno}: power {power} follows power {len(rows) - 1}")
    return tuple(tuple(tuple(row) for row in rows) for rows in out)  # type: ignore[return-value]


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────
def _load_json(path: str) -> CoefficientTable:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("top-level JSON value must be an object keyed by body")
    return CoefficientTable.from_mapping(data, source=path)


def _load_directory(path: str) -> CoefficientTable:
    series: Dict[Body, BodySeries] = {}
    for fn in sorted(os.listdir(path)):
        _, ext = os.path.splitext(fn)
        try:
            body = Body.from_abbreviation(ext.lstrip("."))
        except ValueError:
            log.warning("VSOP87 directory: skipping %s (no body for extension)", fn)
            continue
        with open(os.path.join(path, fn), "r", encoding="utf-8") as f:
            series[body] = parse_vsop87(f.read())
    if not series:
        raise ValueError("no VSOP87 body files found")
    return CoefficientTable(series, source=path)


def load_coefficient_table(source: Optional[str] = None) -> CoefficientTable:
    """
    Load the coefficient table from a JSON file or a VSOP87 directory.
    `None` means the configured path (ASTROPOS_VSOP87_PATH / YAML vsop87_path).
    """
    if source is None:
        from astropos.utils.config import get_settings
        source = get_settings().vsop87_path
    path = os.fspath(source)

    try:
        table = _load_directory(path) if os.path.isdir(path) else _load_json(path)
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise CoefficientLoadError(f"failed to load VSOP87 data from {path}: {e}", path=path) from e

    log.info("VSOP87 table loaded from %s: %d bodies, %d terms",
             path, len(table.bodies), table.term_count())
    return table


async def load_coefficient_table_async(source: Optional[str] = None) -> CoefficientTable:
    """Same as load_coefficient_table, run in a worker thread."""
    return await asyncio.to_thread(load_coefficient_table, source)


class CoefficientTableLoader:
    """
    Lazy, thread-safe holder of one coefficient table. The first get() loads;
    concurrent callers block on the lock and receive the same table.
    """

    def __init__(self, source: Optional[str] = None,
                 loader: Callable[[Optional[str]], CoefficientTable] = load_coefficient_table):
        self._source = source
        self._loader = loader
        self._table: Optional[CoefficientTable] = None
        self._lock = threading.Lock()
        self.load_count = 0

    @property
    def loaded(self) -> bool:
        return self._table is not None

    def peek(self) -> Optional[CoefficientTable]:
        """Table if already loaded, else None; never triggers a load."""
        return self._table

    def get(self) -> CoefficientTable:
        if self._table is not None:
            return self._table
        with self._lock:
            if self._table is None:
                self._table = self._loader(self._source)
                self.load_count += 1
        return self._table
