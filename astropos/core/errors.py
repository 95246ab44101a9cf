# astropos/core/errors.py
from __future__ import annotations

from typing import Any, Optional

__all__ = ["CelestialError", "DataNotLoadedError", "CoefficientLoadError"]


class CelestialError(ValueError):
    """Base error with a stable machine-readable code."""
    code = "celestial_error"

    def __init__(self, message: str, *, code: Optional[str] = None, **context: Any):
        if code is not None:
            self.code = code
        self.message = message
        self.context = context
        super().__init__(f"{self.code}: {message}")


class DataNotLoadedError(CelestialError):
    """A planet/sun position was requested without a loaded coefficient table."""
    code = "data_not_loaded"


class CoefficientLoadError(CelestialError):
    """The coefficient data source could not be read or parsed."""
    code = "load_error"

    def __init__(self, message: str, *, path: Optional[str] = None, **context: Any):
        self.path = path
        super().__init__(message, path=path, **context)
