"""Coordinates passed to the store."""

from __future__ import annotations

import typing as ty
from dataclasses import dataclass


@dataclass(frozen=True)
class Fixed:
    """Single index along an axis."""

    index: int


@dataclass(frozen=True)
class Whole:
    """Entire axis."""


Coordinate = ty.Union[Fixed, Whole]
WHOLE = Whole()


def format_coordinates(coords: ty.Sequence[Coordinate]) -> str:
    """Format coordinates as a compact string, e.g. `(0, 2, :, :)`."""
    return "(" + ", ".join(":" if isinstance(c, Whole) else str(c.index) for c in coords) + ")"
