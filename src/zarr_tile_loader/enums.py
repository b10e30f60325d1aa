"""Enums."""

import typing as ty
from enum import Enum

DEFAULT_TILE_SIZE: int = 512

PyramidOrder = ty.Literal["multiscales", "size"]


class Layout(str, Enum):
    """Axis layout of the array."""

    STANDARD = "standard"
    INTERLEAVED = "interleaved"
