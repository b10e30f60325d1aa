"""Axis layout."""

from __future__ import annotations

from dataclasses import dataclass

from zarr_tile_loader.enums import Layout
from zarr_tile_loader.exceptions import ConfigurationError
from zarr_tile_loader.models.coordinates import WHOLE, Coordinate, Fixed


@dataclass(frozen=True)
class AxisLayout:
    """Position of the spatial axes and of the packed-channel axis, computed once per array."""

    layout: Layout
    ndim: int
    x_axis: int
    y_axis: int
    packed_axis: int | None = None

    @classmethod
    def from_array(cls, shape: tuple[int, ...], chunks: tuple[int, ...], is_interleaved: bool) -> AxisLayout:
        """Create layout for an array with specified shape and chunking."""
        ndim = len(shape)
        min_ndim = 3 if is_interleaved else 2
        if ndim < min_ndim:
            raise ConfigurationError(f"Array with shape {shape} must have at least {min_ndim} dimensions.")
        if is_interleaved:
            layout, x_axis, y_axis = Layout.INTERLEAVED, ndim - 2, ndim - 3
        else:
            layout, x_axis, y_axis = Layout.STANDARD, ndim - 1, ndim - 2
        packed_axis = y_axis - 1 if y_axis - 1 >= 0 and chunks[y_axis - 1] > 1 else None
        return cls(layout=layout, ndim=ndim, x_axis=x_axis, y_axis=y_axis, packed_axis=packed_axis)

    @property
    def is_interleaved(self) -> bool:
        """Return whether the last axis holds interleaved samples."""
        return self.layout == Layout.INTERLEAVED

    @property
    def is_packed(self) -> bool:
        """Return whether multiple channels are stored in a single chunk."""
        return self.packed_axis is not None

    def tile_coordinates(self, selection: tuple[int, ...], x: int, y: int) -> tuple[Coordinate, ...]:
        """Return chunk coordinates of the tile at (x, y) for the selection."""
        coords: list[Coordinate] = [Fixed(int(index)) for index in selection]
        coords[self.y_axis] = Fixed(int(y))
        coords[self.x_axis] = Fixed(int(x))
        return tuple(coords)

    def raster_coordinates(self, selection: tuple[int, ...]) -> tuple[Coordinate, ...]:
        """Return coordinates of the full plane for the selection."""
        coords: list[Coordinate] = [Fixed(int(index)) for index in selection]
        coords[self.y_axis] = WHOLE
        coords[self.x_axis] = WHOLE
        if self.is_interleaved:
            coords[-1] = WHOLE
        if self.is_packed:
            coords[self.packed_axis] = WHOLE  # type: ignore[index]
        return tuple(coords)
