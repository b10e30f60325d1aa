"""Utilities."""

from __future__ import annotations

import typing as ty

import numpy as np
from dask import array as da

from zarr_tile_loader.exceptions import ConfigurationError
from zarr_tile_loader.models.selection import DimensionLabel, DimensionSelection


def guess_interleaved(shape: tuple[int, ...]) -> bool:
    """Guess if the passed shape comes from interleaved (rgb) data.

    If last dim is 3 or 4 assume the data is rgb, including rgba.

    Parameters
    ----------
    shape : list of int
        Shape of the data that should be checked.
    """
    if hasattr(shape, "shape"):
        shape = shape.shape
    ndim = len(shape)
    last_dim = shape[-1]
    rgb = False
    if ndim > 2 and last_dim in (3, 4):
        rgb = True
    return rgb


def is_strictly_decreasing(shapes: ty.Sequence[tuple[int, ...]]) -> bool:
    """Check whether each shape is smaller than the previous one along every axis."""
    for previous, current in zip(shapes[:-1], shapes[1:]):
        if len(previous) != len(current):
            return False
        if any(c >= p for p, c in zip(previous, current)):
            return False
    return True


def is_index(value: ty.Any) -> bool:
    """Check whether value is an integer index."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def normalize_channel_selection(
    dimensions: ty.Sequence[DimensionLabel], selection: ty.Sequence[ty.Any]
) -> tuple[int, ...]:
    """Convert named selection to a numeric selection with one index per dimension.

    Parameters
    ----------
    dimensions : list of DimensionLabel
        Labels of each array axis.
    selection : list
        Entries can be integer indices (applied to the axis at the same position), instances of `DimensionSelection`
        or dictionaries with `id` and `index` keys. Axes which are not mentioned are set to 0.

    Returns
    -------
    selection : tuple of int
        Numeric selection.
    """
    names = [dim.name for dim in dimensions]
    result = [0] * len(dimensions)
    for position, entry in enumerate(selection):
        if is_index(entry):
            if position >= len(dimensions):
                raise ConfigurationError(f"Selection {selection} has more entries than dimensions {names}.")
            result[position] = int(entry)
            continue
        if isinstance(entry, ty.Mapping):
            try:
                entry = DimensionSelection(**entry)
            except ValueError as e:
                raise ConfigurationError(f"Invalid dimension selection {entry!r}: {e}") from e
        if not isinstance(entry, DimensionSelection):
            raise ConfigurationError(f"Cannot interpret selection entry {entry!r}.")
        if entry.id not in names:
            raise ConfigurationError(f"Dimension '{entry.id}' not found in dimensions {names}.")
        axis = names.index(entry.id)
        index = entry.index
        if isinstance(index, str):
            index = dimensions[axis].index_of(index)
            if index is None:
                raise ConfigurationError(
                    f"Value '{entry.index}' not found in dimension '{entry.id}' ({dimensions[axis].values})."
                )
        result[axis] = index
    return tuple(result)


def split_channels(buffer: np.ndarray, n_channels: int) -> list[np.ndarray]:
    """Split flat buffer with channels packed one after another into per-channel views."""
    if n_channels < 1:
        raise ValueError("Number of channels must be positive.")
    if buffer.size % n_channels != 0:
        raise ValueError(f"Buffer of length {buffer.size} cannot be split into {n_channels} channels.")
    offset = buffer.size // n_channels
    return [buffer[offset * i : offset * i + offset] for i in range(n_channels)]


def get_default_chunks(shape: tuple[int, ...], tile_size: int, is_interleaved: bool | None = None) -> tuple[int, ...]:
    """Return chunking with square spatial tiles and one element along every other axis."""
    if is_interleaved is None:
        is_interleaved = guess_interleaved(shape)
    chunks = [1] * len(shape)
    y_axis = len(shape) - 3 if is_interleaved else len(shape) - 2
    chunks[y_axis] = min(tile_size, shape[y_axis])
    chunks[y_axis + 1] = min(tile_size, shape[y_axis + 1])
    if is_interleaved:
        chunks[-1] = shape[-1]
    return tuple(chunks)


def ensure_numpy_array(image: np.ndarray | da.Array) -> np.ndarray:
    """Ensure an array is a numpy array."""
    if isinstance(image, np.ndarray):
        return image
    if isinstance(image, da.core.Array):
        return image.compute()
    return np.array(image)


def sort_pyramid(pyramid: list[ty.Any]) -> list[ty.Any]:
    """Sort pyramid levels from highest to lowest resolution."""
    return sorted(pyramid, key=lambda x: int(np.prod(x.shape)), reverse=True)
