"""Base chunked-array store."""

from __future__ import annotations

import asyncio
import typing as ty

import numpy as np
from loguru import logger

from zarr_tile_loader.config import CONFIG
from zarr_tile_loader.exceptions import OutOfBoundsRead, StoreError
from zarr_tile_loader.models.coordinates import Coordinate, Fixed, Whole, format_coordinates
from zarr_tile_loader.models.raster import Plane

logger = logger.bind(src="Store")

Selection = tuple[ty.Union[int, slice], ...]


class BaseStore:
    """Base class for the chunked-array stores.

    Subclasses only need to expose `shape`, `chunks` and `dtype` and implement the blocking `_read` method which
    returns the requested region as numpy array. Conversion of coordinates, bounds checking and error translation
    is shared.
    """

    store_type: str = "base"

    def __init__(self, array: ty.Any, key: str | None = None):
        self.array = array
        self.key = key or ""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}<{self.key!r}; shape={self.shape}; chunks={self.chunks}; dtype={self.dtype}>"

    @property
    def shape(self) -> tuple[int, ...]:
        """Return shape of the array."""
        return tuple(int(s) for s in self.array.shape)

    @property
    def chunks(self) -> tuple[int, ...]:
        """Return chunk shape of the array."""
        raise NotImplementedError("Must implement method")

    @property
    def dtype(self) -> np.dtype:
        """Return dtype."""
        return np.dtype(self.array.dtype)

    @property
    def ndim(self) -> int:
        """Return number of dimensions."""
        return len(self.shape)

    def chunk_selection(self, coords: ty.Sequence[Coordinate]) -> Selection:
        """Convert chunk coordinates to slices of the array."""
        self._check_rank(coords)
        selection: list[slice] = []
        for axis, (coord, size, chunk) in enumerate(zip(coords, self.shape, self.chunks)):
            if not isinstance(coord, Fixed):
                raise StoreError(f"Chunk reads require a fixed index along every axis (axis={axis}).")
            start = coord.index * chunk
            if coord.index < 0 or start >= size:
                raise OutOfBoundsRead(
                    f"Chunk index {coord.index} out of bounds for axis {axis} with {-(-size // chunk)} chunks."
                )
            selection.append(slice(start, min(start + chunk, size)))
        return tuple(selection)

    def plane_selection(self, coords: ty.Sequence[Coordinate]) -> Selection:
        """Convert element coordinates to indices and slices of the array."""
        self._check_rank(coords)
        selection: list[int | slice] = []
        for axis, (coord, size) in enumerate(zip(coords, self.shape)):
            if isinstance(coord, Whole):
                selection.append(slice(None))
                continue
            if coord.index < 0 or coord.index >= size:
                raise OutOfBoundsRead(f"Index {coord.index} out of bounds for axis {axis} with length {size}.")
            selection.append(coord.index)
        return tuple(selection)

    def _check_rank(self, coords: ty.Sequence[Coordinate]) -> None:
        if len(coords) != self.ndim:
            raise StoreError(f"Coordinates {format_coordinates(coords)} do not match array with shape {self.shape}.")

    def _read(self, selection: Selection) -> np.ndarray:
        """Read region of the array."""
        raise NotImplementedError("Must implement method")

    def _read_safe(self, selection: Selection) -> np.ndarray:
        try:
            return np.asarray(self._read(selection))
        except (OutOfBoundsRead, StoreError):
            raise
        except IndexError as e:
            raise OutOfBoundsRead(str(e)) from e
        except Exception as e:
            raise StoreError(f"Failed to read {selection} from {self!r}: {e}") from e

    async def _read_async(self, selection: Selection) -> np.ndarray:
        if CONFIG.read_in_thread:
            return await asyncio.to_thread(self._read_safe, selection)
        return self._read_safe(selection)

    async def read_chunk(self, coords: ty.Sequence[Coordinate]) -> np.ndarray:
        """Read single chunk and return it as flat buffer."""
        selection = self.chunk_selection(coords)
        CONFIG.trace(f"Reading chunk {format_coordinates(coords)} from {self!r}")
        data = await self._read_async(selection)
        return np.ascontiguousarray(data).ravel()

    async def read_plane(self, coords: ty.Sequence[Coordinate]) -> Plane:
        """Read region where each axis is either fixed to an index or read whole."""
        selection = self.plane_selection(coords)
        CONFIG.trace(f"Reading plane {format_coordinates(coords)} from {self!r}")
        data = await self._read_async(selection)
        return Plane(data=np.ascontiguousarray(data).ravel(), shape=tuple(data.shape))
