"""Numpy and dask array store."""

from __future__ import annotations

import numpy as np
from dask import array as da

from zarr_tile_loader.config import CONFIG
from zarr_tile_loader.stores._base_store import BaseStore, Selection
from zarr_tile_loader.utils.utilities import ensure_numpy_array, get_default_chunks


class ArrayStore(BaseStore):
    """Store for in-memory or dask arrays.

    Dask arrays keep their own chunking, while numpy arrays are split into square spatial tiles unless `chunks` are
    specified.
    """

    store_type = "array"

    def __init__(
        self,
        array: np.ndarray | da.Array,
        chunks: tuple[int, ...] | None = None,
        key: str | None = None,
        is_interleaved: bool | None = None,
    ):
        super().__init__(array, key)
        if chunks is None:
            if isinstance(array, da.core.Array):
                chunks = tuple(int(c) for c in array.chunksize)
            else:
                chunks = get_default_chunks(self.shape, CONFIG.tile_size, is_interleaved)
        if len(chunks) != self.ndim:
            raise ValueError(f"Chunks {chunks} do not match array with shape {self.shape}.")
        self._chunks = tuple(int(c) for c in chunks)

    @property
    def chunks(self) -> tuple[int, ...]:
        """Return chunk shape of the array."""
        return self._chunks

    def _read(self, selection: Selection) -> np.ndarray:
        return ensure_numpy_array(self.array[selection])
