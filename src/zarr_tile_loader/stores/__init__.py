"""Chunked-array stores."""

from __future__ import annotations

import typing as ty

import numpy as np
from dask import array as da

from zarr_tile_loader._zarr import Array
from zarr_tile_loader.stores._base_store import BaseStore
from zarr_tile_loader.stores.array_store import ArrayStore
from zarr_tile_loader.stores.zarr_store import ZarrStore, open_pyramid

__all__ = [
    "ArrayStore",
    "BaseStore",
    "ZarrStore",
    "get_store",
    "open_pyramid",
]


def get_store(data: ty.Any, is_interleaved: bool | None = None) -> BaseStore:
    """Return store for the specified data."""
    if isinstance(data, BaseStore):
        return data
    if isinstance(data, Array):
        return ZarrStore(data)
    if isinstance(data, (np.ndarray, da.core.Array)):
        return ArrayStore(data, is_interleaved=is_interleaved)
    if hasattr(data, "shape") and hasattr(data, "dtype") and hasattr(data, "__getitem__"):
        if hasattr(data, "chunks") and all(isinstance(c, int) for c in data.chunks):
            return ArrayStore(data, chunks=tuple(data.chunks), is_interleaved=is_interleaved)
        return ArrayStore(data, is_interleaved=is_interleaved)
    raise TypeError(f"Cannot create store for object of type {type(data)}.")
