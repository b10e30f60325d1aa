"""Zarr array store."""

from __future__ import annotations

import numpy as np
from koyo.typing import PathLike
from loguru import logger

from zarr_tile_loader._zarr import Array, get_attrs, open_group
from zarr_tile_loader.enums import PyramidOrder
from zarr_tile_loader.stores._base_store import BaseStore, Selection
from zarr_tile_loader.utils.utilities import sort_pyramid

logger = logger.bind(src="Store")


class ZarrStore(BaseStore):
    """Store backed by a zarr array."""

    store_type = "zarr"

    def __init__(self, array: Array, key: str | None = None):
        super().__init__(array, key or getattr(array, "path", None))

    @property
    def chunks(self) -> tuple[int, ...]:
        """Return chunk shape of the array."""
        return tuple(int(c) for c in self.array.chunks)

    def _read(self, selection: Selection) -> np.ndarray:
        return self.array[selection]


def get_multiscales_paths(attrs: dict) -> list[str] | None:
    """Return paths of the datasets listed in the `multiscales` metadata, if present."""
    multiscales = attrs.get("multiscales")
    if not multiscales:
        return None
    datasets = multiscales[0].get("datasets", [])
    return [dataset["path"] for dataset in datasets] or None


def open_pyramid(path: PathLike, order: PyramidOrder = "multiscales") -> list[ZarrStore]:
    """Open all arrays of a zarr group as pyramid, from the highest to the lowest resolution.

    Parameters
    ----------
    path : PathLike
        Path to the zarr group.
    order : str
        When `multiscales`, the order from the `multiscales` metadata is used if it's available. Otherwise, arrays
        are sorted by size.
    """
    group = open_group(str(path), mode="r")
    paths = get_multiscales_paths(get_attrs(group)) if order == "multiscales" else None
    if paths is not None:
        arrays = [group[p] for p in paths]
        logger.trace(f"Opened {len(arrays)} arrays from multiscales metadata in '{path}'")
    else:
        arrays = sort_pyramid([array for _, array in group.arrays()])
        logger.trace(f"Opened {len(arrays)} arrays sorted by size in '{path}'")
    if not arrays:
        raise ValueError(f"Group '{path}' does not contain any arrays.")
    return [ZarrStore(array) for array in arrays]
