"""Zarr storage.

There are some differences between zarr version 2 and version 3, so this module handles the imports.
"""

from __future__ import annotations

import typing as ty

import numpy as np
import zarr
from zarr import Array

try:
    # version 2
    from zarr.hierarchy import Group

    IS_ZARR_V3 = False
except (AttributeError, ModuleNotFoundError):
    # version 3
    try:
        from zarr.core.group import Group
    except (AttributeError, ModuleNotFoundError):
        from zarr.group import Group

    IS_ZARR_V3 = True


def get_attrs(node: Array | Group) -> dict[str, ty.Any]:
    """Return attributes of a node as a plain dictionary."""
    attrs = dict(node.attrs)
    # OME-Zarr 0.5 nests its metadata under the `ome` key
    if "ome" in attrs and isinstance(attrs["ome"], dict):
        attrs = {**attrs, **attrs["ome"]}
    return attrs


def create_array(group: Group, name: str, data: np.ndarray, chunks: tuple[int, ...]) -> Array:
    """Create array inside of a group and fill it with data."""
    if IS_ZARR_V3:
        array = group.create_array(name, shape=data.shape, dtype=data.dtype, chunks=chunks)
    else:
        array = group.create_dataset(name, shape=data.shape, dtype=data.dtype, chunks=chunks)
    array[...] = data
    return array


def open_group(store: ty.Any, mode: str = "r") -> Group:
    """Open group."""
    return zarr.open_group(store=store, mode=mode)


__all__ = [
    "IS_ZARR_V3",
    "Array",
    "Group",
    "create_array",
    "get_attrs",
    "open_group",
]
