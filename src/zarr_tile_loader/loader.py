"""Tile and raster loader for pyramids of chunked arrays."""

from __future__ import annotations

import asyncio
import typing as ty

import numpy as np
from loguru import logger

from zarr_tile_loader.config import CONFIG
from zarr_tile_loader.exceptions import ConfigurationError, OutOfBoundsRead
from zarr_tile_loader.models.layout import AxisLayout
from zarr_tile_loader.models.raster import RasterData
from zarr_tile_loader.models.selection import DimensionLabel, DimensionSelection
from zarr_tile_loader.stores import BaseStore, get_store
from zarr_tile_loader.utils.utilities import (
    guess_interleaved,
    is_index,
    is_strictly_decreasing,
    normalize_channel_selection,
    split_channels,
)

logger = logger.bind(src="Loader")

SelectionEntry = ty.Union[int, DimensionSelection, dict]
ChannelSelection = ty.Sequence[SelectionEntry]


class ZarrLoader:
    """Load tiles and rasters from a single chunked array or a pyramid of them.

    Parameters
    ----------
    data : array or list of arrays
        Single array or a list of arrays ordered from the highest to the lowest resolution. Arrays can be zarr, dask
        or numpy arrays or instances of `BaseStore`.
    dimensions : list, optional
        Labels of each axis, either names, dictionaries or `DimensionLabel` instances. Required for named channel
        selections.
    is_interleaved : bool, optional
        Whether the last axis holds interleaved RGB/A samples. When not specified, it's guessed from the shape.
    scale : float
        Scale of the image, not interpreted by the loader.
    translate : tuple
        Translation of the image, not interpreted by the loader.
    """

    type: str = "zarr"

    def __init__(
        self,
        data: ty.Any,
        dimensions: ty.Sequence[str | dict | DimensionLabel] | None = None,
        is_interleaved: bool | None = None,
        scale: float = 1.0,
        translate: tuple[float, float] = (0, 0),
    ):
        if isinstance(data, (list, tuple)):
            if not data:
                raise ConfigurationError("Pyramid must contain at least one array.")
            levels, self._is_pyramid = list(data), True
        else:
            levels, self._is_pyramid = [data], False

        # layout must be known before stores pick their default chunking
        base_shape = tuple(int(s) for s in getattr(levels[0], "shape", ()))
        if is_interleaved is None:
            is_interleaved = bool(base_shape) and CONFIG.guess_interleaved and guess_interleaved(base_shape)
        elif base_shape and is_interleaved != guess_interleaved(base_shape):
            logger.warning(f"Interleaved layout set to {is_interleaved} for array with shape {base_shape}.")

        stores = tuple(get_store(level, is_interleaved) for level in levels)
        if not is_strictly_decreasing([store.shape for store in stores]):
            raise ConfigurationError(
                f"Arrays provided must be decreasing in shape ({[store.shape for store in stores]})."
            )
        self._stores: tuple[BaseStore, ...] = stores
        base = stores[0]

        if dimensions is not None:
            dimensions = tuple(DimensionLabel.from_value(dim) for dim in dimensions)
            if len(dimensions) != base.ndim:
                raise ConfigurationError(
                    f"Dimension labels {[dim.name for dim in dimensions]} do not match image with shape {base.shape}."
                )
        self.dimensions: tuple[DimensionLabel, ...] | None = dimensions
        self.layout = AxisLayout.from_array(base.shape, base.chunks, is_interleaved)
        self.scale = scale
        self.translate = tuple(translate)
        self._channel_selections: tuple[tuple[int, ...], ...] = (tuple([0] * base.ndim),)
        logger.debug(
            f"Created loader with {self.n_levels} level(s); shape={base.shape}; chunks={base.chunks};"
            f" layout={self.layout.layout.value}; packed={self.is_packed}"
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}<shape={self.base.shape}; levels={self.n_levels};"
            f" layout={self.layout.layout.value}; selections={len(self._channel_selections)}>"
        )

    @property
    def is_pyramid(self) -> bool:
        """Return whether loader was created from a list of arrays."""
        return self._is_pyramid

    @property
    def n_levels(self) -> int:
        """Return number of levels in the pyramid."""
        return len(self._stores)

    @property
    def base(self) -> BaseStore:
        """Return the highest resolution store."""
        return self._stores[0]

    @property
    def dtype(self) -> np.dtype:
        """Return dtype."""
        return self.base.dtype

    @property
    def tile_size(self) -> int:
        """Return size of the tile along the x-axis."""
        return self.base.chunks[self.layout.x_axis]

    @property
    def is_interleaved(self) -> bool:
        """Return whether image is interleaved (RGB/A)."""
        return self.layout.is_interleaved

    @property
    def is_packed(self) -> bool:
        """Return whether multiple channels are stored in a single chunk."""
        return self.layout.is_packed

    @property
    def channel_selections(self) -> tuple[tuple[int, ...], ...]:
        """Return active channel selections."""
        return self._channel_selections

    def resolve(self, level: int | None = None) -> BaseStore:
        """Return store for the pyramid level."""
        if level is None or not self.is_pyramid:
            return self.base
        if level < 0 or level >= self.n_levels:
            raise OutOfBoundsRead(f"Level {level} out of bounds for pyramid with {self.n_levels} levels.")
        return self._stores[level]

    def set_channel_selections(self, channel_selections: ChannelSelection | ty.Sequence[ChannelSelection]) -> None:
        """Set channel selections.

        Each selection specifies one index per axis; entries of the spatial axes are ignored. A single selection
        can be passed without wrapping it in a list. When dimension labels are available, entries can be named.
        """
        if len(channel_selections) == 0:
            raise ConfigurationError("At least one channel selection must be specified.")
        if not isinstance(channel_selections[0], (list, tuple, np.ndarray)):
            channel_selections = [channel_selections]  # type: ignore[list-item]

        next_selections = []
        for selection in channel_selections:
            if self.dimensions is None:
                if not all(is_index(entry) for entry in selection):
                    raise ConfigurationError(
                        f"Cannot use named selection {selection} to index image without dimension labels."
                    )
                next_selections.append(tuple(int(entry) for entry in selection))
            else:
                next_selections.append(normalize_channel_selection(self.dimensions, selection))

        if (self.is_interleaved or self.is_packed) and len(next_selections) > 1:
            raise ConfigurationError(
                "Cannot specify multiple channel selections for RGB/A image or multichannel image with chunk sizes"
                " greater than one."
            )

        shape, chunks = self.base.shape, self.base.chunks
        for selection in next_selections:
            if len(selection) != len(shape):
                raise ConfigurationError(
                    f"Normalized selections {next_selections} do not correspond to image with shape {shape}."
                )
            if any(index != 0 and chunk > 1 for index, chunk in zip(selection, chunks)):
                raise ConfigurationError(
                    f"Cannot set selection {selection} for dimension with chunk size greater than one ({chunks})."
                )

        self._channel_selections = tuple(next_selections)
        CONFIG.trace(f"Set channel selections to {self._channel_selections}")

    def on_tile_error(self, err: BaseException) -> None:
        """Handle errors raised while reading tiles.

        Reads outside of the array are ignored, everything else is re-raised.
        """
        if not isinstance(err, OutOfBoundsRead):
            raise err
        CONFIG.trace(f"Ignored out of bounds read: {err}")

    def _handle_errors(self, results: list[ty.Any]) -> bool:
        """Pass read errors to the error hook and return whether any read failed."""
        errors = [result for result in results if isinstance(result, BaseException)]
        for err in errors:
            self.on_tile_error(err)
        return bool(errors)

    def _n_packed_channels(self, store: BaseStore, whole_axis: bool) -> int:
        axis = self.layout.packed_axis
        if whole_axis:
            return store.shape[axis]
        return min(store.chunks[axis], store.shape[axis])

    async def get_tile(self, x: int, y: int, level: int | None = None) -> list[np.ndarray] | None:
        """Return tile data, one buffer per channel.

        Parameters
        ----------
        x : int
            Index of the chunk along the x-axis.
        y : int
            Index of the chunk along the y-axis.
        level : int, optional
            Pyramid level.

        Returns
        -------
        data : list of np.ndarray or None
            Flat buffer for each selection (or each packed channel). `None` when the tile is outside of the image.
        """
        selections = self._channel_selections
        try:
            store = self.resolve(level)
        except OutOfBoundsRead as err:
            self.on_tile_error(err)
            return None
        requests = [store.read_chunk(self.layout.tile_coordinates(selection, x, y)) for selection in selections]
        results = await asyncio.gather(*requests, return_exceptions=True)
        if self._handle_errors(results):
            return None
        if self.is_packed:
            return split_channels(results[0], self._n_packed_channels(store, whole_axis=False))
        return list(results)

    async def get_raster(self, level: int | None = None) -> RasterData | None:
        """Return full plane of the image, one buffer per channel, together with its width and height."""
        selections = self._channel_selections
        try:
            store = self.resolve(level)
        except OutOfBoundsRead as err:
            self.on_tile_error(err)
            return None
        requests = [store.read_plane(self.layout.raster_coordinates(selection)) for selection in selections]
        results = await asyncio.gather(*requests, return_exceptions=True)
        if self._handle_errors(results):
            return None
        shape = store.shape
        width, height = shape[self.layout.x_axis], shape[self.layout.y_axis]
        if self.is_packed:
            data = split_channels(results[0].data, self._n_packed_channels(store, whole_axis=True))
        else:
            data = [plane.data for plane in results]
        return RasterData(data=data, width=width, height=height)

    def get_tile_sync(self, x: int, y: int, level: int | None = None) -> list[np.ndarray] | None:
        """Return tile data, blocking until all reads complete."""
        return asyncio.run(self.get_tile(x, y, level))

    def get_raster_sync(self, level: int | None = None) -> RasterData | None:
        """Return raster data, blocking until all reads complete."""
        return asyncio.run(self.get_raster(level))
