"""Results of store and loader reads."""

from __future__ import annotations

import numpy as np

from zarr_tile_loader.models.base import BaseModel


class Plane(BaseModel):
    """Flat buffer returned by the store together with the shape of the selected region."""

    data: np.ndarray
    shape: tuple[int, ...]


class RasterData(BaseModel):
    """Full-resolution raster, one buffer per channel."""

    data: list[np.ndarray]
    width: int
    height: int

    @property
    def n_channels(self) -> int:
        """Return number of channels."""
        return len(self.data)

    def to_images(self) -> list[np.ndarray]:
        """Return buffers reshaped to (height, width) or (height, width, samples) images."""
        images = []
        for buffer in self.data:
            n_samples = buffer.size // (self.height * self.width)
            if n_samples > 1:
                images.append(buffer.reshape(self.height, self.width, n_samples))
            else:
                images.append(buffer.reshape(self.height, self.width))
        return images
