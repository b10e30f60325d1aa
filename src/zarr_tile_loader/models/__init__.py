"""Models."""

from zarr_tile_loader.models.base import BaseModel
from zarr_tile_loader.models.coordinates import WHOLE, Coordinate, Fixed, Whole
from zarr_tile_loader.models.layout import AxisLayout
from zarr_tile_loader.models.raster import Plane, RasterData
from zarr_tile_loader.models.selection import DimensionLabel, DimensionSelection

__all__ = [
    "WHOLE",
    "AxisLayout",
    "BaseModel",
    "Coordinate",
    "DimensionLabel",
    "DimensionSelection",
    "Fixed",
    "Plane",
    "RasterData",
    "Whole",
]
