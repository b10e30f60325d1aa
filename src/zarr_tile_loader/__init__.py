"""Tile and raster loader for multi-resolution chunked arrays."""

from importlib.metadata import PackageNotFoundError, version

from loguru import logger

try:
    __version__ = version("zarr-tile-loader")
except PackageNotFoundError:
    __version__ = "uninstalled"

__author__ = "Lukasz G. Migas"
__email__ = "lukas.migas@yahoo.com"

logger.disable("zarr_tile_loader")
