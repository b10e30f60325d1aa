"""Read tiles and rasters."""

from __future__ import annotations

from pathlib import Path

import click
import numpy as np
from loguru import logger
from tqdm import tqdm

from zarr_tile_loader.cli._common import (
    ALLOW_EXTRA_ARGS,
    arg_split_tiles,
    input_,
    level_,
    make_loader,
    output_dir_,
    selection_,
)


def _save(output_dir: str | None, name: str, data: list[np.ndarray]) -> None:
    if output_dir is None:
        return
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    for channel, buffer in enumerate(data):
        filename = directory / f"{name}_channel={channel}.npy"
        np.save(filename, buffer)
        logger.trace(f"Saved '{filename}'")


@output_dir_
@selection_
@level_
@click.option(
    "-t",
    "--tile",
    "tiles",
    help="Tile index as `x,y`. Can be specified multiple times.",
    type=click.STRING,
    multiple=True,
    required=True,
    callback=arg_split_tiles,
)
@input_
@click.command("tile", context_settings=ALLOW_EXTRA_ARGS)
def tile(input_: str, tiles: list[tuple[int, int]], level: int | None, selection, output_dir: str | None) -> None:
    """Read tile(s) from a pyramid."""
    loader = make_loader(input_, selection)
    for x, y in tqdm(tiles, desc="Reading tiles...", disable=len(tiles) < 2):
        data = loader.get_tile_sync(x, y, level)
        if data is None:
            logger.warning(f"Tile ({x}, {y}) is out of bounds.")
            continue
        click.echo(f"Tile ({x}, {y}): {len(data)} channel(s) of {data[0].size} elements")
        _save(output_dir, f"tile_level={level or 0}_x={x}_y={y}", data)


@output_dir_
@selection_
@level_
@input_
@click.command("raster", context_settings=ALLOW_EXTRA_ARGS)
def raster(input_: str, level: int | None, selection, output_dir: str | None) -> None:
    """Read full raster from a pyramid."""
    loader = make_loader(input_, selection)
    result = loader.get_raster_sync(level)
    if result is None:
        logger.warning(f"Level {level} is out of bounds.")
        return
    click.echo(f"Raster: {result.n_channels} channel(s) of {result.width}x{result.height}")
    _save(output_dir, f"raster_level={level or 0}", result.to_images())
