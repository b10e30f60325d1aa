"""Print information about pyramid(s)."""

from __future__ import annotations

import click
from koyo.click import cli_parse_paths_sort
from loguru import logger


@click.option(
    "-i",
    "--input",
    "input_",
    help="Path to zarr group(s).",
    type=click.UNPROCESSED,
    show_default=True,
    required=True,
    multiple=True,
    callback=cli_parse_paths_sort,
)
@click.command()
def info(input_: list[str]) -> None:
    """Print information about pyramid(s)."""
    from zarr_tile_loader.cli._common import make_loader

    for path in input_:
        loader = make_loader(path, None)
        click.echo(f"Pyramid: {path}")
        click.echo(f"  - Levels: {loader.n_levels}")
        click.echo(f"  - Data type: {loader.dtype}")
        click.echo(f"  - Tile size: {loader.tile_size}")
        click.echo(f"  - Layout: {loader.layout.layout.value}")
        click.echo(f"  - Packed channels: {loader.is_packed}")
        for level in range(loader.n_levels):
            store = loader.resolve(level)
            click.echo(f"  - Level {level}: shape={store.shape}; chunks={store.chunks}")
        logger.trace(f"Printed information for '{path}'.")
