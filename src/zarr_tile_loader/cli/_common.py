"""Common CLI options."""

from __future__ import annotations

import click


# noinspection PyUnusedLocal
def arg_split_selection(ctx, param, value):
    """Split comma-separated channel selections, e.g. `0,1,0,0`."""
    if not value:
        return None
    return [[int(arg.strip()) for arg in selection.split(",")] for selection in value]


# noinspection PyUnusedLocal
def arg_split_tiles(ctx, param, value):
    """Split tile indices, e.g. `3,4`."""
    tiles = []
    for tile in value:
        args = [int(arg.strip()) for arg in tile.split(",")]
        assert len(args) == 2, "Tile must have 2 values (x,y)"
        tiles.append(tuple(args))
    return tiles


ALLOW_EXTRA_ARGS = {"help_option_names": ["-h", "--help"], "ignore_unknown_options": True, "allow_extra_args": True}
input_ = click.option(
    "-i",
    "--input",
    "input_",
    help="Path to zarr group with the pyramid.",
    type=click.Path(exists=True, resolve_path=True, file_okay=False, dir_okay=True),
    show_default=True,
    required=True,
)
level_ = click.option(
    "-l",
    "--level",
    help="Pyramid level.",
    type=click.INT,
    default=None,
    show_default=True,
    required=False,
)
selection_ = click.option(
    "-s",
    "--selection",
    help="Channel selection, one index per axis separated by commas. Can be specified multiple times.",
    type=click.STRING,
    multiple=True,
    callback=arg_split_selection,
)
output_dir_ = click.option(
    "-o",
    "--output_dir",
    help="Path to directory where .npy files will be saved.",
    default=None,
    type=click.Path(exists=False, resolve_path=True, file_okay=False, dir_okay=True),
    show_default=True,
    required=False,
)


def make_loader(path: str, selections: list[list[int]] | None):
    """Open pyramid and create loader."""
    from zarr_tile_loader.loader import ZarrLoader
    from zarr_tile_loader.stores import open_pyramid

    loader = ZarrLoader(open_pyramid(path))
    if selections:
        loader.set_channel_selections(selections)
    return loader
