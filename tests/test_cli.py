"""CLI."""

import os

import numpy as np
import pytest

from zarr_tile_loader.utils._test import make_pyramid


@pytest.fixture
def pyramid_path(tmp_path):
    path, _ = make_pyramid(tmp_path / "pyramid.zarr", [(2, 128, 128), (1, 64, 64)], chunks=(1, 64, 64))
    return path


def test_cli_entrypoint() -> None:
    """Test CLI entrypoint."""
    exit_status = os.system("zarrtiles --help")
    assert exit_status == 0, "Exit status was not 0"


def test_info(pyramid_path) -> None:
    exit_status = os.system(f"zarrtiles info -i {pyramid_path!s}")
    assert exit_status == 0, "Exit status was not 0"


@pytest.mark.parametrize("selection", ["", "-s 0,0,0 -s 1,0,0"])
def test_tile(tmp_path, pyramid_path, selection) -> None:
    output_dir = tmp_path / "output"
    exit_status = os.system(f"zarrtiles tile -i {pyramid_path!s} -t 0,1 -t 1,1 {selection} -o {output_dir!s}")
    assert exit_status == 0, "Exit status was not 0"
    data = np.load(output_dir / "tile_level=0_x=1_y=1_channel=0.npy")
    assert data.size == 64 * 64, "Unexpected tile size"


def test_raster(tmp_path, pyramid_path) -> None:
    output_dir = tmp_path / "output"
    exit_status = os.system(f"zarrtiles raster -i {pyramid_path!s} -l 1 -o {output_dir!s}")
    assert exit_status == 0, "Exit status was not 0"
    data = np.load(output_dir / "raster_level=1_channel=0.npy")
    assert data.shape == (64, 64), "Unexpected raster shape"


def test_make_loader(pyramid_path) -> None:
    from zarr_tile_loader.cli._common import make_loader

    loader = make_loader(str(pyramid_path), [[1, 0, 0]])
    assert loader.n_levels == 2, "Loader should have 2 levels"
    assert loader.channel_selections == ((1, 0, 0),), "Selections should be applied"
