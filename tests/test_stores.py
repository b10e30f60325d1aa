"""Test stores."""

import asyncio

import dask.array as da
import numpy as np
import pytest

from zarr_tile_loader.exceptions import OutOfBoundsRead, StoreError
from zarr_tile_loader.loader import ZarrLoader
from zarr_tile_loader.models import WHOLE, Fixed
from zarr_tile_loader.stores import ArrayStore, ZarrStore, get_store, open_pyramid
from zarr_tile_loader.utils._test import make_array, make_pyramid


def test_array_store_chunks():
    store = ArrayStore(make_array((3, 1024, 1024)))
    assert store.chunks == (1, 512, 512), "Unexpected default chunks"
    assert store.ndim == 3, "Store should have 3 dimensions"

    store = ArrayStore(da.from_array(make_array((3, 256, 256)), chunks=(3, 128, 128)))
    assert store.chunks == (3, 128, 128), "Dask chunks should be used"

    with pytest.raises(ValueError):
        ArrayStore(make_array((256, 256)), chunks=(128,))


def test_array_store_read_chunk_edge():
    array = make_array((100, 100))
    store = ArrayStore(array, chunks=(64, 64))
    data = asyncio.run(store.read_chunk((Fixed(1), Fixed(1))))
    np.testing.assert_array_equal(data, array[64:100, 64:100].ravel())


@pytest.mark.parametrize("coords", [(Fixed(2), Fixed(0)), (Fixed(0), Fixed(-1))])
def test_array_store_read_chunk_out_of_bounds(coords):
    store = ArrayStore(make_array((100, 100)), chunks=(64, 64))
    with pytest.raises(OutOfBoundsRead):
        asyncio.run(store.read_chunk(coords))


def test_array_store_read_chunk_invalid():
    store = ArrayStore(make_array((100, 100)), chunks=(64, 64))
    with pytest.raises(StoreError):
        asyncio.run(store.read_chunk((Fixed(0), WHOLE)))
    with pytest.raises(StoreError):
        asyncio.run(store.read_chunk((Fixed(0),)))


def test_array_store_read_plane():
    array = make_array((2, 3, 40, 60))
    store = ArrayStore(array)
    plane = asyncio.run(store.read_plane((Fixed(1), Fixed(2), WHOLE, WHOLE)))
    assert plane.shape == (40, 60), "Unexpected plane shape"
    np.testing.assert_array_equal(plane.data, array[1, 2].ravel())

    with pytest.raises(OutOfBoundsRead):
        asyncio.run(store.read_plane((Fixed(2), Fixed(0), WHOLE, WHOLE)))


@pytest.mark.parametrize("read_in_thread", [True, False])
def test_array_store_read_in_thread(read_in_thread):
    from zarr_tile_loader.config import CONFIG

    array = make_array((64, 64))
    store = ArrayStore(array, chunks=(32, 32))
    with CONFIG.temporary_override(read_in_thread=read_in_thread):
        data = asyncio.run(store.read_chunk((Fixed(0), Fixed(1))))
    np.testing.assert_array_equal(data, array[0:32, 32:64].ravel())


def test_get_store():
    store = ArrayStore(make_array((64, 64)))
    assert get_store(store) is store, "Store should be returned as is"
    assert isinstance(get_store(make_array((64, 64))), ArrayStore), "Numpy array should be wrapped"
    with pytest.raises(TypeError):
        get_store("not-an-array")


def test_open_pyramid_multiscales(tmp_path):
    shapes = [(2, 256, 256), (1, 128, 128)]
    path, arrays = make_pyramid(tmp_path / "pyramid.zarr", shapes, chunks=(1, 64, 64))
    pyramid = open_pyramid(path)
    assert len(pyramid) == 2, "Expected 2 levels"
    assert all(isinstance(store, ZarrStore) for store in pyramid), "Expected zarr stores"
    assert pyramid[0].shape == (2, 256, 256), "First level should be the largest"
    assert pyramid[0].chunks == (1, 64, 64), "Unexpected chunks"

    data = asyncio.run(pyramid[0].read_chunk((Fixed(1), Fixed(2), Fixed(3))))
    np.testing.assert_array_equal(data, arrays[0][1, 128:192, 192:256].ravel())
    with pytest.raises(OutOfBoundsRead):
        asyncio.run(pyramid[1].read_chunk((Fixed(0), Fixed(2), Fixed(0))))


def test_open_pyramid_sorted(tmp_path):
    shapes = [(64, 64), (256, 256), (128, 128)]
    path, _ = make_pyramid(tmp_path / "pyramid.zarr", shapes, chunks=(64, 64), names=["c", "a", "b"], multiscales=False)
    pyramid = open_pyramid(path)
    assert [store.shape for store in pyramid] == [(256, 256), (128, 128), (64, 64)], "Pyramid should be sorted"


def test_loader_zarr_pyramid(tmp_path):
    shapes = [(3, 256, 256), (2, 128, 128), (1, 64, 64)]
    path, arrays = make_pyramid(tmp_path / "pyramid.zarr", shapes, chunks=(1, 64, 64))
    loader = ZarrLoader(open_pyramid(path))
    assert loader.n_levels == 3, "Expected 3 levels"
    loader.set_channel_selections([[0, 0, 0], [1, 0, 0]])

    data = loader.get_tile_sync(1, 0, level=1)
    assert len(data) == 2, "Expected 2 buffers"
    np.testing.assert_array_equal(data[0], arrays[1][0, 0:64, 64:128].ravel())
    np.testing.assert_array_equal(data[1], arrays[1][1, 0:64, 64:128].ravel())

    # second channel is missing from the last level
    assert loader.get_tile_sync(0, 0, level=2) is None, "Missing channel should be ignored"

    result = loader.get_raster_sync(level=1)
    assert (result.width, result.height) == (128, 128), "Unexpected raster size"
    np.testing.assert_array_equal(result.data[1], arrays[1][1].ravel())
