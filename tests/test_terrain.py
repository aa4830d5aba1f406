import numpy as np
import pytest

from meander.errors import TINFormatError
from meander.terrain import HeightMap, Vertex3, as_tin_array, grid_tin, triangles, z_range


def test_as_tin_array_from_nested_lists(worked_triangle):
    arr = as_tin_array([worked_triangle, worked_triangle])
    assert arr.shape == (2, 3, 3)
    assert arr.dtype == np.float64


def test_as_tin_array_empty():
    assert as_tin_array([]).shape == (0, 3, 3)
    assert as_tin_array(np.array([])).shape == (0, 3, 3)


def test_as_tin_array_rejects_non_finite():
    tin = np.zeros((2, 3, 3))
    tin[1, 2, 0] = np.inf
    with pytest.raises(TINFormatError, match="triangle 1"):
        as_tin_array(tin)


def test_triangles_are_vertex3(worked_triangle):
    (tri,) = triangles([worked_triangle])
    assert tri[1] == Vertex3(10.0, 0.0, 10.0)
    assert tri[1].z == 10.0


def test_z_range(worked_triangle):
    assert z_range([worked_triangle]) == (0.0, 10.0)
    with pytest.raises(TINFormatError):
        z_range([])


def test_grid_tin_counts_and_winding():
    X, Y = np.meshgrid(np.arange(4.0), np.arange(3.0))
    Z = X + Y
    tin = grid_tin(X, Y, Z)
    assert tin.shape == (2 * 3 * 2, 3, 3)
    # first cell: (0,0) -> (1,0) -> (1,1) and (0,0) -> (1,1) -> (0,1)
    np.testing.assert_array_equal(tin[0], [[0, 0, 0], [1, 0, 1], [1, 1, 2]])
    np.testing.assert_array_equal(tin[1], [[0, 0, 0], [1, 1, 2], [0, 1, 1]])


def test_grid_tin_skips_nan_cells():
    X, Y = np.meshgrid(np.arange(3.0), np.arange(3.0))
    Z = np.zeros_like(X)
    Z[0, 0] = np.nan
    tin = grid_tin(X, Y, Z)
    assert tin.shape == (6, 3, 3)
    assert np.all(np.isfinite(tin))


def test_grid_tin_shape_errors():
    X, Y = np.meshgrid(np.arange(3.0), np.arange(3.0))
    with pytest.raises(ValueError):
        grid_tin(X, Y, np.zeros((2, 2)))
    with pytest.raises(ValueError):
        grid_tin(X[:1], Y[:1], X[:1])


def test_circular_heightmap_masks_outside():
    hm = HeightMap.circular(radius=5.0, resolution=1.0)
    assert np.isnan(hm.Z[0, 0])
    assert hm.mask[5, 5]
    tin = hm.to_tin()
    assert len(tin) > 0
    assert np.all(np.hypot(tin[:, :, 0], tin[:, :, 1]) <= 5.0 + 1e-9)


def test_slope_and_bump():
    hm = HeightMap.rectangular(10.0, 10.0, 1.0)
    hm.add_planar_slope(slope_x=0.5)
    assert hm.z_range() == (-2.5, 2.5)

    hm = HeightMap.rectangular(10.0, 10.0, 1.0)
    hm.add_gaussian_bump(0.0, 0.0, height=3.0, sigma=2.0)
    lo, hi = hm.z_range()
    assert hi == pytest.approx(3.0)
    assert lo > 0.0
    hm.normalize()
    assert hm.z_range()[0] == 0.0

    with pytest.raises(ValueError):
        hm.add_gaussian_bump(0.0, 0.0, height=1.0, sigma=0.0)


def test_heightmap_shape_mismatch():
    with pytest.raises(ValueError):
        HeightMap(np.zeros((2, 2)), np.zeros((2, 2)), np.zeros((3, 2)), resolution=1.0)
