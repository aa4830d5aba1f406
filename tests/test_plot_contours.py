import matplotlib.pyplot as plt
import pytest
from matplotlib import colormaps
from matplotlib.path import Path

from meander.tools.plot_contours import (
    linear_map,
    plot_contours,
    polyline_path,
    render_contours,
    threshold_color,
)


def test_linear_map():
    assert linear_map(0, 10, 0, 1, 5) == 0.5
    assert linear_map(-1, 1, 0, 100, 1) == 100
    assert linear_map(2, 2, 0, 1, 2) == 0.5


def test_threshold_color_uses_colormap_ends():
    cmap = colormaps["viridis"]
    assert threshold_color(-1.0, -1.0, 1.0) == cmap(0.0)
    assert threshold_color(1.0, -1.0, 1.0, cmap) == cmap(1.0)
    assert threshold_color(3.0, 3.0, 3.0, "viridis") == cmap(0.5)


def test_polyline_path_open_and_closed():
    pts = [(0, 0), (1, 0), (1, 1)]
    open_path = polyline_path(pts)
    assert list(open_path.codes) == [Path.MOVETO, Path.LINETO, Path.LINETO]

    closed = polyline_path(pts, closed=True)
    assert list(closed.codes) == [Path.MOVETO, Path.LINETO, Path.LINETO, Path.CLOSEPOLY]
    assert len(closed.vertices) == 4

    with pytest.raises(ValueError):
        polyline_path([(0, 0)])


def test_plot_contours_adds_one_patch_per_line():
    result = {0.0: [[(0, 0), (1, 1), (2, 0)]], 1.0: [[(0, 1), (1, 2)], [(3, 3), (4, 4)]]}
    fig, ax = plt.subplots()
    try:
        assert plot_contours(result, 0.0, 1.0, ax=ax) is ax
        assert len(ax.patches) == 3
    finally:
        plt.close(fig)


@pytest.mark.parametrize("name", ["contours.png", "contours.svg"])
def test_render_contours_writes_file(tmp_path, cone_tin, name):
    from meander.contours import contours_from_tin

    result = contours_from_tin(cone_tin, 4, 2.0, 8.0, 0.01)
    out = tmp_path / name
    render_contours(str(out), result, 2.0, 8.0, title="cone")
    assert out.exists() and out.stat().st_size > 0
