import logging
import os

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib import colormaps
from matplotlib.patches import PathPatch
from matplotlib.path import Path

logger = logging.getLogger("meander.tools.plot_contours")


def linear_map(in_min: float, in_max: float, out_min: float, out_max: float, value: float) -> float:
    """Map value from [in_min, in_max] onto [out_min, out_max]. A zero-width input range maps to the output midpoint."""
    if in_max == in_min:
        return (out_min + out_max) / 2.0
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)


def threshold_color(threshold: float, z_min: float, z_max: float, cmap="viridis"):
    """RGBA color for a contour band, threshold normalized against [z_min, z_max]."""
    if isinstance(cmap, str):
        cmap = colormaps[cmap]
    return cmap(linear_map(z_min, z_max, 0.0, 1.0, threshold))


def polyline_path(points, closed: bool = False) -> Path:
    """Ordered points to a drawable path; closed joins the last point back to the first."""
    if len(points) < 2:
        raise ValueError(f"A path needs at least 2 points, got {len(points)}")
    verts = [tuple(p) for p in points]
    codes = [Path.MOVETO] + [Path.LINETO] * (len(verts) - 1)
    if closed:
        verts.append(verts[0])
        codes.append(Path.CLOSEPOLY)
    return Path(verts, codes)


def plot_contours(result, z_min: float, z_max: float, ax=None, cmap="viridis", linewidth: float = 1.0):
    """
    Draw every polyline of a contour result, colored by threshold.
    Returns the axes.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8))

    for threshold, lines in result.items():
        color = threshold_color(threshold, z_min, z_max, cmap)
        for points in lines:
            patch = PathPatch(polyline_path(points, closed=False), facecolor="none",
                              edgecolor=color, linewidth=linewidth)
            ax.add_patch(patch)

    ax.set_aspect("equal")
    ax.autoscale_view()
    return ax


def render_contours(path: str, result, z_min: float, z_max: float, cmap="viridis",
                    linewidth: float = 1.0, title: str | None = None) -> None:
    """Render a contour result to an image file (format from the extension, e.g. .png or .svg)."""
    fig, ax = plt.subplots(figsize=(8, 8))
    try:
        plot_contours(result, z_min, z_max, ax=ax, cmap=cmap, linewidth=linewidth)
        if title:
            ax.set_title(title)
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        fig.savefig(path)
    finally:
        plt.close(fig)
    logger.info("Rendered contours to %s", path, extra={"path": path})
