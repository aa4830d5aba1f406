"""
Per-triangle threshold crossings ("meandering triangles").

A triangle whose vertices straddle a threshold is split 1-vs-2: the lone
vertex on one side (minority) and the pair on the other (majority). The
threshold crosses the two edges joining the minority vertex to each majority
vertex, and linear interpolation along those edges gives the two segment ends.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from meander.errors import TINFormatError
from meander.contours.params import DEGENERATE_EPSILON
from meander.terrain.tin import Vertex3

logger = logging.getLogger("meander.contours.intersect")

Point2 = Tuple[float, float]

# Majority vertex indices for each possible minority vertex index, in vertex order.
_MAJORITY = np.array([[1, 2], [0, 2], [0, 1]])


@dataclass(frozen=True)
class CrossingSegment:
    """The two points where one triangle crosses one threshold."""
    start: Point2
    end: Point2
    threshold: float

    @property
    def points(self) -> tuple[Point2, Point2]:
        return self.start, self.end


def intersect_triangle(
    triangle: Sequence[Sequence[float]],
    threshold: float,
    degenerate_epsilon: float = DEGENERATE_EPSILON,
) -> Optional[CrossingSegment]:
    """
    Crossing segment of one triangle at one threshold, or None when all three
    vertices sit on the same side (below: z < threshold; above: z >= threshold).

    Flat edges (|dz| <= degenerate_epsilon) are skipped rather than divided by.
    """
    vertices = [Vertex3(*map(float, v)) for v in triangle]
    if len(vertices) != 3:
        raise TINFormatError(f"A triangle needs exactly 3 vertices, got {len(vertices)}")

    below = [v for v in vertices if v.z < threshold]
    above = [v for v in vertices if v.z >= threshold]
    if not below or not above:
        return None

    minority, majority = (below, above) if len(below) < len(above) else (above, below)
    m = minority[0]

    points = []
    for v in majority:
        dz = m.z - v.z
        if abs(dz) <= degenerate_epsilon:
            logger.debug("Skipping flat edge at threshold %s: %s -> %s", threshold, m, v)
            return None
        t = (threshold - v.z) / dz
        x = t * m.x + (1.0 - t) * v.x
        y = t * m.y + (1.0 - t) * v.y
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.debug("Skipping non-finite crossing at threshold %s: %s -> %s", threshold, m, v)
            return None
        points.append((x, y))

    return CrossingSegment(points[0], points[1], float(threshold))


def crossing_segments(
    tin: np.ndarray,
    threshold: float,
    degenerate_epsilon: float = DEGENERATE_EPSILON,
) -> np.ndarray:
    """
    Vectorized intersect_triangle over a whole TIN.

    tin: (N, 3, 3) array (see meander.terrain.tin.as_tin_array)
    Returns an (M, 2, 2) array of segments in triangle order; row k holds the
    same two points intersect_triangle gives for the k-th crossing triangle.
    """
    tin = np.asarray(tin, dtype=float)
    z = tin[:, :, 2]
    below = z < threshold
    n_below = below.sum(axis=1)

    crossing = (n_below == 1) | (n_below == 2)
    tin = tin[crossing]
    below = below[crossing]
    n_below = n_below[crossing]
    if len(tin) == 0:
        return np.empty((0, 2, 2), dtype=float)

    minority_mask = np.where((n_below == 1)[:, None], below, ~below)
    m_idx = np.argmax(minority_mask, axis=1)
    rows = np.arange(len(tin))

    m = tin[rows, m_idx]                         # (K, 3)
    v = tin[rows[:, None], _MAJORITY[m_idx]]     # (K, 2, 3)

    dz = m[:, None, 2] - v[:, :, 2]
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        t = (threshold - v[:, :, 2]) / dz
        pts = t[..., None] * m[:, None, :2] + (1.0 - t)[..., None] * v[:, :, :2]

    ok = np.all(np.abs(dz) > degenerate_epsilon, axis=1) & np.all(np.isfinite(pts), axis=(1, 2))
    skipped = int(len(ok) - np.count_nonzero(ok))
    if skipped:
        logger.debug("Skipped %d degenerate triangle(s) at threshold %s", skipped, threshold)
    return pts[ok]
