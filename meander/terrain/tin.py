from __future__ import annotations

from typing import NamedTuple, Sequence, Tuple, Union

import numpy as np

from meander.errors import TINFormatError


class Vertex3(NamedTuple):
    """A TIN vertex: planar (x, y) and height z."""
    x: float
    y: float
    z: float


Triangle = Tuple[Vertex3, Vertex3, Vertex3]
TINLike = Union[np.ndarray, Sequence[Sequence[Sequence[float]]]]


def as_tin_array(tin: TINLike) -> np.ndarray:
    """
    Normalize a TIN to a float64 array of shape (N, 3, 3): triangle, vertex, (x, y, z).

    An empty sequence gives an empty (0, 3, 3) array.
    """
    if isinstance(tin, np.ndarray):
        arr = tin
    else:
        tin = list(tin)
        if not tin:
            return np.empty((0, 3, 3), dtype=float)
        try:
            arr = np.array(tin, dtype=float)
        except (TypeError, ValueError) as e:
            raise TINFormatError(f"TIN must contain triangles of three (x, y, z) vertices: {e}") from e

    if arr.size == 0 and arr.ndim <= 1:
        return np.empty((0, 3, 3), dtype=float)
    if arr.ndim != 3 or arr.shape[1:] != (3, 3):
        raise TINFormatError(f"TIN must have shape (N, 3, 3), got {arr.shape}")

    arr = np.asarray(arr, dtype=float)
    if not np.all(np.isfinite(arr)):
        bad = int(np.argmax(~np.all(np.isfinite(arr), axis=(1, 2))))
        raise TINFormatError(f"TIN triangle {bad} has non-finite coordinates")
    return arr


def triangles(tin: TINLike) -> list[Triangle]:
    """The TIN as a list of Vertex3 triples."""
    arr = as_tin_array(tin)
    return [tuple(Vertex3(*map(float, v)) for v in tri) for tri in arr]


def z_range(tin: TINLike) -> tuple[float, float]:
    """(min, max) vertex height. Raises on an empty TIN."""
    arr = as_tin_array(tin)
    if len(arr) == 0:
        raise TINFormatError("Cannot take the height range of an empty TIN")
    z = arr[:, :, 2]
    return float(z.min()), float(z.max())


def grid_tin(X: np.ndarray, Y: np.ndarray, Z: np.ndarray) -> np.ndarray:
    """
    Triangulate a structured grid: every cell becomes two triangles
    split along its (i, j) -> (i+1, j+1) diagonal.

    X, Y, Z are same-shaped 2D arrays (meshgrid layout). Cells touching a
    NaN height are skipped, so masked grid regions produce no triangles.
    """
    if X.shape != Y.shape or X.shape != Z.shape:
        raise ValueError("X, Y, Z must have the same shape")
    if X.ndim != 2 or X.shape[0] < 2 or X.shape[1] < 2:
        raise ValueError(f"Grid must be 2D with at least 2x2 samples, got {X.shape}")

    P = np.stack([X, Y, Z], axis=-1).astype(float)

    p00 = P[:-1, :-1].reshape(-1, 3)
    p01 = P[:-1, 1:].reshape(-1, 3)
    p10 = P[1:, :-1].reshape(-1, 3)
    p11 = P[1:, 1:].reshape(-1, 3)

    # Interleave so both triangles of a cell stay adjacent.
    tris = np.empty((p00.shape[0], 2, 3, 3), dtype=float)
    tris[:, 0] = np.stack([p00, p01, p11], axis=1)
    tris[:, 1] = np.stack([p00, p11, p10], axis=1)
    tris = tris.reshape(-1, 3, 3)

    keep = np.all(np.isfinite(tris), axis=(1, 2))
    return tris[keep]
