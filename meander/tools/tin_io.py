"""JSON I/O for TINs and GeoJSON export of contour results."""

import json
import logging
import os

import numpy as np
from shapely.geometry import LineString, mapping

from meander.errors import TINFormatError
from meander.terrain.tin import as_tin_array

logger = logging.getLogger("meander.tools.tin_io")


def load_tin(path: str) -> np.ndarray:
    """
    Read a TIN from JSON.

    Accepts either a bare list of triangles or {"triangles": [...]},
    each triangle being three [x, y, z] lists.
    """
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise TINFormatError(f"Could not parse TIN {path}: {e}") from e

    if isinstance(data, dict):
        if "triangles" not in data:
            raise TINFormatError(f"TIN {path} has no 'triangles' key")
        data = data["triangles"]
    if not isinstance(data, list):
        raise TINFormatError(f"TIN {path} must hold a list of triangles")

    tin = as_tin_array(data)
    logger.info("Loaded %d triangles from %s", len(tin), path, extra={"triangles": len(tin), "path": path})
    return tin


def save_tin(path: str, tin) -> None:
    arr = as_tin_array(tin)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w") as f:
        json.dump({"triangles": arr.tolist()}, f)
    logger.info("Wrote %d triangles to %s", len(arr), path, extra={"triangles": len(arr), "path": path})


def contours_to_geojson(result, precision: int | None = None) -> dict:
    """
    Contour result as a GeoJSON FeatureCollection of LineStrings.

    precision: decimal places kept in coordinates (None keeps full precision).
    """
    features = []
    for threshold_index, (threshold, lines) in enumerate(result.items()):
        for points in lines:
            coords = np.asarray(points, dtype=float)
            if precision is not None:
                coords = np.round(coords, precision)
            features.append({
                "type": "Feature",
                "properties": {
                    "threshold": float(threshold),
                    "threshold_index": threshold_index,
                    "num_points": len(points),
                },
                "geometry": mapping(LineString(coords)),
            })
    return {"type": "FeatureCollection", "features": features}


def write_geojson(path: str, result, precision: int | None = None) -> None:
    payload = contours_to_geojson(result, precision=precision)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w") as f:
        json.dump(payload, f, indent=2)
    logger.info("Wrote %d contour features to %s", len(payload["features"]), path, extra={"path": path})
