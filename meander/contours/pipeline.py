from __future__ import annotations

import logging
import time
from typing import Dict, List

import numpy as np

from meander.contours.intersect import crossing_segments
from meander.contours.params import ContourParams
from meander.contours.stitch import ContourResult, stitch_group
from meander.contours.thresholds import generate_thresholds
from meander.terrain.tin import TINLike, as_tin_array

logger = logging.getLogger("meander.contours")


def contours_from_params(tin: TINLike, params: ContourParams) -> ContourResult:
    """
    Contour lines for a TIN, keyed by threshold.

    Returns {threshold: [polyline, ...]} in threshold generation order. Each
    polyline is an open list of (x, y) points with more than
    params.short_line_cutoff points. Thresholds with no surviving line are absent.
    """
    arr = as_tin_array(tin)
    thresholds = generate_thresholds(params.threshold_count, params.z_min, params.z_max)

    t0 = time.perf_counter()
    # Equal threshold values (z_min == z_max) share one group.
    groups: Dict[float, List[np.ndarray]] = {}
    for threshold in thresholds:
        segs = crossing_segments(arr, threshold, params.degenerate_epsilon)
        groups.setdefault(threshold, []).append(segs)
    t1 = time.perf_counter()

    result: ContourResult = {}
    for threshold, parts in groups.items():
        segs = np.concatenate(parts) if len(parts) > 1 else parts[0]
        lines = stitch_group(
            segs,
            params.nearness_threshold,
            join_policy=params.join_policy,
            short_line_cutoff=params.short_line_cutoff,
        )
        logger.debug(
            "threshold=%s segments=%d polylines=%d", threshold, len(segs), len(lines),
            extra={"threshold": threshold, "segments": int(len(segs)), "polylines": len(lines)},
        )
        if lines:
            result[threshold] = lines
    t2 = time.perf_counter()

    logger.info(
        "Contoured %d triangles at %d thresholds: %d polylines (intersect %.3fs, stitch %.3fs)",
        len(arr), len(thresholds), sum(len(v) for v in result.values()), t1 - t0, t2 - t1,
    )
    return result


def contours_from_tin(
    tin: TINLike,
    threshold_count: int = 10,
    z_min: float = -1,
    z_max: float = 1,
    nearness_threshold: float = 1,
    **options,
) -> ContourResult:
    """
    Keyword form of contours_from_params.

    options: join_policy, short_line_cutoff, degenerate_epsilon (see ContourParams).
    Invalid parameters raise ContourConfigError before any work is done.

    Example:
        result = contours_from_tin(tin, threshold_count=50, z_min=-1000, z_max=1000)
        for threshold, lines in result.items():
            for points in lines:
                ...
    """
    params = ContourParams(
        threshold_count=threshold_count,
        z_min=z_min,
        z_max=z_max,
        nearness_threshold=nearness_threshold,
        **options,
    )
    return contours_from_params(tin, params)
