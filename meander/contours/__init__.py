"""
Contour extraction: thresholds, per-triangle crossings, and segment stitching.
"""
from meander.errors import ContourConfigError, TINFormatError
from .params import (
    ContourParams,
    DEGENERATE_EPSILON,
    JOIN_FIRST,
    JOIN_NEAREST,
    SHORT_LINE_CUTOFF,
)
from .thresholds import generate_thresholds
from .intersect import CrossingSegment, crossing_segments, intersect_triangle
from .stitch import ContourResult, Polyline, SegmentStitcher, stitch_group, stitch_segments
from .pipeline import contours_from_params, contours_from_tin

__all__ = [
    "ContourConfigError",
    "TINFormatError",
    "ContourParams",
    "DEGENERATE_EPSILON",
    "JOIN_FIRST",
    "JOIN_NEAREST",
    "SHORT_LINE_CUTOFF",
    "generate_thresholds",
    "CrossingSegment",
    "crossing_segments",
    "intersect_triangle",
    "ContourResult",
    "Polyline",
    "SegmentStitcher",
    "stitch_group",
    "stitch_segments",
    "contours_from_params",
    "contours_from_tin",
]
