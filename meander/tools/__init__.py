"""
Tools: TIN/GeoJSON I/O and contour rendering.
"""

__all__ = [
    "tin_io",
    "plot_contours",
]
