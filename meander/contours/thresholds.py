import numpy as np

from meander.contours.params import check_threshold_count, check_z_range


def generate_thresholds(threshold_count: int, z_min: float, z_max: float) -> list[float]:
    """
    Evenly spaced contour thresholds across [z_min, z_max], both ends included.

    A single threshold is z_min. z_min > z_max yields a descending sequence.
    """
    threshold_count = check_threshold_count(threshold_count)
    z_min, z_max = check_z_range(z_min, z_max)
    return [float(t) for t in np.linspace(z_min, z_max, threshold_count)]
