from __future__ import annotations

import math
import numbers
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict

from meander.errors import ContourConfigError

# Stitched lines with this many points or fewer are dropped.
SHORT_LINE_CUTOFF = 5

# Height differences at or below this are treated as a flat edge and skipped.
DEGENERATE_EPSILON = 1e-12

JOIN_FIRST = "first"
JOIN_NEAREST = "nearest"
JOIN_POLICIES = (JOIN_FIRST, JOIN_NEAREST)


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def check_threshold_count(threshold_count) -> int:
    if not _is_int(threshold_count) or threshold_count < 1:
        raise ContourConfigError(f"threshold_count must be an integer >= 1, got {threshold_count!r}")
    return int(threshold_count)


def check_z_range(z_min, z_max) -> tuple[float, float]:
    for name, value in (("z_min", z_min), ("z_max", z_max)):
        if not _is_real(value) or not math.isfinite(value):
            raise ContourConfigError(f"{name} must be a finite number, got {value!r}")
    return float(z_min), float(z_max)


def check_nearness(nearness) -> float:
    if not _is_real(nearness) or not math.isfinite(nearness) or nearness < 0:
        raise ContourConfigError(f"nearness_threshold must be a finite number >= 0, got {nearness!r}")
    return float(nearness)


def check_join_policy(join_policy) -> str:
    if join_policy not in JOIN_POLICIES:
        raise ContourConfigError(f"join_policy must be one of {JOIN_POLICIES}, got {join_policy!r}")
    return join_policy


def check_short_line_cutoff(cutoff) -> int:
    if not _is_int(cutoff) or cutoff < 0:
        raise ContourConfigError(f"short_line_cutoff must be an integer >= 0, got {cutoff!r}")
    return int(cutoff)


def check_degenerate_epsilon(epsilon) -> float:
    if not _is_real(epsilon) or not math.isfinite(epsilon) or epsilon < 0:
        raise ContourConfigError(f"degenerate_epsilon must be a finite number >= 0, got {epsilon!r}")
    return float(epsilon)


@dataclass(frozen=True)
class ContourParams:
    """
    Parameters for contours_from_tin.

    Thresholds are evenly spaced between z_min and z_max (inclusive).
    nearness_threshold is the distance below which two segment endpoints
    count as the same point when stitching.
    """
    threshold_count: int = 10
    z_min: float = -1.0
    z_max: float = 1.0
    nearness_threshold: float = 1.0
    join_policy: str = JOIN_FIRST
    short_line_cutoff: int = SHORT_LINE_CUTOFF
    degenerate_epsilon: float = DEGENERATE_EPSILON

    def __post_init__(self):
        check_threshold_count(self.threshold_count)
        check_z_range(self.z_min, self.z_max)
        check_nearness(self.nearness_threshold)
        check_join_policy(self.join_policy)
        check_short_line_cutoff(self.short_line_cutoff)
        check_degenerate_epsilon(self.degenerate_epsilon)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **overrides) -> "ContourParams":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContourParams":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ContourConfigError(f"Unknown contour parameter(s): {', '.join(unknown)}")
        return cls(**data)

