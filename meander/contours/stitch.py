"""
Stitch unordered crossing segments into polylines.

Segments are grouped by threshold and never joined across groups. Within a
group a line is grown from an arbitrary seed segment: whenever a remaining
segment has an endpoint within `nearness` of either end of the line, that
endpoint is treated as the line end itself and the segment's other endpoint
extends the line. This is a proximity heuristic, not an exact graph
reconstruction, so crowded or noisy inputs can produce wrong joins.
"""
from __future__ import annotations

import logging
import math
from collections import deque
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
from scipy.spatial import cKDTree

from meander.contours.intersect import CrossingSegment, Point2
from meander.contours.params import (
    JOIN_FIRST,
    SHORT_LINE_CUTOFF,
    check_join_policy,
    check_nearness,
    check_short_line_cutoff,
)

logger = logging.getLogger("meander.contours.stitch")

Polyline = List[Point2]
ContourResult = Dict[float, List[Polyline]]

# Widens kd-tree lookups so float rounding never hides a candidate; the
# strict distance test below is what decides.
_RADIUS_SLACK = 1e-9


def _distance(p: Point2, q: Point2) -> float:
    return math.sqrt((q[0] - p[0]) ** 2 + (q[1] - p[1]) ** 2)


class SegmentStitcher:
    """
    Joins the segments of a single threshold group into polylines.

    The remaining-segment pool keeps the input order. Seeds are taken from the
    end of the pool; matches are looked up through a kd-tree of all segment
    endpoints, so each join costs a radius query instead of a scan of the pool.

    join_policy:
      - "first": the matching segment that comes first in the pool wins.
      - "nearest": the closest matching endpoint wins.
    """

    def __init__(
        self,
        segments,
        nearness: float,
        join_policy: str = JOIN_FIRST,
        short_line_cutoff: int = SHORT_LINE_CUTOFF,
    ):
        self.nearness = check_nearness(nearness)
        self.join_policy = check_join_policy(join_policy)
        self.short_line_cutoff = check_short_line_cutoff(short_line_cutoff)

        segs = np.asarray(segments, dtype=float).reshape(-1, 2, 2)
        self._segments: List[Tuple[Point2, Point2]] = [
            (tuple(a), tuple(b)) for a, b in segs.tolist()
        ]
        self._alive = [True] * len(self._segments)
        self._top = len(self._segments) - 1
        self._tree = cKDTree(segs.reshape(-1, 2)) if self._segments else None
        self._radius = self.nearness * (1.0 + _RADIUS_SLACK)

    def __len__(self) -> int:
        return len(self._segments)

    def _endpoint(self, k: int) -> Point2:
        return self._segments[k >> 1][k & 1]

    def _pop_seed(self) -> Optional[int]:
        while self._top >= 0 and not self._alive[self._top]:
            self._top -= 1
        if self._top < 0:
            return None
        seed = self._top
        self._alive[seed] = False
        return seed

    def _candidates(self, point: Point2):
        """(distance, segment index, endpoint index) of live endpoints strictly within nearness."""
        for k in self._tree.query_ball_point(point, self._radius):
            s = k >> 1
            if not self._alive[s]:
                continue
            d = _distance(point, self._endpoint(k))
            if d < self.nearness:
                yield d, s, k & 1

    def _match_first(self, head: Point2, tail: Point2):
        best = None
        for point in (head, tail):
            for _, s, _ in self._candidates(point):
                if best is None or s < best:
                    best = s
        if best is None:
            return None

        a, b = self._segments[best]
        if _distance(a, head) < self.nearness:
            return best, True, b
        if _distance(b, head) < self.nearness:
            return best, True, a
        if _distance(a, tail) < self.nearness:
            return best, False, b
        return best, False, a

    def _match_nearest(self, head: Point2, tail: Point2):
        best = None
        for at_head, point in ((True, head), (False, tail)):
            for d, s, end in self._candidates(point):
                key = (d, s, not at_head, end)
                if best is None or key < best[0]:
                    best = (key, s, at_head, end)
        if best is None:
            return None

        _, s, at_head, end = best
        return s, at_head, self._segments[s][1 - end]

    def polylines(self) -> List[Polyline]:
        """Consume the pool and return the lines longer than short_line_cutoff points."""
        match_fn = self._match_first if self.join_policy == JOIN_FIRST else self._match_nearest
        finished = []
        dropped = 0
        while True:
            seed = self._pop_seed()
            if seed is None:
                break

            line = deque(self._segments[seed])
            while True:
                match = match_fn(line[0], line[-1])
                if match is None:
                    break
                s, at_head, other = match
                if at_head:
                    line.appendleft(other)
                else:
                    line.append(other)
                self._alive[s] = False

            if len(line) > self.short_line_cutoff:
                finished.append(list(line))
            else:
                dropped += 1

        logger.debug("Stitched %d polyline(s), dropped %d short line(s)", len(finished), dropped)
        return finished


def stitch_group(
    segments,
    nearness: float,
    join_policy: str = JOIN_FIRST,
    short_line_cutoff: int = SHORT_LINE_CUTOFF,
) -> List[Polyline]:
    """Stitch one threshold's segments, given as an (N, 2, 2) array or equivalent nested sequence."""
    return SegmentStitcher(segments, nearness, join_policy, short_line_cutoff).polylines()


def stitch_segments(
    segments: Iterable[CrossingSegment],
    nearness: float,
    join_policy: str = JOIN_FIRST,
    short_line_cutoff: int = SHORT_LINE_CUTOFF,
) -> ContourResult:
    """
    Group tagged segments by threshold and stitch every group independently.

    Keys follow the order in which thresholds first appear; thresholds whose
    lines were all too short are left out.
    """
    groups: Dict[float, List[Tuple[Point2, Point2]]] = {}
    for seg in segments:
        groups.setdefault(seg.threshold, []).append((seg.start, seg.end))

    result: ContourResult = {}
    for threshold, group in groups.items():
        lines = stitch_group(group, nearness, join_policy, short_line_cutoff)
        if lines:
            result[threshold] = lines
    return result
