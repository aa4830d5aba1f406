"""
Shared fixtures for meander tests.
"""
import math

import numpy as np
import pytest

from meander.terrain import HeightMap


def _reference_stitch(segments, nearness, short_line_cutoff=5):
    """Plain linear-scan stitcher: pop the last segment, join the first near segment in the pool."""
    def near(p, q):
        return math.sqrt((q[0] - p[0]) ** 2 + (q[1] - p[1]) ** 2) < nearness

    pool = [[tuple(a), tuple(b)] for a, b in np.asarray(segments, dtype=float).reshape(-1, 2, 2).tolist()]
    lines = []
    while pool:
        line = pool.pop()
        while True:
            idx = next(
                (i for i, s in enumerate(pool)
                 if near(line[0], s[0]) or near(line[0], s[1])
                 or near(line[-1], s[0]) or near(line[-1], s[1])),
                -1,
            )
            if idx == -1:
                if len(line) > short_line_cutoff:
                    lines.append(line)
                break
            m = pool[idx]
            if near(m[0], line[0]):
                line.insert(0, m[1])
            elif near(m[1], line[0]):
                line.insert(0, m[0])
            elif near(m[0], line[-1]):
                line.append(m[1])
            else:
                line.append(m[0])
            del pool[idx]
    return lines


@pytest.fixture
def reference_stitch():
    return _reference_stitch


@pytest.fixture
def cone_heightmap():
    """Cone z = sqrt(x^2 + y^2) sampled on a 21x21 grid over [-10, 10]^2."""
    hm = HeightMap.rectangular(20.0, 20.0, 1.0)
    hm.Z = np.hypot(hm.X, hm.Y)
    return hm


@pytest.fixture
def cone_tin(cone_heightmap):
    return cone_heightmap.to_tin()


@pytest.fixture
def worked_triangle():
    return [(0.0, 0.0, 0.0), (10.0, 0.0, 10.0), (0.0, 10.0, 10.0)]


def chain(n, spacing=10.0, y=0.0, x0=0.0):
    """n collinear segments sharing endpoints exactly, left to right."""
    return [((x0 + i * spacing, y), (x0 + (i + 1) * spacing, y)) for i in range(n)]


@pytest.fixture
def make_chain():
    return chain
