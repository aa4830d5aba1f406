import math

import pytest

from meander.contours import ContourConfigError, generate_thresholds


def test_evenly_spaced_inclusive():
    assert generate_thresholds(5, 0.0, 1.0) == [0.0, 0.25, 0.5, 0.75, 1.0]


def test_defaults_range():
    ts = generate_thresholds(10, -1, 1)
    assert len(ts) == 10
    assert ts[0] == -1.0
    assert ts[-1] == 1.0
    assert all(a < b for a, b in zip(ts, ts[1:]))


def test_single_threshold_is_z_min():
    assert generate_thresholds(1, -3.0, 7.0) == [-3.0]


def test_equal_bounds_give_constant_sequence():
    assert generate_thresholds(4, 2.5, 2.5) == [2.5, 2.5, 2.5, 2.5]


def test_reversed_bounds_descend():
    assert generate_thresholds(3, 10.0, 0.0) == [10.0, 5.0, 0.0]


def test_returns_python_floats():
    assert all(type(t) is float for t in generate_thresholds(3, 0, 2))


@pytest.mark.parametrize("count, z_min, z_max", [
    (0, 0.0, 1.0),
    (-2, 0.0, 1.0),
    (2.5, 0.0, 1.0),
    (True, 0.0, 1.0),
    (3, math.nan, 1.0),
    (3, 0.0, math.inf),
    (3, "0", 1.0),
])
def test_invalid_configuration_rejected(count, z_min, z_max):
    with pytest.raises(ContourConfigError):
        generate_thresholds(count, z_min, z_max)
