"""
Tests for the easing functions.
"""

import pytest

from utils.animation import EASINGS, accelerate_decelerate, get_easing, linear


@pytest.mark.parametrize("name", sorted(EASINGS))
def test_easing_endpoints(name):
    f = EASINGS[name]
    assert f(0.0) == pytest.approx(0.0)
    assert f(1.0) == pytest.approx(1.0)


@pytest.mark.parametrize("name", sorted(EASINGS))
def test_easing_is_monotonic_and_clamped(name):
    f = EASINGS[name]
    values = [f(i / 100) for i in range(101)]
    assert all(b >= a - 1e-12 for a, b in zip(values, values[1:]))
    assert f(-0.5) == pytest.approx(0.0)
    assert f(1.5) == pytest.approx(1.0)


def test_accelerate_decelerate_is_symmetric():
    assert accelerate_decelerate(0.5) == pytest.approx(0.5)
    assert accelerate_decelerate(0.25) == pytest.approx(1 - accelerate_decelerate(0.75))
    assert accelerate_decelerate(0.1) < 0.1


def test_get_easing():
    assert get_easing("linear") is linear
    assert get_easing(None) is accelerate_decelerate
    custom = lambda t: t * t
    assert get_easing(custom) is custom
    with pytest.raises(ValueError):
        get_easing("wobble")
