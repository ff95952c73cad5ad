"""
Easing functions for Ken Burns transitions.

Every easing maps [0, 1] -> [0, 1], is monotonic, and satisfies
f(0) = 0 and f(1) = 1, so a transition always starts at its source rect
and lands exactly on its destination rect.
"""

import math


def _clamp(t):
    return max(0.0, min(1.0, t))


def linear(t):
    """Constant speed."""
    return _clamp(t)


def accelerate_decelerate(t):
    """Symmetric cosine ease. Starts and ends slowly, fastest in the middle."""
    t = _clamp(t)
    return math.cos((t + 1.0) * math.pi) / 2.0 + 0.5


def ease_out_cubic(t):
    """Fast start, slow end."""
    t = _clamp(t)
    return 1.0 - (1.0 - t) ** 3


def ease_in_out_cubic(t):
    """Smooth acceleration and deceleration, steeper than the cosine ease."""
    t = _clamp(t)
    if t < 0.5:
        return 4.0 * t * t * t
    else:
        return 1.0 - (-2.0 * t + 2.0) ** 3 / 2.0


def ease_out_quad(t):
    """Gentle deceleration. Subtler than cubic."""
    t = _clamp(t)
    return 1.0 - (1.0 - t) ** 2


def smooth_step(t):
    """Hermite interpolation — smooth start and end."""
    t = _clamp(t)
    return t * t * (3.0 - 2.0 * t)


EASINGS = {
    "linear": linear,
    "accelerate_decelerate": accelerate_decelerate,
    "ease_out_cubic": ease_out_cubic,
    "ease_in_out_cubic": ease_in_out_cubic,
    "ease_out_quad": ease_out_quad,
    "smooth_step": smooth_step,
}

DEFAULT_EASING = "accelerate_decelerate"


def get_easing(name_or_func=None):
    """
    Resolve an easing by name (config value) or pass a callable through.

    None returns the default accelerate-decelerate curve.
    """
    if name_or_func is None:
        return EASINGS[DEFAULT_EASING]
    if callable(name_or_func):
        return name_or_func
    try:
        return EASINGS[name_or_func]
    except KeyError:
        raise ValueError(
            f"Unknown easing '{name_or_func}'. Available: {', '.join(sorted(EASINGS))}"
        ) from None
