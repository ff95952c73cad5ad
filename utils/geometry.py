"""
Geometry utilities — rectangles, aspect ratios and truncation helpers.

Used by transitions, transition generators and the render transform.
"""

import math
from dataclasses import dataclass

from utils.errors import InvalidGeometryError

# Decimal places kept before two aspect ratios are compared.
DEFAULT_RATIO_PRECISION = 3
RATIO_TOLERANCE = 0.01


@dataclass
class Rect:
    """Axis-aligned rectangle in floating point coordinates."""
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def from_size(cls, width, height) -> "Rect":
        """Rectangle anchored at the origin."""
        return cls(0.0, 0.0, float(width), float(height))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def set(self, left, top, right, bottom) -> None:
        self.left = left
        self.top = top
        self.right = right
        self.bottom = bottom

    def copy(self) -> "Rect":
        return Rect(self.left, self.top, self.right, self.bottom)

    def contains(self, other: "Rect") -> bool:
        """True if `other` lies fully inside this rectangle."""
        return (self.left <= other.left and self.top <= other.top
                and other.right <= self.right and other.bottom <= self.bottom)

    def to_tuple(self) -> tuple:
        return (self.left, self.top, self.right, self.bottom)


def rect_ratio(rect):
    """Aspect ratio (width / height) of a rect."""
    return rect.width / rect.height


def truncate(value, decimal_places):
    """
    Reduce a float to `decimal_places`, rounding half up.

    Kills floating point noise before ratio comparisons.
    """
    shift = 10 ** decimal_places
    return math.floor(value * shift + 0.5) / shift


def same_aspect_ratio(r1, r2, precision=DEFAULT_RATIO_PRECISION, tolerance=RATIO_TOLERANCE):
    """
    Check whether two rects share an aspect ratio.

    Both ratios are truncated to `precision` decimals and accepted when they
    differ by at most `tolerance`, which absorbs the drift left behind by
    successive scale operations.
    """
    ratio1 = truncate(rect_ratio(r1), precision)
    ratio2 = truncate(rect_ratio(r2), precision)
    # Epsilon keeps 1.33 vs 1.32 inside a 0.01 tolerance.
    return abs(ratio1 - ratio2) <= tolerance + 1e-9


def intersect(a, b):
    """Intersection of two rects. Returns an empty Rect() if they don't overlap."""
    left = max(a.left, b.left)
    top = max(a.top, b.top)
    right = min(a.right, b.right)
    bottom = min(a.bottom, b.bottom)
    if right <= left or bottom <= top:
        return Rect()
    return Rect(left, top, right, bottom)


def inside_rect(bounds, aspect):
    """
    Largest rect with aspect ratio `aspect` centred inside `bounds`.

    Example: a 4x3 bounds with a 16:9 aspect gives a 4 x 2.25 rect, centred
    vertically.
    """
    width = bounds.width
    height = width / aspect
    if height > bounds.height:
        height = bounds.height
        width = min(height * aspect, bounds.width)
    cx = bounds.center_x
    cy = bounds.center_y
    return Rect(cx - width / 2.0, cy - height / 2.0, cx + width / 2.0, cy + height / 2.0)


def max_crop(bounds, aspect):
    """Same as inside_rect(), but anchored at the top-left corner of `bounds`."""
    inner = inside_rect(bounds, aspect)
    return Rect(bounds.left, bounds.top,
                bounds.left + inner.width, bounds.top + inner.height)


def require_positive(rect, name="rect"):
    """Raise InvalidGeometryError unless `rect` has positive width and height."""
    if rect is None:
        raise InvalidGeometryError(f"{name} is missing")
    if rect.width <= 0 or rect.height <= 0:
        raise InvalidGeometryError(
            f"{name} must have positive size, got {rect.width}x{rect.height}"
        )
    return rect
