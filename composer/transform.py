"""
Render transform — maps image space onto the viewport.

Given the interpolated rect (image coordinates), the image bounds and the
viewport, builds the affine transform
    translate(-image centre) -> scale -> translate(...)
that puts the interpolated rect's centre on the viewport centre and scales
it to fill the viewport.

Two fit modes:
  - FIT_CENTER: whole rect visible, letterboxed if aspect ratios differ
  - CENTER_CROP: viewport fully covered, the rect's excess is clipped

Both modes centre on the interpolated rect (never on the image centre), so
when the rect and viewport share an aspect ratio the rect maps exactly
onto the viewport in either mode.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from utils.errors import FitModeMismatchError
from utils.geometry import Rect, require_positive


class FitMode(Enum):
    """How the interpolated rect is fitted to the viewport."""
    FIT_CENTER = "fit_center"
    CENTER_CROP = "center_crop"


@dataclass(frozen=True)
class RenderTransform:
    """
    Uniform scale + translation: x' = scale * x + translate_x.

    Attributes:
        scale: Combined scale factor
        translate_x: Horizontal offset after scaling
        translate_y: Vertical offset after scaling
    """
    scale: float
    translate_x: float
    translate_y: float

    @property
    def matrix(self):
        """3x3 homogeneous matrix (image -> viewport)."""
        return np.array([
            [self.scale, 0.0, self.translate_x],
            [0.0, self.scale, self.translate_y],
            [0.0, 0.0, 1.0],
        ])

    def map_point(self, x, y):
        return (self.scale * x + self.translate_x, self.scale * y + self.translate_y)

    def map_rect(self, rect):
        left, top = self.map_point(rect.left, rect.top)
        right, bottom = self.map_point(rect.right, rect.bottom)
        return Rect(left, top, right, bottom)

    def inverse_coefficients(self):
        """
        Affine data for PIL's Image.transform (viewport -> image).

        PIL samples the source at (a*x + b*y + c, d*x + e*y + f) for every
        output pixel, so it needs the inverse mapping.
        """
        inv = np.linalg.inv(self.matrix)
        return tuple(float(v) for v in inv[:2].ravel())


def _translation(dx, dy):
    return np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])


def _scaling(s):
    return np.array([[s, 0.0, 0.0], [0.0, s, 0.0], [0.0, 0.0, 1.0]])


def compute_render_transform(current_rect, image_bounds, viewport, fit_mode=FitMode.FIT_CENTER):
    """
    Build the transform that makes `current_rect` fill `viewport`.

    Args:
        current_rect: Interpolated rect in image coordinates
        image_bounds: Intrinsic image bounds (0, 0, w, h)
        viewport: Viewport bounds
        fit_mode: FitMode.FIT_CENTER or FitMode.CENTER_CROP

    Returns:
        RenderTransform
    """
    require_positive(current_rect, "interpolated rect")
    require_positive(image_bounds, "image bounds")
    require_positive(viewport, "viewport")
    fit_mode = FitMode(fit_mode)

    width_scale = viewport.width / current_rect.width
    height_scale = viewport.height / current_rect.height

    # Scale that shows the whole rect inside the viewport.
    scale = min(width_scale, height_scale)
    if fit_mode is FitMode.CENTER_CROP:
        # Enlarge just enough to close the gap on the smaller dimension.
        scale *= max(width_scale, height_scale) / scale

    # 1. image centre to origin
    m = _translation(-image_bounds.center_x, -image_bounds.center_y)
    # 2. combined scale
    m = _scaling(scale) @ m
    # 3. rect centre (now at scale * (rect centre - image centre)) onto viewport centre
    m = _translation(
        viewport.center_x - scale * (current_rect.center_x - image_bounds.center_x),
        viewport.center_y - scale * (current_rect.center_y - image_bounds.center_y),
    ) @ m

    return RenderTransform(float(m[0, 0]), float(m[0, 2]), float(m[1, 2]))


def resolve_fit_mode(generator, fit_mode=None):
    """
    Fit mode to use with `generator`.

    None picks the mode implied by generator.is_cropping_image(). An explicit
    mode that disagrees with the generator raises FitModeMismatchError, since
    that pairing distorts the output.
    """
    expected = FitMode.CENTER_CROP if generator.is_cropping_image() else FitMode.FIT_CENTER
    if fit_mode is None:
        return expected
    fit_mode = FitMode(fit_mode)
    if fit_mode is not expected:
        raise FitModeMismatchError(
            f"{type(generator).__name__} needs {expected.value}, got {fit_mode.value}"
        )
    return fit_mode
