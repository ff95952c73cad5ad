"""
Tests for the render transform and fit mode pairing.
"""

import numpy as np
import pytest

from composer.transform import (
    FitMode, RenderTransform, compute_render_transform, resolve_fit_mode,
)
from generators import FullToRandomTransitionGenerator, RandomTransitionGenerator
from utils.errors import FitModeMismatchError, InvalidGeometryError
from utils.geometry import Rect


@pytest.mark.parametrize("mode", list(FitMode))
def test_matching_rect_fills_viewport(mode, viewport, image_bounds):
    rect = Rect(100, 50, 500, 350)  # 4:3, same as the viewport
    transform = compute_render_transform(rect, image_bounds, viewport, mode)
    assert transform.map_rect(rect).to_tuple() == pytest.approx((0, 0, 800, 600))
    assert transform.scale == pytest.approx(2.0)


def test_fit_center_letterboxes(viewport, image_bounds):
    transform = compute_render_transform(image_bounds, image_bounds, viewport, FitMode.FIT_CENTER)
    assert transform.scale == pytest.approx(0.5)
    assert transform.map_rect(image_bounds).to_tuple() == pytest.approx((0, 75, 800, 525))


def test_center_crop_covers_viewport(viewport, image_bounds):
    transform = compute_render_transform(image_bounds, image_bounds, viewport, FitMode.CENTER_CROP)
    mapped = transform.map_rect(image_bounds)
    assert transform.scale == pytest.approx(600 / 900)
    assert mapped.top == pytest.approx(0)
    assert mapped.bottom == pytest.approx(600)
    assert mapped.center_x == pytest.approx(400)
    assert mapped.left < 0 and mapped.right > 800


def test_rect_centre_lands_on_viewport_centre(viewport, image_bounds):
    rect = Rect(1000, 600, 1400, 900)
    for mode in FitMode:
        t = compute_render_transform(rect, image_bounds, viewport, mode)
        assert t.map_point(rect.center_x, rect.center_y) == pytest.approx((400, 300))


def test_accepts_mode_names(viewport, image_bounds):
    a = compute_render_transform(image_bounds, image_bounds, viewport, "center_crop")
    b = compute_render_transform(image_bounds, image_bounds, viewport, FitMode.CENTER_CROP)
    assert a == b


def test_matrix_and_inverse():
    t = RenderTransform(2.0, 10.0, -4.0)
    assert np.allclose(t.matrix, [[2, 0, 10], [0, 2, -4], [0, 0, 1]])
    a, b, c, d, e, f = t.inverse_coefficients()
    assert (a, b, c) == pytest.approx((0.5, 0.0, -5.0))
    assert (d, e, f) == pytest.approx((0.0, 0.5, 2.0))


def test_degenerate_input_rejected(viewport, image_bounds):
    with pytest.raises(InvalidGeometryError):
        compute_render_transform(Rect(), image_bounds, viewport)
    with pytest.raises(InvalidGeometryError):
        compute_render_transform(image_bounds, image_bounds, Rect.from_size(0, 1))


def test_resolve_fit_mode():
    assert resolve_fit_mode(RandomTransitionGenerator()) is FitMode.CENTER_CROP
    assert resolve_fit_mode(FullToRandomTransitionGenerator()) is FitMode.FIT_CENTER
    assert resolve_fit_mode(RandomTransitionGenerator(), "center_crop") is FitMode.CENTER_CROP


def test_mismatched_fit_mode_rejected():
    with pytest.raises(FitModeMismatchError):
        resolve_fit_mode(RandomTransitionGenerator(), FitMode.FIT_CENTER)
    with pytest.raises(FitModeMismatchError):
        resolve_fit_mode(FullToRandomTransitionGenerator(), "center_crop")
