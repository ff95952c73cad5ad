"""
Tests for the Ken Burns clip renderer and export helpers.
"""

import argparse
import os

import numpy as np
import pytest
from PIL import Image

from composer.export import export_preview_frames
from composer.timeline import KenBurnsRenderer, build_ken_burns_clip, render_frame
from composer.transform import RenderTransform
from utils.geometry import Rect


def _config(**kenburns):
    kb = {"generator": "full_to_random", "duration_ms": 500, "seed": 42, "easing": "linear"}
    kb.update(kenburns)
    return {"kenburns": kb, "video": {"fps": 10}}


def test_render_frame_identity_on_solid_image():
    img = Image.new("RGB", (32, 24), (200, 10, 50))
    out = render_frame(img, RenderTransform(1.0, 0.0, 0.0), 32, 24)
    assert out.shape == (24, 32, 3)
    assert out.dtype == np.uint8
    # Interior only; the resampling kernel may touch the border.
    assert (out[2:-2, 2:-2] == [200, 10, 50]).all()


def test_render_frame_fills_outside_with_black():
    img = Image.new("RGB", (32, 24), (255, 255, 255))
    out = render_frame(img, RenderTransform(1.0, 100.0, 0.0), 32, 24)
    assert not out.any()


def test_renderer_frame_shape(gradient_image):
    renderer = KenBurnsRenderer([gradient_image], 40, 30, _config())
    frame = renderer.frame_at(0.0)
    assert frame.shape == (30, 40, 3)
    assert frame.dtype == np.uint8


def test_renderer_accepts_arrays(gradient_image):
    renderer = KenBurnsRenderer([np.array(gradient_image)], 40, 30, _config())
    assert renderer.current_image.size == (64, 48)


def test_backward_seek_replays_same_frames(gradient_image):
    renderer = KenBurnsRenderer([gradient_image], 40, 30, _config())
    first = renderer.frame_at(0.2)
    renderer.frame_at(0.7)
    again = renderer.frame_at(0.2)
    assert np.array_equal(first, again)


def test_frame_does_not_depend_on_earlier_requests(gradient_image):
    direct = KenBurnsRenderer([gradient_image], 40, 30, _config())
    stepped = KenBurnsRenderer([gradient_image], 40, 30, _config())

    a = direct.frame_at(0.85)
    stepped.frame_at(0.4)
    b = stepped.frame_at(0.85)

    # Second transition started exactly at 500ms
    assert direct.driver.elapsed == pytest.approx(350.0)
    assert stepped.driver.elapsed == pytest.approx(350.0)
    assert direct.transitions_played == stepped.transitions_played == 1
    assert np.array_equal(a, b)


def test_forward_seek_walks_through_transitions(gradient_image):
    renderer = KenBurnsRenderer([gradient_image], 40, 30, _config())
    renderer.frame_at(1.6)
    assert renderer.transitions_played == 3


def test_slideshow_switches_images(gradient_image):
    second = Image.new("RGB", (30, 60), (0, 255, 0))
    renderer = KenBurnsRenderer([gradient_image, second], 40, 30,
                                _config(duration_ms=100, transitions_per_image=1))
    renderer.frame_at(0.0)
    renderer.frame_at(0.1)
    assert renderer.current_image is renderer.images[1]
    assert renderer.driver.image_bounds == Rect.from_size(30, 60)


def test_slideshow_wraps_around(gradient_image):
    second = Image.new("RGB", (30, 60), (0, 255, 0))
    renderer = KenBurnsRenderer([gradient_image, second], 40, 30,
                                _config(duration_ms=100, transitions_per_image=1))
    renderer.frame_at(0.2)
    assert renderer.current_image is renderer.images[0]


def test_renderer_needs_images():
    with pytest.raises(ValueError):
        KenBurnsRenderer([], 40, 30, _config())


def test_renderer_loads_paths(tmp_path, gradient_image):
    path = tmp_path / "photo.png"
    gradient_image.save(path)
    renderer = KenBurnsRenderer([str(path)], 40, 30, _config())
    assert renderer.current_image.size == (64, 48)


def test_build_clip(gradient_image, capsys):
    clip = build_ken_burns_clip([gradient_image], 1.0, 40, 30, _config(generator="random"))
    out = capsys.readouterr().out
    assert "[KenBurns] First transition: {'source': (" in out
    assert "'duration': 500" in out
    assert clip.duration == 1.0
    assert clip.get_frame(0.5).shape == (30, 40, 3)
    assert clip.renderer.driver.fit_mode.value == "center_crop"


def test_export_preview_frames(tmp_path):
    class FakeClip:
        def get_frame(self, t):
            return np.full((8, 8, 3), int(t * 100), dtype=np.uint8)

    paths = export_preview_frames(FakeClip(), str(tmp_path / "frames"), [0.5, 0.1])
    assert len(paths) == 2
    assert all(os.path.exists(p) for p in paths)
    with Image.open(paths[0]) as img:
        assert img.getpixel((0, 0)) == (10, 10, 10)


def test_cli_overrides_config():
    from generate import apply_overrides, load_config

    config = load_config()
    assert config["kenburns"]["duration_ms"] == 10000
    assert config["kenburns"]["easing"] == "accelerate_decelerate"

    args = argparse.Namespace(
        generator="full_to_random", transition_ms=3000, easing=None, min_factor=None,
        seed=9, fit_mode=None, per_image=None, width=320, height=None, fps=None,
    )
    config = apply_overrides(config, args)
    assert config["kenburns"]["generator"] == "full_to_random"
    assert config["kenburns"]["duration_ms"] == 3000
    assert config["kenburns"]["seed"] == 9
    assert config["kenburns"]["easing"] == "accelerate_decelerate"
    assert config["video"]["width"] == 320
    assert config["video"]["height"] == 1920
