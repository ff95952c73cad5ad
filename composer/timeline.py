"""
Timeline — turns still images into a Ken Burns MoviePy clip.

A KenBurnsDriver is ticked with the clip time (converted to ms) and every
frame is rendered with Pillow's affine transform. With several images the
slideshow moves to the next one after a fixed number of transitions.
"""

import os
import time

import numpy as np
from PIL import Image
from moviepy import VideoClip

from composer.driver import KenBurnsDriver, TRANSITION_END
from generators import create_generator
from utils.errors import NoActiveTransitionError

# Ensure FFmpeg is available
try:
    import imageio_ffmpeg
    import moviepy.config as mpy_config
    mpy_config.FFMPEG_BINARY = imageio_ffmpeg.get_ffmpeg_exe()
except ImportError:
    pass

DEFAULT_TRANSITIONS_PER_IMAGE = 3
BACKGROUND = (0, 0, 0)


def _load_image(image):
    """Accept a path, PIL image or numpy array; return an RGB PIL image."""
    if isinstance(image, (str, os.PathLike)):
        with Image.open(image) as img:
            return img.convert("RGB")
    if isinstance(image, np.ndarray):
        return Image.fromarray(image).convert("RGB")
    return image.convert("RGB")


def render_frame(image, transform, width, height):
    """
    Draw `image` through `transform` onto a width x height canvas.

    Returns:
        numpy uint8 array of shape (height, width, 3)
    """
    out = image.transform(
        (width, height),
        Image.Transform.AFFINE,
        data=transform.inverse_coefficients(),
        resample=Image.Resampling.BICUBIC,
        fillcolor=BACKGROUND,
    )
    return np.array(out)


class KenBurnsRenderer:
    """
    Frame source for a Ken Burns clip.

    Frames must be asked for in increasing time order for the driver to
    advance; a backward seek replays the run from the start with the same
    seed, so any frame can be reproduced.

    Args:
        images: List of image paths / PIL images / arrays
        width, height: Output size in pixels
        config: Full config dict (reads the `kenburns` section)
    """

    def __init__(self, images, width, height, config=None):
        if not images:
            raise ValueError("KenBurnsRenderer needs at least one image")
        self.width = width
        self.height = height
        self.config = config or {}
        kb_config = self.config.get("kenburns", {})

        self.images = [_load_image(img) for img in images]
        self.transitions_per_image = kb_config.get("transitions_per_image", DEFAULT_TRANSITIONS_PER_IMAGE)
        self.fit_mode = kb_config.get("fit_mode")

        # A fixed seed per renderer keeps replays identical.
        seed = kb_config.get("seed")
        self.seed = seed if seed is not None else time.time_ns()

        self._reset()

    def _reset(self):
        config = dict(self.config)
        config["kenburns"] = dict(self.config.get("kenburns", {}), seed=self.seed)
        generator = create_generator(config)

        self.driver = KenBurnsDriver(generator, fit_mode=self.fit_mode)
        self.driver.add_listener(self._on_transition_event)
        self._image_index = 0
        self._transitions_on_image = 0
        self.transitions_played = 0

        self.driver.set_viewport(self.width, self.height)
        self._show_image(0)
        self.driver.tick(0.0)
        self._last_ms = 0.0

    @property
    def current_image(self):
        return self.images[self._image_index]

    def _show_image(self, index):
        self._image_index = index % len(self.images)
        self._transitions_on_image = 0
        img = self.current_image
        self.driver.set_image_size(img.width, img.height)

    def _on_transition_event(self, event, transition):
        if event != TRANSITION_END:
            return
        self.transitions_played += 1
        self._transitions_on_image += 1

    def _advance(self, now_ms):
        frame = self.driver.tick(now_ms)
        image = self.current_image
        if (frame.finished and len(self.images) > 1
                and self._transitions_on_image >= self.transitions_per_image):
            self._show_image(self._image_index + 1)
            self.driver.tick(now_ms)
        self._last_ms = now_ms
        return frame, image

    def _remaining(self):
        """Milliseconds left until the current transition ends."""
        transition = self.driver.current_transition
        if transition is None:
            raise NoActiveTransitionError("No active transition")
        return transition.duration - self.driver.elapsed

    def frame_at(self, t):
        """RGB frame (numpy array) at clip time `t` seconds."""
        now_ms = t * 1000.0
        if now_ms < self._last_ms:
            self._reset()

        try:
            # Stop on every transition boundary on the way, so a frame never
            # depends on which frames were requested before it.
            while now_ms - self._last_ms > self._remaining():
                self._advance(self._last_ms + self._remaining())
            frame, image = self._advance(now_ms)
        except NoActiveTransitionError as e:
            print(f"   [KenBurns] Skipping frame at {t:.2f}s: {e}")
            return np.zeros((self.height, self.width, 3), dtype=np.uint8)

        # Drawn with the image that produced the frame, even if the slideshow just moved on.
        return render_frame(image, frame.transform, self.width, self.height)


def build_ken_burns_clip(images, duration, W, H, config=None):
    """
    Build a Ken Burns VideoClip from one or more still images.

    Args:
        images: Image paths / PIL images / arrays
        duration: Clip duration in seconds
        W, H: Output size
        config: Full config dict (`kenburns` and `video` sections)

    Returns:
        MoviePy VideoClip
    """
    config = config or {}
    fps = config.get("video", {}).get("fps", 30)

    renderer = KenBurnsRenderer(images, W, H, config)
    print(f"   [KenBurns] {len(renderer.images)} image(s), {duration:.1f}s at {W}x{H}, "
          f"{type(renderer.driver.generator).__name__}, {renderer.driver.fit_mode.value}, "
          f"seed={renderer.seed}")
    print(f"   [KenBurns] First transition: {renderer.driver.current_transition.to_dict()}")

    clip = VideoClip(renderer.frame_at, duration=duration).with_fps(fps)
    clip.renderer = renderer
    return clip
