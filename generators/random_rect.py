"""
Random generator — every rect sampled independently, wider zoom range.

Rects are meant to be shown with center-crop rendering.
"""

from generators.base import TransitionGenerator
from utils.geometry import Rect, intersect, max_crop, rect_ratio


class RandomTransitionGenerator(TransitionGenerator):
    """
    Samples rects scaled by a factor in [0.5, 1] of the largest
    viewport-ratio rect that fits the sampling region. The region is the
    intersection of the image with the viewport centred on it at 1:1, so
    large images are zoomed into around their centre and small ones are
    used whole.

    Chains transitions: the previous destination is the next source.
    The very first source is a fresh sample.
    """

    MIN_RECT_FACTOR = 0.5

    def is_cropping_image(self):
        return True

    def generate_next(self, viewport, image_bounds):
        self._check_bounds(viewport, image_bounds)

        region = self._sampling_region(viewport, image_bounds)
        crop = max_crop(region, rect_ratio(viewport))

        src = self._chained_source(viewport, image_bounds)
        if src is None:
            src = self._random_rect(region, crop)
        dst = self._random_rect(region, crop)

        return self._new_transition(src, dst, viewport, image_bounds)

    def _sampling_region(self, viewport, image_bounds):
        # Viewport laid over the image centre at 1:1, clipped to the image.
        half_w = viewport.width / 2.0
        half_h = viewport.height / 2.0
        centred = Rect(image_bounds.center_x - half_w, image_bounds.center_y - half_h,
                       image_bounds.center_x + half_w, image_bounds.center_y + half_h)
        return intersect(image_bounds, centred)
