"""
FullToRandom generator — opens on the whole image, then drifts randomly.

Never crops: every rect is fully inside the image, so pair it with
fit-center rendering.
"""

from generators.base import TransitionGenerator


class FullToRandomTransitionGenerator(TransitionGenerator):
    """
    First transition of a run starts from the "full balanced" rect: the
    largest rect with the viewport's aspect ratio that fits in the image,
    anchored at the image origin. Every destination is a random sub-rect
    scaled by a factor in [0.85, 1] of that full rect.
    """

    MIN_RECT_FACTOR = 0.85

    def is_cropping_image(self):
        return False

    def generate_next(self, viewport, image_bounds):
        self._check_bounds(viewport, image_bounds)

        full = self._full_balanced_rect(viewport, image_bounds)
        src = self._chained_source(viewport, image_bounds)
        if src is None:
            src = full
        dst = self._random_rect(image_bounds, full)

        return self._new_transition(src, dst, viewport, image_bounds)
