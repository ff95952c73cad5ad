"""
TransitionGenerator — strategy that picks the next Ken Burns move.

Two operations only: generate_next() and is_cropping_image(). Subclasses
choose how rects are sampled; the base class owns the random source, the
chain memo (last destination) and the shared sampling helpers.
"""

import random
import time
from abc import ABC, abstractmethod

from transitions.transition import Transition, DEFAULT_TRANSITION_DURATION
from utils.animation import get_easing
from utils.errors import InvalidGeometryError
from utils.geometry import (
    DEFAULT_RATIO_PRECISION, Rect, intersect, max_crop, rect_ratio,
    require_positive, same_aspect_ratio, truncate,
)


class TransitionGenerator(ABC):
    """
    Base class for transition generators.

    Args:
        duration: Transition duration in milliseconds
        easing: Easing callable or name (see utils.animation.EASINGS)
        min_rect_factor: Lower bound of the random scale factor
        seed: Seed for the private random source. None = time based.
        rng: Pre-built random source with random() and randrange(n).
             Overrides `seed`.
        ratio_precision: Decimals kept when comparing aspect ratios
    """

    MIN_RECT_FACTOR = 0.5

    def __init__(self, duration=DEFAULT_TRANSITION_DURATION, easing=None,
                 min_rect_factor=None, seed=None, rng=None,
                 ratio_precision=DEFAULT_RATIO_PRECISION):
        self.transition_duration = duration
        self.easing = easing
        self.min_rect_factor = self.MIN_RECT_FACTOR if min_rect_factor is None else min_rect_factor
        self.ratio_precision = ratio_precision

        if rng is None:
            rng = random.Random(time.time_ns() if seed is None else seed)
        self._random = rng

        self._last_transition = None
        self._last_image_bounds = None
        self._last_viewport = None

    # ─── CONFIG ───────────────────────────────────────────────────

    @property
    def transition_duration(self):
        return self._duration

    @transition_duration.setter
    def transition_duration(self, duration):
        if duration is None or duration <= 0:
            raise InvalidGeometryError(f"Transition duration must be positive, got {duration}")
        self._duration = duration

    @property
    def easing(self):
        return self._easing

    @easing.setter
    def easing(self, easing):
        self._easing = get_easing(easing)

    @property
    def min_rect_factor(self):
        return self._min_rect_factor

    @min_rect_factor.setter
    def min_rect_factor(self, factor):
        if not 0.0 < factor <= 1.0:
            raise ValueError(f"min_rect_factor must be in (0, 1], got {factor}")
        self._min_rect_factor = factor

    @property
    def last_transition(self):
        return self._last_transition

    # ─── CAPABILITY ───────────────────────────────────────────────

    @abstractmethod
    def generate_next(self, viewport, image_bounds):
        """
        Build the next Transition for the given viewport and image bounds.

        The previous destination becomes the new source whenever it is
        still valid, so consecutive transitions never jump.
        """

    @abstractmethod
    def is_cropping_image(self):
        """True if rendering must use center-crop, False for fit-center."""

    def reset(self):
        """Forget the chain. The next transition starts a fresh run."""
        self._last_transition = None
        self._last_image_bounds = None
        self._last_viewport = None

    # ─── HELPERS ──────────────────────────────────────────────────

    def _check_bounds(self, viewport, image_bounds):
        require_positive(viewport, "viewport")
        require_positive(image_bounds, "image bounds")

    def _chained_source(self, viewport, image_bounds):
        """
        Previous destination, if it can continue the chain.

        Returns None when there is no previous transition, when either bounds
        changed, or when the old rect no longer fits the image or viewport.
        """
        if self._last_transition is None:
            return None
        if self._last_image_bounds != image_bounds or self._last_viewport != viewport:
            return None
        dst = self._last_transition.destination_rect
        if intersect(dst, image_bounds) != dst:
            return None
        if not same_aspect_ratio(dst, viewport, precision=self.ratio_precision):
            return None
        return dst

    def _remember(self, transition, viewport, image_bounds):
        self._last_transition = transition
        self._last_image_bounds = image_bounds.copy()
        self._last_viewport = viewport.copy()
        return transition

    def _new_transition(self, src, dst, viewport, image_bounds):
        transition = Transition(src, dst, self._duration, self._easing)
        return self._remember(transition, viewport, image_bounds)

    def _full_balanced_rect(self, viewport, image_bounds):
        """Largest rect with the viewport's aspect ratio that fits in the image."""
        return max_crop(image_bounds, rect_ratio(viewport))

    def _sample_factor(self):
        """Scale factor drawn uniformly from [min_rect_factor, 1]."""
        random_float = truncate(self._random.random(), 2)
        return self.min_rect_factor + (1.0 - self.min_rect_factor) * random_float

    def _sample_offset(self, span):
        """Random integer offset in [0, span); 0 when there is no room."""
        span = int(span)
        return self._random.randrange(span) if span > 0 else 0

    def _random_rect(self, region, max_rect):
        """
        Random rect scaled down from `max_rect` that stays inside `region`.

        The top-left offset is drawn over the room left between the region and
        the scaled rect.
        """
        factor = self._sample_factor()
        width = max_rect.width * factor
        height = max_rect.height * factor
        left = region.left + self._sample_offset(region.width - width)
        top = region.top + self._sample_offset(region.height - height)
        return Rect(left, top, left + width, top + height)
