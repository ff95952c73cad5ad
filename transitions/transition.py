"""
Transition — one timed move from a source rect to a destination rect.

Created by a TransitionGenerator, read every frame by the driver,
discarded when the next one takes over.
"""

from utils.animation import get_easing
from utils.errors import InvalidGeometryError
from utils.geometry import Rect, require_positive

# Milliseconds
DEFAULT_TRANSITION_DURATION = 10000


class Transition:
    """
    A Ken Burns move between two rects in image coordinates.

    Source and destination may differ slightly in aspect ratio (a viewport
    resize can cause that); the move smooths it out instead of rejecting it.

    Attributes:
        source_rect: Rect the transition starts from
        destination_rect: Rect the transition ends at
        duration: Length in milliseconds, > 0
        easing: Callable mapping [0, 1] -> [0, 1]
    """

    def __init__(self, source_rect, destination_rect,
                 duration=DEFAULT_TRANSITION_DURATION, easing=None):
        if duration is None or duration <= 0:
            raise InvalidGeometryError(f"Transition duration must be positive, got {duration}")
        require_positive(source_rect, "source rect")
        require_positive(destination_rect, "destination rect")

        self._src = source_rect
        self._dst = destination_rect
        self._duration = duration
        self._easing = get_easing(easing)

        # Reused by interpolated_rect(); callers must copy it to keep a value.
        self._current = Rect()

        self.recompute()

    @property
    def source_rect(self):
        return self._src

    @source_rect.setter
    def source_rect(self, rect):
        self._src = require_positive(rect, "source rect")

    @property
    def destination_rect(self):
        return self._dst

    @destination_rect.setter
    def destination_rect(self, rect):
        self._dst = require_positive(rect, "destination rect")

    @property
    def duration(self):
        """Duration in milliseconds."""
        return self._duration

    @property
    def easing(self):
        return self._easing

    def recompute(self):
        """Re-derive the precomputed deltas after the rects were replaced."""
        self.width_diff = self._dst.width - self._src.width
        self.height_diff = self._dst.height - self._src.height
        self.center_x_diff = self._dst.center_x - self._src.center_x
        self.center_y_diff = self._dst.center_y - self._src.center_y

    def progress(self, elapsed):
        """Fraction of the duration covered by `elapsed` ms, clamped to [0, 1]."""
        return max(0.0, min(1.0, elapsed / float(self._duration)))

    def is_finished(self, elapsed):
        return elapsed >= self._duration

    def interpolated_rect(self, elapsed):
        """
        Rect showing at `elapsed` ms into the transition.

        Width, height and centre move along the precomputed deltas, weighted
        by the eased progress. Same input always gives the same rect.
        """
        p = self._easing(self.progress(elapsed))
        width = self._src.width + p * self.width_diff
        height = self._src.height + p * self.height_diff
        center_x = self._src.center_x + p * self.center_x_diff
        center_y = self._src.center_y + p * self.center_y_diff

        left = center_x - width / 2.0
        top = center_y - height / 2.0
        self._current.set(left, top, left + width, top + height)
        return self._current

    def to_dict(self) -> dict:
        """Serialize for log lines."""
        return {
            "source": self._src.to_tuple(),
            "destination": self._dst.to_tuple(),
            "duration": self._duration,
        }

    def __repr__(self):
        return (f"Transition(src={self._src.to_tuple()}, dst={self._dst.to_tuple()}, "
                f"duration={self._duration})")
