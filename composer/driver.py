"""
Ken Burns driver — the frame loop around a TransitionGenerator.

Feed it the viewport size, the image size and a millisecond clock once per
frame; it hands back the interpolated rect plus the render transform, and
swaps in a new Transition whenever the current one completes.

Pause accounting is explicit: elapsed time only grows between two ticks
that both happen while running. After resume() the next tick becomes the
new baseline, so the paused interval never counts.
"""

from dataclasses import dataclass
from typing import Any, Optional

from composer.transform import compute_render_transform, resolve_fit_mode
from generators.random_rect import RandomTransitionGenerator
from utils.errors import NoActiveTransitionError
from utils.geometry import Rect, intersect, require_positive

TRANSITION_START = "transition_start"
TRANSITION_END = "transition_end"


@dataclass
class Frame:
    """
    One tick of output.

    Attributes:
        rect: Interpolated rect (a copy, safe to keep)
        transform: RenderTransform mapping image space to the viewport
        visible_rect: Part of the viewport covered by the image
        elapsed: Milliseconds into the transition that produced this frame
        finished: True if that transition reached its duration on this tick
        transition: The transition that produced this frame
    """
    rect: Rect
    transform: Any
    visible_rect: Rect
    elapsed: float
    finished: bool
    transition: Any


class KenBurnsDriver:
    """
    Owns the current Transition and advances it frame by frame.

    Calls must come from a single frame loop; nothing here is reentrant.
    """

    def __init__(self, generator=None, fit_mode=None):
        self._generator = generator or RandomTransitionGenerator()
        self._requested_fit_mode = fit_mode
        self.fit_mode = resolve_fit_mode(self._generator, fit_mode)

        self._viewport: Optional[Rect] = None
        self._image_bounds: Optional[Rect] = None
        self._current = None
        self._elapsed = 0.0
        self._last_frame_time = None
        self._paused = False

        self._listener = None
        self._callbacks = []

    # ─── STATE ────────────────────────────────────────────────────

    @property
    def generator(self):
        return self._generator

    @property
    def current_transition(self):
        return self._current

    @property
    def elapsed(self):
        return self._elapsed

    @property
    def paused(self):
        return self._paused

    @property
    def viewport(self):
        return self._viewport

    @property
    def image_bounds(self):
        return self._image_bounds

    def has_bounds(self):
        return self._viewport is not None and self._image_bounds is not None

    # ─── INPUTS ───────────────────────────────────────────────────

    def set_viewport(self, width, height):
        """New viewport size. Cancels the current transition."""
        self._current = None
        self._viewport = require_positive(Rect.from_size(width, height), "viewport")
        self.restart()

    def set_image_size(self, width, height):
        """New image (or a resized one). Cancels the current transition."""
        self._current = None
        self._image_bounds = require_positive(Rect.from_size(width, height), "image bounds")
        self.restart()

    def set_transition_generator(self, generator):
        """Swap the generation strategy and restart if bounds are known."""
        self.fit_mode = resolve_fit_mode(generator, self._requested_fit_mode)
        self._generator = generator
        self.restart()

    def set_transition_listener(self, listener):
        """Object with on_transition_start(transition) / on_transition_end(transition)."""
        self._listener = listener

    def add_listener(self, callback):
        """Plain callable receiving (event, transition)."""
        self._callbacks.append(callback)

    # ─── LIFECYCLE ────────────────────────────────────────────────

    def restart(self, now=None):
        """Start a new transition from the current bounds, if both are known."""
        if self.has_bounds():
            self.start_new_transition(now)

    def start_new_transition(self, now=None):
        if not self.has_bounds():
            raise NoActiveTransitionError("Can't start a transition before viewport and image bounds are set")
        self._current = self._generator.generate_next(self._viewport, self._image_bounds)
        self._elapsed = 0.0
        self._last_frame_time = now
        self._fire(TRANSITION_START, self._current)
        return self._current

    def pause(self):
        self._paused = True

    def resume(self):
        """Continue from where the animation stopped; the next tick is the new baseline."""
        self._paused = False
        self._last_frame_time = None

    def tick(self, now):
        """
        Advance to clock time `now` (ms) and return the Frame to draw.

        While paused the elapsed time stays put and the same frame is
        returned. When the transition completes on this tick, the returned
        Frame has finished=True and a new transition is already in place.

        Raises:
            NoActiveTransitionError: no transition exists yet (missing bounds)
        """
        if self._current is None:
            raise NoActiveTransitionError("No active transition; set viewport and image size first")

        if not self._paused:
            if self._last_frame_time is not None:
                self._elapsed += max(0.0, now - self._last_frame_time)
            self._last_frame_time = now

        frame = self.current_frame()

        if frame.finished and not self._paused:
            self._fire(TRANSITION_END, self._current)
            self.start_new_transition(now)

        return frame

    def current_frame(self):
        """Frame for the current elapsed time, without advancing the clock."""
        if self._current is None:
            raise NoActiveTransitionError("No active transition")

        rect = self._current.interpolated_rect(self._elapsed).copy()
        transform = compute_render_transform(rect, self._image_bounds, self._viewport, self.fit_mode)
        visible = intersect(transform.map_rect(self._image_bounds), self._viewport)
        return Frame(
            rect=rect,
            transform=transform,
            visible_rect=visible,
            elapsed=self._elapsed,
            finished=self._current.is_finished(self._elapsed),
            transition=self._current,
        )

    def _fire(self, event, transition):
        if transition is None:
            return
        if self._listener is not None:
            if event == TRANSITION_START:
                self._listener.on_transition_start(transition)
            else:
                self._listener.on_transition_end(transition)
        for callback in list(self._callbacks):
            callback(event, transition)
