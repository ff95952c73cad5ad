"""
Error taxonomy for the Ken Burns engine.

Geometry problems fail fast; a missing transition is a separate condition
the frame loop can recover from by skipping the frame.
"""


class KenBurnsError(Exception):
    """Base class for all Ken Burns errors."""


class InvalidGeometryError(KenBurnsError, ValueError):
    """Zero/negative viewport or image dimension, or non-positive duration."""


class NoActiveTransitionError(KenBurnsError, RuntimeError):
    """Interpolation was requested before any transition exists."""


class FitModeMismatchError(KenBurnsError, ValueError):
    """The fit mode does not match the generator's cropping behaviour."""
