# Shared utilities for the Ken Burns engine
from utils.errors import (
    KenBurnsError, InvalidGeometryError, NoActiveTransitionError, FitModeMismatchError,
)
from utils.geometry import (
    Rect, rect_ratio, truncate, same_aspect_ratio, intersect,
    inside_rect, max_crop, require_positive,
)
from utils.animation import (
    linear, accelerate_decelerate, ease_out_cubic, ease_in_out_cubic,
    ease_out_quad, smooth_step, get_easing,
)
