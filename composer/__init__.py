from composer.transform import FitMode, RenderTransform, compute_render_transform, resolve_fit_mode
from composer.driver import KenBurnsDriver, Frame, TRANSITION_START, TRANSITION_END
