from generators.base import TransitionGenerator
from generators.full_to_random import FullToRandomTransitionGenerator
from generators.random_rect import RandomTransitionGenerator
from transitions.transition import DEFAULT_TRANSITION_DURATION
from utils.geometry import DEFAULT_RATIO_PRECISION

GENERATORS = {
    "random": RandomTransitionGenerator,
    "full_to_random": FullToRandomTransitionGenerator,
}


def create_generator(config=None, rng=None):
    """
    Build a transition generator from the `kenburns` config section.

    Args:
        config: Full config dict (as loaded from config.yaml)
        rng: Optional random source, overrides the configured seed

    Returns:
        TransitionGenerator instance
    """
    kb_config = (config or {}).get("kenburns", {})
    name = kb_config.get("generator", "random")
    try:
        cls = GENERATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown generator '{name}'. Available: {', '.join(sorted(GENERATORS))}"
        ) from None

    return cls(
        duration=kb_config.get("duration_ms", DEFAULT_TRANSITION_DURATION),
        easing=kb_config.get("easing"),
        min_rect_factor=kb_config.get("min_rect_factor"),
        seed=kb_config.get("seed"),
        rng=rng,
        ratio_precision=kb_config.get("ratio_precision", DEFAULT_RATIO_PRECISION),
    )
