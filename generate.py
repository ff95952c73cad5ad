#!/usr/bin/env python3
"""
KEN BURNS VIDEO — Pan/zoom one or more still images into a video.

  python generate.py --image photo.jpg
  python generate.py --image a.jpg b.jpg c.jpg --duration 45 --generator full_to_random
  python generate.py --image photo.jpg --seed 42 --output out/photo.gif
  python generate.py --image photo.jpg --preview 0 2.5 5 --output out/preview
"""

import argparse
import os
import sys
import time

import yaml

# Ensure project root is in path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from composer.export import export_preview_frames, export_video
from composer.timeline import build_ken_burns_clip
from generators import GENERATORS
from utils.animation import EASINGS
from utils.errors import KenBurnsError


def load_config(path=None):
    """Load configuration from config.yaml."""
    config_path = path or os.path.join(PROJECT_ROOT, "config.yaml")
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def apply_overrides(config, args):
    """Fold CLI flags into the config dict (CLI wins)."""
    kb = config.setdefault("kenburns", {})
    video = config.setdefault("video", {})

    overrides = {
        "generator": args.generator,
        "duration_ms": args.transition_ms,
        "easing": args.easing,
        "min_rect_factor": args.min_factor,
        "seed": args.seed,
        "fit_mode": args.fit_mode,
        "transitions_per_image": args.per_image,
    }
    for key, value in overrides.items():
        if value is not None:
            kb[key] = value

    for key in ("width", "height", "fps"):
        value = getattr(args, key)
        if value is not None:
            video[key] = value
    return config


def _get_output_path(args):
    """Generate output path from args."""
    if args.output:
        return args.output
    first = os.path.splitext(os.path.basename(args.image[0]))[0]
    suffix = "_frames" if args.preview else ".mp4"
    return os.path.join(PROJECT_ROOT, "output", f"{first}_kenburns{suffix}")


def main():
    parser = argparse.ArgumentParser(
        description="KEN BURNS VIDEO — pan/zoom still images into a video"
    )
    parser.add_argument("--image", nargs="+", required=True,
                        help="Image file(s); several images play as a slideshow")
    parser.add_argument("--duration", type=float, default=30.0,
                        help="Clip duration in seconds (default: 30)")
    parser.add_argument("--config", default=None,
                        help="Path to config.yaml (default: project config)")
    parser.add_argument("--generator", default=None, choices=sorted(GENERATORS),
                        help="Transition generator")
    parser.add_argument("--transition-ms", type=int, default=None,
                        help="Duration of one transition in milliseconds")
    parser.add_argument("--easing", default=None, choices=sorted(EASINGS),
                        help="Easing curve")
    parser.add_argument("--min-factor", type=float, default=None,
                        help="Minimum rect factor (0-1]")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible output")
    parser.add_argument("--fit-mode", default=None, choices=["fit_center", "center_crop"],
                        help="Must match the generator (default: follow it)")
    parser.add_argument("--per-image", type=int, default=None,
                        help="Transitions before switching to the next image")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--preview", type=float, nargs="+", metavar="SECONDS",
                        help="Write PNG stills at these times instead of a video")
    parser.add_argument("--output", default=None,
                        help="Output file (.mp4/.gif) or directory for --preview")

    args = parser.parse_args()

    config = apply_overrides(load_config(args.config), args)
    video = config.get("video", {})
    W = video.get("width", 1080)
    H = video.get("height", 1920)

    start_time = time.time()

    print("=" * 55)
    print("  KEN BURNS VIDEO")
    print("=" * 55)
    print(f"  Images:    {len(args.image)}")
    print(f"  Duration:  {args.duration:.1f}s")
    print(f"  Generator: {config['kenburns'].get('generator', 'random')}")
    print(f"  Size:      {W}x{H}")
    print("=" * 55)

    output_path = _get_output_path(args)
    try:
        clip = build_ken_burns_clip(args.image, args.duration, W, H, config)
        if args.preview:
            export_preview_frames(clip, output_path, args.preview)
        else:
            export_video(clip, output_path, config)
    except KenBurnsError as e:
        print(f"\n   [Error] {e}")
        sys.exit(1)

    elapsed = time.time() - start_time
    print(f"\n{'=' * 55}")
    print(f"  DONE in {elapsed:.1f}s -> {output_path}")
    print(f"{'=' * 55}")

    return output_path


if __name__ == "__main__":
    main()
