"""
Export — write a Ken Burns clip to video, GIF or still frames.
Wraps the MoviePy write calls with settings from the `video` config section.
"""

import os

from PIL import Image


def _ensure_parent(path):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def export_video(clip, output_path, config=None):
    """
    Render `clip` to `output_path`.

    `.gif` paths go through write_gif, everything else through
    write_videofile with the configured codec.

    Args:
        clip: MoviePy clip (usually from build_ken_burns_clip)
        output_path: Target file
        config: Config dict with a `video` section

    Returns:
        Path to the written file
    """
    video_config = (config or {}).get("video", {})
    fps = video_config.get("fps", 30)

    _ensure_parent(output_path)
    print(f"   [Export] Rendering to {output_path}...")

    if output_path.lower().endswith(".gif"):
        clip.write_gif(output_path, fps=video_config.get("gif_fps", min(fps, 15)), logger=None)
    else:
        clip.write_videofile(
            output_path,
            fps=fps,
            codec=video_config.get("codec", "libx264"),
            bitrate=video_config.get("bitrate", "4M"),
            audio=False,
            preset="medium",
            threads=video_config.get("threads", 4),
            logger="bar",
        )

    print(f"   [Export] Done! Output: {output_path}")
    return output_path


def export_preview_frames(clip, output_dir, times, prefix="frame"):
    """
    Save PNG stills of `clip` at the given times (seconds).

    Returns:
        List of written file paths
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for i, t in enumerate(sorted(times)):
        path = os.path.join(output_dir, f"{prefix}_{i:03d}_{t:.2f}s.png")
        Image.fromarray(clip.get_frame(t)).save(path)
        paths.append(path)
    print(f"   [Export] Saved {len(paths)} preview frame(s) to {output_dir}")
    return paths
