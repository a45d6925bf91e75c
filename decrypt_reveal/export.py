"""Write a frame sequence out as a GIF, a video file or a PNG sequence."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence

import imageio.v2 as imageio
import numpy as np

from .sequence import Frame


LOG = logging.getLogger("decrypt_reveal")

GIF_SUFFIXES = {".gif"}


def write_gif(frames: Sequence[Frame], stream: BinaryIO) -> None:
    """Encode ``frames`` as an animated GIF that plays once.

    Pillow folds a frame identical to the one before it into that frame and
    adds up their durations, so the GIF can hold fewer frames than ticks.
    The total play time always equals the sum of the frame durations.
    """
    if not frames:
        raise ValueError("No frames to encode")
    images = [frame.image for frame in frames]
    durations: List[int] = [frame.duration_ms for frame in frames]
    images[0].save(
        stream,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=durations,
        disposal=1,
    )


def write_video(frames: Sequence[Frame], output_path: Path, codec: str = "libx264") -> None:
    if not frames:
        raise ValueError("No frames to encode")
    fps = 1000.0 / frames[0].duration_ms
    writer = imageio.get_writer(str(output_path), fps=fps, codec=codec, quality=8)
    try:
        for index, frame in enumerate(frames):
            writer.append_data(np.array(frame.image.convert("RGB")))
            if index % 100 == 0:
                LOG.debug("Encoded frame %d/%d", index + 1, len(frames))
    finally:
        writer.close()


def save_frame_images(frames: Sequence[Frame], directory: Path) -> List[Path]:
    """Dump every frame as a numbered PNG inside ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for index, frame in enumerate(frames, start=1):
        path = directory / f"frame_{index:05d}.png"
        frame.image.save(path)
        paths.append(path)
    return paths


def export_frames(
    frames: Sequence[Frame],
    output: Optional[str] = None,
    video_codec: str = "libx264",
) -> None:
    """Send ``frames`` to stdout (``None`` or ``-``) or to a file by suffix."""
    if output in (None, "-"):
        write_gif(frames, sys.stdout.buffer)
        sys.stdout.buffer.flush()
        return
    output_path = Path(output).expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() in GIF_SUFFIXES:
        with output_path.open("wb") as fh:
            write_gif(frames, fh)
    else:
        write_video(frames, output_path, codec=video_codec)
    LOG.info("Saved %d frame(s) to %s", len(frames), output_path)


__all__ = ["export_frames", "save_frame_images", "write_gif", "write_video"]
