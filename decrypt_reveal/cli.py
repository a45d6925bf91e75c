#!/usr/bin/env python3
"""Command-line entry point: render a decryption reveal of TEXT."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .charsource import normalize_text
from .export import export_frames, save_frame_images
from .sequence import generate_frames
from .settings import load_config


LOG = logging.getLogger("decrypt_reveal")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="decrypt-reveal",
        description="Render a decryption-reveal animation of TEXT",
    )
    parser.add_argument("text", help="Text to reveal; spaces start a new row")
    parser.add_argument("--color", action="store_true", help="Use the pastel colored renderer")
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Output file (.gif or a video suffix such as .mp4); stdout GIF when omitted",
    )
    parser.add_argument("--frames-dir", help="Also save every frame as a PNG in this directory")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    parser.add_argument("--max-ticks", type=int, default=None, help="Stop after this many ticks")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging verbosity (e.g. DEBUG, INFO, WARNING)",
    )
    args = parser.parse_args(argv)
    if not args.text or not args.text.strip(" "):
        parser.error("text must contain at least one non-space character")
    if args.max_ticks is not None and args.max_ticks <= 0:
        parser.error("--max-ticks must be positive")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    log_level_name = str(args.log_level).upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(Path(args.config).expanduser() if args.config else None)
        if args.seed is not None:
            config["seed"] = args.seed
        if args.max_ticks is not None:
            config["max_ticks"] = args.max_ticks
        LOG.info("Normalized text: %r", normalize_text(args.text, config["codec"]))
        frames = generate_frames(args.text, colored=args.color, config=config)
    except (RuntimeError, ValueError) as exc:
        LOG.error("%s", exc)
        return 1

    if args.frames_dir:
        paths = save_frame_images(frames, Path(args.frames_dir).expanduser())
        LOG.info("Wrote %d PNG frame(s) to %s", len(paths), args.frames_dir)
    export_frames(frames, args.output, video_codec=config["video_codec"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
