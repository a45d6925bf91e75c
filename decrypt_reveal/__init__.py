"""Decryption-reveal text animations rendered to GIF or video."""
from __future__ import annotations

from .sequence import Frame, SequenceBuilder, generate_frames

__version__ = "0.1.0"

__all__ = ["Frame", "SequenceBuilder", "generate_frames", "__version__"]
