"""Random glyph stream drawn from a legacy single-byte code page."""
from __future__ import annotations

import codecs
import random
from typing import Optional

EMPTY = "\0"
DEFAULT_CODEC = "mac_cyrillic"

# non-ASCII characters from several scripts; a single-byte code page encodes
# each one it supports as exactly one byte
_WIDTH_SAMPLES = "\u00e9\u00df\u0416\u03a9\u05d0\u20ac\u2713\u3042"


def normalize_text(text: str, codec: str = DEFAULT_CODEC) -> str:
    """Round-trip ``text`` through ``codec`` so every character has a glyph."""
    encoded = text.encode(codec, errors="replace")
    return encoded.decode(codec, errors="replace")


def check_codec(codec: str) -> None:
    """Raise ``ValueError`` unless ``codec`` is a known single-byte code page."""
    try:
        codecs.lookup(codec)
        decoded = [bytes([b]).decode(codec, errors="replace") for b in range(256)]
    except (LookupError, UnicodeError) as exc:
        raise ValueError(f"Unusable codec {codec!r}") from exc
    for b, glyph in enumerate(decoded):
        if len(glyph) != 1:
            raise ValueError(f"Codec {codec!r} does not decode byte {b:#04x} to one character")
    for char in _WIDTH_SAMPLES:
        try:
            encoded = char.encode(codec)
        except UnicodeError:
            continue
        if len(encoded) != 1:
            raise ValueError(f"Codec {codec!r} is not a single-byte encoding")


class CharacterSource:
    """Produces one garbled glyph per call from a uniformly random byte."""

    def __init__(self, codec: str = DEFAULT_CODEC, rng: Optional[random.Random] = None) -> None:
        self.codec = codec
        self.rng = rng or random.Random()

    def next_glyph(self) -> str:
        decoded = bytes([self.rng.randrange(256)]).decode(self.codec, errors="replace")
        return decoded[0] if decoded else EMPTY


__all__ = [
    "EMPTY",
    "DEFAULT_CODEC",
    "CharacterSource",
    "check_codec",
    "normalize_text",
]
