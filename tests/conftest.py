from __future__ import annotations

import random
from typing import List, Sequence, Tuple

import pytest

from decrypt_reveal.palette import Palette
from decrypt_reveal.settings import DEFAULT_CONFIG


class CyclingSource:
    """Glyph source that repeats a fixed sequence of characters."""

    def __init__(self, chars: Sequence[str]) -> None:
        self.chars = list(chars)
        self.calls = 0

    def next_glyph(self) -> str:
        char = self.chars[self.calls % len(self.chars)]
        self.calls += 1
        return char


class RecordingRenderer:
    """Stands in for a font: remembers every glyph request, draws nothing."""

    def __init__(self) -> None:
        self.calls: List[Tuple[tuple, Tuple[int, int], str]] = []

    def draw_glyph(self, draw, color, position, char) -> None:
        self.calls.append((tuple(color), tuple(position), char))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def palette(rng: random.Random) -> Palette:
    return Palette(DEFAULT_CONFIG["palette"], rng)


@pytest.fixture
def recording_renderer() -> RecordingRenderer:
    return RecordingRenderer()


class PaintingRenderer(RecordingRenderer):
    """Marks each glyph with a small block whose offset depends on the character."""

    def draw_glyph(self, draw, color, position, char) -> None:
        super().draw_glyph(draw, color, position, char)
        x, y = position
        shift = ord(char) % 8
        draw.rectangle([x + shift, y + shift, x + shift + 2, y + shift + 2], fill=color)
