"""Display colors for the reveal animation."""
from __future__ import annotations

import random
from typing import Iterable, List, Optional, Tuple

Color = Tuple[int, int, int, int]

NO_COLOR: Color = (0, 0, 0, 0)


def clamp(x, a, b):
    return a if x < a else (b if x > b else x)


def darken(color: Color, factor: float = 0.6) -> Color:
    """Scale the RGB channels by ``factor`` and keep alpha as-is."""
    r, g, b, a = color
    return (
        clamp(int(r * factor), 0, 255),
        clamp(int(g * factor), 0, 255),
        clamp(int(b * factor), 0, 255),
        a,
    )


class Palette:
    """A fixed set of colors with a no-immediate-repeat picker."""

    def __init__(
        self,
        colors: Iterable[Color],
        rng: Optional[random.Random] = None,
        darken_factor: float = 0.6,
    ) -> None:
        self.colors: List[Color] = [tuple(c) for c in colors]
        if len(set(self.colors)) < 2:
            raise ValueError("Palette needs at least two distinct colors")
        self.rng = rng or random.Random()
        self.darken_factor = darken_factor

    def random_excluding(self, excluded: Optional[Color]) -> Color:
        while True:
            color = self.rng.choice(self.colors)
            if color != excluded:
                return color

    def darken(self, color: Color) -> Color:
        return darken(color, self.darken_factor)


__all__ = ["Color", "NO_COLOR", "Palette", "clamp", "darken"]
