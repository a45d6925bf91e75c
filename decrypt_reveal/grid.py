"""Cell grids and the per-tick reveal simulation."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Protocol

from .charsource import DEFAULT_CODEC, EMPTY, normalize_text
from .palette import NO_COLOR, Color, Palette


# ---------------------------------------------------------------------------
# Data helpers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cell:
    """One glyph slot: a character (or ``EMPTY``) plus its display color."""

    char: str = EMPTY
    color: Optional[Color] = None

    @property
    def is_empty(self) -> bool:
        return self.char == EMPTY


EMPTY_CELL = Cell()

Column = List[Cell]


class GlyphSource(Protocol):
    def next_glyph(self) -> str:
        ...


@dataclass
class TargetLayout:
    """The goal characters laid out column-major, one word per row."""

    rows: List[str]
    width: int
    height: int
    columns: List[Column]

    def cell(self, col: int, row: int) -> Cell:
        return self.columns[col][row]

    def filled_cells(self) -> int:
        return sum(1 for column in self.columns for cell in column if not cell.is_empty)


def build_target(
    text: str,
    codec: str = DEFAULT_CODEC,
    padding_rows: int = 5,
    top_margin: int = 2,
) -> TargetLayout:
    """Split ``text`` on spaces and place each word on its own grid row."""
    rows = normalize_text(text, codec).split(" ")
    width = max(len(row) for row in rows)
    height = len(rows) + padding_rows
    columns: List[Column] = [[EMPTY_CELL] * height for _ in range(width)]
    for row_index, word in enumerate(rows):
        for col_index, char in enumerate(word):
            columns[col_index][row_index + top_margin] = Cell(char)
    return TargetLayout(rows=rows, width=width, height=height, columns=columns)


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------


class RevealGrid:
    """Target, rolling and revealed grids plus the per-column colors.

    The rolling grid is one fixed-size deque per column: each tick pushes a
    fresh glyph at row 0 and the bottom row falls off. The revealed grid only
    ever gains characters; once a cell matches its target it keeps that
    character for the rest of the run.
    """

    def __init__(self, target: TargetLayout, source: GlyphSource, palette: Palette) -> None:
        self.target = target
        self.source = source
        self.palette = palette
        self.width = target.width
        self.height = target.height
        self.rolling: List[Deque[Cell]] = [
            deque([EMPTY_CELL] * self.height, maxlen=self.height) for _ in range(self.width)
        ]
        self.revealed: List[Column] = [[EMPTY_CELL] * self.height for _ in range(self.width)]
        self.column_colors: List[Color] = []
        previous = NO_COLOR
        for _ in range(self.width):
            previous = palette.random_excluding(previous)
            self.column_colors.append(previous)
        self.ticks = 0

    # ------------------------------------------------------------------
    def target_at(self, col: int, row: int) -> Cell:
        return self.target.columns[col][row]

    def rolling_at(self, col: int, row: int) -> Cell:
        return self.rolling[col][row]

    def revealed_at(self, col: int, row: int) -> Cell:
        return self.revealed[col][row]

    # ------------------------------------------------------------------
    def advance_tick(self) -> bool:
        """Roll every column once, score the grid and report unresolved cells."""
        for col in range(self.width):
            glyph = self.source.next_glyph()
            color = self.palette.random_excluding(self.column_colors[col])
            self.column_colors[col] = color
            self.rolling[col].appendleft(Cell(glyph, color))
        self.ticks += 1
        return self.score_and_reveal()

    def score_and_reveal(self) -> bool:
        has_unresolved = False
        for col in range(self.width):
            target_column = self.target.columns[col]
            rolling_column = self.rolling[col]
            revealed_column = self.revealed[col]
            for row in range(self.height):
                target = target_column[row]
                if target.is_empty:
                    continue
                rolling = rolling_column[row]
                if rolling.char == target.char:
                    revealed_column[row] = Cell(target.char, self.palette.darken(rolling.color))
                elif revealed_column[row].char != target.char:
                    has_unresolved = True
        return has_unresolved

    # ------------------------------------------------------------------
    def unresolved_count(self) -> int:
        count = 0
        for col in range(self.width):
            for row in range(self.height):
                target = self.target.columns[col][row]
                if not target.is_empty and self.revealed[col][row].char != target.char:
                    count += 1
        return count

    def is_resolved(self) -> bool:
        return self.unresolved_count() == 0


__all__ = [
    "Cell",
    "EMPTY_CELL",
    "GlyphSource",
    "RevealGrid",
    "TargetLayout",
    "build_target",
]
