"""Draw one tick of the reveal grid onto an RGBA canvas."""
from __future__ import annotations

from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .grid import RevealGrid
from .palette import Color


class GlyphRenderer:
    """Draws single characters with a monospace TrueType font."""

    def __init__(self, font: ImageFont.FreeTypeFont) -> None:
        self.font = font

    @classmethod
    def load(cls, path: str, size: int) -> "GlyphRenderer":
        try:
            font = ImageFont.truetype(str(path), size)
        except OSError as exc:
            raise RuntimeError(f"Failed to load font {path}: {exc}") from exc
        return cls(font)

    def draw_glyph(
        self,
        draw: ImageDraw.ImageDraw,
        color: Color,
        position: Tuple[int, int],
        char: str,
    ) -> None:
        draw.text(position, char, fill=color, font=self.font)


class FrameRasterizer:
    """Lays the rolling and revealed grids out on a fixed monospace grid.

    Revealed glyphs are the foreground, rolling glyphs the background. In
    colored mode each column gets a solid backdrop in its current color, and
    every glyph is drawn over a 1px-offset shadow copy.
    """

    def __init__(
        self,
        renderer: GlyphRenderer,
        cell_width: int = 32,
        cell_height: int = 32,
        colored: bool = False,
        fg_color: Color = (0, 255, 0, 255),
        bg_color: Color = (0, 160, 0, 255),
        background_color: Color = (0, 0, 0, 255),
        text_offset: int = 2,
        shadow_offset: int = 1,
        shadow_color: Color = (0, 0, 0, 128),
    ) -> None:
        self.renderer = renderer
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.colored = colored
        self.fg_color = fg_color
        self.bg_color = bg_color
        self.background_color = background_color
        self.text_offset = text_offset if colored else 0
        self.shadow_offset = shadow_offset
        self.shadow_color = shadow_color

    def canvas_size(self, width: int, height: int) -> Tuple[int, int]:
        return (width * self.cell_width, height * self.cell_height)

    # ------------------------------------------------------------------
    def render(self, grid: RevealGrid) -> Image.Image:
        canvas = Image.new("RGBA", self.canvas_size(grid.width, grid.height), self.background_color)
        draw = ImageDraw.Draw(canvas, "RGBA")
        if self.colored:
            self._draw_column_backdrops(draw, grid)
        for col in range(grid.width):
            for row in range(grid.height):
                self._draw_cell(draw, grid, col, row)
        return canvas

    def _draw_column_backdrops(self, draw: ImageDraw.ImageDraw, grid: RevealGrid) -> None:
        bottom = grid.height * self.cell_height - 1
        for col, color in enumerate(grid.column_colors):
            left = col * self.cell_width
            draw.rectangle([left, 0, left + self.cell_width - 1, bottom], fill=color)

    def _draw_cell(self, draw: ImageDraw.ImageDraw, grid: RevealGrid, col: int, row: int) -> None:
        revealed = grid.revealed_at(col, row)
        rolling = grid.rolling_at(col, row)
        if not revealed.is_empty:
            char = revealed.char
            color = self._pick_color(revealed.color, self.fg_color)
        elif not rolling.is_empty:
            char = rolling.char
            color = self._pick_color(rolling.color, self.bg_color)
        else:
            return

        x = col * self.cell_width + self.text_offset
        y = row * self.cell_height
        if self.colored:
            shadow = (x + self.shadow_offset, y + self.shadow_offset)
            self.renderer.draw_glyph(draw, self.shadow_color, shadow, char)
        self.renderer.draw_glyph(draw, color, (x, y), char)

    def _pick_color(self, cell_color: Optional[Color], fixed: Color) -> Color:
        if self.colored and cell_color is not None:
            return cell_color
        return fixed


__all__ = ["FrameRasterizer", "GlyphRenderer"]
