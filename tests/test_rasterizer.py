from __future__ import annotations

from pathlib import Path

import pytest

from decrypt_reveal.grid import RevealGrid, build_target
from decrypt_reveal.palette import Palette
from decrypt_reveal.rasterizer import FrameRasterizer, GlyphRenderer
from decrypt_reveal.settings import DEFAULT_CONFIG

from conftest import CyclingSource, RecordingRenderer

FG = (0, 255, 0, 255)
BG = (0, 160, 0, 255)


def make_grid(text: str, chars: str, palette: Palette) -> RevealGrid:
    return RevealGrid(build_target(text), CyclingSource(chars), palette)


def test_canvas_matches_grid_dimensions(palette: Palette, recording_renderer: RecordingRenderer) -> None:
    grid = make_grid("HI THERE", "x", palette)
    grid.advance_tick()
    rasterizer = FrameRasterizer(recording_renderer, cell_width=32, cell_height=32)
    image = rasterizer.render(grid)
    assert image.size == (5 * 32, 7 * 32)
    assert image.mode == "RGBA"
    assert image.getpixel((10, 10)) == (0, 0, 0, 255)


def test_empty_cells_are_not_drawn(palette: Palette, recording_renderer: RecordingRenderer) -> None:
    grid = make_grid("ABC", "x", palette)
    grid.advance_tick()
    FrameRasterizer(recording_renderer).render(grid)
    assert [position for _, position, _ in recording_renderer.calls] == [(0, 0), (32, 0), (64, 0)]
    assert all(char == "x" for _, _, char in recording_renderer.calls)


def test_monochrome_uses_fixed_colors(palette: Palette, recording_renderer: RecordingRenderer) -> None:
    grid = make_grid("A", "A", palette)
    for _ in range(3):
        grid.advance_tick()
    FrameRasterizer(recording_renderer, fg_color=FG, bg_color=BG).render(grid)
    by_row = {position[1] // 32: color for color, position, _ in recording_renderer.calls}
    assert by_row[2] == FG
    assert by_row[0] == BG
    assert by_row[1] == BG


def test_revealed_glyph_wins_over_rolling_glyph(palette: Palette, recording_renderer: RecordingRenderer) -> None:
    source = CyclingSource("AAAxxxxxxxx")
    grid = RevealGrid(build_target("A"), source, palette)
    for _ in range(6):
        grid.advance_tick()
    assert grid.rolling_at(0, 2).char == "x"
    FrameRasterizer(recording_renderer, fg_color=FG, bg_color=BG).render(grid)
    row_two = [call for call in recording_renderer.calls if call[1] == (0, 64)]
    assert row_two == [(FG, (0, 64), "A")]


def test_colored_mode_paints_columns_and_shadows(palette: Palette, recording_renderer: RecordingRenderer) -> None:
    grid = make_grid("AB", "x", palette)
    grid.advance_tick()
    rasterizer = FrameRasterizer(
        recording_renderer,
        colored=True,
        text_offset=2,
        shadow_offset=1,
        shadow_color=(0, 0, 0, 128),
    )
    image = rasterizer.render(grid)
    for col, color in enumerate(grid.column_colors):
        assert image.getpixel((col * 32 + 16, 5 * 32 + 16)) == color

    calls = recording_renderer.calls
    assert len(calls) == 2 * grid.width
    for col in range(grid.width):
        shadow, main = calls[2 * col], calls[2 * col + 1]
        assert shadow == ((0, 0, 0, 128), (col * 32 + 3, 1), "x")
        assert main == (grid.rolling_at(col, 0).color, (col * 32 + 2, 0), "x")


def test_colored_mode_draws_revealed_in_frozen_color(palette: Palette, recording_renderer: RecordingRenderer) -> None:
    grid = make_grid("A", "A", palette)
    for _ in range(3):
        grid.advance_tick()
    FrameRasterizer(recording_renderer, colored=True).render(grid)
    main_calls = [call for call in recording_renderer.calls if call[1] == (2, 64)]
    assert main_calls == [(grid.revealed_at(0, 2).color, (2, 64), "A")]


def test_missing_font_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        GlyphRenderer.load(str(tmp_path / "missing.ttf"), 32)


@pytest.mark.skipif(not Path(DEFAULT_CONFIG["font_path"]).exists(), reason="DejaVu Sans Mono not installed")
def test_truetype_renderer_draws_pixels(palette: Palette) -> None:
    renderer = GlyphRenderer.load(DEFAULT_CONFIG["font_path"], 32)
    grid = make_grid("W", "W", palette)
    grid.advance_tick()
    image = FrameRasterizer(renderer, fg_color=FG, bg_color=BG).render(grid)
    colors = {color for _, color in image.getcolors(maxcolors=100000)}
    assert (0, 0, 0, 255) in colors
    assert len(colors) > 1
