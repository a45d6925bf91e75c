"""Drive the reveal grid to completion, one rendered frame per tick."""
from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from PIL import Image

from .charsource import CharacterSource
from .grid import GlyphSource, RevealGrid, build_target
from .palette import Palette
from .rasterizer import FrameRasterizer, GlyphRenderer
from .settings import DEFAULT_CONFIG, validate_config


LOG = logging.getLogger("decrypt_reveal")


@dataclass(frozen=True)
class Frame:
    """A rendered tick and how long it stays on screen."""

    image: Image.Image
    duration_ms: int = 10


class SequenceBuilder:
    """Ticks a :class:`RevealGrid` until every target cell is revealed.

    The state after each tick is rendered before the stop check, so the last
    frame always shows the fully revealed text. There is no tick limit unless
    ``max_ticks`` is given.
    """

    def __init__(
        self,
        grid: RevealGrid,
        rasterizer: FrameRasterizer,
        duration_ms: int = 10,
        max_ticks: Optional[int] = None,
    ) -> None:
        self.grid = grid
        self.rasterizer = rasterizer
        self.duration_ms = duration_ms
        self.max_ticks = max_ticks
        self.stopped_early = False

    def iter_frames(self) -> Iterator[Frame]:
        while True:
            has_unresolved = self.grid.advance_tick()
            yield Frame(self.rasterizer.render(self.grid), self.duration_ms)
            if not has_unresolved:
                break
            if self.max_ticks is not None and self.grid.ticks >= self.max_ticks:
                self.stopped_early = True
                LOG.warning(
                    "Stopped after %d ticks with %d cell(s) still hidden",
                    self.grid.ticks,
                    self.grid.unresolved_count(),
                )
                break
            if self.grid.ticks % 100 == 0:
                LOG.debug("Tick %d: %d cell(s) unresolved", self.grid.ticks, self.grid.unresolved_count())

    def build(self) -> List[Frame]:
        frames = list(self.iter_frames())
        width, height = self.rasterizer.canvas_size(self.grid.width, self.grid.height)
        LOG.info("Rendered %d frame(s) at %dx%d", len(frames), width, height)
        return frames


def generate_frames(
    text: str,
    colored: bool = False,
    config: Optional[Dict[str, Any]] = None,
    renderer: Optional[GlyphRenderer] = None,
    source: Optional[GlyphSource] = None,
    palette: Optional[Palette] = None,
) -> List[Frame]:
    """Build the full frame sequence for ``text`` using ``config`` settings."""
    merged = copy.deepcopy(DEFAULT_CONFIG)
    merged.update(config or {})
    config = merged
    validate_config(config)

    target = build_target(text, config["codec"], int(config["padding_rows"]), int(config["top_margin"]))
    rng = random.Random(config.get("seed"))
    if source is None:
        source = CharacterSource(config["codec"], rng)
    if palette is None:
        palette = Palette(config["palette"], rng, float(config["darken_factor"]))
    if renderer is None:
        renderer = GlyphRenderer.load(config["font_path"], int(config["font_size"]))

    LOG.info(
        "Revealing %d character(s) on a %dx%d grid (colored=%s)",
        target.filled_cells(),
        target.width,
        target.height,
        colored,
    )
    grid = RevealGrid(target, source, palette)
    rasterizer = FrameRasterizer(
        renderer,
        cell_width=int(config["cell_width"]),
        cell_height=int(config["cell_height"]),
        colored=colored,
        fg_color=tuple(config["fg_color"]),
        bg_color=tuple(config["bg_color"]),
        background_color=tuple(config["background_color"]),
        text_offset=int(config["text_offset"]),
        shadow_offset=int(config["shadow_offset"]),
        shadow_color=tuple(config["shadow_color"]),
    )
    max_ticks = config.get("max_ticks")
    builder = SequenceBuilder(
        grid,
        rasterizer,
        duration_ms=int(config["frame_duration_ms"]),
        max_ticks=int(max_ticks) if max_ticks is not None else None,
    )
    return builder.build()


__all__ = ["Frame", "SequenceBuilder", "generate_frames"]
