"""Helpers for loading and validating render settings."""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from .charsource import check_codec

# --------------------------- CONFIG ---------------------------
DEFAULT_CONFIG: Dict[str, Any] = {
    # Grid / layout
    "cell_width": 32,
    "cell_height": 32,
    "padding_rows": 5,
    "top_margin": 2,

    # Glyphs
    "font_path": "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "font_size": 32,
    "codec": "mac_cyrillic",

    # Colors (RGBA)
    "background_color": (0, 0, 0, 255),
    "fg_color": (0, 255, 0, 255),
    "bg_color": (0, 160, 0, 255),
    "palette": [
        (255, 179, 186, 255),
        (255, 223, 186, 255),
        (255, 255, 186, 255),
        (186, 255, 201, 255),
        (186, 225, 255, 255),
    ],
    "darken_factor": 0.6,

    # Colored mode embellishments
    "text_offset": 2,
    "shadow_offset": 1,
    "shadow_color": (0, 0, 0, 128),

    # Timing / run control
    "frame_duration_ms": 10,
    "max_ticks": None,
    "seed": None,

    # Export
    "video_codec": "libx264",
}
# --------------------------------------------------------------


def _coerce_config_value(value, default):
    """Best-effort coercion of JSON-loaded values to match defaults."""

    if isinstance(default, tuple):
        return tuple(value) if isinstance(value, list) else value
    if isinstance(default, list):
        if isinstance(value, list):
            if default and isinstance(default[0], tuple):
                return [tuple(item) if isinstance(item, list) else item for item in value]
            return value
        return default
    return value


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the defaults overlaid with the JSON file at ``path`` if it exists."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is None or not path.exists():
        return config
    try:
        user_config = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Failed to parse config file {path}: {exc}") from exc
    if not isinstance(user_config, dict):
        raise RuntimeError(f"Config file {path} must contain a JSON object")
    for key, value in user_config.items():
        if key in config:
            config[key] = _coerce_config_value(value, config[key])
        else:
            config[key] = value
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """Raise ``ValueError`` for settings the renderer cannot work with."""
    for key in ("cell_width", "cell_height", "font_size", "frame_duration_ms"):
        if int(config[key]) <= 0:
            raise ValueError(f"{key} must be positive, got {config[key]!r}")
    if len(set(config["palette"])) < 2:
        raise ValueError("palette needs at least two distinct colors")
    top_margin = int(config["top_margin"])
    if top_margin < 0 or top_margin > int(config["padding_rows"]):
        raise ValueError("top_margin must fit inside padding_rows")
    max_ticks = config.get("max_ticks")
    if max_ticks is not None and int(max_ticks) <= 0:
        raise ValueError("max_ticks must be positive when set")
    check_codec(str(config["codec"]))


__all__ = ["DEFAULT_CONFIG", "load_config", "validate_config"]
