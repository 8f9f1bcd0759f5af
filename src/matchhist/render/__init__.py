"""
matchhist.render
================

Curve overlays and 256×256 diagnostic renderings on 8-bit planes.

Guidelines
----------
- Callers pre-clear backgrounds with `fill_plane` (SHOW_BACKGROUND or
  DEBUG_BACKGROUND per plane); drawing functions only touch curve pixels.
"""

from .draw import (
    SHOW_COLORS,
    SHOW_BACKGROUND,
    DEBUG_BACKGROUND,
    fill_plane,
    overlay_curve,
    render_debug,
)

import importlib as _importlib
draw = _importlib.import_module(".draw", __name__)

__all__ = [
    # constants
    "SHOW_COLORS",
    "SHOW_BACKGROUND",
    "DEBUG_BACKGROUND",
    # functions
    "fill_plane",
    "overlay_curve",
    "render_debug",
    # modules
    "draw",
]
