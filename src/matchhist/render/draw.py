# -*- coding: utf-8 -*-
"""
Curve drawing on 8-bit planes.

Coordinate system: column x = input level, row 255 - curve[x] = output level
(bottom-to-top). Target planes must be at least 256×256; only the top-left
256×256 region is touched.
"""

from __future__ import annotations
from typing import Optional

import numpy as np

from matchhist.curve.accumulate import LEVELS

__all__ = [
    "SHOW_COLORS",
    "SHOW_BACKGROUND",
    "DEBUG_BACKGROUND",
    "fill_plane",
    "overlay_curve",
    "render_debug",
]

# Marker intensity per plane index (luma, chroma 1, chroma 2)
SHOW_COLORS = (235, 160, 96)
# Flat fills: video black for luma, neutral for chroma
SHOW_BACKGROUND = (16, 128, 128)
DEBUG_BACKGROUND = (0, 128, 128)


def _check_canvas(plane: np.ndarray) -> np.ndarray:
    if plane.ndim != 2 or plane.dtype != np.uint8:
        raise ValueError(f"Expected a 2D uint8 plane, got {plane.ndim}D {plane.dtype}.")
    h, w = plane.shape
    if h < LEVELS or w < LEVELS:
        raise ValueError(f"Plane must be at least {LEVELS}x{LEVELS}, got {w}x{h}.")
    return plane


def _check_curve(curve: np.ndarray) -> np.ndarray:
    c = np.asarray(curve)
    if c.shape != (LEVELS,):
        raise ValueError(f"Curve must have shape ({LEVELS},), got {c.shape}.")
    if c.min() < 0 or c.max() > LEVELS - 1:
        raise ValueError(f"Curve values must lie in 0..{LEVELS - 1}, got {c.min()}..{c.max()}.")
    return c.astype(np.intp)


def fill_plane(
    plane: np.ndarray,
    value: int,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> np.ndarray:
    """Flat-fill the top-left width×height region (whole plane by default)."""
    h = plane.shape[0] if height is None else min(int(height), plane.shape[0])
    w = plane.shape[1] if width is None else min(int(width), plane.shape[1])
    plane[:h, :w] = value
    return plane


def overlay_curve(plane: np.ndarray, curve: np.ndarray, color: int) -> np.ndarray:
    """Set one pixel per column at (255 - curve[x], x) to `color`."""
    _check_canvas(plane)
    c = _check_curve(curve)
    x = np.arange(LEVELS)
    plane[LEVELS - 1 - c, x] = color
    return plane


def render_debug(plane: np.ndarray, curve: np.ndarray) -> np.ndarray:
    """
    Bar chart of the curve with a bright trace.

    Column x is filled from row 255 up to row 255 - curve[x] (inclusive)
    with grey curve[x]; the top pixel of each bar is then set to 255.
    """
    _check_canvas(plane)
    c = _check_curve(curve)
    rows = np.arange(LEVELS)[:, None]              # (256, 1)
    bars = rows >= (LEVELS - 1 - c)[None, :]       # (256, 256) column masks
    region = plane[:LEVELS, :LEVELS]
    region[bars] = np.broadcast_to(c.astype(np.uint8)[None, :], bars.shape)[bars]
    region[LEVELS - 1 - c, np.arange(LEVELS)] = 255
    return plane
