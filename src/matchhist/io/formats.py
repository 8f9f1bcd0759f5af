# -*- coding: utf-8 -*-
"""
formats.py — shared helpers for TIFF I/O: orientation, BigTIFF check, 8-bit guard.
No file I/O here — only utilities used by both readers and writers.
"""
from __future__ import annotations
from typing import Tuple
import numpy as np

__all__ = [
    "_to_tyx",
    "_guess_tyx_from_shape",
    "_needs_bigtiff",
    "_require_u8",
]

def _needs_bigtiff(arr: np.ndarray, dtype=None) -> bool:
    """Return True if serialized array size would exceed 4 GiB (BigTIFF required)."""
    dt = arr.dtype if dtype is None else np.dtype(dtype)
    return arr.size * dt.itemsize >= 2**32

# Axis codes tifffile uses for a frame/sequence dimension
_FRAME_AXES = "TIQZ"

def _guess_tyx_from_shape(shape: Tuple[int, ...], axes: str = "") -> Tuple[int, int, int, bool]:
    """
    Return (T, Y, X, stored_yxt_flag) from an arbitrary TIFF series shape.

    When the series `axes` string (e.g. "TYX", "QYX", "YXT") names the frame
    dimension it decides the orientation. Otherwise the shape decides:
      - 2D:          single frame (1, Y, X).
      - 3D (Y,X,T):  last dim small (T < 64) while first two are >= 64.
      - 3D (T,Y,X):  otherwise.
    """
    if len(shape) == 2:
        return 1, shape[0], shape[1], False
    if len(shape) != 3:
        raise ValueError(f"Expected a 2D or 3D TIFF series, got shape {tuple(shape)}.")
    ax = (axes or "").upper()
    if len(ax) == 3:
        if ax[0] in _FRAME_AXES and ax[1:] == "YX":
            return shape[0], shape[1], shape[2], False
        if ax[2] in _FRAME_AXES and ax[:2] == "YX":
            return shape[2], shape[0], shape[1], True
    if shape[-1] < 64 and shape[0] >= 64 and shape[1] >= 64:
        return shape[-1], shape[0], shape[1], True
    return shape[0], shape[1], shape[2], False

def _to_tyx(arr: np.ndarray, axes: str = "") -> np.ndarray:
    """
    Normalize array to (T, Y, X).

      - (Y, X)    -> (1, Y, X)
      - (Y, X, T) -> (T, Y, X) when `axes` ends in a frame axis, or, with no
                     usable axes, when T is small and Y, X are large
      - (T, Y, X) -> unchanged
    """
    a = np.asarray(arr)
    if a.ndim == 2:
        return a[None, ...]
    if a.ndim != 3:
        raise ValueError(f"Expected 2D or 3D array, got shape {a.shape}.")
    _, _, _, stored_yxt = _guess_tyx_from_shape(a.shape, axes)
    return np.moveaxis(a, -1, 0) if stored_yxt else a

def _require_u8(a: np.ndarray, path: str = "") -> np.ndarray:
    """Reject anything that is not 8 bits per sample."""
    if a.dtype != np.uint8:
        where = f" ({path})" if path else ""
        raise ValueError(f"Only 8-bit samples are supported, got {a.dtype}{where}.")
    return a
