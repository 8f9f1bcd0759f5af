# -*- coding: utf-8 -*-
"""
Curve application: remap 8-bit planes through a 256-entry lookup table.
"""

from __future__ import annotations
from typing import Optional

import cv2
import numpy as np

from .accumulate import LEVELS

__all__ = ["apply_curve", "identity_curve"]


def identity_curve() -> np.ndarray:
    """curve[v] = v for every level."""
    return np.arange(LEVELS, dtype=np.uint8)


def _as_lut(curve: np.ndarray) -> np.ndarray:
    lut = np.asarray(curve)
    if lut.shape != (LEVELS,):
        raise ValueError(f"Curve must have shape ({LEVELS},), got {lut.shape}.")
    return np.ascontiguousarray(lut, dtype=np.uint8)


def apply_curve(
    curve: np.ndarray,
    src: np.ndarray,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Replace every sample x of `src` with curve[x].

    Parameters
    ----------
    curve : np.ndarray
        (256,) uint8 table.
    src : np.ndarray
        uint8 plane (Y, X) or stack (T, Y, X).
    out : np.ndarray or None
        Destination with the same shape; may be `src` itself for in-place
        remapping. A new array is allocated when None.

    Returns
    -------
    np.ndarray
        `out` (or the new array).
    """
    lut = _as_lut(curve)
    a = np.asarray(src)
    if a.dtype != np.uint8:
        raise ValueError(f"Expected uint8 samples, got {a.dtype}.")
    if a.ndim not in (2, 3):
        raise ValueError(f"Expected 2D or 3D array, got shape {a.shape}.")
    if out is None:
        out = np.empty_like(a)
    elif out.shape != a.shape or out.dtype != np.uint8:
        raise ValueError(f"Destination {out.shape}/{out.dtype} does not match source {a.shape}/uint8.")
    if a.size == 0:
        return out

    if a.ndim == 2:
        out[...] = cv2.LUT(np.ascontiguousarray(a), lut)
        return out
    for t in range(a.shape[0]):
        out[t] = cv2.LUT(np.ascontiguousarray(a[t]), lut)
    return out
