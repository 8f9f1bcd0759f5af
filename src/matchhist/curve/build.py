# -*- coding: utf-8 -*-
"""
One-call curve construction: accumulate → raw curve → (optional) postprocess.
"""

from __future__ import annotations

import numpy as np

from .accumulate import CurveData, accumulate, raw_curve
from .postprocess import postprocess

__all__ = ["build_curve_data", "build_curve"]


def build_curve_data(
    key: np.ndarray,
    value: np.ndarray,
    *,
    raw: bool = False,
    smoothing_window: int = 8,
) -> CurveData:
    """
    Build the matching curve and keep its accumulators.

    Parameters
    ----------
    key, value : np.ndarray
        uint8 planes (or stacks) of identical shape.
    raw : bool
        If True, return the conditional-mean curve without refinement;
        indices that never occurred in `key` map to 0.
    smoothing_window : int
        Box half-width used by `postprocess` (ignored when `raw`).

    Raises
    ------
    ValueError
        On shape/dtype mismatch, empty planes, or a negative window.
    """
    if int(smoothing_window) < 0:
        raise ValueError(f"smoothing_window must not be negative, got {smoothing_window}.")
    if np.asarray(key).size == 0:
        raise ValueError("Cannot build a curve from empty planes.")

    sums, counts = accumulate(key, value)
    data = CurveData(curve=raw_curve(sums, counts), sums=sums, counts=counts)
    if raw:
        return data
    return postprocess(data, smoothing_window)


def build_curve(
    key: np.ndarray,
    value: np.ndarray,
    *,
    raw: bool = False,
    smoothing_window: int = 8,
) -> np.ndarray:
    """Read-only (256,) uint8 table mapping `key` levels toward `value`."""
    return build_curve_data(key, value, raw=raw, smoothing_window=smoothing_window).curve
