# -*- coding: utf-8 -*-
"""
Raw-curve refinement: uniform-source collapse → gap fill → boundary
extrapolation → box smoothing.

Each stage takes a `CurveData` and returns a new one; inputs are never
modified. After `postprocess` every index is defined, except when the
uniform-source shortcut fires (the curve is then constant and only the
single source index carries a count).

Notes
-----
- Gap fill is a single left-to-right pass. A freshly filled index is marked
  defined (count 1, sum = value) so it anchors the next gap position.
- Extrapolation mirrors the curve around the first/last defined index and
  repeats until both ends are defined.
- Smoothing is a half-open box [-w, w) truncated at the table edges.
"""

from __future__ import annotations
from typing import Optional, Tuple

import numpy as np

from .accumulate import CurveData, round_divide, LEVELS

__all__ = [
    "uniform_index",
    "collapse_uniform",
    "interpolate_gaps",
    "extrapolate_boundaries",
    "smooth_curve",
    "postprocess",
]


def _working_copy(data: CurveData) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    return (
        data.curve.astype(np.int64),
        data.sums.copy(),
        data.counts.copy(),
    )


def _freeze(curve: np.ndarray, sums: np.ndarray, counts: np.ndarray) -> CurveData:
    return CurveData(
        curve=np.clip(curve, 0, 255).astype(np.uint8),
        sums=np.asarray(sums, dtype=np.uint64),
        counts=np.asarray(counts, dtype=np.uint64),
    )


def _clamp_u8(v: int) -> int:
    return min(max(int(v), 0), 255)


def _nearest_defined(defined: np.ndarray, start: int, step: int) -> int:
    i = start
    while 0 <= i < LEVELS:
        if defined[i]:
            return i
        i += step
    return -1


def uniform_index(counts: np.ndarray) -> Optional[int]:
    """Return the only defined index, or None if zero or several are defined."""
    nz = np.flatnonzero(np.asarray(counts))
    if nz.size == 1:
        return int(nz[0])
    return None


def collapse_uniform(data: CurveData, index: int) -> CurveData:
    """Constant curve equal to curve[index]; accumulators are kept as-is."""
    curve = np.full(LEVELS, data.curve[index], dtype=np.uint8)
    return CurveData(curve=curve, sums=data.sums.copy(), counts=data.counts.copy())


def interpolate_gaps(data: CurveData) -> CurveData:
    """
    Linearly fill undefined indices lying between two defined ones.

    Indices outside the span of defined data are left undefined.
    """
    curve, sums, counts = _working_copy(data)
    defined = counts != 0

    for i in range(LEVELS):
        if defined[i]:
            continue
        prev = _nearest_defined(defined, i - 1, -1)
        nxt = _nearest_defined(defined, i + 1, +1)
        if prev < 0 or nxt < 0:
            continue
        rise = int(curve[nxt]) - int(curve[prev])
        step = round_divide((i - prev) * rise, nxt - prev)
        curve[i] = _clamp_u8(int(curve[prev]) + step)
        sums[i] = curve[i]
        counts[i] = 1
        defined[i] = True

    return _freeze(curve, sums, counts)


def extrapolate_boundaries(data: CurveData, max_rounds: int = LEVELS) -> CurveData:
    """
    Reflect the curve outward until indices 0 and 255 are both defined.

    Below the first defined index `first`, an undefined i takes
    2*curve[first] - curve[2*first - i] when that mirror is defined;
    symmetrically above the last defined index.

    Raises
    ------
    ValueError
        If no index is defined.
    RuntimeError
        If the ends are still undefined after `max_rounds` rounds (a single
        defined index, or a gapped span, cannot be reflected outward).
    """
    curve, sums, counts = _working_copy(data)
    defined = counts != 0
    if not defined.any():
        raise ValueError("Cannot extrapolate a curve with no defined index.")

    def mark(i: int, v: int) -> None:
        curve[i] = _clamp_u8(v)
        sums[i] = curve[i]
        counts[i] = 1
        defined[i] = True

    rounds = 0
    while not (defined[0] and defined[LEVELS - 1]):
        if rounds >= max_rounds:
            raise RuntimeError(
                f"Boundary extrapolation did not converge after {max_rounds} rounds "
                f"(defined span {np.flatnonzero(defined).tolist()[:2]}...)."
            )
        rounds += 1

        if not defined[0]:
            first = int(np.argmax(defined))
            for i in range(first):
                mirror = 2 * first - i
                if mirror <= LEVELS - 1 and defined[mirror]:
                    mark(i, 2 * int(curve[first]) - int(curve[mirror]))

        if not defined[LEVELS - 1]:
            last = LEVELS - 1 - int(np.argmax(defined[::-1]))
            for i in range(LEVELS - 1, last, -1):
                mirror = 2 * last - i
                if mirror >= 0 and defined[mirror]:
                    mark(i, 2 * int(curve[last]) - int(curve[mirror]))

    return _freeze(curve, sums, counts)


def smooth_curve(data: CurveData, smoothing_window: int) -> CurveData:
    """
    Box-filter the curve over offsets [-w, w) clipped to [0, 255].

    Means use rounded division. `sums`/`counts` of the result hold the
    window sums and sizes. A window of 0 returns `data` unchanged.
    """
    w = int(smoothing_window)
    if w < 0:
        raise ValueError(f"smoothing_window must not be negative, got {w}.")
    if w == 0:
        return data

    c = data.curve.astype(np.int64)
    csum = np.concatenate(([0], np.cumsum(c)))
    idx = np.arange(LEVELS)
    lo = np.maximum(idx - w, 0)
    hi = np.minimum(idx + w, LEVELS)  # exclusive: last offset is w - 1
    sums = csum[hi] - csum[lo]
    counts = hi - lo
    curve = round_divide(sums, counts)
    return _freeze(curve, sums, counts)


def postprocess(data: CurveData, smoothing_window: int = 8) -> CurveData:
    """
    Turn a raw curve into a fully defined, smoothed mapping.

    Parameters
    ----------
    data : CurveData
        Raw curve and accumulators from `accumulate` / `raw_curve`.
    smoothing_window : int
        Half-width of the box filter; 0 disables smoothing.

    Returns
    -------
    CurveData
        Refined curve. If only one key value occurred, the curve is the
        constant value of that index and no other stage runs.
    """
    if int(smoothing_window) < 0:
        raise ValueError(f"smoothing_window must not be negative, got {smoothing_window}.")

    flat = uniform_index(data.counts)
    if flat is not None:
        return collapse_uniform(data, flat)

    out = interpolate_gaps(data)
    out = extrapolate_boundaries(out)
    return smooth_curve(out, smoothing_window)
