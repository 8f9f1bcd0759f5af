# -*- coding: utf-8 -*-
"""
Conditional-mean histogram accumulation.

For every key value v (0..255) collect the sum and count of value-plane
samples co-located with key samples equal to v, then turn them into a raw
curve by rounded integer division.

Typical usage
-------------
>>> sums, counts = accumulate(key_plane, value_plane)
>>> curve = raw_curve(sums, counts)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

__all__ = ["CurveData", "round_divide", "accumulate", "raw_curve", "LEVELS"]

LEVELS = 256


@dataclass(frozen=True)
class CurveData:
    """Curve table together with the accumulators it was derived from.

    Attributes
    ----------
    curve : np.ndarray
        (256,) uint8 lookup table.
    sums : np.ndarray
        (256,) uint64 per-index sums.
    counts : np.ndarray
        (256,) uint64 per-index counts; an index is *defined* when its count
        is non-zero.
    """
    curve: np.ndarray
    sums: np.ndarray
    counts: np.ndarray

    def __post_init__(self):
        # store read-only copies; the caller's buffers stay writable
        for name in ("curve", "sums", "counts"):
            a = np.array(getattr(self, name), copy=True)
            if a.shape != (LEVELS,):
                raise ValueError(f"{name} must have shape ({LEVELS},), got {a.shape}.")
            a.setflags(write=False)
            object.__setattr__(self, name, a)

    @property
    def defined(self) -> np.ndarray:
        """Boolean mask of indices with a non-zero count."""
        return self.counts != 0


def round_divide(x, y) -> Union[int, np.ndarray]:
    """
    Integer division rounded to nearest, ties away from zero.

    Sign-aware: when exactly one operand is negative the half divisor is
    subtracted, otherwise added, and the result is truncated toward zero.
    Accepts Python ints or integer arrays (element-wise).
    """
    xa = np.asarray(x, dtype=np.int64)
    ya = np.asarray(y, dtype=np.int64)
    if np.any(ya == 0):
        raise ZeroDivisionError("round_divide: division by zero")
    half = ya >> 1
    num = np.where((xa < 0) ^ (ya < 0), xa - half, xa + half)
    q = np.abs(num) // np.abs(ya)
    q = np.where((num < 0) ^ (ya < 0), -q, q)
    if q.ndim == 0:
        return int(q)
    return q


def _check_planes(key: np.ndarray, value: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    k = np.asarray(key)
    v = np.asarray(value)
    if k.shape != v.shape:
        raise ValueError(f"Key/value planes must share shape, got {k.shape} and {v.shape}.")
    if k.dtype != np.uint8 or v.dtype != np.uint8:
        raise ValueError(f"Expected uint8 planes, got {k.dtype} and {v.dtype}.")
    return k, v


def accumulate(key: np.ndarray, value: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-key-value sums and counts of the co-located value samples.

    Parameters
    ----------
    key : np.ndarray
        uint8 plane whose samples index the table.
    value : np.ndarray
        uint8 plane of the same shape whose samples are averaged.

    Returns
    -------
    (sums, counts) : (np.ndarray, np.ndarray)
        Both (256,) uint64.
    """
    k, v = _check_planes(key, value)
    k = k.ravel()
    counts = np.bincount(k, minlength=LEVELS).astype(np.uint64)
    # float64 weights are exact below 2**53, far above any 8-bit plane sum
    sums = np.bincount(k, weights=v.ravel(), minlength=LEVELS).astype(np.uint64)
    return sums, counts


def raw_curve(sums: np.ndarray, counts: np.ndarray) -> np.ndarray:
    """Rounded conditional means; undefined indices (count 0) are 0."""
    s = np.asarray(sums, dtype=np.int64)
    c = np.asarray(counts, dtype=np.int64)
    curve = np.zeros(LEVELS, dtype=np.uint8)
    m = c != 0
    if m.any():
        curve[m] = np.clip(round_divide(s[m], c[m]), 0, 255).astype(np.uint8)
    return curve
