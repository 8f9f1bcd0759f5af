# -*- coding: utf-8 -*-
"""
curves.py — curve table export/import.

Formats
-------
- .npy : raw uint8 array, (256,) or (T, 256)
- .csv : header row "frame,0,1,...,255" then one row per frame
"""
from __future__ import annotations
import csv
import os
from typing import Union

import numpy as np

from matchhist.curve.accumulate import LEVELS

__all__ = ["save_curves", "load_curves"]


def _as_curves(curves: np.ndarray) -> np.ndarray:
    c = np.asarray(curves)
    if c.ndim == 1:
        c = c[None, :]
    if c.ndim != 2 or c.shape[1] != LEVELS:
        raise ValueError(f"Curves must have shape (256,) or (T, 256), got {np.shape(curves)}.")
    return c.astype(np.uint8, copy=False)


def save_curves(path: Union[str, os.PathLike], curves: np.ndarray) -> str:
    """Write one curve or a (T, 256) stack of curves; format follows the suffix."""
    path = os.fspath(path)
    ext = os.path.splitext(path)[1].lower()
    c = _as_curves(curves)
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)

    if ext == ".npy":
        np.save(path, c if np.ndim(curves) == 2 else c[0])
    elif ext == ".csv":
        with open(path, "w", newline="") as fw:
            w = csv.writer(fw)
            w.writerow(["frame"] + [str(i) for i in range(LEVELS)])
            for t, row in enumerate(c):
                w.writerow([t] + [int(v) for v in row])
    else:
        raise ValueError(f"Unsupported curve format {ext!r}; use .npy or .csv")
    return path


def load_curves(path: Union[str, os.PathLike]) -> np.ndarray:
    """Read curves written by `save_curves`. CSV input always yields (T, 256)."""
    path = os.fspath(path)
    ext = os.path.splitext(path)[1].lower()
    if ext == ".npy":
        c = np.load(path)
        if c.shape[-1] != LEVELS or c.ndim not in (1, 2):
            raise ValueError(f"{path}: not a curve array (shape {c.shape}).")
        return c.astype(np.uint8, copy=False)
    if ext == ".csv":
        with open(path, newline="") as fr:
            rows = list(csv.reader(fr))
        if not rows or len(rows[0]) != LEVELS + 1:
            raise ValueError(f"{path}: expected a header with {LEVELS + 1} columns.")
        data = [[int(v) for v in r[1:]] for r in rows[1:] if r]
        return np.asarray(data, dtype=np.uint8).reshape(-1, LEVELS)
    raise ValueError(f"Unsupported curve format {ext!r}; use .npy or .csv")
