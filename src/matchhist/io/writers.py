# -*- coding: utf-8 -*-
"""
writers.py — TIFF writing utilities: streaming writer and whole-stack writer.
Always writes 8-bit stacks in (T, Y, X) orientation.
"""
from __future__ import annotations
import os
from typing import Optional
import numpy as np
import tifffile as tiff
from tifffile import TiffWriter

from .formats import _to_tyx, _needs_bigtiff

__all__ = ["TiffStreamWriter", "write_tiff_stack"]

class TiffStreamWriter:
    """Append uint8 frames to a TIFF stack (context manager)."""
    def __init__(
        self,
        path: str,
        bigtiff: bool = False,
        compress: bool = True,
    ):
        self.path = path
        self.bigtiff = bool(bigtiff)
        self.compress = bool(compress)
        self.frames_written = 0
        self._tw: TiffWriter | None = None
        os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)

    def __enter__(self):
        self._tw = TiffWriter(self.path, bigtiff=self.bigtiff)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._tw is not None:
            self._tw.close()
        self._tw = None

    def write(self, frame: np.ndarray):
        """Append a single 2D frame (Y, X)."""
        if self._tw is None:
            raise RuntimeError("TiffStreamWriter not opened; use as a context manager.")
        f = np.asarray(frame)
        if f.ndim != 2:
            raise ValueError("Each written frame must be 2D (Y, X).")
        if f.dtype != np.uint8:
            raise ValueError(f"Each written frame must be uint8, got {f.dtype}.")
        self._tw.write(
            np.ascontiguousarray(f),
            compression=("deflate" if self.compress else None),
            photometric="minisblack",
        )
        self.frames_written += 1

def write_tiff_stack(
    path: str,
    arr: np.ndarray,
    bigtiff: Optional[bool] = None,
    compress: bool = False,
):
    """Write a (T, Y, X) or single (Y, X) uint8 stack to one TIFF file (uncompressed by default, memmap-able)."""
    a = _to_tyx(np.asarray(arr), "TYX")
    if a.dtype != np.uint8:
        raise ValueError(f"Stack must be uint8, got {a.dtype}.")
    if bigtiff is None:
        bigtiff = _needs_bigtiff(a)

    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)
    tiff.imwrite(
        path,
        a,
        bigtiff=bool(bigtiff),
        compression=("deflate" if compress else None),
        metadata={"axes": "TYX"},
        photometric="minisblack",
    )
