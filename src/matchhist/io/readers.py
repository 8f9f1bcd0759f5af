# -*- coding: utf-8 -*-
"""
readers.py — 8-bit TIFF readers: memmap, full-RAM imread, block streaming.
Stacks are returned in (T, Y, X) orientation with dtype uint8.
"""
from __future__ import annotations
import os
from typing import Iterator, Optional, Tuple

import numpy as np
import tifffile as tiff
from tifffile import TiffFile

from .formats import _to_tyx, _guess_tyx_from_shape, _require_u8

__all__ = ["read_tiff_memmap", "iter_tiff_blocks", "read_tiff_stack"]

# ---- low-level readers ------------------------------------------------------

def read_tiff_memmap(path: str, as_TYX: bool = True) -> np.ndarray:
    """
    Memmap the whole TIFF stack. Raises ValueError if the file is not a single
    contiguous stack series (e.g., many separate pages, compressed, tiled).
    """
    with TiffFile(path) as tif:
        total_pages = len(tif.pages)
        ser0 = tif.series[0]
        axes = getattr(ser0, "axes", "")
        is_stack_series = (len(ser0.shape) == 3) or ("T" in axes) or ("I" in axes)
        if total_pages > 1 and not is_stack_series:
            raise ValueError("TIFF has multiple pages but no contiguous stack series.")
    try:
        a = tiff.memmap(path, mode="r")
    except ValueError as e:
        raise ValueError("TIFF is not memory-mappable (compressed/tiling/non-contiguous).") from e
    _require_u8(a, path)
    return _to_tyx(a, axes) if as_TYX else a

def iter_tiff_blocks(
    path: str, block: int = 64, as_TYX: bool = True
) -> Iterator[Tuple[int, int, np.ndarray]]:
    """
    Stream frames in temporal blocks.

    Yields
    ------
    (start, end, arr): arr has shape (end - start, Y, X), dtype uint8.
    """
    if block <= 0:
        raise ValueError("block must be > 0")

    with TiffFile(path) as tif:
        ser0 = tif.series[0]
        if len(ser0.shape) == 3:
            T, _, _, stored_yxt = _guess_tyx_from_shape(ser0.shape, getattr(ser0, "axes", ""))
        else:
            # one page per frame
            T, stored_yxt = len(tif.pages), False

    if stored_yxt:
        # frames sit on the last axis inside each page; read once, slice in time
        full = _require_u8(np.asarray(tiff.imread(path)), path)
        for cur in range(0, T, block):
            end = min(T, cur + block)
            arr = full[..., cur:end]
            yield (cur, end, np.moveaxis(arr, -1, 0) if as_TYX else arr)
        return

    cur = 0
    while cur < T:
        end = min(T, cur + block)
        arr = np.asarray(tiff.imread(path, key=range(cur, end)))
        _require_u8(arr, path)
        yield (cur, end, _to_tyx(arr, "IYX") if as_TYX else arr)
        cur = end

# ---- high-level API ---------------------------------------------------------

def read_tiff_stack(
    path: str,
    *,
    method: str = "auto",             # "auto" | "memmap" | "imread"
    max_frames: Optional[int] = None,
    verbose: bool = True,
) -> np.ndarray:
    """
    Read an 8-bit TIFF stack as (T, Y, X) uint8.

    Tries a read-only memmap first and falls back to a full imread for
    compressed or tiled files. `max_frames` truncates the returned stack.
    """
    path = os.path.abspath(path)

    if method not in ("auto", "memmap", "imread"):
        raise ValueError("method must be one of {'auto','memmap','imread'}")

    a = None
    if method in ("auto", "memmap"):
        try:
            a = read_tiff_memmap(path, as_TYX=True)
            if verbose:
                print("[I/O] Using memmap:", path)
        except ValueError:
            if method == "memmap":
                raise

    if a is None:
        if verbose:
            print("[I/O] Using full-RAM imread:", path)
        with TiffFile(path) as tif:
            n_pages = len(tif.pages)
            axes = getattr(tif.series[0], "axes", "")
        a = _require_u8(np.asarray(tiff.imread(path, key=slice(None))), path)
        # several 2D pages come back stacked page-first
        a = _to_tyx(a, "IYX" if n_pages > 1 and a.ndim == 3 else axes)

    if max_frames is not None:
        a = a[:max_frames]
    return a
