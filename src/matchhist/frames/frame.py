# -*- coding: utf-8 -*-
"""
Planar frames, clip descriptors and strided plane views.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .formats import PlanarFormat

__all__ = ["ClipInfo", "Frame", "plane_from_buffer"]


def plane_from_buffer(buffer, width: int, height: int, stride: int) -> np.ndarray:
    """
    Zero-copy (height, width) uint8 view over a row-padded buffer.

    The view is writable when `buffer` is (bytearray, writable ndarray,
    memoryview); rows are `stride` bytes apart.
    """
    width, height, stride = int(width), int(height), int(stride)
    if width <= 0 or height <= 0:
        raise ValueError(f"Plane dimensions must be positive, got {width}x{height}.")
    if stride < width:
        raise ValueError(f"stride ({stride}) must be >= width ({width}).")
    mv = memoryview(buffer)
    need = stride * (height - 1) + width
    if mv.nbytes < need:
        raise ValueError(f"Buffer holds {mv.nbytes} bytes, plane needs {need}.")
    return np.ndarray(
        shape=(height, width),
        dtype=np.uint8,
        buffer=mv.cast("B") if mv.format != "B" else mv,
        strides=(stride, 1),
    )


@dataclass(frozen=True)
class ClipInfo:
    """Clip-level description. `format=None` or a zero dimension means variable."""
    format: Optional[PlanarFormat]
    width: int
    height: int

    @property
    def is_constant(self) -> bool:
        return self.format is not None and self.width > 0 and self.height > 0


@dataclass
class Frame:
    """One frame: a list of 2D uint8 planes in `format` layout."""
    format: PlanarFormat
    planes: List[np.ndarray]

    @property
    def width(self) -> int:
        return int(self.planes[0].shape[1])

    @property
    def height(self) -> int:
        return int(self.planes[0].shape[0])

    @property
    def info(self) -> ClipInfo:
        return ClipInfo(self.format, self.width, self.height)

    @classmethod
    def blank(cls, fmt: PlanarFormat, width: int, height: int) -> "Frame":
        planes = []
        for p in range(fmt.num_planes):
            w, h = fmt.plane_size(p, width, height)
            planes.append(np.zeros((h, w), dtype=np.uint8))
        return cls(fmt, planes)

    @classmethod
    def from_planes(cls, fmt: PlanarFormat, planes: Sequence[np.ndarray]) -> "Frame":
        """Wrap existing planes (no copy), checking count, dtype and subsampled shapes."""
        if len(planes) != fmt.num_planes:
            raise ValueError(f"{fmt.name} expects {fmt.num_planes} planes, got {len(planes)}.")
        planes = [np.asarray(p) for p in planes]
        for p in planes:
            if p.ndim != 2 or p.dtype != np.uint8:
                raise ValueError(f"Planes must be 2D uint8, got {p.ndim}D {p.dtype}.")
        height, width = planes[0].shape
        for i, p in enumerate(planes):
            w, h = fmt.plane_size(i, width, height)
            if p.shape != (h, w):
                raise ValueError(f"Plane {i} has shape {p.shape}, expected {(h, w)}.")
        return cls(fmt, list(planes))

    def copy(self) -> "Frame":
        return Frame(self.format, [p.copy() for p in self.planes])
