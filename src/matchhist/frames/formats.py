# -*- coding: utf-8 -*-
"""
formats.py — planar sample formats and per-plane geometry.
No pixel data here, only descriptors shared by frames and the matcher.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

__all__ = [
    "PlanarFormat",
    "GRAY8",
    "YUV420P8",
    "YUV422P8",
    "YUV444P8",
    "YUV420P10",
    "RGB24",
]


@dataclass(frozen=True)
class PlanarFormat:
    """Planar format: color family, sample depth, plane count and chroma subsampling (log2)."""
    name: str
    color_family: str          # "gray" | "yuv" | "rgb"
    bits_per_sample: int
    num_planes: int
    subsampling_w: int = 0
    subsampling_h: int = 0

    def plane_size(self, plane: int, width: int, height: int) -> Tuple[int, int]:
        """(width, height) of `plane` for a frame of width×height."""
        if not 0 <= plane < self.num_planes:
            raise ValueError(f"Plane {plane} out of range for {self.name} ({self.num_planes} planes).")
        if plane == 0:
            return width, height
        return width >> self.subsampling_w, height >> self.subsampling_h


GRAY8 = PlanarFormat("GRAY8", "gray", 8, 1)
YUV420P8 = PlanarFormat("YUV420P8", "yuv", 8, 3, 1, 1)
YUV422P8 = PlanarFormat("YUV422P8", "yuv", 8, 3, 1, 0)
YUV444P8 = PlanarFormat("YUV444P8", "yuv", 8, 3, 0, 0)
YUV420P10 = PlanarFormat("YUV420P10", "yuv", 10, 3, 1, 1)
RGB24 = PlanarFormat("RGB24", "rgb", 8, 3, 0, 0)
