# -*- coding: utf-8 -*-
"""
matchhist.frames
================

Planar frame model and the MatchHistogram processing unit.

Public API
----------
- PlanarFormat, GRAY8, YUV420P8, ... : format descriptors
- Frame, ClipInfo                    : frame data and clip description
- plane_from_buffer                  : strided uint8 view over a raw buffer
- MatchHistogram, MatchHistogramConfig, ConfigurationError

Typical usage
-------------
>>> from matchhist.frames import MatchHistogram, MatchHistogramConfig, Frame, YUV420P8
>>> mh = MatchHistogram(f1.info, f2.info, config=MatchHistogramConfig(planes=[0, 1, 2]))
>>> out = mh.get_frame(f1, f2)
"""

from __future__ import annotations

from .formats import (
    PlanarFormat,
    GRAY8,
    YUV420P8,
    YUV422P8,
    YUV444P8,
    YUV420P10,
    RGB24,
)
from .frame import ClipInfo, Frame, plane_from_buffer
from .matcher import ConfigurationError, MatchHistogramConfig, MatchHistogram

__all__ = [
    "PlanarFormat",
    "GRAY8",
    "YUV420P8",
    "YUV422P8",
    "YUV444P8",
    "YUV420P10",
    "RGB24",
    "ClipInfo",
    "Frame",
    "plane_from_buffer",
    "ConfigurationError",
    "MatchHistogramConfig",
    "MatchHistogram",
]
