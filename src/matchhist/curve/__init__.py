"""
matchhist.curve
===============

Histogram-matching curve engine.

Modules
-------
accumulate  : Conditional-mean accumulation and the raw curve.
postprocess : Uniform-source collapse, gap fill, boundary extrapolation, smoothing.
build       : One-call curve construction (raw or refined).
apply       : Lookup-table remapping of 8-bit planes.

Design
------
- Every function is pure: inputs are never modified (except an explicit
  `out` destination) and returned tables are read-only.
- A curve is a (256,) uint8 array; index = key level, value = matched level.

Typical defaults
----------------
- smoothing_window = 8 (box over offsets [-8, 8)).
"""

# Short imports for public API
from .accumulate import CurveData, round_divide, accumulate, raw_curve
from .postprocess import (
    uniform_index,
    collapse_uniform,
    interpolate_gaps,
    extrapolate_boundaries,
    smooth_curve,
    postprocess,
)
from .build import build_curve, build_curve_data
from .apply import apply_curve, identity_curve

__all__ = [
    # types
    "CurveData",
    # functions
    "round_divide",
    "accumulate",
    "raw_curve",
    "uniform_index",
    "collapse_uniform",
    "interpolate_gaps",
    "extrapolate_boundaries",
    "smooth_curve",
    "postprocess",
    "build_curve",
    "build_curve_data",
    "apply_curve",
    "identity_curve",
]
