# -*- coding: utf-8 -*-
"""
MatchHistogram processing unit.

Modify clip1's histogram to match clip2's, frame by frame, and write the
remapped planes of clip3 (defaults to clip1). Clips must be pixel aligned
for a coherent result; only planar 8-bit non-RGB formats are accepted.

Options
-------
planes [default (0,)] : plane indices to process (0 = luma, 1/2 = chroma)
raw    [default False]: use the conditional-mean curve without refinement
show   [default False]: overlay the curve in the top-left 256×256 corner
debug  [default False]: output a 256×256 frame with the curve bar chart

Typical usage
-------------
>>> mh = MatchHistogram(info1, info2, config=MatchHistogramConfig(show=True))
>>> out = mh.get_frame(f1, f2)
"""

from __future__ import annotations
import warnings
from dataclasses import dataclass, replace
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from matchhist.curve import apply_curve, build_curve
from matchhist.curve.accumulate import LEVELS
from matchhist.render import (
    DEBUG_BACKGROUND,
    SHOW_BACKGROUND,
    SHOW_COLORS,
    fill_plane,
    overlay_curve,
    render_debug,
)

from .frame import ClipInfo, Frame

__all__ = ["ConfigurationError", "MatchHistogramConfig", "MatchHistogram"]


class ConfigurationError(ValueError):
    """Invalid clip/option combination detected before any frame is processed."""


@dataclass(frozen=True)
class MatchHistogramConfig:
    raw: bool = False
    show: bool = False
    debug: bool = False
    smoothing_window: int = 8
    planes: Optional[Sequence[int]] = None   # None -> (0,)


def _fail(msg: str) -> None:
    raise ConfigurationError(f"MatchHistogram: {msg}")


class MatchHistogram:
    """
    Validated, immutable per-frame histogram matcher.

    Construction raises `ConfigurationError` on the first violated rule;
    `get_frame` is a pure function of its input frames.
    """

    def __init__(
        self,
        clip1: ClipInfo,
        clip2: ClipInfo,
        clip3: Optional[ClipInfo] = None,
        config: MatchHistogramConfig = MatchHistogramConfig(),
    ):
        cfg = config
        if cfg.debug and cfg.show:
            warnings.warn("MatchHistogram: show is ignored when debug is True.", UserWarning)
            cfg = replace(cfg, show=False)

        if cfg.smoothing_window < 0:
            _fail("smoothing_window must not be negative.")

        clip3 = clip1 if clip3 is None else clip3

        if clip1.format != clip2.format or clip1.format != clip3.format:
            _fail("the clips must have the same format.")

        if clip1.width != clip2.width or clip1.height != clip2.height:
            _fail("the first two clips must have the same dimensions.")

        if not (clip1.is_constant and clip3.is_constant):
            _fail("the clips must have constant format and dimensions.")

        fmt = clip1.format
        if fmt.color_family == "rgb" or fmt.bits_per_sample > 8:
            _fail("the clips must have 8 bits per sample and must not be RGB.")

        process = [False] * fmt.num_planes
        if not cfg.planes:
            process[0] = True
        else:
            for o in cfg.planes:
                o = int(o)
                if o < 0 or o >= fmt.num_planes:
                    _fail("plane index out of range.")
                if process[o]:
                    _fail("plane specified twice.")
                process[o] = True

        if cfg.show and (clip1.width < LEVELS or clip1.height < LEVELS
                         or clip3.width < LEVELS or clip3.height < LEVELS):
            _fail("clips must be at least 256x256 pixels when show is True.")

        if cfg.debug:
            if sum(process) > 1:
                _fail("only one plane can be processed at a time when debug is True.")
            self.output_info = ClipInfo(fmt, LEVELS, LEVELS)
        else:
            self.output_info = clip3

        self.config = cfg
        self.clip1 = clip1
        self.clip2 = clip2
        self.clip3 = clip3
        self.process: Tuple[bool, ...] = tuple(process)

    # ------------------------------------------------------------------ #

    @property
    def planes(self) -> Tuple[int, ...]:
        return tuple(i for i, p in enumerate(self.process) if p)

    def _check_frame(self, frame: Frame, info: ClipInfo, name: str) -> None:
        if frame.format != info.format or frame.width != info.width or frame.height != info.height:
            raise ValueError(
                f"{name}: frame {frame.format.name} {frame.width}x{frame.height} does not match "
                f"clip {info.format.name} {info.width}x{info.height}."
            )

    def curve_for_plane(self, frame1: Frame, frame2: Frame, plane: int) -> np.ndarray:
        """Matching curve for one plane of a frame pair."""
        return build_curve(
            frame1.planes[plane],
            frame2.planes[plane],
            raw=self.config.raw,
            smoothing_window=self.config.smoothing_window,
        )

    def get_frame(self, frame1: Frame, frame2: Frame, frame3: Optional[Frame] = None) -> Frame:
        """
        Produce one output frame.

        Parameters
        ----------
        frame1 : Frame
            Key frame (the histogram to be modified).
        frame2 : Frame
            Value frame (the histogram to match).
        frame3 : Frame or None
            Target frame to remap; defaults to `frame1`. Ignored in debug mode.
        """
        return self.get_frame_with_curves(frame1, frame2, frame3)[0]

    def get_frame_with_curves(
        self, frame1: Frame, frame2: Frame, frame3: Optional[Frame] = None
    ) -> Tuple[Frame, Dict[int, np.ndarray]]:
        """Like `get_frame`, also returning the curve built for each processed plane."""
        self._check_frame(frame1, self.clip1, "clip1")
        self._check_frame(frame2, self.clip2, "clip2")
        curves = {p: self.curve_for_plane(frame1, frame2, p) for p in self.planes}
        if self.config.debug:
            return self._debug_frame(curves), curves

        frame3 = frame1 if frame3 is None else frame3
        self._check_frame(frame3, self.clip3, "clip3")
        fmt = frame3.format
        dst = frame3.copy()

        for plane in range(fmt.num_planes):
            curve = curves.get(plane)
            if curve is not None:
                apply_curve(curve, frame3.planes[plane], out=dst.planes[plane])

            if self.config.show:
                ssw = fmt.subsampling_w if plane else 0
                ssh = fmt.subsampling_h if plane else 0
                fill_plane(dst.planes[plane], SHOW_BACKGROUND[plane], LEVELS >> ssw, LEVELS >> ssh)
                if curve is not None:
                    overlay_curve(dst.planes[0], curve, SHOW_COLORS[plane])

        return dst, curves

    def _debug_frame(self, curves: Dict[int, np.ndarray]) -> Frame:
        dst = Frame.blank(self.output_info.format, LEVELS, LEVELS)
        for plane in range(dst.format.num_planes):
            fill_plane(dst.planes[plane], DEBUG_BACKGROUND[plane])
            if plane in curves:
                render_debug(dst.planes[0], curves[plane])
        return dst
