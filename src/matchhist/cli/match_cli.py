# --- file: matchhist/cli/match_cli.py ---
"""
Batch histogram matching of 8-bit grayscale TIFF stacks.

Usage
-----
python -m matchhist.cli.match_cli \
  --key "D:/data/*_raw.tif" \
  --value D:/data/reference.tif \
  --outdir D:/data/_matched \
  --smoothing-window 8 --save-curves csv --plot

Notes
-----
- Frame t of each key stack is matched against frame t of the value stack;
  stacks are truncated to the shorter length.
- --target remaps a third stack with the curves derived from key/value.
- --debug writes 256x256 curve renderings instead of remapped frames.

Outputs
-------
- <name>_matched_u8.tiff (or <name>_debug_u8.tiff)
- <name>_curves.csv / .npy  (one 256-entry curve per frame, if --save-curves)
- <name>_curves.png         (if --plot)
"""

from __future__ import annotations
import os
import sys
import glob
import argparse
from typing import Optional

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from tqdm import tqdm

from matchhist.frames import (
    GRAY8,
    ClipInfo,
    ConfigurationError,
    Frame,
    MatchHistogram,
    MatchHistogramConfig,
)
from matchhist.io import read_tiff_stack, save_curves, TiffStreamWriter
from matchhist.summary import plot_curves


def _basename_noext(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def _clip_info(stack: np.ndarray) -> ClipInfo:
    return ClipInfo(GRAY8, int(stack.shape[2]), int(stack.shape[1]))


def run_match(
    key_path: str,
    value_path: str,
    outdir: str,
    target_path: Optional[str] = None,
    *,
    raw: bool = False,
    show: bool = False,
    debug: bool = False,
    smoothing_window: int = 8,
    save_curves_as: str = "none",    # "none" | "csv" | "npy"
    plot: bool = False,
    max_frames: Optional[int] = None,
    progress: bool = True,
    verbose: bool = True,
) -> dict:
    """
    Match one key stack against a value stack and write the results.

    Raises
    ------
    ConfigurationError
        If the stacks/options are rejected by `MatchHistogram`.
    """
    if save_curves_as not in ("none", "csv", "npy"):
        raise ValueError("save_curves_as must be one of {'none','csv','npy'}")

    key = read_tiff_stack(key_path, max_frames=max_frames, verbose=verbose)
    value = read_tiff_stack(value_path, max_frames=max_frames, verbose=verbose)
    target = key if target_path is None else read_tiff_stack(target_path, max_frames=max_frames, verbose=verbose)

    cfg = MatchHistogramConfig(raw=raw, show=show, debug=debug, smoothing_window=smoothing_window)
    mh = MatchHistogram(_clip_info(key), _clip_info(value), _clip_info(target), config=cfg)

    T = min(key.shape[0], value.shape[0], target.shape[0])
    if verbose and T < max(key.shape[0], value.shape[0], target.shape[0]):
        print(f"[WARN] stack lengths differ; processing the first {T} frames")

    base = os.path.join(outdir, _basename_noext(key_path))
    out_path = base + ("_debug_u8.tiff" if debug else "_matched_u8.tiff")
    want_curves = save_curves_as != "none" or plot
    curves = np.zeros((T, 256), dtype=np.uint8) if want_curves else None

    rng = range(T)
    if progress:
        rng = tqdm(rng, desc="[match]", file=sys.stdout)

    with TiffStreamWriter(out_path, compress=False) as tw:
        for t in rng:
            f1 = Frame.from_planes(GRAY8, [key[t]])
            f2 = Frame.from_planes(GRAY8, [value[t]])
            f3 = None if target_path is None else Frame.from_planes(GRAY8, [target[t]])
            out, plane_curves = mh.get_frame_with_curves(f1, f2, f3)
            tw.write(out.planes[0])
            if curves is not None:
                curves[t] = plane_curves[0]

    stats = {
        "file": os.path.basename(key_path),
        "T": int(T),
        "H": int(key.shape[1]),
        "W": int(key.shape[2]),
        "output": os.path.basename(out_path),
        "raw": bool(raw),
        "smoothing_window": int(smoothing_window),
        "curves": None,
        "png": None,
    }

    if save_curves_as != "none":
        stats["curves"] = os.path.basename(save_curves(base + f"_curves.{save_curves_as}", curves))

    if plot:
        labels = [f"t={t}" for t in range(T)] if T <= 8 else None
        fig = plot_curves(curves, labels=labels, title=_basename_noext(key_path))
        png_path = base + "_curves.png"
        fig.savefig(png_path, dpi=150)
        plt.close(fig)
        stats["png"] = os.path.basename(png_path)

    return stats


def main(argv=None):
    ap = argparse.ArgumentParser(description="Match 8-bit TIFF stack histograms frame by frame.")
    ap.add_argument("--key", required=True, help="Glob of stacks to modify, e.g. D:/data/*.tif")
    ap.add_argument("--value", required=True, help="Reference stack whose histogram is matched")
    ap.add_argument("--target", default=None, help="Optional stack to remap instead of the key stack")
    ap.add_argument("--outdir", required=True, help="Output directory")

    ap.add_argument("--raw", action="store_true", help="Skip curve refinement")
    ap.add_argument("--show", action="store_true", help="Overlay the curve in the top-left corner")
    ap.add_argument("--debug", action="store_true", help="Write 256x256 curve renderings")
    ap.add_argument("--smoothing-window", type=int, default=8, dest="smoothing_window")

    ap.add_argument("--save-curves", choices=["none", "csv", "npy"], default="none", dest="save_curves_as")
    ap.add_argument("--plot", action="store_true", help="Save a PNG of the per-frame curves")
    ap.add_argument("--max-frames", type=int, default=None, dest="max_frames")
    ap.add_argument("--no-progress", action="store_false", dest="progress")
    args = ap.parse_args(argv)

    files = sorted(glob.glob(args.key))
    if not files:
        raise SystemExit(f"No files match: {args.key}")

    rows = []
    for f in files:
        print(f"[match] {f}")
        try:
            rows.append(
                run_match(
                    f,
                    args.value,
                    args.outdir,
                    args.target,
                    raw=args.raw,
                    show=args.show,
                    debug=args.debug,
                    smoothing_window=args.smoothing_window,
                    save_curves_as=args.save_curves_as,
                    plot=args.plot,
                    max_frames=args.max_frames,
                    progress=args.progress,
                )
            )
        except ConfigurationError as e:
            raise SystemExit(str(e))
        print(f"[OK] {f} -> {rows[-1]['output']}")


if __name__ == "__main__":
    main()
