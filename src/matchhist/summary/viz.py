# --- file: matchhist/summary/viz.py ---
"""
Curve plots for QC and reports.
All functions return the Matplotlib figure handle for further customization/saving.
"""

from __future__ import annotations
from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt

from matchhist.curve.accumulate import LEVELS


def plot_curve(curve: np.ndarray, ax=None, title: str = "Matching curve", label: Optional[str] = None):
    """Curve against the identity diagonal, both axes 0..255."""
    c = np.asarray(curve)
    if c.shape != (LEVELS,):
        raise ValueError(f"Curve must have shape ({LEVELS},), got {c.shape}.")
    if ax is None:
        fig, ax = plt.subplots(figsize=(5, 5))
    else:
        fig = ax.figure
    x = np.arange(LEVELS)
    ax.plot(x, x, color="0.7", lw=1, ls="--", label="identity")
    ax.plot(x, c, lw=1.5, label=label)
    ax.set_xlim(0, LEVELS - 1); ax.set_ylim(0, LEVELS - 1)
    ax.set_xlabel("input level"); ax.set_ylabel("output level")
    ax.set_title(title); ax.set_aspect("equal")
    return fig


def plot_curves(curves: np.ndarray, labels: Optional[Sequence[str]] = None, title: str = "Matching curves"):
    """Overlay a (T, 256) stack of curves (e.g. per frame or per plane)."""
    cs = np.atleast_2d(np.asarray(curves))
    if cs.ndim != 2 or cs.shape[1] != LEVELS:
        raise ValueError(f"Curves must have shape (T, {LEVELS}), got {np.shape(curves)}.")
    labels = list(labels) if labels is not None else [None] * cs.shape[0]
    if len(labels) != cs.shape[0]:
        raise ValueError("labels must match the number of curves")

    fig, ax = plt.subplots(figsize=(5, 5))
    plot_curve(cs[0], ax=ax, title=title, label=labels[0])
    x = np.arange(LEVELS)
    for c, lab in zip(cs[1:], labels[1:]):
        ax.plot(x, c, lw=1.0, label=lab)
    if any(lab is not None for lab in labels):
        ax.legend(loc="lower right", fontsize=8)
    plt.tight_layout()
    return fig
