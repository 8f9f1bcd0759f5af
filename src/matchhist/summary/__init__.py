"""
matchhist.summary
=================

Lightweight visualizations of matching curves for inspection.

Modules
-------
viz : Curve plots (single curve or overlaid stack) against the identity line.

Guidelines
----------
- Summary products are for QC/visualization; they do not alter curves or frames.
"""

from .viz import plot_curve, plot_curves

import importlib as _importlib
viz = _importlib.import_module(".viz", __name__)

__all__ = [
    # functions
    "plot_curve",
    "plot_curves",
    # modules
    "viz",
]
