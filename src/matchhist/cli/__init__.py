"""
matchhist.cli
=============

Command-line entrypoints:
- Histogram matching of TIFF stacks (match_cli)

Re-exports
----------
from matchhist.cli import run_match, match_main, match_cli
"""

from .match_cli import run_match as run_match, main as match_main

import importlib as _importlib
match_cli = _importlib.import_module(".match_cli", __name__)

__all__ = [
    # functions
    "run_match", "match_main",
    # modules
    "match_cli",
]
