# -*- coding: utf-8 -*-
"""Public I/O API for matchhist.io."""
from .readers import read_tiff_stack, read_tiff_memmap, iter_tiff_blocks
from .writers import write_tiff_stack, TiffStreamWriter
from .curves import save_curves, load_curves

__all__ = [
    "read_tiff_stack",
    "read_tiff_memmap",
    "iter_tiff_blocks",
    "write_tiff_stack",
    "TiffStreamWriter",
    "save_curves",
    "load_curves",
]
