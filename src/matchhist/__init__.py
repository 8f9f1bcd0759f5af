# --- file: matchhist/__init__.py ---
__all__ = [
    "cli",
    "curve",
    "frames",
    "io",
    "render",
    "summary",
]

__version__ = "0.1.0"
