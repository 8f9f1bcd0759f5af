"""Test configuration and fixtures."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from matchhist.frames import GRAY8, YUV420P8, Frame


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def random_plane(rng: np.random.Generator) -> np.ndarray:
    """64x48 uint8 plane covering most levels."""
    return rng.integers(0, 256, size=(48, 64), dtype=np.uint8)


@pytest.fixture
def gray_frame_256(rng: np.random.Generator) -> Frame:
    """256x256 GRAY8 frame."""
    plane = rng.integers(0, 256, size=(256, 256), dtype=np.uint8)
    return Frame.from_planes(GRAY8, [plane])


@pytest.fixture
def yuv_frame(rng: np.random.Generator) -> Frame:
    """64x64 YUV420P8 frame (chroma planes 32x32)."""
    y = rng.integers(16, 236, size=(64, 64), dtype=np.uint8)
    u = rng.integers(64, 192, size=(32, 32), dtype=np.uint8)
    v = rng.integers(64, 192, size=(32, 32), dtype=np.uint8)
    return Frame.from_planes(YUV420P8, [y, u, v])


@pytest.fixture
def u8_stack(rng: np.random.Generator) -> np.ndarray:
    """(T, Y, X) = (3, 32, 40) uint8 stack."""
    return rng.integers(0, 256, size=(3, 32, 40), dtype=np.uint8)
