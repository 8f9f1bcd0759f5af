"""Tests for lookup-table application."""

from __future__ import annotations

import numpy as np
import pytest

from matchhist.curve.apply import apply_curve, identity_curve
from matchhist.frames import plane_from_buffer


class TestApplyCurve:
    def test_identity_round_trip(self, random_plane: np.ndarray) -> None:
        out = apply_curve(identity_curve(), random_plane)
        np.testing.assert_array_equal(out, random_plane)
        assert out is not random_plane

    def test_inverting_curve(self, random_plane: np.ndarray) -> None:
        curve = (255 - np.arange(256)).astype(np.uint8)
        out = apply_curve(curve, random_plane)
        np.testing.assert_array_equal(out, 255 - random_plane)

    def test_in_place(self, random_plane: np.ndarray) -> None:
        curve = np.full(256, 7, dtype=np.uint8)
        plane = random_plane.copy()
        res = apply_curve(curve, plane, out=plane)
        assert res is plane
        assert np.all(plane == 7)

    def test_separate_destination(self, random_plane: np.ndarray) -> None:
        dst = np.zeros_like(random_plane)
        curve = (np.arange(256) // 2).astype(np.uint8)
        apply_curve(curve, random_plane, out=dst)
        np.testing.assert_array_equal(dst, random_plane // 2)

    def test_stack(self, u8_stack: np.ndarray) -> None:
        curve = (255 - np.arange(256)).astype(np.uint8)
        out = apply_curve(curve, u8_stack)
        assert out.shape == u8_stack.shape
        np.testing.assert_array_equal(out, 255 - u8_stack)

    def test_strided_view_in_place(self) -> None:
        buf = bytearray(range(4)) * 6            # 3 rows, stride 8, width 5
        plane = plane_from_buffer(buf, width=5, height=3, stride=8)
        curve = np.full(256, 200, dtype=np.uint8)
        apply_curve(curve, plane, out=plane)
        rows = [buf[r * 8:(r + 1) * 8] for r in range(3)]
        for row in rows:
            assert list(row[:5]) == [200] * 5
            assert list(row[5:]) == [1, 2, 3]     # padding untouched

    def test_bad_curve_shape(self, random_plane: np.ndarray) -> None:
        with pytest.raises(ValueError, match="shape"):
            apply_curve(np.arange(10, dtype=np.uint8), random_plane)

    def test_bad_destination(self, random_plane: np.ndarray) -> None:
        with pytest.raises(ValueError, match="Destination"):
            apply_curve(identity_curve(), random_plane, out=np.zeros((2, 2), np.uint8))

    def test_rejects_wide_samples(self) -> None:
        with pytest.raises(ValueError, match="uint8"):
            apply_curve(identity_curve(), np.zeros((4, 4), np.uint16))

    @pytest.mark.parametrize("shape", [(0, 5), (5, 0), (0, 4, 4), (2, 0, 3)])
    def test_empty_source(self, shape) -> None:
        src = np.zeros(shape, dtype=np.uint8)
        out = apply_curve(identity_curve(), src)
        assert out.shape == shape and out.dtype == np.uint8
        dst = np.zeros(shape, dtype=np.uint8)
        assert apply_curve(identity_curve(), src, out=dst) is dst
