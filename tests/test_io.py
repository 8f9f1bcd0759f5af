"""Tests for TIFF stack I/O and curve export."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import tifffile

from matchhist.io import (
    TiffStreamWriter,
    iter_tiff_blocks,
    load_curves,
    read_tiff_stack,
    save_curves,
    write_tiff_stack,
)
from matchhist.io.formats import _to_tyx


class TestTiffStacks:
    def test_write_then_read(self, tmp_path: Path, u8_stack: np.ndarray) -> None:
        path = tmp_path / "stack.tif"
        write_tiff_stack(str(path), u8_stack)
        back = read_tiff_stack(str(path), verbose=False)
        assert back.dtype == np.uint8
        np.testing.assert_array_equal(np.asarray(back), u8_stack)

    def test_imread_fallback_for_compressed(self, tmp_path: Path, u8_stack: np.ndarray) -> None:
        path = tmp_path / "stack_deflate.tif"
        write_tiff_stack(str(path), u8_stack, compress=True)
        back = read_tiff_stack(str(path), verbose=False)
        np.testing.assert_array_equal(back, u8_stack)

    def test_memmap_only_rejects_compressed(self, tmp_path: Path, u8_stack: np.ndarray) -> None:
        path = tmp_path / "stack_deflate.tif"
        write_tiff_stack(str(path), u8_stack, compress=True)
        with pytest.raises(ValueError):
            read_tiff_stack(str(path), method="memmap", verbose=False)

    def test_max_frames(self, tmp_path: Path, u8_stack: np.ndarray) -> None:
        path = tmp_path / "stack.tif"
        write_tiff_stack(str(path), u8_stack)
        back = read_tiff_stack(str(path), max_frames=2, verbose=False)
        assert back.shape == (2, 32, 40)

    def test_rejects_16_bit(self, tmp_path: Path) -> None:
        path = tmp_path / "wide.tif"
        tifffile.imwrite(str(path), np.zeros((2, 8, 8), dtype=np.uint16))
        with pytest.raises(ValueError, match="8-bit"):
            read_tiff_stack(str(path), verbose=False)

    def test_write_rejects_float(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="uint8"):
            write_tiff_stack(str(tmp_path / "f.tif"), np.zeros((2, 4, 4), np.float32))

    def test_stream_writer(self, tmp_path: Path, u8_stack: np.ndarray) -> None:
        path = tmp_path / "streamed.tif"
        with TiffStreamWriter(str(path)) as tw:
            for frame in u8_stack:
                tw.write(frame)
        assert tw.frames_written == 3
        back = read_tiff_stack(str(path), verbose=False)
        np.testing.assert_array_equal(back, u8_stack)

    def test_stream_writer_requires_context(self, tmp_path: Path) -> None:
        tw = TiffStreamWriter(str(tmp_path / "x.tif"))
        with pytest.raises(RuntimeError, match="context manager"):
            tw.write(np.zeros((4, 4), np.uint8))

    def test_iter_blocks(self, tmp_path: Path, u8_stack: np.ndarray) -> None:
        path = tmp_path / "stack.tif"
        write_tiff_stack(str(path), u8_stack)
        blocks = list(iter_tiff_blocks(str(path), block=2))
        assert [(s, e) for s, e, _ in blocks] == [(0, 2), (2, 3)]
        np.testing.assert_array_equal(np.concatenate([a for _, _, a in blocks]), u8_stack)


class TestOrientation:
    """Many frames of a narrow image must not be mistaken for (Y, X, T)."""

    @pytest.fixture
    def long_narrow(self, rng: np.random.Generator) -> np.ndarray:
        return rng.integers(0, 256, size=(100, 80, 40), dtype=np.uint8)

    def test_memmap_round_trip(self, tmp_path: Path, long_narrow: np.ndarray) -> None:
        path = tmp_path / "long.tif"
        write_tiff_stack(str(path), long_narrow)
        back = read_tiff_stack(str(path), verbose=False)
        assert back.shape == (100, 80, 40)
        np.testing.assert_array_equal(np.asarray(back), long_narrow)

    def test_imread_round_trip(self, tmp_path: Path, long_narrow: np.ndarray) -> None:
        path = tmp_path / "long_deflate.tif"
        write_tiff_stack(str(path), long_narrow, compress=True)
        back = read_tiff_stack(str(path), method="imread", verbose=False)
        assert back.shape == (100, 80, 40)
        np.testing.assert_array_equal(back, long_narrow)

    def test_streamed_pages_round_trip(self, tmp_path: Path, long_narrow: np.ndarray) -> None:
        path = tmp_path / "long_streamed.tif"
        with TiffStreamWriter(str(path)) as tw:
            for frame in long_narrow:
                tw.write(frame)
        back = read_tiff_stack(str(path), verbose=False)
        np.testing.assert_array_equal(np.asarray(back), long_narrow)

    def test_iter_blocks_counts_frames(self, tmp_path: Path, long_narrow: np.ndarray) -> None:
        path = tmp_path / "long.tif"
        write_tiff_stack(str(path), long_narrow)
        blocks = list(iter_tiff_blocks(str(path), block=64))
        assert [(s, e) for s, e, _ in blocks] == [(0, 64), (64, 100)]
        assert blocks[0][2].shape == (64, 80, 40)
        np.testing.assert_array_equal(np.concatenate([a for _, _, a in blocks]), long_narrow)

    def test_axes_decide_over_shape(self) -> None:
        tyx = np.zeros((100, 80, 40), np.uint8)
        assert _to_tyx(tyx, "TYX").shape == (100, 80, 40)
        assert _to_tyx(tyx, "QYX").shape == (100, 80, 40)
        yxt = np.zeros((80, 70, 5), np.uint8)
        assert _to_tyx(yxt, "YXT").shape == (5, 80, 70)

    def test_shape_guess_without_axes(self) -> None:
        assert _to_tyx(np.zeros((80, 70, 5), np.uint8)).shape == (5, 80, 70)
        assert _to_tyx(np.zeros((80, 70, 5), np.uint8), "YXS").shape == (5, 80, 70)
        blocks = list(iter_tiff_blocks(str(path), block=2))
        assert [(s, e) for s, e, _ in blocks] == [(0, 2), (2, 3)]
        np.testing.assert_array_equal(np.concatenate([a for _, _, a in blocks]), u8_stack)


class TestCurveExport:
    @pytest.mark.parametrize("suffix", [".npy", ".csv"])
    def test_stack_of_curves(self, tmp_path: Path, suffix: str) -> None:
        curves = np.stack([np.arange(256), 255 - np.arange(256)]).astype(np.uint8)
        path = save_curves(tmp_path / f"curves{suffix}", curves)
        np.testing.assert_array_equal(load_curves(path), curves)

    def test_single_curve_csv_has_header(self, tmp_path: Path) -> None:
        path = save_curves(tmp_path / "one.csv", np.arange(256, dtype=np.uint8))
        header = Path(path).read_text().splitlines()[0].split(",")
        assert header[0] == "frame" and header[-1] == "255"
        assert load_curves(path).shape == (1, 256)

    def test_single_curve_npy_keeps_shape(self, tmp_path: Path) -> None:
        path = save_curves(tmp_path / "one.npy", np.arange(256, dtype=np.uint8))
        assert load_curves(path).shape == (256,)

    def test_unknown_suffix(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            save_curves(tmp_path / "c.txt", np.zeros(256, np.uint8))

    def test_bad_shape(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="shape"):
            save_curves(tmp_path / "c.npy", np.zeros((2, 10), np.uint8))
