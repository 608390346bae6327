"""
Shared fixtures: tiny synthetic frames, written as real PNGs where the
exporter needs files on disk.
"""

import numpy as np
import pytest
from PIL import Image

# 2x2 source used by the worked examples, row-major RGB
SOURCE_2X2 = np.array(
    [
        [(10, 20, 30), (40, 50, 60)],
        [(70, 80, 90), (100, 110, 120)],
    ],
    dtype=np.uint8,
)


def _make_test_frame(width=4, height=3, seed=0):
    """Frame where every pixel is distinct, so any mis-ordering is visible."""
    n = np.arange(width * height, dtype=np.uint16) + seed * 7
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[..., 0] = (n % 256).reshape(height, width)
    frame[..., 1] = ((n * 3 + 1) % 256).reshape(height, width)
    frame[..., 2] = ((n * 5 + 2) % 256).reshape(height, width)
    return frame


@pytest.fixture
def source_2x2():
    return SOURCE_2X2.copy()


@pytest.fixture
def make_frames(tmp_path):
    """Factory writing `count` PNG frames of one size into a fresh folder."""

    def make(count=3, width=4, height=3, folder="frames", fmt="PNG", ext=".png"):
        path = tmp_path / folder
        path.mkdir(exist_ok=True)
        for i in range(count):
            Image.fromarray(_make_test_frame(width, height, seed=i)).save(
                path / f"frame_{i:03d}{ext}", format=fmt
            )
        return path

    return make
