import numpy as np

from .constants import *
from .errors import DimensionMismatch, TruncatedFrame
from .helpers import FROM_CANONICAL, TO_CANONICAL, color_format
from .traversal import source_indices
from .types import FlipOptions, RGBFrame

"""
Frame codec: decoded image pixels <-> the bytes a matrix reads straight off storage.
"""


def _as_flat_bytes(pixels) -> np.ndarray:
    if isinstance(pixels, np.ndarray):
        return np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1)
    return np.frombuffer(pixels, dtype=np.uint8)


def encode(
    pixels,
    width: int,
    height: int,
    channels: int,
    flip: FlipOptions | None,
    plan,
    fmt,
) -> bytes:
    """
    Serialize one frame.

    `pixels` is a row-major buffer of `channels` bytes per pixel (RGB or RGBA,
    alpha is dropped). `plan` is the (row, col) visiting order from
    `traversal.plan`, applied after `flip` mirrors the source.
    """
    if channels < BYTES_PER_PIXEL:
        raise DimensionMismatch(f"need at least {BYTES_PER_PIXEL} channels, got {channels}")

    count = width * height
    data = _as_flat_bytes(pixels)
    if data.size < count * channels:
        raise DimensionMismatch(
            f"pixel buffer holds {data.size} bytes, {width}x{height}x{channels} needs {count * channels}"
        )

    indices = source_indices(plan, width, height, flip)
    if indices.size != count:
        raise DimensionMismatch(f"plan covers {indices.size} pixels, frame has {count}")

    # drop alpha (or anything past it), then walk and reorder channels
    px = data[: count * channels].reshape(count, channels)[:, :BYTES_PER_PIXEL]
    out = px[indices][:, FROM_CANONICAL[color_format(fmt)]]

    return out.tobytes()


def decode(data, width: int, height: int, fmt, offset: int = 0) -> RGBFrame:
    """
    Expand one stored frame back to canonical RGB, in storage order.

    The physical traversal is not undone: the frame is shown exactly as the
    matrix receives it.
    """
    size = width * height * BYTES_PER_PIXEL
    available = len(data) - offset
    if available < size:
        raise TruncatedFrame(f"frame needs {size} bytes, only {max(available, 0)} left")

    stored = np.frombuffer(data, dtype=np.uint8, count=size, offset=offset)
    stored = stored.reshape(height, width, BYTES_PER_PIXEL)

    return stored[..., TO_CANONICAL[color_format(fmt)]]
