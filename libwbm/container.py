import logging
from struct import pack as _pack, unpack_from

from .constants import *
from .errors import IndexOutOfRange, OutOfRange, TruncatedFrame, TruncatedHeader
from .helpers import color_format
from .types import ContainerHeader

"""
The plumbing.

Low level functions for laying out .wbmani headers and frame blocks.
"""

log = logging.getLogger("libwbm")


def _check_u16(name: str, value: int):
    if not 1 <= value <= UINT16_MAX:
        raise OutOfRange(f"{name} must be 1..{UINT16_MAX} (got {value})")


def write_header(frame_count: int, width: int, height: int, fmt) -> bytes:
    _check_u16("frame count", frame_count)
    _check_u16("width", width)
    _check_u16("height", height)
    fmt = color_format(fmt)

    return _pack(HEADER_FORMAT, frame_count, width, height, fmt.value.encode("ascii"))


def read_header(data) -> ContainerHeader:
    if len(data) < HEADER_SIZE:
        raise TruncatedHeader(f"header needs {HEADER_SIZE} bytes, got {len(data)}")

    frame_count, width, height, fmt = unpack_from(HEADER_FORMAT, data)
    _check_u16("frame count", frame_count)
    _check_u16("width", width)
    _check_u16("height", height)

    return ContainerHeader(frame_count, width, height, color_format(fmt))


def frame_offset(header: ContainerHeader, index: int) -> int:
    if not 0 <= index < header.frame_count:
        raise IndexOutOfRange(
            f"frame {index} out of range, container has {header.frame_count}"
        )
    return HEADER_SIZE + index * header.frame_size


def pack(header: ContainerHeader, frames) -> bytes:
    "assemble a complete container from a header and its frame blocks"
    frames = list(frames)
    if len(frames) != header.frame_count:
        raise OutOfRange(f"header says {header.frame_count} frames, got {len(frames)}")

    for i, frame in enumerate(frames):
        if len(frame) != header.frame_size:
            raise TruncatedFrame(
                f"frame {i} is {len(frame)} bytes, expected {header.frame_size}"
            )

    head = write_header(header.frame_count, header.width, header.height, header.color_format)
    return b"".join([head, *map(bytes, frames)])


def unpack(data) -> tuple[ContainerHeader, list[bytes]]:
    "split a complete container into its header and frame blocks"
    header = read_header(data)

    if len(data) < header.total_size:
        raise TruncatedFrame(
            f"container needs {header.total_size} bytes for {header.frame_count} frames, got {len(data)}"
        )
    if len(data) > header.total_size:
        log.warning(f"ignoring {len(data) - header.total_size} trailing bytes")

    frames = []
    for i in range(header.frame_count):
        start = frame_offset(header, i)
        frames.append(bytes(data[start : start + header.frame_size]))

    return header, frames
