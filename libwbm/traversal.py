"""
Pixel traversal: the order in which grid cells are sent down the LED chain.

Coordinates are (row, col) in source image space, row 0 at the top and col 0
at the left. Only the corner/order pairs below have a defined wiring; anything
else is rejected rather than guessed.
"""

from collections.abc import Callable, Iterator

import numpy as np

from .errors import ConfigurationError, OutOfRange
from .types import FlipOptions, PixelOrder, StartCorner

Cell = tuple[int, int]


def _forward(n: int) -> range:
    return range(n)


def _backward(n: int) -> range:
    return range(n - 1, -1, -1)


def _row_major(rows: range, cols: Callable[[int], range]) -> Iterator[Cell]:
    for row in rows:
        for col in cols(row):
            yield row, col


def _col_major(cols: range, rows: Callable[[int], range]) -> Iterator[Cell]:
    for col in cols:
        for row in rows(col):
            yield row, col


# (corner, order) -> walk(width, height)
# fmt: off
TRAVERSALS: dict[tuple[StartCorner, PixelOrder], Callable[[int, int], Iterator[Cell]]] = {
    (StartCorner.TOP_LEFT, PixelOrder.HORIZONTAL):
        lambda w, h: _row_major(_forward(h), lambda r: _forward(w)),
    (StartCorner.TOP_LEFT, PixelOrder.VERTICAL):
        lambda w, h: _col_major(_forward(w), lambda c: _forward(h)),
    (StartCorner.TOP_LEFT, PixelOrder.HORIZONTAL_ALTERNATE):
        lambda w, h: _row_major(_forward(h), lambda r: _backward(w) if r & 1 else _forward(w)),
    (StartCorner.TOP_LEFT, PixelOrder.VERTICAL_ALTERNATE):
        lambda w, h: _col_major(_forward(w), lambda c: _backward(h) if c & 1 else _forward(h)),

    (StartCorner.TOP_RIGHT, PixelOrder.HORIZONTAL):
        lambda w, h: _row_major(_forward(h), lambda r: _backward(w)),
    (StartCorner.TOP_RIGHT, PixelOrder.HORIZONTAL_ALTERNATE):
        lambda w, h: _row_major(_forward(h), lambda r: _forward(w) if r & 1 else _backward(w)),

    (StartCorner.BOTTOM_LEFT, PixelOrder.HORIZONTAL):
        lambda w, h: _row_major(_backward(h), lambda r: _forward(w)),
    (StartCorner.BOTTOM_LEFT, PixelOrder.VERTICAL_ALTERNATE):
        lambda w, h: _col_major(_forward(w), lambda c: _forward(h) if c & 1 else _backward(h)),

    (StartCorner.BOTTOM_RIGHT, PixelOrder.VERTICAL):
        lambda w, h: _col_major(_backward(w), lambda c: _backward(h)),
    # parity follows the absolute column index, not the visit count
    (StartCorner.BOTTOM_RIGHT, PixelOrder.VERTICAL_ALTERNATE):
        lambda w, h: _col_major(_backward(w), lambda c: _forward(h) if c & 1 else _backward(h)),
}
# fmt: on


def legal_combinations() -> list[tuple[StartCorner, PixelOrder]]:
    return list(TRAVERSALS)


def validate(start_corner, pixel_order) -> tuple[StartCorner, PixelOrder]:
    "coerce and check a corner/order pair, raising ConfigurationError if unsupported"
    try:
        corner = StartCorner(start_corner)
    except ValueError:
        raise ConfigurationError(f"unknown start corner {start_corner!r}") from None
    try:
        order = PixelOrder(pixel_order)
    except ValueError:
        raise ConfigurationError(f"unknown pixel order {pixel_order!r}") from None

    if (corner, order) not in TRAVERSALS:
        raise ConfigurationError(
            f"unsupported pixel order '{order}' for start corner '{corner}'"
        )
    return corner, order


def plan(width: int, height: int, start_corner, pixel_order) -> list[Cell]:
    """
    Visitation order over a `width` x `height` grid.

    Entry `i` is the (row, col) of the source pixel that goes to output slot `i`.
    """
    corner, order = validate(start_corner, pixel_order)
    if width < 1 or height < 1:
        raise OutOfRange(f"grid must be at least 1x1 (got {width}x{height})")

    return list(TRAVERSALS[corner, order](width, height))


def source_indices(
    cells, width: int, height: int, flip: FlipOptions | None = None
) -> np.ndarray:
    "flatten a plan into row-major source pixel indices, mirroring for `flip`"
    cells = np.asarray(cells, dtype=np.intp).reshape(-1, 2)
    rows, cols = cells[:, 0], cells[:, 1]

    if flip is not None and flip.vertical:
        rows = height - 1 - rows
    if flip is not None and flip.horizontal:
        cols = width - 1 - cols

    return rows * width + cols
