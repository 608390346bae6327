#!/usr/bin/env python3
"""
make-test-patterns: write frame sequences for checking how a matrix is wired

Usage:
    make-test-patterns <width> <height> [<outdir>]

Each pattern goes to its own folder under <outdir> (default: ./patterns),
ready for images2wbm. The walking pixel lights one cell per frame in plain
reading order, so a mis-set start corner or pixel order shows up at once.
"""

import itertools
from pathlib import Path

import docopt
from PIL import Image

ARGS = docopt.docopt(__doc__)

SIZE = (int(ARGS["<width>"]), int(ARGS["<height>"]))
OUT = Path(ARGS["<outdir>"] or "./patterns")


def folder(name):
    path = OUT / name
    path.mkdir(parents=True, exist_ok=True)
    return path


def two_tone(name, dark):
    "white frame with black wherever `dark(col, row)` holds"
    img = Image.new("RGB", SIZE, "white")
    pix = img.load()
    for col, row in itertools.product(range(SIZE[0]), range(SIZE[1])):
        if dark(col, row):
            pix[col, row] = (0, 0, 0)
    img.save(folder(name) / "0000.png")


two_tone("checkerboard", lambda col, row: col % 2 == row % 2)
two_tone("vlines", lambda col, row: col % 2)
two_tone("hlines", lambda col, row: row % 2)


# one lit pixel per frame, red first row, green last row, blue in between
walk = folder("walking-pixel")
for n in range(SIZE[0] * SIZE[1]):
    row, col = divmod(n, SIZE[0])
    color = (255, 0, 0) if row == 0 else (0, 255, 0) if row == SIZE[1] - 1 else (0, 0, 255)
    frame = Image.new("RGB", SIZE, "black")
    frame.putpixel((col, row), color)
    frame.save(walk / f"{n:04d}.png")


# solid color frames, to check the channel order
solid = folder("rgb-solid")
for n, color in enumerate(["red", "lime", "blue", "white"]):
    Image.new("RGB", SIZE, color).save(solid / f"{n:04d}.png")

print(f":: wrote test patterns for {SIZE[0]}x{SIZE[1]} to {OUT}")
