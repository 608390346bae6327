from .errors import UnknownColorFormat
from .types import ColorFormat

"""
Color channel mapping between canonical RGB and the byte order a strip expects.
"""

# stored byte i holds canonical channel FROM_CANONICAL[fmt][i] (0=R, 1=G, 2=B)
# fmt: off
FROM_CANONICAL: dict[ColorFormat, tuple[int, int, int]] = {
    ColorFormat.RGB: (0, 1, 2),
    ColorFormat.RBG: (0, 2, 1),
    ColorFormat.BGR: (2, 1, 0),
    ColorFormat.BRG: (2, 0, 1),
    ColorFormat.GRB: (1, 0, 2),
    ColorFormat.GBR: (1, 2, 0),
}

# canonical channel i comes from stored byte TO_CANONICAL[fmt][i]
TO_CANONICAL: dict[ColorFormat, tuple[int, int, int]] = {
    ColorFormat.RGB: (0, 1, 2),
    ColorFormat.RBG: (0, 2, 1),
    ColorFormat.BGR: (2, 1, 0),
    ColorFormat.BRG: (1, 2, 0),
    ColorFormat.GRB: (1, 0, 2),
    ColorFormat.GBR: (2, 0, 1),
}
# fmt: on


def color_format(value) -> ColorFormat:
    "coerce `value` (enum, str or 3 header bytes) to a ColorFormat"
    if isinstance(value, ColorFormat):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            value = bytes(value).decode("ascii")
        except UnicodeDecodeError:
            raise UnknownColorFormat(f"unknown color format {bytes(value)!r}") from None
    try:
        return ColorFormat(value)
    except ValueError:
        raise UnknownColorFormat(f"unknown color format {value!r}") from None


def from_canonical(fmt: ColorFormat, r: int, g: int, b: int) -> tuple[int, int, int]:
    "reorder an RGB triplet into the byte order of `fmt`"
    rgb = (r, g, b)
    b0, b1, b2 = FROM_CANONICAL[color_format(fmt)]
    return (rgb[b0], rgb[b1], rgb[b2])


def to_canonical(fmt: ColorFormat, b0: int, b1: int, b2: int) -> tuple[int, int, int]:
    "reorder three stored bytes in `fmt` order back into RGB"
    stored = (b0, b1, b2)
    r, g, b = TO_CANONICAL[color_format(fmt)]
    return (stored[r], stored[g], stored[b])
