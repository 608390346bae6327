from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Literal

import numpy as np
import numpy.typing as npt

from .constants import *

# rows x cols x channels, straight out of Pillow
PixelBuffer = Annotated[npt.NDArray[np.uint8], Literal["height", "width", "channels"]]
# rows x cols x 3, canonical RGB for display
RGBFrame = Annotated[npt.NDArray[np.uint8], Literal["height", "width", 3]]


class ColorFormat(str, Enum):
    "byte order of one pixel as stored in the container"

    RGB = "rgb"
    RBG = "rbg"
    BGR = "bgr"
    BRG = "brg"
    GRB = "grb"
    GBR = "gbr"

    def __str__(self) -> str:
        return self.value


class StartCorner(str, Enum):
    "matrix corner that receives the data line"

    TOP_LEFT = "topLeft"
    TOP_RIGHT = "topRight"
    BOTTOM_LEFT = "bottomLeft"
    BOTTOM_RIGHT = "bottomRight"

    def __str__(self) -> str:
        return self.value


class PixelOrder(str, Enum):
    "how the matrix is chained: straight rows/columns or snaking"

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    HORIZONTAL_ALTERNATE = "horizontalAlternate"
    VERTICAL_ALTERNATE = "verticalAlternate"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FlipOptions:
    horizontal: bool = False
    vertical: bool = False


@dataclass(frozen=True)
class ImageOptions:
    """
    How source images are laid onto the LED matrix.

    Defaults match a plain row-major matrix wired from its top left corner.
    """

    start_corner: StartCorner = StartCorner.TOP_LEFT
    pixel_order: PixelOrder = PixelOrder.HORIZONTAL
    flip: FlipOptions = field(default_factory=FlipOptions)


@dataclass(frozen=True)
class FrameDescriptor:
    width: int
    height: int

    @property
    def frame_size(self) -> int:
        return self.width * self.height * BYTES_PER_PIXEL


@dataclass(frozen=True)
class ContainerHeader:
    frame_count: int
    width: int
    height: int
    color_format: ColorFormat

    @property
    def descriptor(self) -> FrameDescriptor:
        return FrameDescriptor(self.width, self.height)

    @property
    def frame_size(self) -> int:
        return self.descriptor.frame_size

    @property
    def total_size(self) -> int:
        return HEADER_SIZE + self.frame_count * self.frame_size


@dataclass(frozen=True)
class ImageInfo:
    "result of the dimension probe, used to group a folder before export"

    name: str
    width: int
    height: int
    type: str | None = None

    @property
    def params(self) -> tuple[str | None, int, int]:
        return (self.type, self.width, self.height)


@dataclass
class DecodedImage:
    pixels: PixelBuffer
    width: int
    height: int
    channels: int
