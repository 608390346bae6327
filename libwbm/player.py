import itertools
import logging
import os
from collections.abc import Iterator
from pathlib import Path

import ffmpeg
from PIL import Image

from . import codec, container
from .constants import *
from .types import ContainerHeader, RGBFrame


class Player:
    """
    Read-only view over a loaded .wbmani container.

    Frames are decoded on demand, so `frame()` can be called in any order and
    from any thread holding the player.
    """

    log = logging.getLogger("libwbm")

    def __init__(self, data: bytes, name: str | None = None) -> None:
        self.header: ContainerHeader = container.read_header(data)
        self.data = data
        self.name = name

        if len(data) != self.header.total_size:
            self.log.warning(
                f"{name or 'container'}: expected {self.header.total_size} bytes, got {len(data)}"
            )

    @classmethod
    def load(cls, data: bytes, name: str | None = None) -> "Player":
        return cls(data, name)

    @classmethod
    def open(cls, path: str | os.PathLike) -> "Player":
        path = Path(path)
        return cls(path.read_bytes(), path.name)

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height

    def __len__(self) -> int:
        return self.header.frame_count

    def frame(self, index: int) -> RGBFrame:
        "frame `index` as a height x width x 3 RGB array"
        offset = container.frame_offset(self.header, index)
        return codec.decode(
            self.data, self.width, self.height, self.header.color_format, offset=offset
        )

    def image(self, index: int) -> Image.Image:
        return Image.fromarray(self.frame(index))

    def __iter__(self) -> Iterator[RGBFrame]:
        for i in range(len(self)):
            yield self.frame(i)

    def loop(self, start: int = 0) -> Iterator[int]:
        "frame indices forever, wrapping back to 0 after the last frame"
        container.frame_offset(self.header, start)  # range check
        return itertools.chain(range(start, len(self)), itertools.cycle(range(len(self))))

    def save_gif(self, path: str | os.PathLike, scale: int = 1):
        "write an animated GIF preview at the player's frame rate"
        size = (self.width * scale, self.height * scale)
        images = [
            self.image(i).resize(size, resample=Image.Resampling.NEAREST)
            for i in range(len(self))
        ]
        self.log.info(f"saving {len(images)} frame preview to {path}")
        images[0].save(
            path,
            save_all=True,
            append_images=images[1:],
            duration=FRAME_INTERVAL_MS,
            loop=0,
        )

    def render_preview(
        self, path: str | os.PathLike, scale: int = 1, fps=PREVIEW_FPS, quiet=True
    ):
        "pipe every frame through ffmpeg into a video file"
        # yuv420p needs even dimensions
        width, height = self.width * scale, self.height * scale
        width, height = width + width % 2, height + height % 2

        self.log.info(f"rendering {len(self)} frame preview to {path}")
        ffprocess = (
            ffmpeg.input(
                "pipe:",
                format="rawvideo",
                pix_fmt="rgb24",
                s=f"{self.width}x{self.height}",
                framerate=fps,
            )
            .filter("scale", width=width, height=height, flags="neighbor")
            .output(str(path), pix_fmt="yuv420p")
            .global_args("-hide_banner", "-loglevel", "warning")
            .overwrite_output()
            .run_async(pipe_stdin=True, quiet=quiet)
        )

        for frame in self:
            ffprocess.stdin.write(frame.tobytes())

        ffprocess.stdin.close()
        if ffprocess.wait() != 0:
            raise ffmpeg.Error("ffmpeg", None, None)
