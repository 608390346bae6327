import logging
import os
import stat
import tempfile
import threading
from enum import Enum
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from . import codec, container, traversal
from .errors import (
    DimensionMismatch,
    ExportStateError,
    InconsistentFrameDimensions,
    OutOfRange,
)
from .helpers import color_format
from .types import ColorFormat, DecodedImage, FrameDescriptor, ImageInfo, ImageOptions


# read once, umask can only be read by setting it
_UMASK = os.umask(0)
os.umask(_UMASK)


def probe_image(path: str | os.PathLike) -> ImageInfo:
    "read just enough of `path` to learn its size and type"
    path = Path(path)
    with Image.open(path) as image:
        kind = image.format.lower() if image.format else None
        return ImageInfo(path.name, image.width, image.height, kind)


def decode_image(path: str | os.PathLike) -> DecodedImage:
    "decode `path` to an RGB (or RGBA, if it has alpha) pixel array"
    with Image.open(path) as image:
        has_alpha = image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info
        image = image.convert("RGBA" if has_alpha else "RGB")
        pixels = np.asarray(image, dtype=np.uint8)

    height, width, channels = pixels.shape
    return DecodedImage(pixels, width, height, channels)


def group_params(infos) -> list[tuple[str | None, int, int]]:
    "distinct (type, width, height) groups, in first-seen order"
    groups = []
    for info in infos:
        if info.params not in groups:
            groups.append(info.params)
    return groups


class Session:
    """
    The set of source frames currently selected for export.

    Holds one folder's worth of images, validated to share a single type and
    resolution. Pass it (or its `paths`) to an `Exporter`.
    """

    log = logging.getLogger("libwbm")

    def __init__(self, probe=probe_image) -> None:
        self.probe = probe
        self.clear()

    def clear(self) -> list[ImageInfo]:
        self.folder: Path | None = None
        self.files: list[ImageInfo] = []
        self.ignored: list[str] = []
        return self.files

    def load_folder(self, folder: str | os.PathLike) -> list[ImageInfo]:
        "load every image in `folder`, skipping anything that isn't one"
        self.clear()
        folder = Path(folder)

        files, ignored = [], []
        for entry in sorted(folder.iterdir()):
            if not entry.is_file():
                continue
            try:
                files.append(self.probe(entry))
            except (UnidentifiedImageError, OSError):
                ignored.append(entry.name)

        if ignored:
            self.log.warning(f"ignoring {len(ignored)} non-image files: {ignored}")

        groups = group_params(files)
        if len(groups) > 1:
            raise InconsistentFrameDimensions(groups)

        self.folder, self.files, self.ignored = folder, files, ignored
        self.log.info(f"loaded {len(files)} files from {folder} {groups}")
        return self.files

    @property
    def paths(self) -> list[Path]:
        return [self.folder / f.name for f in self.files]

    @property
    def descriptor(self) -> FrameDescriptor | None:
        if not self.files:
            return None
        return FrameDescriptor(self.files[0].width, self.files[0].height)

    def __len__(self) -> int:
        return len(self.files)


class ExportState(str, Enum):
    IDLE = "idle"
    WRITING = "writing"
    FINALIZING = "finalizing"
    DONE = "done"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"


class Exporter:
    """
    Streams a sequence of images into one .wbmani file.

    The file is written under a temporary name next to `output` and only
    renamed into place once every frame is written. Cancelling, or any error,
    removes the temporary file instead.
    """

    log = logging.getLogger("libwbm")

    def __init__(
        self,
        output: str | os.PathLike,
        overwrite=False,
        decoder=decode_image,
        probe=probe_image,
        on_frame_processed=None,
        on_export_complete=None,
        on_export_cancelled=None,
    ) -> None:
        self.output = Path(output)
        self.overwrite = overwrite
        self.decoder = decoder
        self.probe = probe

        self.on_frame_processed = on_frame_processed
        self.on_export_complete = on_export_complete
        self.on_export_cancelled = on_export_cancelled

        self.state = ExportState.IDLE
        self.frames_written = 0
        self.temp_path: Path | None = None
        self.error: BaseException | None = None

        self._cancel = threading.Event()
        # guards the cancel check against the switch to FINALIZING
        self._lock = threading.RLock()

    def cancel(self) -> bool:
        "ask for the export to stop after the frame in flight; False if too late"
        with self._lock:
            if self.state in (ExportState.FINALIZING, ExportState.DONE, ExportState.FAILED):
                return False
            self._cancel.set()
        self.log.info("export cancel requested")
        return True

    def validate_frames(self, frames) -> FrameDescriptor:
        "probe every frame and make sure they share one type and resolution"
        infos = [self.probe(path) for path in frames]
        groups = group_params(infos)
        if len(groups) > 1:
            raise InconsistentFrameDimensions(groups)
        return FrameDescriptor(infos[0].width, infos[0].height)

    def start(
        self,
        frames,
        fmt: ColorFormat | str = ColorFormat.RGB,
        options: ImageOptions | None = None,
    ) -> Path | None:
        """
        Run the export. Returns the output path, or None if it was cancelled.

        `frames` is a `Session` or any sequence of image paths, in playback order.
        """
        if self.state is not ExportState.IDLE:
            raise ExportStateError(f"exporter already used (state: {self.state.value})")

        paths = frames.paths if isinstance(frames, Session) else [Path(f) for f in frames]
        fmt = color_format(fmt)
        options = options or ImageOptions()

        # everything that can be rejected is rejected before touching disk
        corner, order = traversal.validate(options.start_corner, options.pixel_order)
        if not paths:
            raise OutOfRange("no frames to export")
        descriptor = self.validate_frames(paths)
        header = container.write_header(len(paths), descriptor.width, descriptor.height, fmt)
        plan = traversal.plan(descriptor.width, descriptor.height, corner, order)

        if self.output.exists() and not self.overwrite:
            raise FileExistsError(f"{self.output} already exists")

        self.log.info(
            f"starting export of {len(paths)} frames to {self.output} "
            f"({descriptor.width}x{descriptor.height} {fmt}, {corner} {order})"
        )
        self.state = ExportState.WRITING

        tmp = tempfile.NamedTemporaryFile(
            dir=self.output.parent,
            prefix=f".{self.output.name}.",
            suffix=".tmp",
            delete=False,
        )
        self.temp_path = Path(tmp.name)

        try:
            with tmp:
                tmp.write(header)
                for path in paths:
                    if self._cancel.is_set():
                        break
                    tmp.write(self.encode_frame(path, descriptor, plan, fmt, options))
                    self.frames_written += 1
                    self.log.debug(f"frame #{self.frames_written} {path.name}")

                    if self.on_frame_processed:
                        self.on_frame_processed(path.name)
        except BaseException as e:
            self.state = ExportState.FAILED
            self.error = e
            self._discard()
            self.log.error(f"export failed at frame #{self.frames_written + 1}: {e}")
            raise

        with self._lock:
            cancelled = self._cancel.is_set()
            if not cancelled:
                self.state = ExportState.FINALIZING

        if cancelled:
            self.state = ExportState.CANCELLING
            self._discard()
            self.state = ExportState.CANCELLED
            self.log.info(f"export cancelled after {self.frames_written} frames")
            if self.on_export_cancelled:
                self.on_export_cancelled()
            return None

        try:
            self._apply_mode()
            os.replace(self.temp_path, self.output)
        except OSError as e:
            self.state = ExportState.FAILED
            self.error = e
            self._discard()
            raise
        self.temp_path = None
        self.state = ExportState.DONE

        self.log.info(f"export finished: {self.output}")
        if self.on_export_complete:
            self.on_export_complete(self.output)
        return self.output

    def start_background(self, frames, fmt=ColorFormat.RGB, options=None) -> threading.Thread:
        """
        Run `start` on a worker thread; failures end up in `self.error`.

        The thread is not a daemon, so interpreter exit waits for the export to
        finish (or be cancelled) and clean up its temp file.
        """

        def run():
            try:
                self.start(frames, fmt, options)
            except Exception as e:
                self.error = e

        thread = threading.Thread(target=run, name="wbm-export")
        thread.start()
        return thread

    def encode_frame(self, path: Path, descriptor: FrameDescriptor, plan, fmt, options) -> bytes:
        image = self.decoder(path)
        if (image.width, image.height) != (descriptor.width, descriptor.height):
            raise DimensionMismatch(
                f"{path.name} is {image.width}x{image.height}, "
                f"expected {descriptor.width}x{descriptor.height}"
            )
        return codec.encode(
            image.pixels, image.width, image.height, image.channels, options.flip, plan, fmt
        )

    def _apply_mode(self):
        "give the output the mode a plain open() would, or keep the one it replaces"
        if self.output.exists():
            mode = stat.S_IMODE(self.output.stat().st_mode)
        else:
            mode = 0o666 & ~_UMASK
        os.chmod(self.temp_path, mode)

    def _discard(self):
        if self.temp_path is not None and self.temp_path.exists():
            self.temp_path.unlink()
        self.temp_path = None
