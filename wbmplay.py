#!/usr/bin/env python3
"""
wbmplay: inspect a WBM LED animation and render previews of it

Usage:
    wbmplay <input.wbmani> [--gif <output.gif>] [--video <output.mp4>] [--frame <n>] [--png <output.png>] [--scale <n>] [--fps <fps>] [-v]

Options:
    --gif <output.gif>      Write an animated GIF preview
    --video <output.mp4>    Write a video preview (needs ffmpeg)
    --frame <n>             Frame to export with --png [default: 0]
    --png <output.png>      Write a single frame as an image
    --scale <n>             Upscale previews by this factor [default: 8]
    --fps <fps>             Video preview frame rate [default: 30]
    -v, --verbose           Show ffmpeg output
"""

import logging
import sys

import docopt
import ffmpeg
from PIL import Image

from libwbm.errors import WbmError
from libwbm.player import Player

log = logging.getLogger("libwbm")


def main(argv=None) -> int:
    args = docopt.docopt(__doc__, argv=argv)
    quiet = not args["--verbose"]
    logging.basicConfig(level="INFO" if quiet else "DEBUG")

    try:
        player = Player.open(args["<input.wbmani>"])
        scale = int(args["--scale"])

        h = player.header
        print(f"{player.name}: {h.frame_count} frames, {h.width}x{h.height}, format {h.color_format.value.upper()}")

        if args["--png"]:
            image = player.image(int(args["--frame"]))
            image.resize((h.width * scale, h.height * scale), resample=Image.Resampling.NEAREST).save(args["--png"])
        if args["--gif"]:
            player.save_gif(args["--gif"], scale=scale)
        if args["--video"]:
            player.render_preview(args["--video"], scale=scale, fps=int(args["--fps"]), quiet=quiet)
    except (WbmError, OSError, ffmpeg.Error) as e:
        log.error(e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
