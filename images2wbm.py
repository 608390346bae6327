#!/usr/bin/env python3
"""
images2wbm: convert a folder of same-sized images to a WBM LED animation

Usage:
    images2wbm <folder> [--output <output.wbmani>] [--format <fmt>] [--corner <corner>] [--order <order>] [--flip-h] [--flip-v] [--force] [-v]
    images2wbm --combinations

Options:
    -o, --output <output.wbmani>  Target filename. Default: folder name + .wbmani
    -f, --format <fmt>            Color byte order: rgb rbg bgr brg grb gbr [default: rgb]
    -c, --corner <corner>         Start corner: topLeft topRight bottomLeft bottomRight [default: topLeft]
    -p, --order <order>           Pixel order: horizontal vertical horizontalAlternate verticalAlternate [default: horizontal]
    --flip-h                      Mirror images left-right before mapping
    --flip-v                      Mirror images top-bottom before mapping
    --force                       Overwrite the output file if it exists
    --combinations                List supported start corner / pixel order pairs
    -v, --verbose                 Log every frame
"""

import logging
import sys
from pathlib import Path

import docopt

from libwbm import traversal
from libwbm.constants import FILE_EXTENSION
from libwbm.errors import WbmError
from libwbm.libwbm import Exporter, Session
from libwbm.types import FlipOptions, ImageOptions

log = logging.getLogger("libwbm")


def main(argv=None) -> int:
    args = docopt.docopt(__doc__, argv=argv)

    if args["--combinations"]:
        for corner, order in traversal.legal_combinations():
            print(f"{corner.value:<12} {order.value}")
        return 0

    logging.basicConfig(level="DEBUG" if args["--verbose"] else "INFO")

    folder = Path(args["<folder>"])
    out = Path(args["--output"] or folder.resolve().with_suffix(FILE_EXTENSION))

    try:
        options = ImageOptions(
            *traversal.validate(args["--corner"], args["--order"]),
            flip=FlipOptions(horizontal=args["--flip-h"], vertical=args["--flip-v"]),
        )

        session = Session()
        session.load_folder(folder)

        exporter = Exporter(out, overwrite=args["--force"])
        exporter.start(session, args["--format"], options)
    except (WbmError, FileExistsError) as e:
        log.error(e)
        return 1
    except KeyboardInterrupt:
        log.warning("interrupted, nothing written")
        return 130

    print(f":: wrote {len(session)} frames to {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
