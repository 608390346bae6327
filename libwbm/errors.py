"""
Errors raised while building or reading .wbmani containers.

None of these are worth retrying: a bad wiring config or a corrupt file will
be just as bad the second time around.
"""


class WbmError(Exception):
    pass


class ConfigurationError(WbmError, ValueError):
    "start corner / pixel order pair that has no defined traversal"


class InconsistentFrameDimensions(WbmError, ValueError):
    "source images disagree on type or resolution"

    def __init__(self, groups):
        self.groups = [tuple(g) for g in groups]
        listing = ", ".join(f"{t or '?'} {w}x{h}" for t, w, h in self.groups)
        super().__init__(
            f"frames contain more than one file type and/or resolution: {listing}"
        )


class DimensionMismatch(WbmError, ValueError):
    pass


class TruncatedFrame(WbmError, ValueError):
    pass


class TruncatedHeader(WbmError, ValueError):
    pass


class OutOfRange(WbmError, ValueError):
    pass


class IndexOutOfRange(WbmError, IndexError):
    pass


class UnknownColorFormat(WbmError, ValueError):
    pass


class ExportStateError(WbmError, RuntimeError):
    "exporter used out of order, e.g. started twice"
