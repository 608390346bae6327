"""Tests for the color channel mapper."""

import itertools

import pytest

from libwbm.errors import UnknownColorFormat
from libwbm.helpers import color_format, from_canonical, to_canonical
from libwbm.types import ColorFormat


class TestFromCanonical:
    @pytest.mark.parametrize(
        "fmt, expected",
        [
            ("rgb", (1, 2, 3)),
            ("rbg", (1, 3, 2)),
            ("bgr", (3, 2, 1)),
            ("brg", (3, 1, 2)),
            ("grb", (2, 1, 3)),
            ("gbr", (2, 3, 1)),
        ],
    )
    def test_table(self, fmt, expected):
        # R=1, G=2, B=3
        assert from_canonical(ColorFormat(fmt), 1, 2, 3) == expected

    def test_accepts_str(self):
        assert from_canonical("bgr", 10, 20, 30) == (30, 20, 10)


class TestToCanonical:
    @pytest.mark.parametrize(
        "fmt, stored",
        [
            ("rgb", (1, 2, 3)),
            ("rbg", (1, 3, 2)),
            ("bgr", (3, 2, 1)),
            ("brg", (3, 1, 2)),
            ("grb", (2, 1, 3)),
            ("gbr", (2, 3, 1)),
        ],
    )
    def test_table(self, fmt, stored):
        assert to_canonical(ColorFormat(fmt), *stored) == (1, 2, 3)


class TestInvolution:
    @pytest.mark.parametrize("fmt", list(ColorFormat))
    def test_matching_pair_restores_bytes(self, fmt):
        for triple in itertools.product((0, 1, 127, 128, 254, 255), repeat=3):
            assert from_canonical(fmt, *to_canonical(fmt, *triple)) == triple
            assert to_canonical(fmt, *from_canonical(fmt, *triple)) == triple


class TestColorFormat:
    def test_from_header_bytes(self):
        assert color_format(b"grb") is ColorFormat.GRB

    def test_enum_passthrough(self):
        assert color_format(ColorFormat.BRG) is ColorFormat.BRG

    @pytest.mark.parametrize("value", ["xyz", "RGB", "", b"rg\x00", b"\xff\xfe\xfd"])
    def test_unknown(self, value):
        with pytest.raises(UnknownColorFormat):
            color_format(value)
