"""
Unit-тесты для DtsLayoutImporter.

ЦКП: Разбор &key_physical_attrs (целые * 100) из ZMK devicetree.
"""

import pytest

from layout_wizard.domain.exceptions import LayoutParseError
from layout_wizard.infrastructure.adapters import DtsLayoutImporter

DTS_2X2 = """
/ {
    physical_layout0: physical_layout_0 {
        compatible = "zmk,physical-layout";
        display-name = "Default";

        keys  //                     w   h    x    y     rot    rx    ry
            = <&key_physical_attrs 100 100    0  100       0     0     0>
            , <&key_physical_attrs 100 100  100  100       0     0     0>
            , <&key_physical_attrs 100 100    0    0       0     0     0>
            , <&key_physical_attrs 150 100  100    0    1500 (-50)   300>
            ;
    };
};
"""

DTS_KEYS_OUTSIDE_BLOCK = """
/ {
    physical_layout0: physical_layout_0 {
        compatible = "zmk,physical-layout";
        display-name = "Empty";
    };
};

&physical_layout0 {
    keys = <&key_physical_attrs 100 100 0 0 0 0 0>
         , <&key_physical_attrs 100 100 100 0 0 0 0>
         ;
};
"""


@pytest.fixture
def importer():
    return DtsLayoutImporter()


class TestDtsLayoutImporter:

    def test_format_name(self, importer):
        assert importer.format_name == "dts"

    def test_fixed_point_decoding(self, importer):
        """Значения делятся на 100, скобки и минус поддерживаются."""
        keys = importer.parse(DTS_2X2)

        assert len(keys) == 4
        rotated = next(key for key in keys if key.r)
        assert rotated.w == 1.5
        assert rotated.h == 1
        assert (rotated.x, rotated.y) == (1, 0)
        assert rotated.r == 15
        assert (rotated.rx, rotated.ry) == (-0.5, 3)

    def test_logical_layout_inferred(self, importer):
        keys = importer.parse(
            DTS_2X2.replace("1500 (-50)   300", "0 0 0")
        )
        positions = [((key.row, key.col), (key.x, key.y)) for key in keys]
        assert positions == [
            ((0, 0), (0, 0)),
            ((0, 1), (1, 0)),
            ((1, 0), (0, 1)),
            ((1, 1), (1, 1)),
        ]

    def test_fallback_to_whole_text(self, importer):
        """Если в блоке layout клавиш нет, сканируется весь файл."""
        keys = importer.parse(DTS_KEYS_OUTSIDE_BLOCK)
        assert len(keys) == 2
        assert [(key.row, key.col) for key in keys] == [(0, 0), (0, 1)]

    def test_missing_compatible_raises(self, importer):
        with pytest.raises(LayoutParseError):
            importer.parse("&key_physical_attrs 100 100 0 0 0 0 0")

    def test_no_keys_raises(self, importer):
        with pytest.raises(LayoutParseError):
            importer.parse('/ { l { compatible = "zmk,physical-layout"; }; };')

    def test_zero_size_raises_parse_error(self, importer):
        with pytest.raises(LayoutParseError):
            importer.parse(DTS_KEYS_OUTSIDE_BLOCK.replace("100 100 0 0 0 0 0", "0 100 0 0 0 0 0"))
