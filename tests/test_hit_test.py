"""Test hit-testing and its inverse, pixel_of."""

import unittest

from runepad.glyphs import FixedPitchMetrics
from runepad.layout import build_layout
from runepad.model import Position


def layout_of(lines, viewport_width=800):
    metrics = FixedPitchMetrics(advance=10, line_height=20)
    return build_layout(lines, metrics.width, metrics.line_height, viewport_width)


class TestHitTest(unittest.TestCase):

    def setUp(self):
        # "abcd" / "efgh" after wrapping, then an empty line and "xy"
        self.layout = layout_of(["abcdefgh", "", "xy"], viewport_width=100)

    def test_point_inside_glyph(self):
        self.assertEqual(self.layout.hit_test(15, 15), Position(0, 0))
        self.assertEqual(self.layout.hit_test(25, 15), Position(0, 1))
        self.assertEqual(self.layout.hit_test(45, 35), Position(0, 7))

    def test_left_of_row_is_first_column(self):
        self.assertEqual(self.layout.hit_test(0, 15), Position(0, 0))
        self.assertEqual(self.layout.hit_test(-50, 35), Position(0, 4))

    def test_past_end_of_wrapped_row_is_wrap_point(self):
        self.assertEqual(self.layout.hit_test(90, 15), Position(0, 4))

    def test_past_end_of_line(self):
        self.assertEqual(self.layout.hit_test(90, 35), Position(0, 8))
        self.assertEqual(self.layout.hit_test(500, 75), Position(2, 2))

    def test_empty_line(self):
        self.assertEqual(self.layout.hit_test(5, 55), Position(1, 0))
        self.assertEqual(self.layout.hit_test(300, 55), Position(1, 0))

    def test_above_content_uses_first_row(self):
        self.assertEqual(self.layout.hit_test(25, 0), Position(0, 1))
        self.assertEqual(self.layout.hit_test(25, -100), Position(0, 1))

    def test_below_content_is_end_of_document(self):
        self.assertEqual(self.layout.hit_test(0, 1000), Position(2, 2))

    def test_hit_test_is_total(self):
        lines = ["abcdefgh", "", "xy"]
        for x in range(-20, 140, 7):
            for y in range(-20, 140, 7):
                pos = self.layout.hit_test(x, y)
                self.assertTrue(0 <= pos.row < len(lines))
                self.assertTrue(0 <= pos.col <= len(lines[pos.row]))

    def test_ligature_is_one_target(self):
        layout = layout_of(["a->b"])
        self.assertEqual(layout.hit_test(22, 15), Position(0, 1))
        self.assertEqual(layout.hit_test(38, 15), Position(0, 1))
        self.assertEqual(layout.hit_test(41, 15), Position(0, 3))


class TestPixelOf(unittest.TestCase):

    def test_glyph_origin(self):
        layout = layout_of(["hello"])
        self.assertEqual(layout.pixel_of(0, 0), (10, 10))
        self.assertEqual(layout.pixel_of(0, 3), (40, 10))
        self.assertEqual(layout.pixel_of(0, 5), (60, 10))

    def test_wrap_point_is_start_of_next_row(self):
        layout = layout_of(["abcdefgh"], viewport_width=100)
        self.assertEqual(layout.pixel_of(0, 4), (10, 30))
        self.assertEqual(layout.pixel_of(0, 8), (50, 30))

    def test_inside_ligature_is_proportional(self):
        layout = layout_of(["a->b"])
        self.assertEqual(layout.pixel_of(0, 1), (20, 10))
        self.assertEqual(layout.pixel_of(0, 2), (30, 10))
        self.assertEqual(layout.pixel_of(0, 3), (40, 10))

    def test_clamps_coordinates(self):
        layout = layout_of(["ab", ""])
        self.assertEqual(layout.pixel_of(0, 99), (30, 10))
        self.assertEqual(layout.pixel_of(9, 9), (10, 30))
        self.assertEqual(layout.pixel_of(-1, -1), (10, 10))

    def test_round_trip_without_ligatures(self):
        lines = ["hello world", "", "wrapped text here", "x"]
        layout = layout_of(lines, viewport_width=120)
        for row, line in enumerate(lines):
            for col in range(len(line) + 1):
                x, y = layout.pixel_of(row, col)
                self.assertEqual(layout.hit_test(x, y), Position(row, col))


if __name__ == '__main__':
    unittest.main()
