"""Test the line-structured text buffer."""

import unittest

from runepad.model import Position, TextBuffer, normalize_range


class TestTextBuffer(unittest.TestCase):
    """Test buffer queries and structural edits."""

    def setUp(self):
        self.buffer = TextBuffer.from_text("hello\nworld")

    def test_empty_buffer_has_one_line(self):
        buffer = TextBuffer()
        self.assertEqual(buffer.lines, [""])
        self.assertEqual(buffer.line_count(), 1)
        self.assertEqual(TextBuffer.from_text("").lines, [""])

    def test_text_round_trip(self):
        self.assertEqual(self.buffer.text, "hello\nworld")
        self.buffer.set_text("a\n\nb\n")
        self.assertEqual(self.buffer.lines, ["a", "", "b", ""])
        self.assertEqual(self.buffer.text, "a\n\nb\n")

    def test_out_of_range_queries(self):
        self.assertEqual(self.buffer.line_length(5), 0)
        self.assertEqual(self.buffer.line_text(-1), "")

    def test_clamp(self):
        self.assertEqual(self.buffer.clamp(0, 99), Position(0, 5))
        self.assertEqual(self.buffer.clamp(9, 2), Position(1, 2))
        self.assertEqual(self.buffer.clamp(-3, -3), Position(0, 0))

    def test_columns_count_runes(self):
        buffer = TextBuffer.from_text("héllo wörld 日本")
        self.assertEqual(buffer.line_length(0), 14)
        end = buffer.insert_at(0, 1, "é")
        self.assertEqual(end, Position(0, 2))
        self.assertEqual(buffer.lines[0], "hééllo wörld 日本")

    def test_insert_single_line(self):
        end = self.buffer.insert_at(0, 5, "!")
        self.assertEqual(self.buffer.lines, ["hello!", "world"])
        self.assertEqual(end, Position(0, 6))

    def test_insert_multi_line(self):
        buffer = TextBuffer.from_text("abc")
        end = buffer.insert_at(0, 1, "X\nY\nZ")
        self.assertEqual(buffer.lines, ["aX", "Y", "Zbc"])
        self.assertEqual(end, Position(2, 1))

    def test_insert_newline_splits_line(self):
        end = self.buffer.insert_at(0, 2, "\n")
        self.assertEqual(self.buffer.lines, ["he", "llo", "world"])
        self.assertEqual(end, Position(1, 0))

    def test_insert_into_missing_row_is_noop(self):
        self.assertIsNone(self.buffer.insert_at(7, 0, "x"))
        self.assertEqual(self.buffer.text, "hello\nworld")

    def test_delete_char_before(self):
        pos = self.buffer.delete_char_before(0, 5)
        self.assertEqual(self.buffer.lines[0], "hell")
        self.assertEqual(pos, Position(0, 4))

    def test_delete_char_before_joins_lines(self):
        pos = self.buffer.delete_char_before(1, 0)
        self.assertEqual(self.buffer.lines, ["helloworld"])
        self.assertEqual(pos, Position(0, 5))

    def test_delete_char_before_at_start_is_noop(self):
        pos = self.buffer.delete_char_before(0, 0)
        self.assertEqual(pos, Position(0, 0))
        self.assertEqual(self.buffer.text, "hello\nworld")

    def test_delete_char_before_missing_row_stays_in_document(self):
        self.assertEqual(self.buffer.delete_char_before(9, 3), Position(1, 3))
        self.assertEqual(self.buffer.delete_char_before(-2, 0), Position(0, 0))
        self.assertEqual(self.buffer.text, "hello\nworld")

    def test_delete_char_at(self):
        self.assertTrue(self.buffer.delete_char_at(0, 0))
        self.assertEqual(self.buffer.lines[0], "ello")
        self.assertTrue(self.buffer.delete_char_at(0, 4))
        self.assertEqual(self.buffer.lines, ["elloworld"])
        self.assertFalse(self.buffer.delete_char_at(0, 9))

    def test_delete_range_single_line(self):
        start = self.buffer.delete_range(0, 1, 0, 4)
        self.assertEqual(self.buffer.lines, ["ho", "world"])
        self.assertEqual(start, Position(0, 1))

    def test_delete_range_across_lines_either_order(self):
        start = self.buffer.delete_range(1, 2, 0, 3)
        self.assertEqual(self.buffer.lines, ["helrld"])
        self.assertEqual(start, Position(0, 3))

    def test_delete_range_bad_row(self):
        self.assertIsNone(self.buffer.delete_range(0, 0, 4, 0))
        self.assertEqual(self.buffer.text, "hello\nworld")

    def test_text_in_range(self):
        self.assertEqual(self.buffer.text_in_range(0, 3, 1, 2), "lo\nwo")
        self.assertEqual(self.buffer.text_in_range(1, 2, 0, 3), "lo\nwo")
        self.assertEqual(self.buffer.text_in_range(0, 2, 0, 2), "")

    def test_normalize_range(self):
        self.assertEqual(normalize_range(2, 0, 1, 5), (Position(1, 5), Position(2, 0)))
        self.assertEqual(normalize_range(1, 1, 1, 3), (Position(1, 1), Position(1, 3)))
