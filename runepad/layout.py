"""Layout and hit-testing: the single mapping between buffer and pixels.

build_layout() walks the document once and places every glyph. Drawing,
click handling and cursor placement all read the resulting table, so they
can never disagree about where a character is.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence

from .constants import EditorConstants
from .model import Position


@dataclass(frozen=True)
class Glyph:
    """One placed glyph. A ligature covers two columns; the zero-width
    end-of-line entry has empty text and sits at column == line length."""
    buffer_row: int
    buffer_col: int
    text: str
    x: int
    y: int
    width: int

    @property
    def span(self) -> int:
        return len(self.text)

    @property
    def is_end_of_line(self) -> bool:
        return self.text == ""

    def contains_x(self, x: float) -> bool:
        return self.x <= x < self.x + self.width


@dataclass(frozen=True)
class LayoutRow:
    """One visual row; a wrapped buffer line produces several."""
    buffer_row: int
    y: int
    glyphs: tuple[Glyph, ...]

    @property
    def first_col(self) -> int:
        return self.glyphs[0].buffer_col

    @property
    def end_col(self) -> int:
        """Column just past the last glyph on this row."""
        last = self.glyphs[-1]
        return last.buffer_col + last.span

    @property
    def is_last_of_line(self) -> bool:
        return self.glyphs[-1].is_end_of_line


def split_glyphs(line: str, ligatures: Iterable[str] = EditorConstants.LIGATURES) -> list[tuple[int, str]]:
    """Split a line into (column, text) glyph units, merging ligature pairs."""
    pairs = frozenset(ligatures)
    units = []
    i = 0
    while i < len(line):
        pair = line[i:i + 2]
        if len(pair) == 2 and pair in pairs:
            units.append((i, pair))
            i += 2
        else:
            units.append((i, line[i]))
            i += 1
    return units


class Layout:
    """Result of one layout pass, with hit-testing and reverse lookup."""

    def __init__(self, rows: Sequence[LayoutRow], line_height: int):
        self.rows = tuple(rows)
        self.line_height = line_height
        self._by_row: dict[int, list[Glyph]] = {}
        self._positions: dict[tuple[int, int], Glyph] = {}
        for row in self.rows:
            for glyph in row.glyphs:
                self._by_row.setdefault(glyph.buffer_row, []).append(glyph)
                self._positions[(glyph.buffer_row, glyph.buffer_col)] = glyph

    def __eq__(self, other):
        if not isinstance(other, Layout):
            return NotImplemented
        return self.rows == other.rows and self.line_height == other.line_height

    def __repr__(self):
        return f"Layout(rows={len(self.rows)}, line_height={self.line_height})"

    def glyphs(self) -> Iterator[Glyph]:
        for row in self.rows:
            yield from row.glyphs

    @property
    def line_count(self) -> int:
        return len(self._by_row)

    @property
    def top(self) -> int:
        return self.rows[0].y

    @property
    def height(self) -> int:
        """Distance from the top of the first row to the bottom of the last."""
        return self.rows[-1].y + self.line_height - self.top

    def rows_for(self, buffer_row: int) -> list[LayoutRow]:
        return [row for row in self.rows if row.buffer_row == buffer_row]

    def line_length(self, buffer_row: int) -> int:
        return self._by_row[buffer_row][-1].buffer_col

    def _clamp(self, row: int, col: int) -> tuple[int, int]:
        row = max(0, min(row, self.line_count - 1))
        col = max(0, min(col, self.line_length(row)))
        return row, col

    def _end_of_document(self) -> Position:
        last = self.line_count - 1
        return Position(last, self.line_length(last))

    def hit_test(self, x: float, y: float) -> Position:
        """Map a point to the buffer position under it. Never fails.

        Points above the content use the first row's band; points below it
        resolve to the end of the document.
        """
        if y < self.top:
            band = self.rows[0]
        else:
            for band in self.rows:
                if band.y <= y < band.y + self.line_height:
                    break
            else:
                return self._end_of_document()

        for glyph in band.glyphs:
            if glyph.contains_x(x):
                return Position(glyph.buffer_row, glyph.buffer_col)
        if x < band.glyphs[0].x:
            return Position(band.buffer_row, band.first_col)
        # Past the end of the row: end of line, or the wrap point
        return Position(band.buffer_row, band.end_col)

    def pixel_of(self, row: int, col: int) -> tuple[int, int]:
        """Top-left pixel of the cursor slot before (row, col)."""
        row, col = self._clamp(row, col)
        glyph = self._positions.get((row, col))
        if glyph is not None:
            return glyph.x, glyph.y
        # Inside a ligature: split its width evenly between its runes
        for glyph in self._by_row[row]:
            if glyph.buffer_col < col < glyph.buffer_col + glyph.span:
                offset = glyph.width * (col - glyph.buffer_col) // glyph.span
                return glyph.x + offset, glyph.y
        end = self._by_row[row][-1]
        return end.x, end.y


def build_layout(
    lines: Sequence[str],
    width: Callable[[str], int],
    line_height: int,
    viewport_width: int,
    left_margin: int = EditorConstants.LEFT_MARGIN,
    top_margin: int = EditorConstants.TOP_MARGIN,
    right_margin: int = EditorConstants.RIGHT_MARGIN,
    ligatures: Iterable[str] = EditorConstants.LIGATURES,
) -> Layout:
    """Place every glyph of the document, wrapping greedily per glyph.

    A glyph wraps to a new visual row when it would cross
    `viewport_width - right_margin`, unless it is the first glyph on its
    row. Each buffer line ends with a zero-width end-of-line glyph so the
    position after the last character (and any empty line) is addressable.
    """
    ligatures = frozenset(ligatures)
    limit = viewport_width - right_margin
    rows: list[LayoutRow] = []
    y = top_margin

    for row_index, line in enumerate(lines or [""]):
        x = left_margin
        current: list[Glyph] = []
        for col, text in split_glyphs(line, ligatures):
            w = width(text)
            if current and x + w > limit:
                rows.append(LayoutRow(row_index, y, tuple(current)))
                current = []
                x = left_margin
                y += line_height
            current.append(Glyph(row_index, col, text, x, y, w))
            x += w
        current.append(Glyph(row_index, len(line), "", x, y, 0))
        rows.append(LayoutRow(row_index, y, tuple(current)))
        y += line_height

    return Layout(rows, line_height)
