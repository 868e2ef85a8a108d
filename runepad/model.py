from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, order=True)
class Position:
    """A rune-exact buffer position, ordered row-major then by column."""
    row: int = 0
    col: int = 0


def normalize_range(start_row: int, start_col: int, end_row: int, end_col: int) -> tuple[Position, Position]:
    """Return the two endpoints so that the first precedes the second."""
    start = Position(start_row, start_col)
    end = Position(end_row, end_col)
    if end < start:
        start, end = end, start
    return start, end


class TextBuffer:
    """Line-structured text addressed by (row, column) in runes.

    There is always at least one line. A column equal to the line length
    means "after the last character". No operation raises on bad
    coordinates: rows out of range make edits a no-op, columns are clamped.
    """

    lines: list[str]

    def __init__(self, lines: Optional[list[str]] = None):
        self.lines = list(lines) if lines else [""]

    @classmethod
    def from_text(cls, text: str) -> "TextBuffer":
        return cls(text.split("\n"))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def set_text(self, text: str) -> None:
        self.lines = text.split("\n")

    # --- Queries ---
    def line_count(self) -> int:
        return len(self.lines)

    def line_length(self, row: int) -> int:
        if 0 <= row < len(self.lines):
            return len(self.lines[row])
        return 0

    def line_text(self, row: int) -> str:
        if 0 <= row < len(self.lines):
            return self.lines[row]
        return ""

    def _valid_row(self, row: int) -> bool:
        return 0 <= row < len(self.lines)

    def _clamp_col(self, row: int, col: int) -> int:
        return max(0, min(col, len(self.lines[row])))

    def clamp(self, row: int, col: int) -> Position:
        """Return the nearest valid position to (row, col)."""
        row = max(0, min(row, len(self.lines) - 1))
        return Position(row, self._clamp_col(row, col))

    def end_position(self) -> Position:
        last = len(self.lines) - 1
        return Position(last, len(self.lines[last]))

    # --- Edits ---
    def insert_at(self, row: int, col: int, text: str) -> Optional[Position]:
        """Insert text at (row, col), expanding embedded newlines.

        Returns the position just after the inserted text, or None if the
        row does not exist.
        """
        if not self._valid_row(row):
            return None
        col = self._clamp_col(row, col)
        line = self.lines[row]
        before, after = line[:col], line[col:]

        segments = text.split("\n")
        end_col = len(before + segments[-1]) if len(segments) == 1 else len(segments[-1])
        segments[0] = before + segments[0]
        segments[-1] += after
        self.lines[row:row + 1] = segments
        return Position(row + len(segments) - 1, end_col)

    def delete_char_before(self, row: int, col: int) -> Position:
        """Backspace at (row, col); returns where the cursor ends up.

        At column 0 the line is joined onto the previous one.
        """
        if not self._valid_row(row):
            return self.clamp(row, col)
        col = self._clamp_col(row, col)
        line = self.lines[row]
        if col > 0:
            self.lines[row] = line[:col - 1] + line[col:]
            return Position(row, col - 1)
        if row == 0:
            return Position(0, 0)
        prev_len = len(self.lines[row - 1])
        self.lines[row - 1] += line
        del self.lines[row]
        return Position(row - 1, prev_len)

    def delete_char_at(self, row: int, col: int) -> bool:
        """Delete the rune under (row, col); at end of line join the next line."""
        if not self._valid_row(row):
            return False
        col = self._clamp_col(row, col)
        line = self.lines[row]
        if col < len(line):
            self.lines[row] = line[:col] + line[col + 1:]
            return True
        if row + 1 < len(self.lines):
            self.lines[row] = line + self.lines[row + 1]
            del self.lines[row + 1]
            return True
        return False

    def delete_range(self, start_row: int, start_col: int, end_row: int, end_col: int) -> Optional[Position]:
        """Remove the text between two positions (in either order).

        Returns the normalized start, which is where the merged text meets,
        or None if either row is out of range.
        """
        start, end = normalize_range(start_row, start_col, end_row, end_col)
        if not (self._valid_row(start.row) and self._valid_row(end.row)):
            return None
        sc = self._clamp_col(start.row, start.col)
        ec = self._clamp_col(end.row, end.col)
        merged = self.lines[start.row][:sc] + self.lines[end.row][ec:]
        self.lines[start.row:end.row + 1] = [merged]
        return Position(start.row, sc)

    def text_in_range(self, start_row: int, start_col: int, end_row: int, end_col: int) -> str:
        """Text covered by the normalized range, lines joined with newlines."""
        start, end = normalize_range(start_row, start_col, end_row, end_col)
        if not (self._valid_row(start.row) and self._valid_row(end.row)):
            return ""
        parts = []
        for row in range(start.row, end.row + 1):
            line = self.lines[row]
            lo = start.col if row == start.row else 0
            hi = end.col if row == end.row else len(line)
            lo = max(0, min(lo, len(line)))
            hi = max(lo, min(hi, len(line)))
            parts.append(line[lo:hi])
        return "\n".join(parts)
