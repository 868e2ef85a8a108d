"""Cursors and selections."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .model import Position, TextBuffer, normalize_range

if TYPE_CHECKING:
    from .layout import Layout


@dataclass
class Selection:
    """A selected region. Start may lie after end (drag direction is kept).

    The start is inclusive and the end is exclusive.
    """
    start_row: int = 0
    start_col: int = 0
    end_row: int = 0
    end_col: int = 0
    active: bool = False

    def start(self, row: int, col: int):
        """Anchor a new, still empty selection at (row, col)."""
        self.start_row, self.start_col = row, col
        self.end_row, self.end_col = row, col
        self.active = True

    def extend(self, row: int, col: int):
        self.end_row, self.end_col = row, col
        self.active = True

    def normalized(self) -> tuple[Position, Position]:
        return normalize_range(self.start_row, self.start_col, self.end_row, self.end_col)

    @property
    def is_empty(self) -> bool:
        return (self.start_row, self.start_col) == (self.end_row, self.end_col)

    def contains(self, row: int, col: int) -> bool:
        """True if the rune at (row, col) is selected."""
        if not self.active:
            return False
        start, end = self.normalized()
        return start <= Position(row, col) < end

    def extract_text(self, buffer: TextBuffer) -> str:
        if not self.active:
            return ""
        return buffer.text_in_range(self.start_row, self.start_col, self.end_row, self.end_col)

    def clamp(self, buffer: TextBuffer):
        start = buffer.clamp(self.start_row, self.start_col)
        end = buffer.clamp(self.end_row, self.end_col)
        self.start_row, self.start_col = start.row, start.col
        self.end_row, self.end_col = end.row, end.col


@dataclass
class Cursor:
    row: int = 0
    col: int = 0
    # Render anchor, refreshed after every layout pass
    x: int = 0
    y: int = 0
    selection: Selection = field(default_factory=Selection)

    @property
    def position(self) -> Position:
        return Position(self.row, self.col)

    def move_to(self, position: Position):
        self.row, self.col = position.row, position.col


class CursorManager:
    """Ordered, never-empty collection of cursors with one primary.

    Only the primary cursor is driven by input; the others are kept
    consistent (clamped, anchored) so multi-cursor editing can build on it.
    """

    def __init__(self):
        self.cursors: list[Cursor] = [Cursor()]
        self.primary_index = 0

    @property
    def primary(self) -> Cursor:
        return self.cursors[self.primary_index]

    def add_cursor(self, row: int, col: int) -> int:
        self.cursors.append(Cursor(row, col))
        return len(self.cursors) - 1

    def reset(self):
        self.cursors = [Cursor()]
        self.primary_index = 0

    def clear_all_selections(self):
        for cursor in self.cursors:
            cursor.selection.active = False

    def has_selection(self) -> bool:
        return any(cursor.selection.active for cursor in self.cursors)

    def selected_text(self, index: int, buffer: TextBuffer) -> str:
        if not 0 <= index < len(self.cursors):
            return ""
        return self.cursors[index].selection.extract_text(buffer)

    def clamp_all(self, buffer: TextBuffer):
        for cursor in self.cursors:
            cursor.move_to(buffer.clamp(cursor.row, cursor.col))
            cursor.selection.clamp(buffer)

    def update_anchors(self, layout: "Layout"):
        for cursor in self.cursors:
            cursor.x, cursor.y = layout.pixel_of(cursor.row, cursor.col)
