"""Edit engine: structural edits that keep cursors consistent."""

import logging
from enum import Enum
from typing import Optional

from .constants import EditorConstants
from .cursor import CursorManager
from .model import Position, TextBuffer
from .undo import UndoHistory

logger = logging.getLogger(__name__)


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    LINE_START = "line_start"
    LINE_END = "line_end"


class EditEngine:
    """Applies edits to a buffer on behalf of the primary cursor.

    Every method that changes content pushes one snapshot onto the undo
    history first. Methods return True when the content changed.
    """

    def __init__(self, buffer: Optional[TextBuffer] = None, undo: Optional[UndoHistory] = None):
        self.buffer = buffer or TextBuffer()
        self.cursors = CursorManager()
        self.undo_history = undo if undo is not None else UndoHistory()

    def _snapshot(self):
        self.undo_history.push(self.buffer.text)

    def _primary_selection_active(self) -> bool:
        sel = self.cursors.primary.selection
        return sel.active and not sel.is_empty

    def _remove_selection(self) -> bool:
        """Delete the primary selection without pushing a snapshot."""
        primary = self.cursors.primary
        sel = primary.selection
        start = self.buffer.delete_range(sel.start_row, sel.start_col, sel.end_row, sel.end_col)
        self.cursors.clear_all_selections()
        if start is None:
            return False
        primary.move_to(start)
        return True

    # --- Content edits ---
    def insert_text(self, text: str) -> bool:
        if not text:
            return False
        self._snapshot()
        if self._primary_selection_active():
            self._remove_selection()
        self.cursors.clear_all_selections()
        primary = self.cursors.primary
        end = self.buffer.insert_at(primary.row, primary.col, text)
        if end is not None:
            primary.move_to(end)
        return True

    def paste(self, text: str) -> bool:
        logger.debug("Paste of %d runes", len(text))
        return self.insert_text(text)

    def newline(self) -> bool:
        return self.insert_text("\n")

    def tab(self) -> bool:
        return self.insert_text(EditorConstants.TAB_TEXT)

    def backspace(self) -> bool:
        if self._primary_selection_active():
            return self.delete_selection()
        self.cursors.clear_all_selections()
        primary = self.cursors.primary
        if primary.row == 0 and primary.col == 0:
            return False
        self._snapshot()
        primary.move_to(self.buffer.delete_char_before(primary.row, primary.col))
        return True

    def delete_forward(self) -> bool:
        if self._primary_selection_active():
            return self.delete_selection()
        self.cursors.clear_all_selections()
        primary = self.cursors.primary
        end = self.buffer.end_position()
        if primary.position >= end:
            return False
        self._snapshot()
        return self.buffer.delete_char_at(primary.row, primary.col)

    def delete_selection(self) -> bool:
        if not self._primary_selection_active():
            self.cursors.clear_all_selections()
            return False
        self._snapshot()
        return self._remove_selection()

    # --- Selection ---
    def select_all(self):
        logger.debug("Select all")
        self.cursors.clear_all_selections()
        primary = self.cursors.primary
        end = self.buffer.end_position()
        primary.selection.start(0, 0)
        primary.selection.extend(end.row, end.col)
        primary.move_to(end)

    def set_selection_anchor(self, row: int, col: int) -> Position:
        pos = self.buffer.clamp(row, col)
        primary = self.cursors.primary
        primary.move_to(pos)
        primary.selection.start(pos.row, pos.col)
        return pos

    def extend_selection_to(self, row: int, col: int) -> Position:
        pos = self.buffer.clamp(row, col)
        primary = self.cursors.primary
        if not primary.selection.active:
            primary.selection.start(primary.row, primary.col)
        primary.move_to(pos)
        primary.selection.extend(pos.row, pos.col)
        return pos

    def selected_text(self) -> str:
        return self.cursors.selected_text(self.cursors.primary_index, self.buffer)

    # --- Movement ---
    def _target_of(self, direction: Direction) -> Position:
        primary = self.cursors.primary
        row, col = primary.row, primary.col
        if direction == Direction.LEFT:
            return Position(row, max(0, col - 1))
        if direction == Direction.RIGHT:
            return Position(row, min(col + 1, self.buffer.line_length(row)))
        if direction == Direction.UP:
            if row == 0:
                return Position(row, col)
            return self.buffer.clamp(row - 1, col)
        if direction == Direction.DOWN:
            if row + 1 >= self.buffer.line_count():
                return Position(row, col)
            return self.buffer.clamp(row + 1, col)
        if direction == Direction.LINE_START:
            return Position(row, 0)
        return Position(row, self.buffer.line_length(row))

    def move_cursor(self, direction: Direction, extend: bool = False):
        """Move the primary cursor; with extend, grow the selection instead of clearing it."""
        primary = self.cursors.primary
        target = self._target_of(direction)
        if extend:
            self.extend_selection_to(target.row, target.col)
        else:
            self.cursors.clear_all_selections()
            primary.move_to(target)

    # --- History ---
    def undo(self) -> bool:
        state = self.undo_history.pop()
        if state is None:
            logger.debug("No more undos available")
            return False
        self.buffer.set_text(state)
        self.cursors.clamp_all(self.buffer)
        return True

    def load(self, text: str):
        """Replace all content, dropping history and cursor state."""
        self.buffer.set_text(text)
        self.undo_history.clear()
        self.cursors.reset()
