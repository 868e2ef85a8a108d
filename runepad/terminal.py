"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Callable, Optional

import blessed
from curtsies import Input

from .constants import EditorConstants
from .layout import Glyph, Layout

logger = logging.getLogger(__name__)

# A screen line is a list of (text, selected) runs
Segment = tuple[str, bool]


def glyph_cells(glyph: Glyph) -> str:
    """Text to print for a glyph, exactly `glyph.width` cells wide."""
    if glyph.text == "\t":
        return EditorConstants.TAB_TEXT[:glyph.width].ljust(glyph.width)
    if glyph.text.isprintable():
        return glyph.text
    return " " * glyph.width


def compose_rows(layout: Layout, scroll_offset: int, height: int,
                 is_selected: Callable[[int, int], bool]) -> list[list[Segment]]:
    """Cut the visible window out of a cell-measured layout.

    Returns one list of runs per screen line; lines past the end of the
    document are empty.
    """
    screen: list[list[Segment]] = [[] for _ in range(max(0, height))]
    for row in layout.rows:
        y = row.y - scroll_offset
        if not 0 <= y < height:
            continue
        runs: list[Segment] = []
        for glyph in row.glyphs:
            if glyph.is_end_of_line:
                continue
            selected = is_selected(glyph.buffer_row, glyph.buffer_col)
            text = glyph_cells(glyph)
            if runs and runs[-1][1] == selected:
                runs[-1] = (runs[-1][0] + text, selected)
            else:
                runs.append((text, selected))
        screen[y] = runs
    return screen


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[Input] = None
        # Virtual screen state for minimal updates
        self._last_lines: Optional[list[str]] = None
        self._last_status: Optional[str] = None

    def setup(self):
        """Enter fullscreen mode and put the keyboard in raw mode."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                self._curtsies_input = Input(keynames='curtsies')
                self._curtsies_input.__enter__()
            except OSError as e:
                # No usable tty: the editor still draws but gets no keys
                logger.warning(f"Keyboard input unavailable: {e}")
                self._curtsies_input = None

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None

    def invalidate_frame(self) -> None:
        """Force a full repaint on the next update."""
        self._last_lines = None
        self._last_status = None

    def _compose_line(self, runs: list[Segment], width: int) -> str:
        out = []
        used = 0
        for text, selected in runs:
            cells = self.term.length(text)
            if used + cells > width:
                text = self.term.truncate(text, width - used)
                cells = self.term.length(text)
            out.append(self.term.reverse + text + self.term.normal if selected else text)
            used += cells
            if used >= width:
                break
        out.append(" " * max(0, width - used))
        return "".join(out)

    def update_frame(self, screen: list[list[Segment]], cursor_y: int, cursor_x: int,
                     status: str = "") -> None:
        """Diff against last frame and write only changed lines.

        Falls back to a full clear on first paint or when geometry changes.
        """
        width = self.term.width
        if self._last_lines is None or len(self._last_lines) != len(screen):
            print(self.term.home + self.term.clear, end='')
            self._last_lines = ["" for _ in screen]
            self._last_status = None

        for y, runs in enumerate(screen):
            line = self._compose_line(runs, width)
            if line != self._last_lines[y]:
                print(self.term.move(y, 0) + line, end='')
                self._last_lines[y] = line

        status_text = self.term.ljust(self.term.truncate(status, width), width)
        if status_text != self._last_status:
            print(self.term.move(self.term.height - 1, 0) + self.term.reverse
                  + status_text + self.term.normal, end='')
            self._last_status = status_text

        cursor_y = max(0, min(cursor_y, len(screen) - 1))
        cursor_x = max(0, min(cursor_x, width - 1))
        print(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor, end='', flush=True)

    def get_key(self, timeout=None) -> Optional[str]:
        """Next curtsies key token, or None on timeout or without input.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1  # Reserve one line for status
