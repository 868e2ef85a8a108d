"""Editing session: the one object a front-end talks to.

An EditorSession owns the buffer, cursors, undo history, zoom, scroll
state and the cached layout. Nothing outlives the session, so several
editors can coexist in one process.
"""

import logging
from typing import Callable, Iterable, Optional

from .constants import EditorConstants
from .cursor import Cursor
from .editing import Direction, EditEngine
from .glyphs import CallableMetrics, FixedPitchMetrics, GlyphMetrics, TerminalCellMetrics
from .layout import Layout, build_layout
from .model import Position, TextBuffer

logger = logging.getLogger(__name__)


class EditorSession:
    """Translates input into model changes and serves layout queries.

    Content, viewport and zoom changes drop the cached layout; the next
    get_layout() call rebuilds it in full and refreshes cursor anchors.
    Hit-testing and pixel lookups take viewport coordinates, i.e. with
    the current scroll offset applied.
    """

    def __init__(
        self,
        text: str = "",
        metrics: Optional[GlyphMetrics] = None,
        viewport_width: int = 800,
        zoom: float = EditorConstants.DEFAULT_ZOOM,
        left_margin: int = EditorConstants.LEFT_MARGIN,
        top_margin: int = EditorConstants.TOP_MARGIN,
        right_margin: int = EditorConstants.RIGHT_MARGIN,
        ligatures: Iterable[str] = EditorConstants.LIGATURES,
    ):
        self.engine = EditEngine(TextBuffer.from_text(text))
        self.zoom = zoom
        self.metrics = (metrics or FixedPitchMetrics()).scaled(zoom)
        self.viewport_width = viewport_width
        self.left_margin = left_margin
        self.top_margin = top_margin
        self.right_margin = right_margin
        self.ligatures = tuple(ligatures)
        self.scroll_speed = EditorConstants.SCROLL_SPEED
        self.scroll_lerp = EditorConstants.SCROLL_LERP_SPEED
        self.target_scroll_y = 0.0
        self.actual_scroll_y = 0.0
        self.scroll_offset = 0
        self.modified = False
        self._layout: Optional[Layout] = None
        self._width_fn: Optional[Callable[[str], int]] = None
        self._dragging = False

    @classmethod
    def for_terminal(cls, text: str = "", columns: int = 80) -> "EditorSession":
        """A session measured in terminal cells with no margins."""
        session = cls(text, metrics=TerminalCellMetrics(), viewport_width=columns,
                      left_margin=0, top_margin=0, right_margin=0)
        session.scroll_speed = 3
        session.scroll_lerp = 1.0
        return session

    # --- State ---
    @property
    def buffer(self) -> TextBuffer:
        return self.engine.buffer

    @property
    def primary(self) -> Cursor:
        return self.engine.cursors.primary

    @property
    def text(self) -> str:
        return self.buffer.text

    def load_text(self, text: str):
        self.engine.load(text)
        self.target_scroll_y = self.actual_scroll_y = 0.0
        self.scroll_offset = 0
        self.modified = False
        self.invalidate_layout()

    def invalidate_layout(self):
        self._layout = None

    def _after_edit(self, changed: bool) -> bool:
        if changed:
            self.modified = True
            self.invalidate_layout()
        return changed

    # --- Input operations ---
    def apply_text_input(self, text: str) -> bool:
        return self._after_edit(self.engine.insert_text(text))

    def apply_backspace(self) -> bool:
        return self._after_edit(self.engine.backspace())

    def apply_delete(self) -> bool:
        return self._after_edit(self.engine.delete_forward())

    def apply_enter(self) -> bool:
        return self._after_edit(self.engine.newline())

    def apply_tab(self) -> bool:
        return self._after_edit(self.engine.tab())

    def paste(self, text: str) -> bool:
        return self._after_edit(self.engine.paste(text))

    def delete_selection(self) -> bool:
        return self._after_edit(self.engine.delete_selection())

    def undo(self) -> bool:
        return self._after_edit(self.engine.undo())

    def move_cursor(self, direction: Direction, extend: bool = False):
        self.engine.move_cursor(direction, extend=extend)

    def set_selection_anchor(self, row: int, col: int) -> Position:
        return self.engine.set_selection_anchor(row, col)

    def extend_selection_to(self, row: int, col: int) -> Position:
        return self.engine.extend_selection_to(row, col)

    def select_all(self):
        self.engine.select_all()

    def clear_selection(self):
        self.engine.cursors.clear_all_selections()

    def has_selection(self) -> bool:
        sel = self.primary.selection
        return sel.active and not sel.is_empty

    def selected_text(self) -> str:
        return self.engine.selected_text()

    def is_selected(self, row: int, col: int) -> bool:
        return self.primary.selection.contains(row, col)

    # --- Mouse ---
    def mouse_down(self, x: float, y: float) -> Position:
        pos = self.hit_test(x, y)
        self.engine.set_selection_anchor(pos.row, pos.col)
        self._dragging = True
        return pos

    def mouse_drag(self, x: float, y: float) -> Optional[Position]:
        if not self._dragging:
            return None
        pos = self.hit_test(x, y)
        self.engine.extend_selection_to(pos.row, pos.col)
        return pos

    def mouse_up(self, x: float, y: float) -> Position:
        if self._dragging:
            self.mouse_drag(x, y)
            self._dragging = False
        # A plain click only places the cursor
        if self.primary.selection.is_empty:
            self.clear_selection()
        return self.primary.position

    # --- Viewport ---
    def resize(self, viewport_width: int):
        if viewport_width != self.viewport_width:
            self.viewport_width = viewport_width
            self.invalidate_layout()

    def set_metrics(self, metrics: GlyphMetrics):
        self.metrics = metrics
        self.invalidate_layout()

    def set_zoom(self, zoom: float) -> float:
        zoom = max(EditorConstants.MIN_ZOOM, zoom)
        if zoom != self.zoom:
            self.zoom = zoom
            self.set_metrics(self.metrics.scaled(zoom))
            logger.debug("Zoom set to %.1f", zoom)
        return self.zoom

    def zoom_in(self) -> float:
        return self.set_zoom(self.zoom + EditorConstants.ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.set_zoom(self.zoom - EditorConstants.ZOOM_STEP)

    def scroll(self, wheel_delta: float):
        """Positive deltas scroll toward the top, as mouse wheels report."""
        self.target_scroll_y = max(0.0, self.target_scroll_y - wheel_delta * self.scroll_speed)

    def tick(self) -> bool:
        """Ease the scroll offset toward its target; True if it moved."""
        delta = self.target_scroll_y - self.actual_scroll_y
        self.actual_scroll_y += delta * self.scroll_lerp
        offset = int(self.actual_scroll_y + 0.5)
        moved = offset != self.scroll_offset
        self.scroll_offset = offset
        return moved

    def move_by_page(self, pages: int, viewport_height: int, extend: bool = False) -> Position:
        """Move the cursor a viewport height up (negative) or down, keeping its x."""
        layout = self.get_layout()
        x, y = layout.pixel_of(self.primary.row, self.primary.col)
        target = layout.hit_test(x, y + pages * viewport_height)
        if extend:
            self.engine.extend_selection_to(target.row, target.col)
        else:
            self.clear_selection()
            self.primary.move_to(target)
        return target

    def scroll_to_cursor(self, viewport_height: int):
        """Snap the scroll offset so the primary cursor is on screen."""
        layout = self.get_layout()
        _, y = layout.pixel_of(self.primary.row, self.primary.col)
        offset = self.scroll_offset
        if y < offset:
            offset = max(0, y - self.top_margin)
        elif y + layout.line_height > offset + viewport_height:
            offset = y + layout.line_height - viewport_height
        self.target_scroll_y = self.actual_scroll_y = float(offset)
        self.scroll_offset = offset

    # --- Layout queries ---
    def get_layout(
        self,
        viewport_width: Optional[int] = None,
        glyph_width: Optional[Callable[[str], int]] = None,
        line_height: Optional[int] = None,
    ) -> Layout:
        if viewport_width is not None:
            self.resize(viewport_width)
        if glyph_width is not None and glyph_width != self._width_fn:
            self._width_fn = glyph_width
            self.set_metrics(CallableMetrics(glyph_width, line_height or self.metrics.line_height))
        elif line_height is not None and line_height != self.metrics.line_height:
            self.set_metrics(CallableMetrics(self.metrics.width, line_height))

        if self._layout is None:
            self._layout = build_layout(
                self.buffer.lines,
                self.metrics.width,
                self.metrics.line_height,
                self.viewport_width,
                left_margin=self.left_margin,
                top_margin=self.top_margin,
                right_margin=self.right_margin,
                ligatures=self.ligatures,
            )
        self.engine.cursors.update_anchors(self._layout)
        return self._layout

    def hit_test(self, x: float, y: float) -> Position:
        return self.get_layout().hit_test(x, y + self.scroll_offset)

    def pixel_of(self, row: int, col: int) -> tuple[int, int]:
        x, y = self.get_layout().pixel_of(row, col)
        return x, y - self.scroll_offset
