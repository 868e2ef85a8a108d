"""Runepad - a rune-exact text editing engine with wrapping layout."""

from .model import Position, TextBuffer
from .cursor import Cursor, CursorManager, Selection
from .editing import Direction, EditEngine
from .glyphs import FixedPitchMetrics, FontMetrics, GlyphMetrics, TerminalCellMetrics
from .layout import Glyph, Layout, LayoutRow, build_layout
from .session import EditorSession
from .undo import UndoHistory

__all__ = [
    'Position',
    'TextBuffer',
    'Cursor',
    'CursorManager',
    'Selection',
    'Direction',
    'EditEngine',
    'GlyphMetrics',
    'FixedPitchMetrics',
    'FontMetrics',
    'TerminalCellMetrics',
    'Glyph',
    'Layout',
    'LayoutRow',
    'build_layout',
    'EditorSession',
    'UndoHistory',
]
