"""Glyph-width oracles used by the layout engine.

The layout engine never measures text itself. It asks a GlyphMetrics
object how wide a run of text is and how tall a line is. Front-ends
provide the measuring: a GUI wraps its font renderer in FontMetrics, a
terminal uses TerminalCellMetrics where one cell is one "pixel".
"""

from abc import ABC, abstractmethod
from typing import Callable

from wcwidth import wcwidth

from .constants import EditorConstants


def cell_width(text: str) -> int:
    """Number of terminal cells the text occupies.

    Wide (East Asian) characters take two cells, combining marks none, and
    unprintable characters one so they remain clickable.
    """
    total = 0
    for ch in text:
        w = wcwidth(ch)
        total += 1 if w < 0 else w
    return total


class GlyphMetrics(ABC):
    """Measures text runs; results are cached per run."""

    def __init__(self):
        self._widths: dict[str, int] = {}

    @property
    @abstractmethod
    def line_height(self) -> int:
        """Height of one visual row in pixels."""

    @abstractmethod
    def measure(self, text: str) -> int:
        """Uncached width of a text run in pixels."""

    def width(self, text: str) -> int:
        # Tabs are measured as four spaces
        if text == "\t":
            text = EditorConstants.TAB_TEXT
        cached = self._widths.get(text)
        if cached is None:
            cached = self._widths[text] = max(0, int(self.measure(text)))
        return cached

    def __call__(self, text: str) -> int:
        return self.width(text)

    def scaled(self, zoom: float) -> "GlyphMetrics":
        """Metrics for another zoom level; zoom-independent metrics return self."""
        return self


class FixedPitchMetrics(GlyphMetrics):
    """Every terminal cell of a run is `advance` pixels wide."""

    def __init__(self, advance: int = 10, line_height: int = 20):
        super().__init__()
        self.advance = advance
        self._line_height = line_height

    @property
    def line_height(self) -> int:
        return self._line_height

    def measure(self, text: str) -> int:
        return cell_width(text) * self.advance


class TerminalCellMetrics(FixedPitchMetrics):
    """Widths in terminal cells; a line is one cell tall."""

    def __init__(self):
        super().__init__(advance=1, line_height=1)


class FontMetrics(GlyphMetrics):
    """Wraps an external font renderer.

    `measure_fn(text, pixel_size)` returns the rendered width of `text` at
    the given pixel size. The pixel size follows the zoom level, and the
    line height leaves a third of the size as leading.
    """

    def __init__(self, measure_fn: Callable[[str, int], int],
                 font_size: int = EditorConstants.FONT_SIZE,
                 zoom: float = EditorConstants.DEFAULT_ZOOM):
        super().__init__()
        self.measure_fn = measure_fn
        self.font_size = font_size
        self.zoom = zoom

    @property
    def pixel_size(self) -> int:
        return int(self.font_size * self.zoom)

    @property
    def line_height(self) -> int:
        return self.pixel_size + self.pixel_size // 3

    def measure(self, text: str) -> int:
        return self.measure_fn(text, self.pixel_size)

    def scaled(self, zoom: float) -> "FontMetrics":
        return FontMetrics(self.measure_fn, self.font_size, zoom)


class CallableMetrics(GlyphMetrics):
    """Adapts a bare `width(text)` function and a fixed line height."""

    def __init__(self, width_fn: Callable[[str], int], line_height: int):
        super().__init__()
        self.width_fn = width_fn
        self._line_height = line_height

    @property
    def line_height(self) -> int:
        return self._line_height

    def measure(self, text: str) -> int:
        return self.width_fn(text)
