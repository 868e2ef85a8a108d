"""Textual front-end: the same editor with mouse selection and wheel scrolling."""

from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Footer, Static

from .editor import EditorController
from .keyboard import KeyEvent, key_event_from_textual
from .session import EditorSession
from .terminal import glyph_cells


class EditorCanvas(Widget, can_focus=True):
    """Draws the session's layout and routes input into it.

    The layout is measured in terminal cells, so widget-relative mouse
    coordinates are already layout coordinates.
    """

    DEFAULT_CSS = """
    EditorCanvas {
        height: 1fr;
        background: $surface;
    }
    """

    class Changed(Message):
        """Content, cursor or status changed."""

    class QuitRequested(Message):
        pass

    def __init__(self, controller: EditorController, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller

    @property
    def session(self) -> EditorSession:
        return self.controller.session

    def on_mount(self) -> None:
        self.set_interval(1 / 60, self._tick)

    def _tick(self) -> None:
        if self.session.tick():
            self.refresh()

    def on_resize(self, event: events.Resize) -> None:
        self.session.resize(max(1, event.size.width))
        self.controller.page_height = event.size.height
        self.refresh()

    def render(self) -> Text:
        height = self.size.height
        session = self.session
        layout = session.get_layout()
        cursor = session.primary
        offset = session.scroll_offset
        rows_by_y = {row.y: row for row in layout.rows}
        result = Text()
        for screen_y in range(height):
            if screen_y:
                result.append("\n")
            y = screen_y + offset
            row = rows_by_y.get(y)
            if row is None:
                continue
            for glyph in row.glyphs:
                at_cursor = (glyph.buffer_row == cursor.row
                             and glyph.buffer_col <= cursor.col < glyph.buffer_col + max(1, glyph.span))
                if glyph.is_end_of_line:
                    if at_cursor and self.has_focus:
                        result.append(" ", style="reverse")
                    continue
                style = ""
                if session.is_selected(glyph.buffer_row, glyph.buffer_col):
                    style = "reverse"
                if at_cursor and self.has_focus:
                    style = "underline reverse" if not style else "underline"
                result.append(glyph_cells(glyph), style=style)
        return result

    def dispatch_key(self, key_event: KeyEvent) -> None:
        self.controller.handle_key_event(key_event)
        self.refresh()
        self.post_message(self.Changed())
        if not self.controller.running:
            self.post_message(self.QuitRequested())

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        self.dispatch_key(key_event_from_textual(event.key, event.character))

    def on_mouse_down(self, event: events.MouseDown) -> None:
        self.capture_mouse()
        self.session.mouse_down(event.x, event.y)
        self.refresh()
        self.post_message(self.Changed())

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self.session.mouse_drag(event.x, event.y) is not None:
            self.refresh()

    def on_mouse_up(self, event: events.MouseUp) -> None:
        self.release_mouse()
        self.session.mouse_up(event.x, event.y)
        self.refresh()
        self.post_message(self.Changed())

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self.session.scroll(-1)
        self._tick()

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self.session.scroll(1)
        self._tick()


class RunepadApp(App):
    """Textual app hosting one EditorCanvas and a status line."""

    CSS = """
    #status {
        height: 1;
        background: $panel;
    }
    """

    # Priority bindings so Textual's own focus and quit keys reach the editor
    BINDINGS = [
        Binding("tab", "editor_key('tab')", "Tab", show=False, priority=True),
        Binding("ctrl+c", "editor_key('ctrl+c')", "Copy", show=False, priority=True),
        Binding("ctrl+q", "editor_key('ctrl+q')", "Quit", priority=True),
        Binding("ctrl+s", "editor_key('ctrl+s')", "Save", priority=True),
    ]

    def __init__(self, filename: Optional[str] = None, controller: Optional[EditorController] = None):
        super().__init__()
        if controller is None:
            controller = EditorController(EditorSession.for_terminal())
            controller.load_file(filename)
        self.controller = controller
        self.canvas = EditorCanvas(controller)

    def compose(self) -> ComposeResult:
        yield self.canvas
        yield Static(self.controller.status_line(), id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.controller.running = True
        self.title = "runepad"
        self.sub_title = self.controller.document.filename
        self.canvas.focus()

    def action_editor_key(self, key: str) -> None:
        self.canvas.dispatch_key(key_event_from_textual(key))

    def on_editor_canvas_changed(self, message: EditorCanvas.Changed) -> None:
        self.query_one("#status", Static).update(self.controller.status_line())

    def on_editor_canvas_quit_requested(self, message: EditorCanvas.QuitRequested) -> None:
        self.exit()


def main(filename: Optional[str] = None):
    """Run the Textual app."""
    RunepadApp(filename=filename).run()

