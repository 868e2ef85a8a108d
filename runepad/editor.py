"""Editor controllers: document lifecycle and the terminal main loop."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .clipboard import ClipboardManager
from .commands import CommandRegistry
from .constants import EditorConstants
from .document_io import DocumentFile
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .session import EditorSession
from .terminal import TerminalInterface, compose_rows

logger = logging.getLogger(__name__)


class EditorController:
    """Front-end independent editor state: session, file, status line.

    Commands from the CommandRegistry act on this object. A front-end
    feeds it key events and reads `running` and `status_line()` back.
    """

    def __init__(self, session: EditorSession, document: Optional[DocumentFile] = None,
                 clipboard: Optional[ClipboardManager] = None, persistence=None):
        self.session = session
        self.persistence = persistence
        self.document = document or DocumentFile(persistence=persistence)
        self.clipboard = clipboard or ClipboardManager()
        self.command_registry = CommandRegistry()
        self.running = False
        self.status_message: Optional[str] = None
        self._page_height = 20
        self._quit_armed = False
        self._confirming_quit = False

    @property
    def page_height(self) -> int:
        """Viewport height used for paging and keeping the cursor visible."""
        return self._page_height

    @page_height.setter
    def page_height(self, value: int):
        self._page_height = max(1, value)

    def load_file(self, filename: Optional[str] = None):
        """Load a file (or the default buffer) and its stored zoom."""
        self.document = DocumentFile(filename, self.persistence)
        self.session.load_text(self.document.read())
        zoom = self.document.load_zoom()
        if zoom is not None:
            self.session.set_zoom(zoom)

    def save(self) -> bool:
        """Handle Ctrl-S: write the document atomically."""
        ok, error = self.document.write(self.session.text)
        if not ok:
            self.status_message = error
            return False
        self.session.modified = False
        self.document.save_zoom(self.session.zoom)
        self.status_message = f"Saved to {self.document.filename}"
        return True

    def request_quit(self):
        """Quit, saving the default buffer; a modified file needs a second request."""
        if self.document.is_default:
            # A failed save arms the quit; the next quit discards the edits
            if self.session.modified and not self._confirming_quit and not self.save():
                self.status_message = EditorConstants.SAVE_FAILED_QUIT_MESSAGE.format(
                    error=self.status_message)
                self._quit_armed = True
                return
            self.running = False
            return
        if self.session.modified and not self._confirming_quit:
            self.status_message = EditorConstants.UNSAVED_QUIT_MESSAGE
            self._quit_armed = True
            return
        self.document.save_zoom(self.session.zoom)
        self.running = False

    def handle_key_event(self, key_event: KeyEvent) -> bool:
        """Run the command bound to a key.

        Returns:
            True if the document was modified
        """
        self.status_message = None
        self._confirming_quit, self._quit_armed = self._quit_armed, False
        changed = self.command_registry.execute(self, key_event)
        self.session.scroll_to_cursor(self.page_height)
        return changed

    def status_line(self) -> str:
        if self.status_message:
            return f" {self.status_message}"
        cursor = self.session.primary
        flag = " *" if self.session.modified else ""
        return (f" {self.document.display_name}{flag}  "
                f"Ln {cursor.row + 1}, Col {cursor.col + 1}  Zoom {self.session.zoom:.1f}")


class Editor(EditorController):
    """Terminal editor: blessed output, curtsies input, select() loop."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 clipboard: Optional[ClipboardManager] = None,
                 document: Optional[DocumentFile] = None, persistence=None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        super().__init__(EditorSession.for_terminal(columns=self.terminal.width),
                         document=document, clipboard=clipboard, persistence=persistence)
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self._ctrl_c_pressed = False

    @property
    def page_height(self) -> int:
        return max(1, self.terminal.height)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) - treat as copy command."""
        del signum, frame  # Unused
        self._ctrl_c_pressed = True
        os.write(self._resize_pipe_w, b'C')

    def _disable_flow_control(self):
        """Let Ctrl-S, Ctrl-Q and Ctrl-V reach the editor.

        Returns the previous termios settings, or None if stdin is no tty.
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
        except (termios.error, OSError) as e:
            logger.debug(f"Not a tty, leaving flow control alone: {e}")
            return None
        new_settings = list(old_settings)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        new_settings[3] &= ~termios.IEXTEN
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        return old_settings

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)
        old_settings = self._disable_flow_control()

        try:
            need_draw = True
            while self.running:
                if need_draw:
                    self._draw()
                    need_draw = False

                # Wait for input on stdin or the resize pipe
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    if self._ctrl_c_pressed:
                        self._ctrl_c_pressed = False
                        self.handle_key_event(KeyEvent(
                            key_type=KeyType.CTRL, value='c', raw='\x03', is_ctrl=True))
                    else:
                        self.terminal.invalidate_frame()
                        self.session.resize(self.terminal.width)
                        self.session.scroll_to_cursor(self.page_height)
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.handle_key_event(key_event)
                        need_draw = True
        finally:
            if old_settings is not None:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def _draw(self):
        """Draw the visible part of the layout and the status line."""
        self.session.resize(self.terminal.width)
        layout = self.session.get_layout()
        screen = compose_rows(layout, self.session.scroll_offset, self.page_height,
                              self.session.is_selected)
        x, y = self.session.pixel_of(self.session.primary.row, self.session.primary.col)
        self.terminal.update_frame(screen, y, x, self.status_line())
