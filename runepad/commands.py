"""Command pattern implementation for editor actions.

Commands drive the front-end's `session` (an EditorSession) and report
back through `status_message`. Both front-ends provide the same small
surface: `session`, `status_message`, `clipboard`, `page_height`,
`save()` and `request_quit()`.
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .constants import EditorConstants
from .editing import Direction
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Moves the primary cursor; a plain movement drops the selection."""

    direction: Direction
    extend = False

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        editor.session.move_cursor(self.direction, extend=self.extend)
        return False


class LeftCharCommand(MovementCommand):
    direction = Direction.LEFT


class RightCharCommand(MovementCommand):
    direction = Direction.RIGHT


class UpLineCommand(MovementCommand):
    direction = Direction.UP


class DownLineCommand(MovementCommand):
    direction = Direction.DOWN


class BeginningOfLineCommand(MovementCommand):
    direction = Direction.LINE_START


class EndOfLineCommand(MovementCommand):
    direction = Direction.LINE_END


class SelectionMovementCommand(MovementCommand):
    """Shift+movement: keeps the anchor and grows or shrinks the selection."""
    extend = True


class ShiftLeftCommand(SelectionMovementCommand):
    direction = Direction.LEFT


class ShiftRightCommand(SelectionMovementCommand):
    direction = Direction.RIGHT


class ShiftUpCommand(SelectionMovementCommand):
    direction = Direction.UP


class ShiftDownCommand(SelectionMovementCommand):
    direction = Direction.DOWN


class ShiftHomeCommand(SelectionMovementCommand):
    direction = Direction.LINE_START


class ShiftEndCommand(SelectionMovementCommand):
    direction = Direction.LINE_END


class PageCommand(EditorCommand):
    pages = 1

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        editor.session.move_by_page(self.pages, editor.page_height)
        return False


class PageDownCommand(PageCommand):
    pages = 1


class PageUpCommand(PageCommand):
    pages = -1


class EditCommand(EditorCommand):
    """Base class for editing commands; the session records undo history."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        return bool(self._edit(editor, key_event))

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Perform the edit; return True if the content changed."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.session.apply_backspace()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.session.apply_delete()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.session.apply_enter()


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        if char == '\t':
            return editor.session.apply_tab()
        # Filter out control characters
        if not char or ord(char[0]) < 32:
            return False
        return editor.session.apply_text_input(char)


class CutCommand(EditCommand):
    def _edit(self, editor, key_event):
        text = editor.session.selected_text()
        if not text:
            editor.status_message = EditorConstants.NO_SELECTION_MESSAGE
            return False
        if not editor.clipboard.copy_text(text):
            editor.status_message = EditorConstants.CLIPBOARD_FAILED_MESSAGE
            return False
        editor.status_message = EditorConstants.SELECTION_CUT_MESSAGE
        return editor.session.delete_selection()


class PasteCommand(EditCommand):
    def _edit(self, editor, key_event):
        text = editor.clipboard.paste_text()
        if not text:
            editor.status_message = EditorConstants.CLIPBOARD_EMPTY_MESSAGE
            return False
        return editor.session.paste(text)


class UndoCommand(EditCommand):
    def _edit(self, editor, key_event):
        if editor.session.undo():
            editor.status_message = EditorConstants.UNDONE_MESSAGE
            return True
        editor.status_message = EditorConstants.NOTHING_TO_UNDO_MESSAGE
        return False


class SystemCommand(EditorCommand):
    """Base class for commands that leave the content alone."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        pass


class CopyCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        text = editor.session.selected_text()
        if not text:
            editor.status_message = EditorConstants.NO_SELECTION_MESSAGE
        elif editor.clipboard.copy_text(text):
            editor.status_message = EditorConstants.SELECTION_COPIED_MESSAGE
        else:
            editor.status_message = EditorConstants.CLIPBOARD_FAILED_MESSAGE


class SelectAllCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.session.select_all()


class ZoomInCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.status_message = f"Zoom {editor.session.zoom_in():.1f}"


class ZoomOutCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.status_message = f"Zoom {editor.session.zoom_out():.1f}"


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.save()


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_quit()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
        self.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())
        self.register((KeyType.CTRL, 'e'), EndOfLineCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())

        # Selection movement commands (Shift+arrow)
        self.register((KeyType.SHIFT_SPECIAL, 'left'), ShiftLeftCommand())
        self.register((KeyType.SHIFT_SPECIAL, 'right'), ShiftRightCommand())
        self.register((KeyType.SHIFT_SPECIAL, 'up'), ShiftUpCommand())
        self.register((KeyType.SHIFT_SPECIAL, 'down'), ShiftDownCommand())
        self.register((KeyType.SHIFT_SPECIAL, 'home'), ShiftHomeCommand())
        self.register((KeyType.SHIFT_SPECIAL, 'end'), ShiftEndCommand())
        self.register((KeyType.CTRL, 'a'), SelectAllCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.CTRL, 'x'), CutCommand())
        self.register((KeyType.CTRL, 'c'), CopyCommand())
        self.register((KeyType.CTRL, 'v'), PasteCommand())
        self.register((KeyType.CTRL, 'z'), UndoCommand())

        # Zoom
        self.register((KeyType.CTRL, '='), ZoomInCommand())
        self.register((KeyType.CTRL, '+'), ZoomInCommand())
        self.register((KeyType.CTRL, '-'), ZoomOutCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.SPECIAL, 'escape'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
