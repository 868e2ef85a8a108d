"""Constants and configuration for the runepad editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Undo
    UNDO_STACK_LIMIT = 100  # Snapshots kept before the oldest is evicted

    # Editing
    TAB_TEXT = "    "  # Tab key inserts four spaces
    LIGATURES = ("->", "=>", "<-", "<=", "==", "!=", "&&", "||", "++", "--")

    # Pixel layout margins
    LEFT_MARGIN = 10
    TOP_MARGIN = 10
    RIGHT_MARGIN = 50  # Wrap before the last 50 pixels of the viewport

    # Fonts and zoom
    FONT_SIZE = 14
    DEFAULT_ZOOM = 2.0
    ZOOM_STEP = 0.5
    MIN_ZOOM = 0.5

    # Scrolling
    SCROLL_SPEED = 100  # Pixels per wheel notch
    SCROLL_LERP_SPEED = 0.1  # Smaller = slower easing

    # Files
    DEFAULT_BUFFER_FILE = "buffer.txt"  # Used when no file is given
    DEFAULT_CONTENT = "Hello, High-DPI World!\nasdadasda"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    NOTHING_TO_UNDO_MESSAGE = "Nothing to undo"
    UNDONE_MESSAGE = "Undone"
    NO_SELECTION_MESSAGE = "No selection"
    SELECTION_COPIED_MESSAGE = "Selection copied"
    SELECTION_CUT_MESSAGE = "Selection cut"
    CLIPBOARD_EMPTY_MESSAGE = "Clipboard empty"
    CLIPBOARD_FAILED_MESSAGE = "Clipboard unavailable, nothing copied"
    UNSAVED_QUIT_MESSAGE = "Unsaved changes. Quit again to discard, Ctrl-S to save"
    SAVE_FAILED_QUIT_MESSAGE = "{error}. Quit again to discard"
