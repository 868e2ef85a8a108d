"""System clipboard integration."""

import logging

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardManager:
    """Plain-text copy and paste through the system clipboard.

    A missing clipboard mechanism (e.g. no xclip on a headless box) is
    reported through the log and the return value, never raised.
    """

    @staticmethod
    def copy_text(text: str) -> bool:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning(f"Clipboard copy failed: {e}")
            return False
        return True

    @staticmethod
    def paste_text() -> str:
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.warning(f"Clipboard paste failed: {e}")
            return ""
        # Normalize Windows and old Mac line endings
        return (content or "").replace('\r\n', '\n').replace('\r', '\n')
