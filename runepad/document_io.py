"""Reading and atomically writing documents as plain UTF-8 text."""

import errno
import logging
import os
import tempfile
from typing import Optional

from .constants import EditorConstants
from .settings_persistence import get_persistence

logger = logging.getLogger(__name__)


def load_text(filename: str, default: Optional[str] = None) -> Optional[str]:
    """Read a document.

    Returns:
        The file content, or `default` if the file does not exist or cannot
        be read.
    """
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        return default
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {filename}: {e}")
        return default
    logger.info(f"Loaded {filename}")
    return content


def save_text(filename: str, content: str) -> tuple[bool, Optional[str]]:
    """Save content to a file atomically.

    The content is written to a temporary file in the same directory and
    renamed over the target, so a crash never leaves a half-written file.

    Returns:
        (True, None) on success, else (False, error message).
    """
    dir_name = os.path.dirname(filename) or '.'
    suffix = os.path.splitext(filename)[1]
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                         dir=dir_name, suffix=suffix,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_filename, filename)
    except PermissionError:
        error = f"Error: Permission denied saving {filename}"
    except OSError as e:
        if e.errno == errno.ENOSPC:
            error = "Error: No space left on device"
        else:
            error = f"Error: Cannot save to {filename}"
    else:
        logger.info(f"Saved {filename}")
        return True, None

    logger.warning(error)
    if temp_filename and os.path.exists(temp_filename):
        try:
            os.remove(temp_filename)
        except OSError as cleanup_error:
            logger.debug(f"Could not remove {temp_filename}: {cleanup_error}")
    return False, error


class DocumentFile:
    """The file behind an editing session.

    Without an explicit filename the editor works on `buffer.txt` in the
    current directory, starts from a greeting when it does not exist yet,
    and writes back to it on quit.
    """

    def __init__(self, filename: Optional[str] = None, persistence=None):
        self.is_default = filename is None
        self.filename = filename or EditorConstants.DEFAULT_BUFFER_FILE
        self._persistence = persistence

    @property
    def persistence(self):
        if self._persistence is None:
            self._persistence = get_persistence()
        return self._persistence

    @property
    def display_name(self) -> str:
        return os.path.basename(self.filename)

    def read(self) -> str:
        default = EditorConstants.DEFAULT_CONTENT if self.is_default else ""
        return load_text(self.filename, default)

    def write(self, content: str) -> tuple[bool, Optional[str]]:
        return save_text(self.filename, content)

    def load_zoom(self) -> Optional[float]:
        return self.persistence.load_zoom(self.filename)

    def save_zoom(self, zoom: float) -> bool:
        return self.persistence.save_zoom(self.filename, zoom)
