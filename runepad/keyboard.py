"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key token from the input source
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False


SPECIAL_KEYS = frozenset({
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down',
})

# Textual names punctuation keys; these are the ones bound to commands
_TEXTUAL_SYMBOLS = {
    'equals_sign': '=',
    'plus': '+',
    'minus': '-',
    'underscore': '_',
}


def _normalize_base(base: str) -> str:
    if base in ('pageup', 'page_up'):
        return 'page_up'
    if base in ('pagedown', 'page_down'):
        return 'page_down'
    if base == 'return':
        return 'enter'
    return base


def _event_for(mods: set, base: str, raw: str) -> KeyEvent:
    """Build the KeyEvent for a modifier set and base key name."""
    base = _normalize_base(base)
    if base in ('space', 'spacebar', 'spc') and not mods:
        return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
    if base == 'tab' and not mods:
        return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
    if 'ctrl' in mods and len(base) == 1:
        # Ctrl-J / Ctrl-M are what terminals send for Enter
        if base in ('j', 'm'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=raw, is_sequence=True)
        return KeyEvent(key_type=KeyType.CTRL, value=base, raw=raw, is_ctrl=True)
    if 'shift' in mods and base in SPECIAL_KEYS:
        return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=raw,
                        is_shift=True, is_sequence=True)
    if base in ('esc', 'escape'):
        return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
    return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=raw, is_sequence=True)


class KeyboardHandler:
    """Handles keyboard input using curtsies-style key names."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event and map curtsies-style names to KeyEvent."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token (or a raw character) into a KeyEvent."""
        key_str = str(key)

        # curtsies-style names like '<LEFT>', '<Ctrl-x>', '<Esc+u>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            lower = key_str[1:-1].lower().replace('+', '-')
            # A trailing '--' means the base key is the minus sign itself
            if lower.endswith('--'):
                parts = lower[:-2].split('-') + ['-']
            else:
                parts = lower.split('-')
            base = parts[-1]
            mods = set(parts[:-1])
            return _event_for(mods, base, key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                ch = chr(ord('a') + o - 1)
                if ch == 'i':
                    return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
                if ch in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)
            if o == 0x7f:
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)

        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)


def key_event_from_textual(key: str, character: Optional[str] = None) -> KeyEvent:
    """Translate a Textual key name (e.g. 'shift+left', 'ctrl+a') to a KeyEvent."""
    parts = key.split('+')
    base = _TEXTUAL_SYMBOLS.get(parts[-1], parts[-1])
    mods = set(parts[:-1])
    if not mods and character and character.isprintable() and len(character) == 1 \
            and base not in ('tab', 'enter', 'escape'):
        return KeyEvent(key_type=KeyType.REGULAR, value=character, raw=key)
    return _event_for(mods, base, key)
