"""Test clipboard integration with pyperclip mocked out."""

from unittest.mock import patch

import pyperclip

from runepad.clipboard import ClipboardManager


def test_copy_text():
    with patch('runepad.clipboard.pyperclip.copy') as mock_copy:
        assert ClipboardManager.copy_text("hello") is True
    mock_copy.assert_called_once_with("hello")


def test_paste_normalizes_line_endings():
    with patch('runepad.clipboard.pyperclip.paste', return_value="a\r\nb\rc"):
        assert ClipboardManager.paste_text() == "a\nb\nc"


def test_copy_failure_is_reported(caplog):
    with patch('runepad.clipboard.pyperclip.copy',
               side_effect=pyperclip.PyperclipException("no clipboard")):
        assert ClipboardManager.copy_text("x") is False
    assert "Clipboard copy failed" in caplog.text


def test_paste_failure_returns_empty():
    with patch('runepad.clipboard.pyperclip.paste',
               side_effect=pyperclip.PyperclipException("no clipboard")):
        assert ClipboardManager.paste_text() == ""
