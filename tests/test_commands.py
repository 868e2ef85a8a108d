"""Test the key-to-command mapping against a live session."""

import unittest
from unittest.mock import Mock

from runepad.commands import CommandRegistry, InsertTextCommand, QuitCommand
from runepad.constants import EditorConstants
from runepad.editor import EditorController
from runepad.keyboard import KeyEvent, KeyType
from runepad.model import Position
from runepad.session import EditorSession


def key(key_type, value):
    return KeyEvent(key_type=key_type, value=value, raw=value)


class TestCommands(unittest.TestCase):

    def setUp(self):
        self.clipboard = Mock()
        self.clipboard.copy_text.return_value = True
        self.clipboard.paste_text.return_value = ""
        self.document = Mock()
        self.document.is_default = False
        self.document.write.return_value = (True, None)
        self.controller = EditorController(EditorSession.for_terminal("hello\nworld"),
                                           document=self.document, clipboard=self.clipboard)
        self.session = self.controller.session
        self.registry = CommandRegistry()

    def run_key(self, key_type, value):
        return self.registry.execute(self.controller, key(key_type, value))

    def test_typing(self):
        self.assertTrue(self.run_key(KeyType.REGULAR, 'x'))
        self.assertEqual(self.session.text, "xhello\nworld")

    def test_control_characters_are_not_inserted(self):
        self.assertFalse(InsertTextCommand().execute(self.controller, key(KeyType.REGULAR, '\x00')))
        self.assertEqual(self.session.text, "hello\nworld")

    def test_tab_inserts_spaces(self):
        self.run_key(KeyType.REGULAR, '\t')
        self.assertEqual(self.session.text, "    hello\nworld")

    def test_arrows_and_ctrl_e(self):
        self.run_key(KeyType.SPECIAL, 'down')
        self.run_key(KeyType.CTRL, 'e')
        self.assertEqual(self.session.primary.position, Position(1, 5))
        self.run_key(KeyType.SPECIAL, 'home')
        self.assertEqual(self.session.primary.position, Position(1, 0))

    def test_shift_arrows_select(self):
        self.run_key(KeyType.SHIFT_SPECIAL, 'right')
        self.run_key(KeyType.SHIFT_SPECIAL, 'right')
        self.assertEqual(self.session.selected_text(), "he")
        self.run_key(KeyType.SPECIAL, 'right')
        self.assertFalse(self.session.has_selection())

    def test_select_all_and_backspace(self):
        self.run_key(KeyType.CTRL, 'a')
        self.assertTrue(self.run_key(KeyType.SPECIAL, 'backspace'))
        self.assertEqual(self.session.text, "")

    def test_enter_and_delete(self):
        self.run_key(KeyType.SPECIAL, 'enter')
        self.assertEqual(self.session.text, "\nhello\nworld")
        self.run_key(KeyType.SPECIAL, 'delete')
        self.assertEqual(self.session.text, "\nello\nworld")

    def test_copy(self):
        self.run_key(KeyType.SHIFT_SPECIAL, 'end')
        self.assertFalse(self.run_key(KeyType.CTRL, 'c'))
        self.clipboard.copy_text.assert_called_once_with("hello")
        self.assertEqual(self.controller.status_message, EditorConstants.SELECTION_COPIED_MESSAGE)

    def test_copy_without_selection(self):
        self.run_key(KeyType.CTRL, 'c')
        self.clipboard.copy_text.assert_not_called()
        self.assertEqual(self.controller.status_message, EditorConstants.NO_SELECTION_MESSAGE)

    def test_cut(self):
        self.run_key(KeyType.SHIFT_SPECIAL, 'end')
        self.assertTrue(self.run_key(KeyType.CTRL, 'x'))
        self.clipboard.copy_text.assert_called_once_with("hello")
        self.assertEqual(self.session.text, "\nworld")

    def test_cut_keeps_text_when_clipboard_fails(self):
        self.clipboard.copy_text.return_value = False
        self.session.select_all()
        self.assertFalse(self.run_key(KeyType.CTRL, 'x'))
        self.assertEqual(self.session.text, "hello\nworld")
        self.assertEqual(self.controller.status_message, EditorConstants.CLIPBOARD_FAILED_MESSAGE)

    def test_copy_reports_clipboard_failure(self):
        self.clipboard.copy_text.return_value = False
        self.session.select_all()
        self.run_key(KeyType.CTRL, 'c')
        self.assertEqual(self.controller.status_message, EditorConstants.CLIPBOARD_FAILED_MESSAGE)

    def test_paste(self):
        self.clipboard.paste_text.return_value = "a\nb"
        self.assertTrue(self.run_key(KeyType.CTRL, 'v'))
        self.assertEqual(self.session.text, "a\nbhello\nworld")

    def test_paste_empty_clipboard(self):
        self.assertFalse(self.run_key(KeyType.CTRL, 'v'))
        self.assertEqual(self.controller.status_message, EditorConstants.CLIPBOARD_EMPTY_MESSAGE)

    def test_undo_messages(self):
        self.run_key(KeyType.CTRL, 'z')
        self.assertEqual(self.controller.status_message, EditorConstants.NOTHING_TO_UNDO_MESSAGE)
        self.run_key(KeyType.REGULAR, 'x')
        self.assertTrue(self.run_key(KeyType.CTRL, 'z'))
        self.assertEqual(self.controller.status_message, EditorConstants.UNDONE_MESSAGE)
        self.assertEqual(self.session.text, "hello\nworld")

    def test_zoom(self):
        self.run_key(KeyType.CTRL, '=')
        self.assertEqual(self.session.zoom, 2.5)
        self.assertEqual(self.controller.status_message, "Zoom 2.5")
        self.run_key(KeyType.CTRL, '-')
        self.run_key(KeyType.CTRL, '-')
        self.assertEqual(self.session.zoom, 1.5)

    def test_page_down(self):
        self.controller.page_height = 1
        self.run_key(KeyType.SPECIAL, 'page_down')
        self.assertEqual(self.session.primary.row, 1)

    def test_save(self):
        self.run_key(KeyType.REGULAR, 'x')
        self.run_key(KeyType.CTRL, 's')
        self.document.write.assert_called_once_with("xhello\nworld")
        self.assertFalse(self.session.modified)

    def test_unknown_key_does_nothing(self):
        self.assertFalse(self.run_key(KeyType.SPECIAL, 'f12'))
        self.assertIsNone(self.registry.get_command(KeyType.SPECIAL, 'f12'))

    def test_register_overrides(self):
        command = Mock()
        command.execute.return_value = False
        self.registry.register((KeyType.CTRL, 'q'), command)
        self.run_key(KeyType.CTRL, 'q')
        command.execute.assert_called_once()

    def test_escape_and_ctrl_q_quit(self):
        self.assertIsInstance(self.registry.get_command(KeyType.SPECIAL, 'escape'), QuitCommand)
        self.assertIsInstance(self.registry.get_command(KeyType.CTRL, 'q'), QuitCommand)


if __name__ == '__main__':
    unittest.main()
