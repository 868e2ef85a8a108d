"""Tests for the Textual front-end, driven headless through Textual's pilot."""

import asyncio
from unittest.mock import Mock

from runepad.editor import EditorController
from runepad.model import Position
from runepad.session import EditorSession
from runepad.textual_app import EditorCanvas, RunepadApp


def make_app(text="hello world\nsecond"):
    document = Mock()
    document.is_default = False
    document.filename = "notes.txt"
    document.display_name = "notes.txt"
    document.write.return_value = (True, None)
    controller = EditorController(EditorSession.for_terminal(text), document=document,
                                  clipboard=Mock())
    return RunepadApp(controller=controller), controller


def run(app, interaction):
    async def scenario():
        async with app.run_test(size=(40, 12)) as pilot:
            await interaction(pilot)
    asyncio.run(scenario())


def test_app_creation():
    app, controller = make_app()
    assert app.controller is controller
    assert isinstance(app.canvas, EditorCanvas)
    assert app.canvas.session is controller.session


def test_typing_goes_through_commands():
    app, controller = make_app("")

    async def interaction(pilot):
        await pilot.press("h", "i", "enter", "tab", "x")
        await pilot.pause()

    run(app, interaction)
    assert controller.session.text == "hi\n    x"


def test_shift_selection_and_backspace():
    app, controller = make_app("hello")

    async def interaction(pilot):
        await pilot.press("shift+right", "shift+right", "backspace")
        await pilot.pause()

    run(app, interaction)
    assert controller.session.text == "llo"


def test_click_places_cursor():
    app, controller = make_app()

    async def interaction(pilot):
        await pilot.click(EditorCanvas, offset=(3, 1))
        await pilot.pause()

    run(app, interaction)
    assert controller.session.primary.position == Position(1, 3)
    assert not controller.session.has_selection()


def test_quit_binding_exits():
    app, controller = make_app()

    async def interaction(pilot):
        await pilot.press("ctrl+q")
        await pilot.pause()

    run(app, interaction)
    assert controller.running is False


def test_render_shows_text():
    app, controller = make_app("abc")

    async def interaction(pilot):
        rendered = app.canvas.render()
        assert rendered.plain.startswith("abc")

    run(app, interaction)
