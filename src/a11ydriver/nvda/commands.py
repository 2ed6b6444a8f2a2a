"""NVDA keyboard command table (desktop layout).

NVDA has no commander, so every named command is a keyboard shortcut.
"""

from __future__ import annotations

from a11ydriver.domain.models import CommanderCommand, KeyboardCommand

NVDA = ("insert",)


def _kb(name: str, key: str, modifiers: tuple[str, ...], description: str) -> KeyboardCommand:
    return KeyboardCommand(name=name, key=key, modifiers=modifiers, description=description)


KEYBOARD_COMMANDS: dict[str, KeyboardCommand] = {
    command.name: command
    for command in (
        _kb("move_to_next", "ArrowDown", (), "Move to the next line in browse mode"),
        _kb("move_to_previous", "ArrowUp", (), "Move to the previous line in browse mode"),
        _kb("activate", "Enter", (), "Activate the current item"),
        _kb("toggle_browse_mode", "Space", NVDA, "Toggle between browse and focus mode"),
        _kb("read_line", "ArrowUp", NVDA, "Read the current line"),
        _kb("say_all", "ArrowDown", NVDA, "Read from the cursor to the end"),
        _kb("report_focus", "Tab", NVDA, "Report the focused object"),
        _kb("report_title", "t", NVDA, "Report the title of the foreground window"),
        _kb("report_status_bar", "End", NVDA, "Report the status bar"),
        _kb("stop_speech", "Control", (), "Stop speaking"),
        _kb("next_heading", "h", (), "Move to the next heading"),
        _kb("previous_heading", "h", ("shift",), "Move to the previous heading"),
        _kb("next_link", "k", (), "Move to the next link"),
        _kb("previous_link", "k", ("shift",), "Move to the previous link"),
        _kb("next_form_field", "f", (), "Move to the next form field"),
        _kb("previous_form_field", "f", ("shift",), "Move to the previous form field"),
        _kb("next_list", "l", (), "Move to the next list"),
        _kb("next_table", "t", (), "Move to the next table"),
        _kb("elements_list", "F7", NVDA, "Open the elements list"),
        _kb("left_mouse_click", "NumpadDivide", (), "Click the left mouse button"),
        _kb("right_mouse_click", "NumpadMultiply", (), "Click the right mouse button"),
    )
}

COMMANDER_COMMANDS: dict[str, CommanderCommand] = {}
