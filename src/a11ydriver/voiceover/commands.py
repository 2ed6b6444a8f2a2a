"""VoiceOver keyboard and commander command tables.

Keyboard command names are snake_case identifiers; commander commands
are the phrases VoiceOver's ``perform command`` accepts. The two
namespaces never share a name.
"""

from __future__ import annotations

from a11ydriver.domain.models import CommanderCommand, KeyboardCommand
from a11ydriver.voiceover.keys import VO

VO_SHIFT = VO + ("shift",)


def _kb(name: str, key: str, modifiers: tuple[str, ...], description: str) -> KeyboardCommand:
    return KeyboardCommand(name=name, key=key, modifiers=modifiers, description=description)


KEYBOARD_COMMANDS: dict[str, KeyboardCommand] = {
    command.name: command
    for command in (
        _kb("move_to_next", "ArrowRight", VO, "Move the VoiceOver cursor to the next item"),
        _kb("move_to_previous", "ArrowLeft", VO, "Move the VoiceOver cursor to the previous item"),
        _kb("move_up", "ArrowUp", VO, "Move the VoiceOver cursor up"),
        _kb("move_down", "ArrowDown", VO, "Move the VoiceOver cursor down"),
        _kb("interact_with_item", "ArrowDown", VO_SHIFT, "Start interacting with the item"),
        _kb("stop_interacting_with_item", "ArrowUp", VO_SHIFT, "Stop interacting with the item"),
        _kb("perform_default_action", "Space", VO, "Perform the item's default action"),
        _kb("read_line", "l", VO, "Read the current line"),
        _kb("read_word", "w", VO, "Read the current word"),
        _kb("read_character", "c", VO, "Read the current character"),
        _kb("read_all", "a", VO, "Read from the cursor to the end"),
        _kb("describe_item", "F3", VO, "Describe the item in the VoiceOver cursor"),
        _kb("copy_last_spoken_phrase", "c", VO_SHIFT, "Copy the last spoken phrase to the clipboard"),
        _kb("save_last_spoken_phrase", "z", VO_SHIFT, "Save the last phrase and crash log to the desktop"),
        _kb("open_rotor", "u", VO, "Open the rotor"),
        _kb("find", "f", VO, "Open the VoiceOver find dialog"),
        _kb("open_voiceover_utility", "F8", VO, "Open VoiceOver Utility"),
        _kb("stop_speaking", "Control", (), "Pause or resume speaking"),
        _kb("mouse_click", "Space", VO_SHIFT, "Click the mouse at the VoiceOver cursor"),
        _kb("open_shortcut_menu", "m", VO_SHIFT, "Open the shortcut menu (secondary click)"),
    )
}


def _cc(name: str, description: str = "") -> CommanderCommand:
    return CommanderCommand(name=name, description=description)


COMMANDER_COMMANDS: dict[str, CommanderCommand] = {
    command.name: command
    for command in (
        _cc("move to next", "Move the VoiceOver cursor to the next item"),
        _cc("move to previous", "Move the VoiceOver cursor to the previous item"),
        _cc("move to first", "Move to the first item in the window"),
        _cc("move to last", "Move to the last item in the window"),
        _cc("read current line"),
        _cc("read current word"),
        _cc("read current character"),
        _cc("read paragraph"),
        _cc("read all"),
        _cc("read contents of window"),
        _cc("describe item in voiceover cursor"),
        _cc("describe item with keyboard focus"),
        _cc("move to focused item"),
        _cc("go to desktop"),
        _cc("go to dock"),
        _cc("go to menu bar"),
        _cc("open application chooser"),
        _cc("open window chooser"),
        _cc("toggle mute speech"),
        _cc("toggle screen curtain"),
    )
}
