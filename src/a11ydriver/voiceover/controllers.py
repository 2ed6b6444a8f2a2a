"""VoiceOver command controllers.

Each controller binds a handful of session operations to platform
calls and runs them through the session's LogStore, so that any of them
can return the speech they caused when the caller asks for capture.
"""

from __future__ import annotations

import asyncio
import logging

from a11ydriver.domain.models import (
    ClickButton,
    ClickOptions,
    CommandOptions,
    CommandResult,
    CommanderCommand,
    KeyboardCommand,
    KeyboardOptions,
    coerce_options,
)
from a11ydriver.logstore.store import LogStore
from a11ydriver.platform.applescript import AppleScriptRunner
from a11ydriver.utils.keys import merge_modifiers, parse_chord
from a11ydriver.voiceover.commands import COMMANDER_COMMANDS, KEYBOARD_COMMANDS
from a11ydriver.voiceover.keys import applescript_modifiers, key_code_for
from a11ydriver.voiceover.platform import VoiceOverPlatform

logger = logging.getLogger(__name__)


async def send_key(
    runner: AppleScriptRunner, key: str, modifiers: list[str] | tuple[str, ...] = ()
) -> None:
    """Press a named key or type a single character with modifiers held."""
    code = key_code_for(key)
    names = applescript_modifiers(modifiers)
    if code is None:
        await runner.keystroke(key, names)
    else:
        await runner.key_code(code, names)


class VoiceOverKeyboard:
    """Keyboard input and VoiceOver keyboard commands."""

    def __init__(self, platform: VoiceOverPlatform, log_store: LogStore) -> None:
        self._platform = platform
        self._log_store = log_store

    @property
    def commands(self) -> dict[str, KeyboardCommand]:
        return dict(KEYBOARD_COMMANDS)

    async def press(self, key: str, options: CommandOptions | None = None) -> CommandResult:
        """Press a key or chord such as ``Control+Shift+f``."""
        opts = coerce_options(options, KeyboardOptions)
        chord_modifiers, main_key = parse_chord(key)
        modifiers = merge_modifiers(chord_modifiers, opts.modifiers)
        # Validate before anything is sent
        key_code_for(main_key)
        applescript_modifiers(modifiers)
        logger.debug("press %s (%s)", main_key, "+".join(modifiers))
        return await self._log_store.tap(
            lambda: send_key(self._platform.runner, main_key, modifiers), opts
        )

    async def type(self, text: str, options: CommandOptions | None = None) -> CommandResult:
        """Type text into the focused item."""
        opts = coerce_options(options, KeyboardOptions)
        modifiers = applescript_modifiers(merge_modifiers(opts.modifiers))

        async def type_text() -> None:
            if not opts.delay:
                await self._platform.runner.keystroke(text, modifiers)
                return
            for index, char in enumerate(text):
                if index:
                    await asyncio.sleep(opts.delay)
                await self._platform.runner.keystroke(char, modifiers)

        logger.debug("type %d characters", len(text))
        return await self._log_store.tap(type_text, opts)

    async def perform(
        self, command: KeyboardCommand, options: CommandOptions | None = None
    ) -> CommandResult:
        """Perform a VoiceOver keyboard command."""
        opts = coerce_options(options, KeyboardOptions)
        modifiers = merge_modifiers(command.modifiers, opts.modifiers)
        logger.debug("perform keyboard command %s", command.name)
        return await self._log_store.tap(
            lambda: send_key(self._platform.runner, command.key, modifiers), opts
        )


class VoiceOverCursor:
    """VoiceOver cursor movement and actions."""

    def __init__(self, platform: VoiceOverPlatform, log_store: LogStore) -> None:
        self._platform = platform
        self._log_store = log_store

    async def _shortcut(self, name: str, options: CommandOptions | None) -> CommandResult:
        command = KEYBOARD_COMMANDS[name]
        return await self._log_store.tap(
            lambda: send_key(self._platform.runner, command.key, command.modifiers), options
        )

    async def previous(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._shortcut("move_to_previous", options)

    async def next(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._shortcut("move_to_next", options)

    async def act(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._log_store.tap(self._platform.perform_action, options)

    async def interact(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._shortcut("interact_with_item", options)

    async def stop_interacting(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._shortcut("stop_interacting_with_item", options)

    async def take_screenshot(self, options: CommandOptions | None = None) -> CommandResult:
        """Screenshot the VoiceOver cursor; the result value is the file path."""
        return await self._log_store.tap(self._platform.grab_screenshot, options)


class VoiceOverCaption:
    """Spoken phrase and item text queries."""

    def __init__(self, platform: VoiceOverPlatform, log_store: LogStore) -> None:
        self._platform = platform
        self._log_store = log_store

    async def copy_last_spoken_phrase(self, options: CommandOptions | None = None) -> CommandResult:
        command = KEYBOARD_COMMANDS["copy_last_spoken_phrase"]
        return await self._log_store.tap(
            lambda: send_key(self._platform.runner, command.key, command.modifiers), options
        )

    async def save_last_spoken_phrase(self, options: CommandOptions | None = None) -> CommandResult:
        command = KEYBOARD_COMMANDS["save_last_spoken_phrase"]
        return await self._log_store.tap(
            lambda: send_key(self._platform.runner, command.key, command.modifiers), options
        )

    async def last_spoken_phrase(self) -> str:
        return await self._platform.last_phrase()

    async def item_text(self) -> str:
        return await self._platform.item_text()

    async def spoken_phrase_log(self) -> list[str]:
        return await self._log_store.spoken_phrase_log()

    async def item_text_log(self) -> list[str]:
        return await self._log_store.item_text_log()


class VoiceOverMouse:
    """Mouse clicks through VoiceOver's mouse shortcuts."""

    def __init__(self, platform: VoiceOverPlatform, log_store: LogStore) -> None:
        self._platform = platform
        self._log_store = log_store

    async def click(self, options: CommandOptions | None = None) -> CommandResult:
        opts = coerce_options(options, ClickOptions)
        if opts.button is ClickButton.RIGHT:
            command = KEYBOARD_COMMANDS["open_shortcut_menu"]
            count = 1
        else:
            command = KEYBOARD_COMMANDS["mouse_click"]
            count = opts.click_count

        async def click() -> None:
            for _ in range(count):
                await send_key(self._platform.runner, command.key, command.modifiers)

        logger.debug("click %s x%d", opts.button.value, count)
        return await self._log_store.tap(click, opts)


class VoiceOverCommander:
    """VoiceOver commander commands."""

    def __init__(self, platform: VoiceOverPlatform, log_store: LogStore) -> None:
        self._platform = platform
        self._log_store = log_store

    @property
    def commands(self) -> dict[str, CommanderCommand]:
        return dict(COMMANDER_COMMANDS)

    async def perform(
        self, command: CommanderCommand, options: CommandOptions | None = None
    ) -> CommandResult:
        logger.debug("perform commander command %r", command.name)
        return await self._log_store.tap(
            lambda: self._platform.perform_commander_command(command.name), options
        )
