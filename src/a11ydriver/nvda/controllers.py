"""NVDA command controllers.

Keys are injected through the remote access connection, so NVDA sees
them exactly as if they were typed on the local keyboard, including the
NVDA modifier key.
"""

from __future__ import annotations

import asyncio
import logging

from a11ydriver.domain.models import (
    ClickButton,
    ClickOptions,
    CommandOptions,
    CommandResult,
    KeyboardCommand,
    KeyboardOptions,
    coerce_options,
)
from a11ydriver.logstore.store import LogStore
from a11ydriver.nvda.client import NVDARemoteClient
from a11ydriver.nvda.commands import KEYBOARD_COMMANDS
from a11ydriver.nvda.keys import Key, key_for, modifier_key
from a11ydriver.utils.keys import merge_modifiers, parse_chord

logger = logging.getLogger(__name__)


def resolve_chord(key: str, modifiers: list[str] | tuple[str, ...] = ()) -> tuple[list[Key], Key]:
    """Map a key and canonical modifiers to the keys to hold and the key to tap.

    Raises:
        ValueError: If the key or a modifier has no mapping.
    """
    main, needs_shift = key_for(key)
    names = list(modifiers)
    if needs_shift and "shift" not in names:
        names.append("shift")
    return [modifier_key(name) for name in names], main


async def send_chord(
    client: NVDARemoteClient, key: str, modifiers: list[str] | tuple[str, ...] = ()
) -> None:
    """Hold the modifiers, tap the key, then release in reverse order."""
    held, main = resolve_chord(key, modifiers)
    for vk, scan, extended in held:
        await client.send_key(vk, scan, extended, pressed=True)
    try:
        await client.send_key(*main, pressed=True)
        await client.send_key(*main, pressed=False)
    finally:
        for vk, scan, extended in reversed(held):
            await client.send_key(vk, scan, extended, pressed=False)


class NVDAKeyboard:
    """Keyboard input and NVDA keyboard commands."""

    def __init__(self, client: NVDARemoteClient, log_store: LogStore) -> None:
        self._client = client
        self._log_store = log_store

    @property
    def commands(self) -> dict[str, KeyboardCommand]:
        return dict(KEYBOARD_COMMANDS)

    async def press(self, key: str, options: CommandOptions | None = None) -> CommandResult:
        opts = coerce_options(options, KeyboardOptions)
        chord_modifiers, main_key = parse_chord(key)
        modifiers = merge_modifiers(chord_modifiers, opts.modifiers)
        resolve_chord(main_key, modifiers)
        logger.debug("press %s (%s)", main_key, "+".join(modifiers))
        return await self._log_store.tap(lambda: send_chord(self._client, main_key, modifiers), opts)

    async def type(self, text: str, options: CommandOptions | None = None) -> CommandResult:
        opts = coerce_options(options, KeyboardOptions)
        modifiers = merge_modifiers(opts.modifiers)
        for char in text:
            resolve_chord(char, modifiers)

        async def type_text() -> None:
            for index, char in enumerate(text):
                if index and opts.delay:
                    await asyncio.sleep(opts.delay)
                await send_chord(self._client, char, modifiers)

        logger.debug("type %d characters", len(text))
        return await self._log_store.tap(type_text, opts)

    async def perform(
        self, command: KeyboardCommand, options: CommandOptions | None = None
    ) -> CommandResult:
        opts = coerce_options(options, KeyboardOptions)
        modifiers = merge_modifiers(command.modifiers, opts.modifiers)
        logger.debug("perform keyboard command %s", command.name)
        return await self._log_store.tap(
            lambda: send_chord(self._client, command.key, modifiers), opts
        )


class NVDACursor:
    """Browse mode navigation."""

    def __init__(self, client: NVDARemoteClient, log_store: LogStore) -> None:
        self._client = client
        self._log_store = log_store

    async def _shortcut(self, name: str, options: CommandOptions | None) -> CommandResult:
        command = KEYBOARD_COMMANDS[name]
        return await self._log_store.tap(
            lambda: send_chord(self._client, command.key, command.modifiers), options
        )

    async def previous(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._shortcut("move_to_previous", options)

    async def next(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._shortcut("move_to_next", options)

    async def act(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._shortcut("activate", options)

    async def interact(self, options: CommandOptions | None = None) -> CommandResult:
        """Switch to focus mode so keys go to the focused control."""
        return await self._shortcut("toggle_browse_mode", options)

    async def stop_interacting(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._shortcut("toggle_browse_mode", options)


class NVDACaption:
    """NVDA has no caption query; everything comes from the speech log."""

    def __init__(self, log_store: LogStore) -> None:
        self._log_store = log_store

    async def last_spoken_phrase(self) -> str:
        phrases = await self._log_store.spoken_phrase_log()
        return phrases[-1] if phrases else ""

    async def item_text(self) -> str:
        return await self.last_spoken_phrase()

    async def spoken_phrase_log(self) -> list[str]:
        return await self._log_store.spoken_phrase_log()

    async def item_text_log(self) -> list[str]:
        return await self._log_store.spoken_phrase_log()


class NVDAMouse:
    """Mouse clicks through NVDA's numpad mouse commands."""

    def __init__(self, client: NVDARemoteClient, log_store: LogStore) -> None:
        self._client = client
        self._log_store = log_store

    async def click(self, options: CommandOptions | None = None) -> CommandResult:
        opts = coerce_options(options, ClickOptions)
        if opts.button is ClickButton.RIGHT:
            command = KEYBOARD_COMMANDS["right_mouse_click"]
        else:
            command = KEYBOARD_COMMANDS["left_mouse_click"]

        async def click() -> None:
            for _ in range(opts.click_count):
                await send_chord(self._client, command.key, command.modifiers)

        logger.debug("click %s x%d", opts.button.value, opts.click_count)
        return await self._log_store.tap(click, opts)
