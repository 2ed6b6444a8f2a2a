"""VoiceOver session for macOS."""

from __future__ import annotations

import functools
import logging
from typing import Awaitable, Callable

from a11ydriver.config.settings import Settings
from a11ydriver.domain.models import (
    ClickOptions,
    CommandOptions,
    CommandResult,
    CommanderCommand,
    KeyboardCommand,
    KeyboardOptions,
    SessionState,
)
from a11ydriver.logstore.sources import PhrasePollingSource
from a11ydriver.logstore.store import LogStore
from a11ydriver.session.base import (
    AlreadyRunningError,
    NotRunningError,
    NotSupportedError,
    ScreenReader,
    requires_started,
    resolve_command,
)
from a11ydriver.session.polling import wait_for_process_state
from a11ydriver.voiceover.commands import COMMANDER_COMMANDS, KEYBOARD_COMMANDS
from a11ydriver.voiceover.controllers import (
    VoiceOverCaption,
    VoiceOverCommander,
    VoiceOverCursor,
    VoiceOverKeyboard,
    VoiceOverMouse,
)
from a11ydriver.voiceover.platform import VoiceOverPlatform

logger = logging.getLogger(__name__)


class VoiceOver(ScreenReader):
    """Controls the VoiceOver screen reader on macOS.

    Starting a session overrides a few VoiceOver preferences so output is
    predictable (no splash screen, no sound effects, caption panel on);
    stopping it restores exactly the previous values.
    """

    name = "VoiceOver"

    def __init__(
        self,
        settings: Settings | None = None,
        platform: VoiceOverPlatform | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or Settings()
        self._platform = platform or VoiceOverPlatform(self._settings.voiceover)
        self._reset_settings: Callable[[], Awaitable[None]] | None = None
        self._log_store: LogStore | None = None
        self._caption: VoiceOverCaption | None = None
        self._commander: VoiceOverCommander | None = None
        self._cursor: VoiceOverCursor | None = None
        self._keyboard: VoiceOverKeyboard | None = None
        self._mouse: VoiceOverMouse | None = None

    @property
    def keyboard_commands(self) -> dict[str, KeyboardCommand]:
        return dict(KEYBOARD_COMMANDS)

    @property
    def commander_commands(self) -> dict[str, CommanderCommand]:
        return dict(COMMANDER_COMMANDS)

    async def detect(self) -> bool:
        return self._platform.is_macos() and await self._platform.supports_applescript_control()

    async def default(self) -> bool:
        return self._platform.is_macos()

    async def start(self, options: CommandOptions | None = None) -> None:
        options = options or CommandOptions()
        if not await self.detect():
            raise NotSupportedError(self.name)
        if self.started:
            raise AlreadyRunningError(self.name)

        capture = self._settings.capture
        if self._settings.voiceover.configure_defaults:
            snapshot = await self._platform.configure_settings()
            self._reset_settings = functools.partial(self._platform.restore_settings, snapshot)

        self._log_store = LogStore(
            PhrasePollingSource(self._platform.last_phrase),
            timeout=capture.timeout,
            interval=capture.interval,
            item_text=self._platform.item_text,
        )
        self._caption = VoiceOverCaption(self._platform, self._log_store)
        self._commander = VoiceOverCommander(self._platform, self._log_store)
        self._cursor = VoiceOverCursor(self._platform, self._log_store)
        self._keyboard = VoiceOverKeyboard(self._platform, self._log_store)
        self._mouse = VoiceOverMouse(self._platform, self._log_store)

        try:
            await self._platform.launch()
            await wait_for_process_state(
                self._platform.is_running,
                True,
                self.name,
                options.timeout or capture.start_timeout,
                options.interval or capture.start_interval,
            )
        except Exception:
            logger.error("%s failed to start, rolling back", self.name)
            try:
                await self._platform.force_quit()
            finally:
                await self._teardown()
            raise

        self._state = SessionState.STARTED
        logger.info("%s session started", self.name)

    async def stop(self, options: CommandOptions | None = None) -> None:
        if not self.started:
            raise NotRunningError(self.name)
        options = options or CommandOptions()
        if options.capture:
            raise ValueError("stop() does not accept the capture option")

        capture = self._settings.capture
        if self._log_store is not None:
            self._log_store.close()
        try:
            await self._platform.force_quit()
            await wait_for_process_state(
                self._platform.is_running,
                False,
                self.name,
                options.timeout or capture.start_timeout,
                options.interval or capture.start_interval,
            )
        finally:
            await self._teardown()
            self._state = SessionState.STOPPED
            logger.info("%s session stopped", self.name)

    async def _teardown(self) -> None:
        if self._log_store is not None:
            self._log_store.close()
        self._log_store = None
        self._caption = None
        self._commander = None
        self._cursor = None
        self._keyboard = None
        self._mouse = None

        if self._reset_settings is not None:
            reset, self._reset_settings = self._reset_settings, None
            await reset()

    # -- Cursor ----------------------------------------------------------------

    @requires_started
    async def previous(self, options: CommandOptions | None = None) -> CommandResult:
        """Move the VoiceOver cursor to the previous location (VO-Left Arrow)."""
        return await self._cursor.previous(options)

    @requires_started
    async def next(self, options: CommandOptions | None = None) -> CommandResult:
        """Move the VoiceOver cursor to the next location (VO-Right Arrow)."""
        return await self._cursor.next(options)

    @requires_started
    async def act(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._cursor.act(options)

    @requires_started
    async def interact(self, options: CommandOptions | None = None) -> CommandResult:
        """Interact with the item under the VoiceOver cursor (VO-Shift-Down Arrow)."""
        return await self._cursor.interact(options)

    @requires_started
    async def stop_interacting(self, options: CommandOptions | None = None) -> CommandResult:
        """Stop interacting with the current item (VO-Shift-Up Arrow)."""
        return await self._cursor.stop_interacting(options)

    @requires_started
    async def take_cursor_screenshot(self, options: CommandOptions | None = None) -> CommandResult:
        """Screenshot the VoiceOver cursor; ``value`` is the path of the image."""
        return await self._cursor.take_screenshot(options)

    # -- Input -----------------------------------------------------------------

    @requires_started
    async def press(self, key: str, options: KeyboardOptions | None = None) -> CommandResult:
        """Press a key on the focused item.

        ``key`` is a key name (``Enter``, ``ArrowDown``, ``F5``), a single
        character, or a chord such as ``Control+Shift+f`` where the
        modifiers are held while the last key is pressed.
        """
        return await self._keyboard.press(key, options)

    @requires_started
    async def type(self, text: str, options: KeyboardOptions | None = None) -> CommandResult:
        """Type text into the focused item. Use ``press`` for special keys."""
        return await self._keyboard.type(text, options)

    @requires_started
    async def perform(
        self,
        command: KeyboardCommand | CommanderCommand | str,
        options: CommandOptions | None = None,
    ) -> CommandResult:
        """Perform a VoiceOver keyboard command or commander command.

        Strings are looked up by name in ``keyboard_commands`` and
        ``commander_commands``.
        """
        resolved = resolve_command(command, KEYBOARD_COMMANDS, COMMANDER_COMMANDS)
        if isinstance(resolved, KeyboardCommand):
            return await self._keyboard.perform(resolved, options)
        return await self._commander.perform(resolved, options)

    @requires_started
    async def click(self, options: ClickOptions | None = None) -> CommandResult:
        return await self._mouse.click(options)

    # -- Caption ---------------------------------------------------------------

    @requires_started
    async def copy_last_spoken_phrase(self, options: CommandOptions | None = None) -> CommandResult:
        """Copy the last spoken phrase to the pasteboard."""
        return await self._caption.copy_last_spoken_phrase(options)

    @requires_started
    async def save_last_spoken_phrase(self, options: CommandOptions | None = None) -> CommandResult:
        """Save the last spoken phrase and the crash log to a file on the desktop."""
        return await self._caption.save_last_spoken_phrase(options)

    @requires_started
    async def last_spoken_phrase(self) -> str:
        return await self._caption.last_spoken_phrase()

    @requires_started
    async def item_text(self) -> str:
        """Text of the item in the VoiceOver cursor, distinct from the last phrase."""
        return await self._caption.item_text()

    @requires_started
    async def spoken_phrase_log(self) -> list[str]:
        return await self._caption.spoken_phrase_log()

    @requires_started
    async def item_text_log(self) -> list[str]:
        return await self._caption.item_text_log()
