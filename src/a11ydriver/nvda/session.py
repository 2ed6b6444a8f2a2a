"""NVDA session for Windows."""

from __future__ import annotations

import asyncio
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
from a11ydriver.logstore.sources import BufferedLogSource
from a11ydriver.logstore.store import LogStore
from a11ydriver.nvda.client import NVDARemoteClient
from a11ydriver.nvda.commands import COMMANDER_COMMANDS, KEYBOARD_COMMANDS
from a11ydriver.nvda.controllers import NVDACaption, NVDACursor, NVDAKeyboard, NVDAMouse
from a11ydriver.nvda.platform import NVDAPlatform
from a11ydriver.session.base import (
    AlreadyRunningError,
    NotRunningError,
    NotSupportedError,
    ReadinessTimeoutError,
    ScreenReader,
    requires_started,
    resolve_command,
)
from a11ydriver.session.polling import wait_for_process_state, wait_until

logger = logging.getLogger(__name__)


class NVDA(ScreenReader):
    """Controls the NVDA screen reader on Windows.

    NVDA is launched with a session-specific ``nvda.ini`` that enables its
    self-hosted remote access server; the session then connects to that
    server to inject keys and receive speech.
    """

    name = "NVDA"

    def __init__(
        self,
        settings: Settings | None = None,
        platform: NVDAPlatform | None = None,
        client_factory: Callable[[BufferedLogSource], NVDARemoteClient] | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or Settings()
        self._platform = platform or NVDAPlatform(self._settings.nvda)
        self._client_factory = client_factory or self._default_client
        self._reset_settings: Callable[[], Awaitable[None]] | None = None
        self._log_store: LogStore | None = None
        self._client: NVDARemoteClient | None = None
        self._caption: NVDACaption | None = None
        self._cursor: NVDACursor | None = None
        self._keyboard: NVDAKeyboard | None = None
        self._mouse: NVDAMouse | None = None

    def _default_client(self, source: BufferedLogSource) -> NVDARemoteClient:
        config = self._settings.nvda
        return NVDARemoteClient(
            config.host,
            config.port,
            config.channel,
            source,
            timeout=config.connect_timeout,
            use_tls=config.use_tls,
        )

    @property
    def keyboard_commands(self) -> dict[str, KeyboardCommand]:
        return dict(KEYBOARD_COMMANDS)

    @property
    def commander_commands(self) -> dict[str, CommanderCommand]:
        return dict(COMMANDER_COMMANDS)

    async def detect(self) -> bool:
        return self._platform.is_windows() and self._platform.is_installed()

    async def default(self) -> bool:
        return self._platform.is_windows()

    async def start(self, options: CommandOptions | None = None) -> None:
        options = options or CommandOptions()
        if not await self.detect():
            raise NotSupportedError(self.name)
        if self.started:
            raise AlreadyRunningError(self.name)

        capture = self._settings.capture
        timeout = options.timeout or capture.start_timeout
        interval = options.interval or capture.start_interval
        if self._settings.nvda.configure_ini:
            snapshot = await self._platform.configure_settings()
            self._reset_settings = functools.partial(self._platform.restore_settings, snapshot)

        source = BufferedLogSource()
        self._log_store = LogStore(source, timeout=capture.timeout, interval=capture.interval)
        self._client = self._client_factory(source)
        self._caption = NVDACaption(self._log_store)
        self._cursor = NVDACursor(self._client, self._log_store)
        self._keyboard = NVDAKeyboard(self._client, self._log_store)
        self._mouse = NVDAMouse(self._client, self._log_store)

        try:
            await self._platform.launch()
            await wait_for_process_state(self._platform.is_running, True, self.name, timeout, interval)
            loop = asyncio.get_running_loop()
            deadline = loop.time() + timeout

            async def connected() -> bool:
                # Attempts share the readiness budget
                return await self._client.try_connect(max(deadline - loop.time(), interval))

            if not await wait_until(connected, timeout, interval):
                raise ReadinessTimeoutError(self.name, "connected", timeout)
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
            if self._client is not None:
                await self._client.disconnect()
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
        if self._client is not None:
            await self._client.disconnect()
        self._log_store = None
        self._client = None
        self._caption = None
        self._cursor = None
        self._keyboard = None
        self._mouse = None

        if self._reset_settings is not None:
            reset, self._reset_settings = self._reset_settings, None
            await reset()

    # -- Cursor ----------------------------------------------------------------

    @requires_started
    async def previous(self, options: CommandOptions | None = None) -> CommandResult:
        """Move to the previous line in browse mode (Up Arrow)."""
        return await self._cursor.previous(options)

    @requires_started
    async def next(self, options: CommandOptions | None = None) -> CommandResult:
        """Move to the next line in browse mode (Down Arrow)."""
        return await self._cursor.next(options)

    @requires_started
    async def act(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._cursor.act(options)

    @requires_started
    async def interact(self, options: CommandOptions | None = None) -> CommandResult:
        """Toggle browse/focus mode (NVDA-Space)."""
        return await self._cursor.interact(options)

    @requires_started
    async def stop_interacting(self, options: CommandOptions | None = None) -> CommandResult:
        return await self._cursor.stop_interacting(options)

    # -- Input -----------------------------------------------------------------

    @requires_started
    async def press(self, key: str, options: KeyboardOptions | None = None) -> CommandResult:
        return await self._keyboard.press(key, options)

    @requires_started
    async def type(self, text: str, options: KeyboardOptions | None = None) -> CommandResult:
        return await self._keyboard.type(text, options)

    @requires_started
    async def perform(
        self,
        command: KeyboardCommand | CommanderCommand | str,
        options: CommandOptions | None = None,
    ) -> CommandResult:
        """Perform an NVDA keyboard command.

        NVDA has no commander, so commander commands are rejected.
        """
        resolved = resolve_command(command, KEYBOARD_COMMANDS, COMMANDER_COMMANDS)
        if isinstance(resolved, CommanderCommand):
            raise ValueError(f"{self.name} has no commander: {resolved.name!r}")
        return await self._keyboard.perform(resolved, options)

    @requires_started
    async def click(self, options: ClickOptions | None = None) -> CommandResult:
        return await self._mouse.click(options)

    # -- Caption ---------------------------------------------------------------

    @requires_started
    async def last_spoken_phrase(self) -> str:
        return await self._caption.last_spoken_phrase()

    @requires_started
    async def item_text(self) -> str:
        """NVDA does not expose item text separately from speech."""
        return await self._caption.item_text()

    @requires_started
    async def spoken_phrase_log(self) -> list[str]:
        return await self._caption.spoken_phrase_log()

    @requires_started
    async def item_text_log(self) -> list[str]:
        return await self._caption.item_text_log()
