"""Session log with windowed capture.

The LogStore is the single record of everything a screen reader said
during one session. Commands run through :meth:`LogStore.tap`, which
serializes them and, when capture is requested, returns exactly the
entries that arrived between the command being issued and the output
settling down.

Window attribution is decided purely by arrival order relative to a
marker taken just before the command is issued, never by content.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable

from a11ydriver.domain.models import CommandOptions, CommandResult, LogEntry
from a11ydriver.logstore.base import LogSource, LogSourceUnavailableError
from a11ydriver.platform.base import PlatformCommandError

logger = logging.getLogger(__name__)


class LogStore:
    """Append-only spoken-phrase log for one screen reader session.

    Example usage::

        store = LogStore(source, timeout=5.0, interval=0.1)
        result = await store.tap(
            lambda: keyboard.press("ArrowDown"),
            CommandOptions(capture=True),
        )
        print(result.phrases)
    """

    def __init__(
        self,
        source: LogSource,
        timeout: float = 5.0,
        interval: float = 0.1,
        item_text: Callable[[], Awaitable[str]] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            source: Where new phrases are read from.
            timeout: Default maximum seconds a capture window stays open.
            interval: Default seconds between source polls.
            item_text: Optional reader for the text of the item under the
                       cursor, recorded after every capture window.
        """
        self._source = source
        self._timeout = timeout
        self._interval = interval
        self._item_text = item_text
        self._entries: list[LogEntry] = []
        self._item_text_log: list[str] = []
        self._offset = 0
        self._lock = asyncio.Lock()
        self._closed = asyncio.Event()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def marker(self) -> int:
        """Position the next appended entry will occupy."""
        return len(self._entries)

    def window(self, start: int, end: int | None = None) -> list[LogEntry]:
        """Entries whose arrival index lies in ``[start, end)``."""
        return self._entries[start:end]

    def last_entry(self) -> LogEntry | None:
        return self._entries[-1] if self._entries else None

    def close(self) -> None:
        """Stop accepting entries and wake any in-flight capture poll."""
        if not self._closed.is_set():
            self._closed.set()
            logger.debug("LogStore closed with %d entries", len(self._entries))

    async def drain(self) -> int:
        """Append whatever the source produced since the last read.

        Best effort: an unreadable source is logged and treated as
        having produced nothing.

        Returns:
            Number of entries appended.
        """
        try:
            return await self._drain()
        except LogSourceUnavailableError as e:
            logger.warning("Log source unavailable, keeping %d entries: %s", len(self._entries), e)
            return 0

    async def _drain(self) -> int:
        if self._closed.is_set():
            return 0
        texts = await self._source.read_since(self._offset)
        if not texts:
            return 0
        observed_at = datetime.now()
        for text in texts:
            self._entries.append(LogEntry(text=text, timestamp=observed_at))
        self._offset += len(texts)
        logger.debug("Drained %d entries (total %d)", len(texts), len(self._entries))
        return len(texts)

    async def _pause(self, delay: float) -> None:
        """Sleep for ``delay`` seconds, returning early if the store closes."""
        try:
            await asyncio.wait_for(self._closed.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass

    async def capture(
        self,
        marker: int,
        timeout: float | None = None,
        interval: float | None = None,
    ) -> list[LogEntry]:
        """Poll the source until output settles and return the window.

        The window closes when at least one entry has arrived and a full
        ``interval`` passes without another, when ``timeout`` elapses,
        when the store is closed, or when the source becomes unreadable.
        A window with no entries is an empty list, not an error.
        """
        timeout = timeout if timeout is not None else self._timeout
        interval = interval if interval is not None else self._interval

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        seen_output = len(self._entries) > marker

        while not self._closed.is_set():
            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.debug("Capture window timed out after %.2fs", timeout)
                break
            await self._pause(min(interval, remaining))
            try:
                arrived = await self._drain()
            except LogSourceUnavailableError as e:
                logger.warning("Log source lost mid-capture, returning partial window: %s", e)
                break
            if arrived:
                seen_output = True
            elif seen_output:
                break

        return self.window(marker)

    async def tap(
        self,
        action: Callable[[], Awaitable[Any]],
        options: CommandOptions | None = None,
    ) -> CommandResult:
        """Run one command inside a capture window.

        Commands are serialized: a command is only issued once the
        previous command's window has closed.
        """
        options = options or CommandOptions()
        async with self._lock:
            await self.drain()
            marker = self.marker()

            value = await action()
            self._source.mark()

            if not options.capture:
                await self.drain()
                return CommandResult(value=value)

            captured = await self.capture(marker, options.timeout, options.interval)
            await self._record_item_text()
            logger.debug("Captured %d entries", len(captured))
            return CommandResult(value=value, captured=captured)

    async def _record_item_text(self) -> None:
        if self._item_text is None or self._closed.is_set():
            return
        try:
            text = await self._item_text()
        except PlatformCommandError as e:
            logger.warning("Failed to read item text: %s", e)
            return
        self._item_text_log.append(text)

    async def spoken_phrase_log(self) -> list[str]:
        """Every phrase captured so far in this session, in arrival order."""
        async with self._lock:
            await self.drain()
            return [entry.text for entry in self._entries]

    async def item_text_log(self) -> list[str]:
        """Item text recorded after each capture window."""
        return list(self._item_text_log)
