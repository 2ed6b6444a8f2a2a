"""Concrete log sources."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from a11ydriver.logstore.base import LogSource, LogSourceUnavailableError
from a11ydriver.platform.base import PlatformCommandError

logger = logging.getLogger(__name__)


class BufferedLogSource(LogSource):
    """In-memory append-only buffer fed by a producer.

    The NVDA remote client pushes every phrase it receives into one of
    these. Once closed, reads fail so that in-flight captures end early.
    """

    def __init__(self) -> None:
        self._buffer: list[str] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, text: str) -> None:
        if self._closed:
            logger.debug("Dropping phrase pushed after close: %s", text[:50])
            return
        self._buffer.append(text)

    def close(self) -> None:
        self._closed = True

    async def length(self) -> int:
        if self._closed:
            raise LogSourceUnavailableError("Log source is closed")
        return len(self._buffer)

    async def read_since(self, offset: int) -> list[str]:
        if self._closed:
            raise LogSourceUnavailableError("Log source is closed")
        return self._buffer[offset:]


class PhrasePollingSource(LogSource):
    """Builds an append-only stream from "last spoken phrase" samples.

    VoiceOver only exposes its most recent phrase. Each read samples it
    and appends the sample when it differs from the previous one. After
    :meth:`mark` the next non-empty sample is appended even if it repeats
    the previous one, so two commands speaking the same text both get
    an entry.
    """

    def __init__(self, sample: Callable[[], Awaitable[str]]) -> None:
        self._sample = sample
        self._buffer: list[str] = []
        self._last_sample: str | None = None

    async def _poll(self) -> None:
        try:
            phrase = await self._sample()
        except PlatformCommandError as e:
            raise LogSourceUnavailableError(f"Failed to sample last phrase: {e}") from e
        if phrase and phrase != self._last_sample:
            self._buffer.append(phrase)
        self._last_sample = phrase

    def mark(self) -> None:
        self._last_sample = None

    async def length(self) -> int:
        await self._poll()
        return len(self._buffer)

    async def read_since(self, offset: int) -> list[str]:
        await self._poll()
        return self._buffer[offset:]
