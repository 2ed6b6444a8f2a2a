"""NVDA Remote Access client.

Speaks the newline-delimited JSON protocol of NVDA's remote access
feature over TLS. The session connects as the controlling side
("master") to the NVDA instance it launched, receives every speech
sequence that NVDA produces, and sends key events for NVDA to inject.
"""

from __future__ import annotations

import asyncio
import json
import logging
import ssl
from typing import Any

from a11ydriver.logstore.sources import BufferedLogSource
from a11ydriver.platform.base import PlatformCommandError

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = 2


def speech_text(sequence: list[Any]) -> str:
    """Join the text items of an NVDA speech sequence.

    Sequences interleave strings with serialized speech commands
    (pitch changes, breaks, ...); only the strings are spoken text.
    """
    parts = [item.strip() for item in sequence if isinstance(item, str)]
    return " ".join(part for part in parts if part)


class NVDARemoteClient:
    """Connection to a local NVDA instance through remote access.

    Example usage::

        source = BufferedLogSource()
        client = NVDARemoteClient("127.0.0.1", 6837, "a11ydriver", source)
        await client.connect()
        await client.send_key(0x28, 0x50, True, pressed=True)
        await client.send_key(0x28, 0x50, True, pressed=False)
        await client.disconnect()
    """

    def __init__(
        self,
        host: str,
        port: int,
        channel: str,
        source: BufferedLogSource,
        timeout: float = 5.0,
        use_tls: bool = True,
    ) -> None:
        self._host = host
        self._port = port
        self._channel = channel
        self._source = source
        self._timeout = timeout
        self._use_tls = use_tls
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._read_task: asyncio.Task | None = None
        self._joined = asyncio.Event()

    @property
    def is_connected(self) -> bool:
        return self._writer is not None and self._joined.is_set()

    def _ssl_context(self) -> ssl.SSLContext | None:
        if not self._use_tls:
            return None
        # NVDA serves a self-signed certificate
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    async def connect(self, timeout: float | None = None) -> None:
        """Open the connection and join the control channel.

        Args:
            timeout: Seconds allowed for opening the connection and the
                     join together. Capped at the client's own timeout.

        Raises:
            PlatformCommandError: If NVDA cannot be reached or does not
                confirm the channel join within the timeout.
        """
        budget = self._timeout if timeout is None else min(timeout, self._timeout)
        loop = asyncio.get_running_loop()
        deadline = loop.time() + budget
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port, ssl=self._ssl_context()),
                timeout=budget,
            )
        except (OSError, asyncio.TimeoutError) as e:
            raise PlatformCommandError(
                f"Failed to connect to NVDA at {self._host}:{self._port}: {e}"
            ) from e

        self._joined.clear()
        self._read_task = asyncio.create_task(self._read_loop())
        try:
            await self.send({"type": "protocol_version", "version": PROTOCOL_VERSION})
            await self.send({"type": "join", "channel": self._channel, "connection_type": "master"})
            await asyncio.wait_for(self._joined.wait(), timeout=max(deadline - loop.time(), 0))
        except asyncio.TimeoutError as e:
            await self.disconnect()
            raise PlatformCommandError("NVDA did not confirm the channel join") from e
        except PlatformCommandError:
            await self.disconnect()
            raise
        logger.info("Connected to NVDA at %s:%d", self._host, self._port)

    async def try_connect(self, timeout: float | None = None) -> bool:
        """Attempt to connect, reporting failure instead of raising."""
        try:
            await self.connect(timeout)
        except PlatformCommandError as e:
            logger.debug("NVDA not reachable yet: %s", e)
            return False
        return True

    async def disconnect(self) -> None:
        """Close the connection. Safe to call multiple times."""
        if self._read_task is not None:
            self._read_task.cancel()
            try:
                await self._read_task
            except asyncio.CancelledError:
                pass
            self._read_task = None

        if self._writer is not None:
            self._writer.close()
            try:
                await self._writer.wait_closed()
            except (OSError, ssl.SSLError):
                pass
            self._writer = None
            self._reader = None
            logger.info("Disconnected from NVDA")
        self._joined.clear()

    async def send(self, message: dict[str, Any]) -> None:
        """Send one protocol message."""
        if self._writer is None:
            raise PlatformCommandError("Not connected to NVDA")
        try:
            self._writer.write(json.dumps(message).encode() + b"\n")
            await self._writer.drain()
        except (OSError, ssl.SSLError) as e:
            raise PlatformCommandError(f"Failed to send {message.get('type')}: {e}") from e

    async def send_key(self, vk_code: int, scan_code: int, extended: bool, pressed: bool) -> None:
        await self.send(
            {
                "type": "key",
                "vk_code": vk_code,
                "scan_code": scan_code,
                "extended": extended,
                "pressed": pressed,
            }
        )

    def _handle(self, message: dict[str, Any]) -> None:
        kind = message.get("type")
        if kind == "speak":
            text = speech_text(message.get("sequence", []))
            if text:
                self._source.push(text)
                logger.debug("NVDA spoke: %s", text[:80])
        elif kind == "channel_joined":
            self._joined.set()
        elif kind in ("ping", "motd", "client_joined", "client_left", "cancel"):
            pass
        else:
            logger.debug("Ignoring NVDA message type %r", kind)

    async def _read_loop(self) -> None:
        """Background task that feeds speech into the log source."""
        reader = self._reader
        if reader is None:
            return
        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                try:
                    message = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("Discarding malformed NVDA message: %r", line[:80])
                    continue
                if isinstance(message, dict):
                    self._handle(message)
        except asyncio.CancelledError:
            raise
        except (OSError, ssl.SSLError) as e:
            logger.warning("NVDA connection lost: %s", e)
        logger.info("NVDA stream ended")
        if self._joined.is_set():
            self._source.close()
