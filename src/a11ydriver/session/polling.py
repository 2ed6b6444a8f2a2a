"""Bounded polling waits for external process state."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from a11ydriver.session.base import ReadinessTimeoutError

logger = logging.getLogger(__name__)


async def wait_until(
    check: Callable[[], Awaitable[bool]],
    timeout: float,
    interval: float,
) -> bool:
    """Poll ``check`` every ``interval`` seconds until it returns True.

    The check always runs at least once, and once more right at the
    deadline so a slow final interval is not wasted.

    Returns:
        True if the condition was met within ``timeout`` seconds,
        False otherwise.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    attempts = 0
    while True:
        attempts += 1
        if await check():
            logger.debug("Condition met after %d polls", attempts)
            return True
        remaining = deadline - loop.time()
        if remaining <= 0:
            logger.debug("Condition not met after %d polls (%.2fs)", attempts, timeout)
            return False
        await asyncio.sleep(min(interval, remaining))


async def wait_for_process_state(
    is_running: Callable[[], Awaitable[bool]],
    running: bool,
    reader: str,
    timeout: float,
    interval: float,
) -> None:
    """Wait until a screen reader process is (or is no longer) running.

    Raises:
        ReadinessTimeoutError: If the state was not reached within ``timeout``.
    """

    async def reached() -> bool:
        return await is_running() == running

    if not await wait_until(reached, timeout, interval):
        raise ReadinessTimeoutError(reader, "running" if running else "stopped", timeout)
    logger.info("%s is %s", reader, "running" if running else "stopped")
