"""Async subprocess execution.

Runs external programs without blocking the event loop, with a hard
timeout after which the child is killed.
"""

from __future__ import annotations

import asyncio
import logging

from a11ydriver.platform.base import PlatformCommandError, ProcessResult

logger = logging.getLogger(__name__)


async def run_process(*argv: str, timeout: float = 10.0, check: bool = False) -> ProcessResult:
    """Run a program and collect its output.

    Args:
        argv: Program and arguments.
        timeout: Seconds to wait before killing the process.
        check: Raise PlatformCommandError on a non-zero exit code.

    Raises:
        PlatformCommandError: If the program is missing, times out, or
            (with ``check``) exits non-zero.
    """
    command = " ".join(argv)
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise PlatformCommandError(f"Failed to run {argv[0]}: {e}", command=command) from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        await proc.wait()
        raise PlatformCommandError(
            f"{argv[0]} timed out after {timeout}s", command=command
        ) from e

    result = ProcessResult(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode(errors="replace").strip(),
        stderr=stderr.decode(errors="replace").strip(),
    )
    logger.debug("Ran %s -> %d", argv[0], result.returncode)

    if check and not result.ok:
        raise PlatformCommandError(
            f"{argv[0]} exited with {result.returncode}: {result.stderr}",
            command=command,
            stderr=result.stderr,
        )
    return result


async def spawn_process(*argv: str) -> asyncio.subprocess.Process:
    """Start a long-running program without waiting for it to exit.

    Raises:
        PlatformCommandError: If the program cannot be started.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except OSError as e:
        raise PlatformCommandError(f"Failed to start {argv[0]}: {e}", command=" ".join(argv)) from e
    logger.debug("Spawned %s (pid=%d)", argv[0], proc.pid)
    return proc
