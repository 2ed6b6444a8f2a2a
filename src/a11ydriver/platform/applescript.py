"""AppleScript backend.

Executes AppleScript source through ``osascript`` and synthesizes
keystrokes through System Events. Every VoiceOver operation is
ultimately one call to :meth:`AppleScriptRunner.run`.
"""

from __future__ import annotations

import logging

from a11ydriver.platform.base import PlatformCommandError
from a11ydriver.platform.process import run_process

logger = logging.getLogger(__name__)

# osascript reports this when automation of the target app is disallowed
NOT_AUTHORIZED_MARKERS = ("not allowed", "not authorized", "(-1743)")


def quote(text: str) -> str:
    """Quote a Python string as an AppleScript string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def using_clause(modifiers: list[str] | tuple[str, ...]) -> str:
    """Build a System Events ``using {...}`` clause from AppleScript modifier names."""
    if not modifiers:
        return ""
    return " using {" + ", ".join(f"{m} down" for m in modifiers) + "}"


class AppleScriptRunner:
    """Runs AppleScript and System Events keystrokes via osascript."""

    def __init__(self, osascript: str = "osascript", timeout: float = 10.0) -> None:
        self._osascript = osascript
        self._timeout = timeout

    async def run(self, script: str) -> str:
        """Execute AppleScript source and return its stdout.

        Raises:
            PlatformCommandError: If osascript fails or automation of the
                target application is not permitted.
        """
        result = await run_process(self._osascript, "-e", script, timeout=self._timeout)
        if not result.ok:
            lowered = result.stderr.lower()
            if any(marker in lowered for marker in NOT_AUTHORIZED_MARKERS):
                message = f"Application is not controllable by AppleScript: {result.stderr}"
            else:
                message = f"AppleScript failed: {result.stderr}"
            raise PlatformCommandError(message, command=script, stderr=result.stderr)
        logger.debug("AppleScript ok: %s", script.splitlines()[0][:80])
        return result.stdout

    async def key_code(self, code: int, modifiers: list[str] | tuple[str, ...] = ()) -> None:
        """Press a key by macOS virtual key code."""
        await self.run(
            f'tell application "System Events" to key code {code}{using_clause(modifiers)}'
        )

    async def keystroke(self, text: str, modifiers: list[str] | tuple[str, ...] = ()) -> None:
        """Type characters through System Events."""
        await self.run(
            f'tell application "System Events" to keystroke {quote(text)}{using_clause(modifiers)}'
        )
