"""Platform command backends for a11ydriver.

Thin async wrappers around the OS-level scripting bridges used to drive
screen readers: plain subprocesses and AppleScript via ``osascript``.

Public API:
    PlatformCommandError -- Raised when the platform rejects a command
    run_process -- Run an external program and collect its output
    spawn_process -- Start a long-running program in the background
    AppleScriptRunner -- Execute AppleScript source via osascript
"""

from a11ydriver.platform.base import PlatformCommandError, ProcessResult
from a11ydriver.platform.process import run_process, spawn_process

__all__ = [
    "AppleScriptRunner",
    "PlatformCommandError",
    "ProcessResult",
    "run_process",
    "spawn_process",
]


def __getattr__(name: str) -> type:
    """Lazy import for the macOS-specific backend."""
    if name == "AppleScriptRunner":
        from a11ydriver.platform.applescript import AppleScriptRunner
        return AppleScriptRunner
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
