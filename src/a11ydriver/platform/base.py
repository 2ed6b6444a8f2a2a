"""Shared types for the platform command layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ProcessResult(BaseModel):
    """Outcome of an external program run."""

    model_config = ConfigDict(frozen=True)

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class PlatformCommandError(Exception):
    """Raised when the platform backend rejects or fails a command."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.command = command
        self.stderr = stderr
