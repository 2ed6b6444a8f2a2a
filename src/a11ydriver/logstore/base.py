"""Abstract base class for spoken-output log sources.

A log source is the side channel a running screen reader writes its
output into. It is append-only and addressed by offsets: callers ask for
the current length and for every entry after a given offset.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class LogSource(ABC):
    """Append-only, offset-addressed stream of spoken phrases."""

    @abstractmethod
    async def length(self) -> int:
        """Number of entries the source has produced so far.

        Raises:
            LogSourceUnavailableError: If the source cannot be read.
        """
        ...

    @abstractmethod
    async def read_since(self, offset: int) -> list[str]:
        """Return every entry produced at or after ``offset``, in order.

        Raises:
            LogSourceUnavailableError: If the source cannot be read.
        """
        ...

    def mark(self) -> None:
        """Note that a command was just issued.

        Sources that infer new entries from samples use this to start a
        fresh comparison. The default does nothing.
        """


class LogSourceUnavailableError(Exception):
    """Raised when a log source can no longer be read.

    Typically the screen reader process exited or its bridge dropped.
    """
