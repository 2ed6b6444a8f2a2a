"""Spoken-output log capture for a11ydriver.

Reconciles the screen reader's continuous, externally-timed output with
individual commands: every command runs inside a capture window of the
session's LogStore, so callers can ask what was spoken because of it.

Public API:
    LogSource -- Abstract append-only source of spoken phrases
    LogSourceUnavailableError -- Raised when a source can no longer be read
    BufferedLogSource -- In-memory source fed by a producer
    PhrasePollingSource -- Source built from "last spoken phrase" samples
    LogStore -- Session log with windowed capture
"""

from a11ydriver.logstore.base import LogSource, LogSourceUnavailableError
from a11ydriver.logstore.sources import BufferedLogSource, PhrasePollingSource
from a11ydriver.logstore.store import LogStore

__all__ = [
    "BufferedLogSource",
    "LogSource",
    "LogSourceUnavailableError",
    "LogStore",
    "PhrasePollingSource",
]
