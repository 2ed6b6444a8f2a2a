"""Screen reader session interface and error taxonomy.

Public API:
    ScreenReader -- Interface every screen reader session implements
    ScreenReaderError -- Base class of session errors
    NotSupportedError, AlreadyRunningError, NotRunningError,
    ReadinessTimeoutError -- Session state and readiness failures
    requires_started -- Decorator guarding operations on a stopped session
    resolve_command -- Turn a command name into a command variant
    wait_until -- Bounded polling helper
"""

from a11ydriver.session.base import (
    AlreadyRunningError,
    NotRunningError,
    NotSupportedError,
    ReadinessTimeoutError,
    ScreenReader,
    ScreenReaderError,
    requires_started,
    resolve_command,
)
from a11ydriver.session.polling import wait_for_process_state, wait_until

__all__ = [
    "AlreadyRunningError",
    "NotRunningError",
    "NotSupportedError",
    "ReadinessTimeoutError",
    "ScreenReader",
    "ScreenReaderError",
    "requires_started",
    "resolve_command",
    "wait_for_process_state",
    "wait_until",
]
