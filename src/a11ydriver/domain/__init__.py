"""Domain models for a11ydriver.

This package contains the core data structures, enumerations, and value
objects used throughout the system. All models use Pydantic v2 for
validation and serialization.
"""

from a11ydriver.domain.models import (
    ClickButton,
    ClickOptions,
    Command,
    CommandOptions,
    CommandResult,
    CommanderCommand,
    KeyboardCommand,
    KeyboardOptions,
    KeyPress,
    LogEntry,
    MouseClick,
    SessionState,
    TextTyping,
    coerce_options,
)

__all__ = [
    "ClickButton",
    "ClickOptions",
    "Command",
    "CommandOptions",
    "CommandResult",
    "CommanderCommand",
    "KeyboardCommand",
    "KeyboardOptions",
    "KeyPress",
    "LogEntry",
    "MouseClick",
    "SessionState",
    "TextTyping",
    "coerce_options",
]
