"""Core domain models for a11ydriver.

These models represent the data flowing between a screen reader session
and its callers: entries of the spoken-phrase log, per-call options,
the commands that can be issued, and the result of issuing one.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Annotated, Any, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class SessionState(str, enum.Enum):
    """Lifecycle state of a screen reader session."""

    STOPPED = "stopped"
    STARTED = "started"


class ClickButton(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"


# ---------------------------------------------------------------------------
# Log Models
# ---------------------------------------------------------------------------


class LogEntry(BaseModel):
    """A single phrase observed in the screen reader's output."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="The spoken or captioned text")
    timestamp: datetime = Field(
        default_factory=datetime.now, description="When the entry was observed"
    )


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class CommandOptions(BaseModel):
    """Options accepted by every session operation.

    ``timeout`` and ``interval`` are in seconds. They bound the readiness
    polls of ``start``/``stop`` and the capture poll of every other call.
    ``None`` means "use the configured default".
    """

    model_config = ConfigDict(frozen=True)

    capture: bool = Field(default=False, description="Return the log window for this call")
    timeout: float | None = Field(default=None, gt=0)
    interval: float | None = Field(default=None, gt=0)


class KeyboardOptions(CommandOptions):
    """Options for keyboard input."""

    modifiers: list[str] = Field(
        default_factory=list, description="Modifier keys held for every key of the call"
    )
    delay: float | None = Field(
        default=None, ge=0, description="Seconds between characters when typing text"
    )


class ClickOptions(CommandOptions):
    """Options for mouse clicks."""

    button: ClickButton = Field(default=ClickButton.LEFT)
    click_count: int = Field(default=1, ge=1, le=3)


# ---------------------------------------------------------------------------
# Commands (discriminated union)
# ---------------------------------------------------------------------------


class KeyPress(BaseModel):
    """A key or key chord such as ``Enter`` or ``Control+Shift+f``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["key_press"] = "key_press"
    key: str


class TextTyping(BaseModel):
    """A string of text to type into the focused item."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text_typing"] = "text_typing"
    text: str


class KeyboardCommand(BaseModel):
    """A named screen reader command bound to a keyboard shortcut."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["keyboard_command"] = "keyboard_command"
    name: str = Field(description="Unique command name, e.g. 'move_to_next'")
    key: str = Field(description="Key name or single character to press")
    modifiers: tuple[str, ...] = Field(default=())
    description: str = Field(default="")


class CommanderCommand(BaseModel):
    """A named command executed through the screen reader's commander."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["commander_command"] = "commander_command"
    name: str = Field(description="Command phrase, e.g. 'read current line'")
    description: str = Field(default="")


class MouseClick(BaseModel):
    """A mouse click at the screen reader's mouse position."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["mouse_click"] = "mouse_click"
    button: ClickButton = ClickButton.LEFT
    click_count: int = Field(default=1, ge=1, le=3)


Command = Annotated[
    Union[KeyPress, TextTyping, KeyboardCommand, CommanderCommand, MouseClick],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class CommandResult(BaseModel):
    """Outcome of a single session operation.

    ``captured`` is ``None`` when capture was not requested and a
    (possibly empty) list of entries when it was.
    """

    model_config = ConfigDict(frozen=True)

    value: Any = Field(default=None, description="Raw value returned by the platform, if any")
    captured: list[LogEntry] | None = Field(default=None)

    @property
    def phrases(self) -> list[str]:
        """Texts of the captured entries, in arrival order."""
        return [entry.text for entry in self.captured or []]


OptionsT = TypeVar("OptionsT", bound=CommandOptions)


def coerce_options(options: CommandOptions | None, model: type[OptionsT]) -> OptionsT:
    """Return ``options`` as an instance of ``model``, filling defaults."""
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    return model(**options.model_dump(include=set(CommandOptions.model_fields)))
