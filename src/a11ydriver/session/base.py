"""Abstract interface for screen reader sessions.

Every supported screen reader (VoiceOver, NVDA) exposes the same
session API so that tests can be written once and run against whichever
screen reader the host provides. Sessions are created stopped; every
operation other than ``detect``, ``default`` and ``start`` requires a
started session.
"""

from __future__ import annotations

import functools
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Mapping, TypeVar

from a11ydriver.domain.models import (
    ClickOptions,
    Command,
    CommandOptions,
    CommandResult,
    CommanderCommand,
    KeyboardCommand,
    KeyboardOptions,
    KeyPress,
    MouseClick,
    SessionState,
    TextTyping,
    coerce_options,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


class ScreenReader(ABC):
    """Abstract interface for controlling a screen reader.

    Example usage::

        async with VoiceOver() as vo:
            await vo.next()
            result = await vo.perform("read current line", CommandOptions(capture=True))
            print(result.phrases)
    """

    name: str = "screen reader"

    def __init__(self) -> None:
        self._state = SessionState.STOPPED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def started(self) -> bool:
        return self._state is SessionState.STARTED

    @abstractmethod
    async def detect(self) -> bool:
        """Whether this screen reader can be driven on the current host."""
        ...

    @abstractmethod
    async def default(self) -> bool:
        """Whether this screen reader is the default for the current OS."""
        ...

    @abstractmethod
    async def start(self, options: CommandOptions | None = None) -> None:
        """Turn the screen reader on.

        Raises:
            NotSupportedError: If ``detect()`` is false.
            AlreadyRunningError: If the session is already started.
            ReadinessTimeoutError: If the process does not come up in time.
        """
        ...

    @abstractmethod
    async def stop(self, options: CommandOptions | None = None) -> None:
        """Turn the screen reader off and restore its configuration.

        Raises:
            NotRunningError: If the session is not started.
            ReadinessTimeoutError: If the process does not exit in time.
        """
        ...

    @abstractmethod
    async def previous(self, options: CommandOptions | None = None) -> CommandResult:
        """Move the screen reader cursor to the previous location."""
        ...

    @abstractmethod
    async def next(self, options: CommandOptions | None = None) -> CommandResult:
        """Move the screen reader cursor to the next location."""
        ...

    @abstractmethod
    async def act(self, options: CommandOptions | None = None) -> CommandResult:
        """Perform the default action for the item under the cursor."""
        ...

    @abstractmethod
    async def interact(self, options: CommandOptions | None = None) -> CommandResult:
        """Interact with the item under the cursor."""
        ...

    @abstractmethod
    async def stop_interacting(self, options: CommandOptions | None = None) -> CommandResult:
        """Stop interacting with the current item."""
        ...

    @abstractmethod
    async def press(self, key: str, options: KeyboardOptions | None = None) -> CommandResult:
        """Press a key or chord such as ``Enter`` or ``Control+f``."""
        ...

    @abstractmethod
    async def type(self, text: str, options: KeyboardOptions | None = None) -> CommandResult:
        """Type text into the focused item."""
        ...

    @abstractmethod
    async def perform(
        self,
        command: KeyboardCommand | CommanderCommand | str,
        options: CommandOptions | None = None,
    ) -> CommandResult:
        """Perform a screen reader keyboard or commander command."""
        ...

    @abstractmethod
    async def click(self, options: ClickOptions | None = None) -> CommandResult:
        """Click the mouse."""
        ...

    @abstractmethod
    async def last_spoken_phrase(self) -> str:
        ...

    @abstractmethod
    async def item_text(self) -> str:
        ...

    @abstractmethod
    async def spoken_phrase_log(self) -> list[str]:
        ...

    @abstractmethod
    async def item_text_log(self) -> list[str]:
        ...

    async def execute(self, command: Command, options: CommandOptions | None = None) -> CommandResult:
        """Issue any command variant through the matching session operation."""
        if isinstance(command, KeyPress):
            return await self.press(command.key, coerce_options(options, KeyboardOptions))
        if isinstance(command, TextTyping):
            return await self.type(command.text, coerce_options(options, KeyboardOptions))
        if isinstance(command, (KeyboardCommand, CommanderCommand)):
            return await self.perform(command, options)
        if isinstance(command, MouseClick):
            fields = (options or CommandOptions()).model_dump()
            fields.update(button=command.button, click_count=command.click_count)
            return await self.click(ClickOptions(**fields))
        raise TypeError(f"Cannot execute {type(command).__name__}")

    async def __aenter__(self) -> ScreenReader:
        """Async context manager entry -- starts the session."""
        await self.start()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        """Async context manager exit -- stops the session if still started."""
        if self.started:
            await self.stop()


def requires_started(method: F) -> F:
    """Reject calls on a session that has not been started."""

    @functools.wraps(method)
    async def wrapper(self: ScreenReader, *args: Any, **kwargs: Any) -> Any:
        if not self.started:
            raise NotRunningError(self.name)
        return await method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def resolve_command(
    command: KeyboardCommand | CommanderCommand | str,
    keyboard_commands: Mapping[str, KeyboardCommand],
    commander_commands: Mapping[str, CommanderCommand],
) -> KeyboardCommand | CommanderCommand:
    """Turn a command or command name into exactly one command variant.

    Raises:
        ValueError: If a name is unknown or belongs to both namespaces.
        TypeError: If ``command`` is neither a command nor a name.
    """
    if isinstance(command, (KeyboardCommand, CommanderCommand)):
        return command
    if not isinstance(command, str):
        raise TypeError(f"Cannot perform {type(command).__name__}")

    in_keyboard = command in keyboard_commands
    in_commander = command in commander_commands
    if in_keyboard and in_commander:
        raise ValueError(f"Ambiguous command name: {command!r}")
    if in_keyboard:
        return keyboard_commands[command]
    if in_commander:
        return commander_commands[command]
    raise ValueError(f"Unknown command: {command!r}")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ScreenReaderError(Exception):
    """Base class for screen reader session errors."""

    kind: str = "screen_reader_error"

    def __init__(self, message: str, reader: str = "") -> None:
        super().__init__(message)
        self.reader = reader


class NotSupportedError(ScreenReaderError):
    kind = "not_supported"

    def __init__(self, reader: str) -> None:
        super().__init__(f"{reader} is not supported on this host", reader)


class AlreadyRunningError(ScreenReaderError):
    kind = "already_running"

    def __init__(self, reader: str) -> None:
        super().__init__(f"{reader} is already running", reader)


class NotRunningError(ScreenReaderError):
    kind = "not_running"

    def __init__(self, reader: str) -> None:
        super().__init__(f"{reader} is not running", reader)


class ReadinessTimeoutError(ScreenReaderError):
    """Raised when the screen reader process did not reach the expected state in time."""

    kind = "readiness_timeout"

    def __init__(self, reader: str, expected: str, timeout: float) -> None:
        super().__init__(f"{reader} was not {expected} after {timeout}s", reader)
        self.expected = expected
        self.timeout = timeout
