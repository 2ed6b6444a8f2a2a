"""Tests for domain models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

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
    TextTyping,
    coerce_options,
)


class TestOptions:
    def test_defaults(self) -> None:
        options = CommandOptions()
        assert options.capture is False
        assert options.timeout is None
        assert options.interval is None

    def test_rejects_non_positive_durations(self) -> None:
        with pytest.raises(ValidationError):
            CommandOptions(timeout=0)
        with pytest.raises(ValidationError):
            CommandOptions(interval=-1)

    def test_click_count_bounds(self) -> None:
        assert ClickOptions(click_count=3).click_count == 3
        with pytest.raises(ValidationError):
            ClickOptions(click_count=4)

    def test_coerce_keeps_common_fields(self) -> None:
        options = coerce_options(CommandOptions(capture=True, timeout=2.0), KeyboardOptions)
        assert isinstance(options, KeyboardOptions)
        assert options.capture is True
        assert options.timeout == 2.0
        assert options.modifiers == []

    def test_coerce_between_subclasses(self) -> None:
        options = coerce_options(KeyboardOptions(capture=True, modifiers=["shift"]), ClickOptions)
        assert options.capture is True
        assert options.button is ClickButton.LEFT

    def test_coerce_none_and_same_type(self) -> None:
        assert coerce_options(None, ClickOptions) == ClickOptions()
        same = KeyboardOptions(delay=0.1)
        assert coerce_options(same, KeyboardOptions) is same


class TestCommands:
    def test_union_dispatches_on_kind(self) -> None:
        adapter = TypeAdapter(list[Command])
        commands = adapter.validate_python(
            [
                {"kind": "key_press", "key": "Enter"},
                {"kind": "text_typing", "text": "hello"},
                {"kind": "keyboard_command", "name": "read_line", "key": "l", "modifiers": ["control", "alt"]},
                {"kind": "commander_command", "name": "read all"},
                {"kind": "mouse_click", "button": "right"},
            ]
        )
        assert [type(c) for c in commands] == [
            KeyPress, TextTyping, KeyboardCommand, CommanderCommand, MouseClick,
        ]
        assert commands[2].modifiers == ("control", "alt")
        assert commands[4].button is ClickButton.RIGHT

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TypeAdapter(Command).validate_python({"kind": "teleport"})

    def test_commands_are_immutable(self) -> None:
        command = KeyPress(key="Tab")
        with pytest.raises(ValidationError):
            command.key = "Enter"  # type: ignore[misc]


class TestCommandResult:
    def test_phrases_without_capture(self) -> None:
        result = CommandResult(value="x")
        assert result.captured is None
        assert result.phrases == []

    def test_phrases_in_order(self) -> None:
        result = CommandResult(captured=[LogEntry(text="one"), LogEntry(text="two")])
        assert result.phrases == ["one", "two"]
