"""Tests for VoiceOver session operations on a fake host."""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest
import pytest_asyncio

from a11ydriver.config.settings import Settings
from a11ydriver.domain.models import (
    ClickButton,
    ClickOptions,
    CommandOptions,
    CommanderCommand,
    KeyboardOptions,
    KeyPress,
    MouseClick,
    TextTyping,
)
from a11ydriver.voiceover.commands import COMMANDER_COMMANDS, KEYBOARD_COMMANDS
from a11ydriver.voiceover.keys import KEY_CODES
from a11ydriver.voiceover.session import VoiceOver

CAPTURE = CommandOptions(capture=True)
VO_NAMES = ["control", "option"]


@pytest_asyncio.fixture
async def reader(fast_settings: Settings, voiceover_platform: MagicMock):
    vo = VoiceOver(fast_settings, voiceover_platform)
    await vo.start()
    yield vo
    if vo.started:
        await vo.stop()


class TestCursor:
    @pytest.mark.asyncio
    async def test_next_sends_vo_right(self, reader: VoiceOver, voiceover_platform: MagicMock) -> None:
        await reader.next()
        voiceover_platform.runner.key_code.assert_awaited_once_with(KEY_CODES["ArrowRight"], VO_NAMES)

    @pytest.mark.asyncio
    async def test_previous_sends_vo_left(self, reader: VoiceOver, voiceover_platform: MagicMock) -> None:
        await reader.previous()
        voiceover_platform.runner.key_code.assert_awaited_once_with(KEY_CODES["ArrowLeft"], VO_NAMES)

    @pytest.mark.asyncio
    async def test_interact_and_stop_interacting(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.interact()
        await reader.stop_interacting()
        assert voiceover_platform.runner.key_code.await_args_list == [
            call(KEY_CODES["ArrowDown"], VO_NAMES + ["shift"]),
            call(KEY_CODES["ArrowUp"], VO_NAMES + ["shift"]),
        ]

    @pytest.mark.asyncio
    async def test_act_performs_cursor_action(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.act()
        voiceover_platform.perform_action.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_screenshot_returns_path(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        voiceover_platform.grab_screenshot.return_value = "/tmp/shot.png"
        result = await reader.take_cursor_screenshot()
        assert result.value == "/tmp/shot.png"


class TestCapture:
    @pytest.mark.asyncio
    async def test_next_captures_spoken_phrase(
        self, reader: VoiceOver, voiceover_host
    ) -> None:
        voiceover_host.responses[KEY_CODES["ArrowRight"]] = "Button, OK"
        result = await reader.next(CAPTURE)
        assert result.phrases == ["Button, OK"]
        assert await reader.last_spoken_phrase() == "Button, OK"
        assert await reader.spoken_phrase_log() == ["Button, OK"]

    @pytest.mark.asyncio
    async def test_each_window_holds_only_its_command(
        self, reader: VoiceOver, voiceover_host
    ) -> None:
        voiceover_host.responses[KEY_CODES["ArrowRight"]] = "Link, Home"
        voiceover_host.responses[KEY_CODES["ArrowLeft"]] = "Heading level 1, Welcome"
        first = await reader.next(CAPTURE)
        second = await reader.previous(CAPTURE)
        assert first.phrases == ["Link, Home"]
        assert second.phrases == ["Heading level 1, Welcome"]
        assert await reader.spoken_phrase_log() == ["Link, Home", "Heading level 1, Welcome"]

    @pytest.mark.asyncio
    async def test_repeated_phrase_is_captured_by_each_command(
        self, reader: VoiceOver, voiceover_host
    ) -> None:
        voiceover_host.responses[KEY_CODES["ArrowRight"]] = "Button"
        first = await reader.next(CAPTURE)
        second = await reader.next(CAPTURE)
        assert first.phrases == ["Button"]
        assert second.phrases == ["Button"]
        assert await reader.spoken_phrase_log() == ["Button", "Button"]

    @pytest.mark.asyncio
    async def test_item_text_log_follows_captures(
        self, reader: VoiceOver, voiceover_host
    ) -> None:
        voiceover_host.responses[KEY_CODES["ArrowRight"]] = "Button, OK"
        await reader.next(CAPTURE)
        assert await reader.item_text() == "item: Button, OK"
        assert await reader.item_text_log() == ["item: Button, OK"]

    @pytest.mark.asyncio
    async def test_silent_command_captures_nothing(self, reader: VoiceOver) -> None:
        result = await reader.press("Escape", KeyboardOptions(capture=True, timeout=0.05))
        assert result.captured == []


class TestKeyboard:
    @pytest.mark.asyncio
    async def test_press_named_key(self, reader: VoiceOver, voiceover_platform: MagicMock) -> None:
        await reader.press("Enter")
        voiceover_platform.runner.key_code.assert_awaited_once_with(36, [])

    @pytest.mark.asyncio
    async def test_press_chord_types_character(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.press("Control+Shift+f")
        voiceover_platform.runner.keystroke.assert_awaited_once_with("f", ["control", "shift"])

    @pytest.mark.asyncio
    async def test_press_merges_option_modifiers(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.press("Meta+a", KeyboardOptions(modifiers=["shift", "cmd"]))
        voiceover_platform.runner.keystroke.assert_awaited_once_with("a", ["command", "shift"])

    @pytest.mark.asyncio
    async def test_press_rejects_unknown_key_before_sending(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        with pytest.raises(ValueError):
            await reader.press("NotAKey")
        with pytest.raises(ValueError):
            await reader.press("Insert+a")
        voiceover_platform.runner.key_code.assert_not_awaited()
        voiceover_platform.runner.keystroke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_type_text(self, reader: VoiceOver, voiceover_platform: MagicMock) -> None:
        await reader.type("hello world")
        voiceover_platform.runner.keystroke.assert_awaited_once_with("hello world", [])

    @pytest.mark.asyncio
    async def test_type_with_delay_sends_each_character(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.type("abc", KeyboardOptions(delay=0.001))
        assert voiceover_platform.runner.keystroke.await_args_list == [
            call("a", []), call("b", []), call("c", []),
        ]


class TestPerform:
    @pytest.mark.asyncio
    async def test_keyboard_command_by_name(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.perform("read_line")
        voiceover_platform.runner.keystroke.assert_awaited_once_with("l", VO_NAMES)
        voiceover_platform.perform_commander_command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commander_command_by_name(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.perform("read current line")
        voiceover_platform.perform_commander_command.assert_awaited_once_with("read current line")

    @pytest.mark.asyncio
    async def test_command_objects(self, reader: VoiceOver, voiceover_platform: MagicMock) -> None:
        await reader.perform(KEYBOARD_COMMANDS["describe_item"])
        await reader.perform(CommanderCommand(name="go to dock"))
        voiceover_platform.runner.key_code.assert_awaited_once_with(KEY_CODES["F3"], VO_NAMES)
        voiceover_platform.perform_commander_command.assert_awaited_once_with("go to dock")

    @pytest.mark.asyncio
    async def test_unknown_name(self, reader: VoiceOver) -> None:
        with pytest.raises(ValueError):
            await reader.perform("do a barrel roll")

    @pytest.mark.asyncio
    async def test_command_tables_exposed(self, reader: VoiceOver) -> None:
        assert reader.keyboard_commands == KEYBOARD_COMMANDS
        assert reader.commander_commands == COMMANDER_COMMANDS


class TestMouseAndExecute:
    @pytest.mark.asyncio
    async def test_double_click(self, reader: VoiceOver, voiceover_platform: MagicMock) -> None:
        await reader.click(ClickOptions(click_count=2))
        assert voiceover_platform.runner.key_code.await_count == 2
        voiceover_platform.runner.key_code.assert_awaited_with(
            KEY_CODES["Space"], VO_NAMES + ["shift"]
        )

    @pytest.mark.asyncio
    async def test_right_click_opens_shortcut_menu(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.click(ClickOptions(button=ClickButton.RIGHT))
        voiceover_platform.runner.keystroke.assert_awaited_once_with("m", VO_NAMES + ["shift"])

    @pytest.mark.asyncio
    async def test_execute_dispatches_each_variant(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.execute(KeyPress(key="Tab"))
        await reader.execute(TextTyping(text="hi"))
        await reader.execute(CommanderCommand(name="read all"))
        await reader.execute(MouseClick(), CommandOptions(capture=False))
        runner = voiceover_platform.runner
        assert runner.key_code.await_args_list[0] == call(KEY_CODES["Tab"], [])
        runner.keystroke.assert_awaited_once_with("hi", [])
        voiceover_platform.perform_commander_command.assert_awaited_once_with("read all")
        assert runner.key_code.await_count == 2

    @pytest.mark.asyncio
    async def test_copy_and_save_last_phrase(
        self, reader: VoiceOver, voiceover_platform: MagicMock
    ) -> None:
        await reader.copy_last_spoken_phrase()
        await reader.save_last_spoken_phrase()
        assert voiceover_platform.runner.keystroke.await_args_list == [
            call("c", VO_NAMES + ["shift"]),
            call("z", VO_NAMES + ["shift"]),
        ]
