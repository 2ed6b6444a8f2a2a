"""Tests for the NVDA session on a fake host."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from a11ydriver.config.settings import Settings
from a11ydriver.domain.models import ClickButton, ClickOptions, CommandOptions, CommanderCommand
from a11ydriver.nvda.keys import KEYS, MODIFIER_KEYS
from a11ydriver.nvda.session import NVDA
from a11ydriver.session.base import NotSupportedError, ReadinessTimeoutError

CAPTURE = CommandOptions(capture=True)
DOWN = KEYS["ArrowDown"][0]
UP = KEYS["ArrowUp"][0]


@pytest.fixture
def nvda(fast_settings: Settings, nvda_platform: MagicMock, nvda_client_factory) -> NVDA:
    return NVDA(fast_settings, nvda_platform, nvda_client_factory)


@pytest_asyncio.fixture
async def reader(nvda: NVDA):
    await nvda.start()
    yield nvda
    if nvda.started:
        await nvda.stop()


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_connects_and_stop_disconnects(
        self, nvda: NVDA, nvda_platform: MagicMock, nvda_host
    ) -> None:
        await nvda.start()
        assert nvda.started
        nvda_host.client.try_connect.assert_awaited()
        nvda_platform.configure_settings.assert_awaited_once()

        await nvda.stop()
        assert not nvda.started
        nvda_host.client.disconnect.assert_awaited()
        nvda_platform.restore_settings.assert_awaited_once()
        assert not nvda_host.running

    @pytest.mark.asyncio
    async def test_not_installed(self, nvda: NVDA, nvda_platform: MagicMock) -> None:
        nvda_platform.is_installed.return_value = False
        with pytest.raises(NotSupportedError):
            await nvda.start()
        nvda_platform.launch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unreachable_remote_rolls_back(
        self, nvda: NVDA, nvda_platform: MagicMock, nvda_host
    ) -> None:
        nvda_host.reachable = False
        with pytest.raises(ReadinessTimeoutError) as exc_info:
            await nvda.start()
        assert exc_info.value.expected == "connected"
        assert not nvda.started
        assert not nvda_host.running
        nvda_platform.restore_settings.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_attempts_stay_within_start_budget(
        self, nvda: NVDA, nvda_host
    ) -> None:
        nvda_host.reachable = False
        with pytest.raises(ReadinessTimeoutError):
            await nvda.start(CommandOptions(timeout=0.1, interval=0.01))
        assert nvda_host.connect_timeouts
        assert all(0 < timeout <= 0.1 for timeout in nvda_host.connect_timeouts)

    @pytest.mark.asyncio
    async def test_default_follows_platform(self, nvda: NVDA, nvda_platform: MagicMock) -> None:
        assert await nvda.default() is True
        nvda_platform.is_windows.return_value = False
        assert await nvda.default() is False
        assert await nvda.detect() is False


class TestCommands:
    @pytest.mark.asyncio
    async def test_next_captures_speech(self, reader: NVDA, nvda_host) -> None:
        nvda_host.responses[DOWN] = "Heading level 2, Pricing"
        result = await reader.next(CAPTURE)
        assert result.phrases == ["Heading level 2, Pricing"]
        assert await reader.last_spoken_phrase() == "Heading level 2, Pricing"
        assert await reader.item_text() == "Heading level 2, Pricing"

    @pytest.mark.asyncio
    async def test_windows_do_not_overlap(self, reader: NVDA, nvda_host) -> None:
        nvda_host.responses[DOWN] = "Link, Docs"
        nvda_host.responses[UP] = "Link, Home"
        first = await reader.next(CAPTURE)
        second = await reader.previous(CAPTURE)
        assert first.phrases == ["Link, Docs"]
        assert second.phrases == ["Link, Home"]
        assert await reader.spoken_phrase_log() == ["Link, Docs", "Link, Home"]
        assert await reader.item_text_log() == ["Link, Docs", "Link, Home"]

    @pytest.mark.asyncio
    async def test_interact_toggles_browse_mode(self, reader: NVDA, nvda_host) -> None:
        await reader.interact()
        insert_vk, space_vk = MODIFIER_KEYS["insert"][0], KEYS["Space"][0]
        assert nvda_host.keys == [
            (insert_vk, True), (space_vk, True), (space_vk, False), (insert_vk, False),
        ]

    @pytest.mark.asyncio
    async def test_type_shifted_text(self, reader: NVDA, nvda_host) -> None:
        await reader.type("Hi")
        shift_vk = MODIFIER_KEYS["shift"][0]
        assert nvda_host.keys[0] == (shift_vk, True)
        assert [vk for vk, _ in nvda_host.keys].count(shift_vk) == 2
        assert len(nvda_host.keys) == 6

    @pytest.mark.asyncio
    async def test_type_rejects_unmappable_text_before_sending(self, reader: NVDA, nvda_host) -> None:
        with pytest.raises(ValueError):
            await reader.type("naïve")
        assert nvda_host.keys == []

    @pytest.mark.asyncio
    async def test_perform_keyboard_command(self, reader: NVDA, nvda_host) -> None:
        await reader.perform("report_title")
        assert nvda_host.keys[0] == (MODIFIER_KEYS["insert"][0], True)

    @pytest.mark.asyncio
    async def test_commander_commands_rejected(self, reader: NVDA) -> None:
        with pytest.raises(ValueError, match="no commander"):
            await reader.perform(CommanderCommand(name="read all"))
        with pytest.raises(ValueError):
            await reader.perform("read all")

    @pytest.mark.asyncio
    async def test_clicks(self, reader: NVDA, nvda_host) -> None:
        await reader.click(ClickOptions(click_count=2))
        await reader.click(ClickOptions(button=ClickButton.RIGHT))
        pressed = [vk for vk, down in nvda_host.keys if down]
        assert pressed == [
            KEYS["NumpadDivide"][0], KEYS["NumpadDivide"][0], KEYS["NumpadMultiply"][0],
        ]

    @pytest.mark.asyncio
    async def test_last_phrase_empty_before_speech(self, reader: NVDA) -> None:
        assert await reader.last_spoken_phrase() == ""
