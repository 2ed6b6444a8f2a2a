"""Shared test fixtures for the a11ydriver test suite.

Provides fast capture settings and fake VoiceOver / NVDA hosts: mocked
platform objects that track whether the screen reader "process" is
running and what it last said, so sessions can be driven end to end
without a real screen reader.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from a11ydriver.config.settings import CaptureConfig, NVDAConfig, Settings
from a11ydriver.logstore.sources import BufferedLogSource
from a11ydriver.nvda.client import NVDARemoteClient
from a11ydriver.nvda.platform import NVDAPlatform
from a11ydriver.nvda.platform import SettingsSnapshot as NVDASnapshot
from a11ydriver.platform.applescript import AppleScriptRunner
from a11ydriver.voiceover.platform import SettingsSnapshot, VoiceOverPlatform


# ---------------------------------------------------------------------------
# Settings Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fast_settings(tmp_path) -> Settings:
    """Settings with short capture and readiness budgets."""
    return Settings(
        capture=CaptureConfig(timeout=0.3, interval=0.02, start_timeout=0.2, start_interval=0.01),
        nvda=NVDAConfig(config_path=str(tmp_path / "nvda")),
    )


# ---------------------------------------------------------------------------
# Log Source Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def source() -> BufferedLogSource:
    return BufferedLogSource()


# ---------------------------------------------------------------------------
# Fake Hosts
# ---------------------------------------------------------------------------


class FakeVoiceOverHost:
    """State behind a mocked VoiceOverPlatform.

    ``responses`` maps what was sent (a key code or typed text) to the
    phrase VoiceOver "speaks" in reply.
    """

    def __init__(self) -> None:
        self.running = False
        self.phrase = ""
        self.item = ""
        self.responses: dict[object, str] = {}

    def speak(self, sent: object) -> None:
        if sent in self.responses:
            self.phrase = self.responses[sent]
            self.item = f"item: {self.phrase}"


@pytest.fixture
def voiceover_host() -> FakeVoiceOverHost:
    return FakeVoiceOverHost()


@pytest.fixture
def voiceover_platform(voiceover_host: FakeVoiceOverHost) -> MagicMock:
    """A mocked VoiceOverPlatform that launches, quits and speaks."""
    host = voiceover_host
    platform = MagicMock(spec=VoiceOverPlatform)
    platform.runner = AsyncMock(spec=AppleScriptRunner)

    async def launch() -> None:
        host.running = True

    async def force_quit() -> None:
        host.running = False

    async def is_running() -> bool:
        return host.running

    async def last_phrase() -> str:
        return host.phrase

    async def item_text() -> str:
        return host.item

    async def key_code(code, modifiers=()) -> None:
        host.speak(code)

    async def keystroke(text, modifiers=()) -> None:
        host.speak(text)

    platform.is_macos.return_value = True
    platform.supports_applescript_control.return_value = True
    platform.launch.side_effect = launch
    platform.force_quit.side_effect = force_quit
    platform.is_running.side_effect = is_running
    platform.last_phrase.side_effect = last_phrase
    platform.item_text.side_effect = item_text
    platform.configure_settings.return_value = SettingsSnapshot()
    platform.runner.key_code.side_effect = key_code
    platform.runner.keystroke.side_effect = keystroke
    return platform


class FakeNVDAHost:
    """State behind a mocked NVDAPlatform and remote client."""

    def __init__(self) -> None:
        self.running = False
        self.reachable = True
        self.source: BufferedLogSource | None = None
        self.client: AsyncMock | None = None
        self.keys: list[tuple[int, bool]] = []
        self.connect_timeouts: list[float | None] = []
        # vk_code -> phrase spoken when that key is released
        self.responses: dict[int, str] = {}


@pytest.fixture
def nvda_host() -> FakeNVDAHost:
    return FakeNVDAHost()


@pytest.fixture
def nvda_platform(nvda_host: FakeNVDAHost, tmp_path) -> MagicMock:
    host = nvda_host
    platform = MagicMock(spec=NVDAPlatform)

    async def launch() -> None:
        host.running = True

    async def force_quit() -> None:
        host.running = False

    async def is_running() -> bool:
        return host.running

    platform.is_windows.return_value = True
    platform.is_installed.return_value = True
    platform.launch.side_effect = launch
    platform.force_quit.side_effect = force_quit
    platform.is_running.side_effect = is_running
    platform.configure_settings.return_value = NVDASnapshot(path=tmp_path / "nvda.ini")
    return platform


@pytest.fixture
def nvda_client_factory(nvda_host: FakeNVDAHost):
    """Factory producing mocked remote clients wired to the fake host."""
    host = nvda_host

    def factory(source: BufferedLogSource) -> AsyncMock:
        client = AsyncMock(spec=NVDARemoteClient)

        async def try_connect(timeout=None) -> bool:
            host.connect_timeouts.append(timeout)
            return host.running and host.reachable

        async def send_key(vk_code, scan_code, extended, pressed) -> None:
            host.keys.append((vk_code, pressed))
            if not pressed and vk_code in host.responses:
                source.push(host.responses[vk_code])

        client.try_connect.side_effect = try_connect
        client.send_key.side_effect = send_key
        host.source = source
        host.client = client
        return client

    return factory
