"""VoiceOver platform operations on macOS.

Lifecycle (launch, force quit, running check), preference snapshot and
restore through ``defaults``, and the AppleScript queries VoiceOver
exposes for its cursor and spoken output.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from a11ydriver.config.settings import VoiceOverConfig
from a11ydriver.platform.applescript import AppleScriptRunner, quote
from a11ydriver.platform.base import PlatformCommandError
from a11ydriver.platform.process import run_process

logger = logging.getLogger(__name__)

VOICEOVER_DOMAIN = "com.apple.VoiceOver4/default"
TRAINING_DOMAIN = "com.apple.VoiceOverTraining"
# Newer macOS releases gate AppleScript control behind this marker file
APPLESCRIPT_ENABLED_MARKER = Path("/private/var/db/Accessibility/.VoiceOverAppleScriptEnabled")


class DefaultsSetting(BaseModel):
    """One ``defaults`` preference to override for the session."""

    model_config = ConfigDict(frozen=True)

    domain: str
    key: str
    type: Literal["bool", "int", "float", "string"]
    value: str


class PreviousValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    setting: DefaultsSetting
    value: str | None = Field(description="Value before the override, None if unset")


class SettingsSnapshot(BaseModel):
    """What ``configure_settings`` changed, consumed by ``restore_settings``."""

    model_config = ConfigDict(frozen=True)

    previous: list[PreviousValue] = Field(default_factory=list)


DEFAULT_SETTINGS: list[DefaultsSetting] = [
    DefaultsSetting(domain=TRAINING_DOMAIN, key="doNotShowSplashScreen", type="bool", value="true"),
    DefaultsSetting(domain=VOICEOVER_DOMAIN, key="SCRDisplayTextEnabled", type="bool", value="true"),
    DefaultsSetting(domain=VOICEOVER_DOMAIN, key="SCRShouldAnnounceKeyCommands", type="bool", value="false"),
    DefaultsSetting(
        domain=VOICEOVER_DOMAIN,
        key="SCRCategories_SCRCategorySystemWide_SCRSoundComponentSettings_SCRSoundComponentSettingsEnabled",
        type="bool",
        value="false",
    ),
    DefaultsSetting(
        domain=VOICEOVER_DOMAIN,
        key="SCRCategories_SCRCategorySystemWide_SCRSpeechComponentSettings_SCRSpeechComponentSettingsRate",
        type="int",
        value="100",
    ),
]


def _defaults_value(setting_type: str, value: str) -> str:
    # `defaults read` prints booleans as 1/0
    if setting_type == "bool":
        return {"1": "true", "0": "false"}.get(value, value)
    return value


class VoiceOverPlatform:
    """macOS-side operations used by the VoiceOver session and controllers."""

    def __init__(
        self,
        config: VoiceOverConfig | None = None,
        runner: AppleScriptRunner | None = None,
    ) -> None:
        self._config = config or VoiceOverConfig()
        self.runner = runner or AppleScriptRunner(
            osascript=self._config.osascript,
            timeout=self._config.script_timeout,
        )

    # -- Detection -----------------------------------------------------------

    @staticmethod
    def is_macos() -> bool:
        return sys.platform == "darwin"

    async def supports_applescript_control(self) -> bool:
        """Whether "Allow VoiceOver to be controlled with AppleScript" is on."""
        if APPLESCRIPT_ENABLED_MARKER.exists():
            return True
        try:
            result = await run_process("defaults", "read", VOICEOVER_DOMAIN, "SCREnableAppleScript")
        except PlatformCommandError as e:
            logger.debug("Could not read AppleScript preference: %s", e)
            return False
        return result.ok and result.stdout == "1"

    # -- Lifecycle -----------------------------------------------------------

    async def is_running(self) -> bool:
        result = await run_process("pgrep", "-x", "VoiceOver")
        return result.ok

    async def launch(self) -> None:
        await run_process(self._config.starter_path, check=True)
        logger.info("VoiceOver launch requested")

    async def force_quit(self) -> None:
        # pgrep/pkill exit 1 when nothing matched, which is fine here
        await run_process("pkill", "-9", "-x", "VoiceOver")
        logger.info("VoiceOver force quit requested")

    # -- Preferences ---------------------------------------------------------

    async def read_default(self, domain: str, key: str) -> str | None:
        result = await run_process("defaults", "read", domain, key)
        return result.stdout if result.ok else None

    async def write_default(self, setting: DefaultsSetting, value: str) -> None:
        await run_process(
            "defaults", "write", setting.domain, setting.key,
            f"-{setting.type}", _defaults_value(setting.type, value),
            check=True,
        )

    async def delete_default(self, domain: str, key: str) -> None:
        await run_process("defaults", "delete", domain, key)

    async def configure_settings(
        self, settings: list[DefaultsSetting] | None = None
    ) -> SettingsSnapshot:
        """Override VoiceOver preferences, returning what they were before."""
        settings = DEFAULT_SETTINGS if settings is None else settings
        previous: list[PreviousValue] = []
        for setting in settings:
            before = await self.read_default(setting.domain, setting.key)
            previous.append(PreviousValue(setting=setting, value=before))
        snapshot = SettingsSnapshot(previous=previous)

        for setting in settings:
            await self.write_default(setting, setting.value)
        logger.info("Applied %d VoiceOver preference overrides", len(settings))
        return snapshot

    async def restore_settings(self, snapshot: SettingsSnapshot) -> None:
        """Undo exactly the overrides recorded in ``snapshot``."""
        for entry in reversed(snapshot.previous):
            if entry.value is None:
                await self.delete_default(entry.setting.domain, entry.setting.key)
            else:
                await self.write_default(entry.setting, entry.value)
        logger.info("Restored %d VoiceOver preferences", len(snapshot.previous))

    # -- AppleScript queries -------------------------------------------------

    async def last_phrase(self) -> str:
        return await self.runner.run('tell application "VoiceOver" to return content of last phrase')

    async def item_text(self) -> str:
        return await self.runner.run(
            'tell application "VoiceOver" to return text under cursor of vo cursor'
        )

    async def perform_action(self) -> None:
        await self.runner.run('tell application "VoiceOver" to tell vo cursor to perform action')

    async def grab_screenshot(self) -> str:
        """Screenshot the VoiceOver cursor, returning the image path."""
        return await self.runner.run(
            'tell application "VoiceOver"\n'
            "\ttell vo cursor to set shot to grab screenshot\n"
            "\treturn POSIX path of shot\n"
            "end tell"
        )

    async def perform_commander_command(self, name: str) -> None:
        await self.runner.run(
            f'tell application "VoiceOver" to tell commander to perform command {quote(name)}'
        )
