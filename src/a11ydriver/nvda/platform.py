"""NVDA platform operations on Windows.

Lifecycle (launch, force quit, running check) and the ``nvda.ini``
snapshot and restore used to give each session a predictable
configuration: no welcome dialog, no update checks, no exit prompt, and
a self-hosted remote access server the session can connect to.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from a11ydriver.config.settings import NVDAConfig
from a11ydriver.platform.process import run_process, spawn_process

logger = logging.getLogger(__name__)

PROCESS_NAME = "nvda.exe"
INI_NAME = "nvda.ini"
BOM = "\ufeff"

_SECTION = re.compile(r"^\s*(\[+)\s*([^\]]+?)\s*\]+\s*$")


class IniSetting(BaseModel):
    """One ``nvda.ini`` value to override for the session."""

    model_config = ConfigDict(frozen=True)

    section: tuple[str, ...]
    key: str
    value: str


class SettingsSnapshot(BaseModel):
    """Raw ``nvda.ini`` contents before the session changed it."""

    model_config = ConfigDict(frozen=True)

    path: Path
    previous: bytes | None = None


def default_settings(config: NVDAConfig) -> list[IniSetting]:
    return [
        IniSetting(section=("general",), key="showWelcomeDialogAtStartup", value="False"),
        IniSetting(section=("general",), key="askToExit", value="False"),
        IniSetting(section=("update",), key="autoCheck", value="False"),
        IniSetting(section=("remote", "controlServer"), key="autoconnect", value="True"),
        IniSetting(section=("remote", "controlServer"), key="selfHosted", value="True"),
        IniSetting(section=("remote", "controlServer"), key="connectionMode", value="1"),
        IniSetting(section=("remote", "controlServer"), key="port", value=str(config.port)),
        IniSetting(section=("remote", "controlServer"), key="key", value=config.channel),
    ]


def _locate(lines: list[str], section: tuple[str, ...]) -> tuple[int, int, int] | None:
    """Find ``(header, keys_end, block_end)`` line indexes for a section.

    Keys of a section come before its subsections, so ``keys_end`` is the
    first header after ``header`` and ``block_end`` the first header at
    the same depth or shallower.
    """
    path: list[str] = []
    header = None
    keys_end = block_end = len(lines)
    for index, line in enumerate(lines):
        match = _SECTION.match(line)
        if not match:
            continue
        depth = len(match.group(1))
        if header is not None:
            keys_end = min(keys_end, index)
            if depth <= len(section):
                block_end = index
                break
        path = path[: depth - 1] + [match.group(2)]
        if tuple(path) == section:
            header = index
    if header is None:
        return None
    return header, keys_end, block_end


def _ensure_section(lines: list[str], section: tuple[str, ...]) -> tuple[int, int, int]:
    found = _locate(lines, section)
    if found is not None:
        return found
    depth = len(section)
    if depth == 1:
        insert_at = len(lines)
    else:
        insert_at = _ensure_section(lines, section[:-1])[2]
    indent = "\t" * (depth - 1)
    lines.insert(insert_at, f"{indent}{'[' * depth}{section[-1]}{']' * depth}")
    return insert_at, insert_at + 1, insert_at + 1


def set_ini_value(text: str, section: tuple[str, ...], key: str, value: str) -> str:
    """Set ``key = value`` in a (possibly nested) section of an NVDA ini file.

    Missing sections are created. Every other line is left untouched,
    including a leading byte order mark.
    """
    bom = BOM if text.startswith(BOM) else ""
    lines = text[len(bom):].splitlines()
    header, keys_end, _ = _ensure_section(lines, section)
    indent = "\t" * len(section)
    pattern = re.compile(rf"^\s*{re.escape(key)}\s*=")
    for index in range(header + 1, keys_end):
        if pattern.match(lines[index]):
            lines[index] = f"{indent}{key} = {value}"
            break
    else:
        lines.insert(keys_end, f"{indent}{key} = {value}")
    return bom + "\n".join(lines) + "\n"


class NVDAPlatform:
    """Windows-side operations used by the NVDA session."""

    def __init__(self, config: NVDAConfig | None = None) -> None:
        self._config = config or NVDAConfig()

    @property
    def config_dir(self) -> Path:
        if self._config.config_path:
            return Path(self._config.config_path)
        return Path(os.environ.get("APPDATA", "")) / "nvda"

    @property
    def ini_path(self) -> Path:
        return self.config_dir / INI_NAME

    # -- Detection -----------------------------------------------------------

    @staticmethod
    def is_windows() -> bool:
        return sys.platform == "win32"

    def is_installed(self) -> bool:
        return Path(self._config.executable).is_file()

    # -- Lifecycle -----------------------------------------------------------

    async def is_running(self) -> bool:
        result = await run_process(
            "tasklist", "/FI", f"IMAGENAME eq {PROCESS_NAME}", "/NH"
        )
        return result.ok and PROCESS_NAME in result.stdout.lower()

    async def launch(self) -> None:
        argv = [self._config.executable]
        if self._config.config_path:
            argv += ["-c", self._config.config_path]
        # NVDA keeps running after the launcher returns; do not wait on it
        await spawn_process(*argv)
        logger.info("NVDA launch requested")

    async def force_quit(self) -> None:
        # taskkill exits nonzero when no process matched
        await run_process("taskkill", "/F", "/IM", PROCESS_NAME)
        logger.info("NVDA force quit requested")

    # -- Configuration -------------------------------------------------------

    async def configure_settings(
        self, settings: list[IniSetting] | None = None
    ) -> SettingsSnapshot:
        """Override ``nvda.ini`` values, returning the file as it was before."""
        settings = default_settings(self._config) if settings is None else settings
        path = self.ini_path
        previous = path.read_bytes() if path.exists() else None
        snapshot = SettingsSnapshot(path=path, previous=previous)

        text = previous.decode("utf-8") if previous is not None else ""
        for setting in settings:
            text = set_ini_value(text, setting.section, setting.key, setting.value)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.info("Applied %d NVDA setting overrides to %s", len(settings), path)
        return snapshot

    async def restore_settings(self, snapshot: SettingsSnapshot) -> None:
        """Put ``nvda.ini`` back exactly as recorded in ``snapshot``."""
        if snapshot.previous is None:
            snapshot.path.unlink(missing_ok=True)
        else:
            snapshot.path.write_bytes(snapshot.previous)
        logger.info("Restored NVDA settings at %s", snapshot.path)
