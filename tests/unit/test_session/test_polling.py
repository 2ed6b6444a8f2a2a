"""Tests for readiness polling and command resolution."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from a11ydriver.domain.models import CommanderCommand, KeyboardCommand
from a11ydriver.session.base import ReadinessTimeoutError, resolve_command
from a11ydriver.session.polling import wait_for_process_state, wait_until


class TestWaitUntil:
    @pytest.mark.asyncio
    async def test_checks_at_least_once(self) -> None:
        check = AsyncMock(return_value=True)
        assert await wait_until(check, timeout=0.0001, interval=1.0) is True
        check.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_polls_until_true(self) -> None:
        check = AsyncMock(side_effect=[False, False, True])
        assert await wait_until(check, timeout=1.0, interval=0.01) is True
        assert check.await_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_timeout(self) -> None:
        check = AsyncMock(return_value=False)
        assert await wait_until(check, timeout=0.05, interval=0.01) is False
        assert check.await_count >= 2


class TestWaitForProcessState:
    @pytest.mark.asyncio
    async def test_reaches_state(self) -> None:
        is_running = AsyncMock(side_effect=[True, False])
        await wait_for_process_state(is_running, False, "NVDA", timeout=1.0, interval=0.01)

    @pytest.mark.asyncio
    async def test_timeout_raises(self) -> None:
        is_running = AsyncMock(return_value=False)
        with pytest.raises(ReadinessTimeoutError) as exc_info:
            await wait_for_process_state(is_running, True, "NVDA", timeout=0.05, interval=0.01)
        error = exc_info.value
        assert error.kind == "readiness_timeout"
        assert error.reader == "NVDA"
        assert error.expected == "running"


class TestResolveCommand:
    keyboard = {"read_line": KeyboardCommand(name="read_line", key="l")}
    commander = {"read current line": CommanderCommand(name="read current line")}

    def test_command_objects_pass_through(self) -> None:
        command = CommanderCommand(name="anything")
        assert resolve_command(command, self.keyboard, self.commander) is command

    def test_names_resolve_by_namespace(self) -> None:
        assert isinstance(resolve_command("read_line", self.keyboard, self.commander), KeyboardCommand)
        assert isinstance(
            resolve_command("read current line", self.keyboard, self.commander), CommanderCommand
        )

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown command"):
            resolve_command("fly", self.keyboard, self.commander)

    def test_ambiguous_name(self) -> None:
        commander = {"read_line": CommanderCommand(name="read_line")}
        with pytest.raises(ValueError, match="Ambiguous"):
            resolve_command("read_line", self.keyboard, commander)

    def test_other_types_rejected(self) -> None:
        with pytest.raises(TypeError):
            resolve_command(42, self.keyboard, self.commander)  # type: ignore[arg-type]
