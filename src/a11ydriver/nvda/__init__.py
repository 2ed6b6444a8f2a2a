"""NVDA support for a11ydriver (Windows).

Public API:
    NVDA -- Screen reader session for NVDA
    NVDARemoteClient -- Remote access connection used by the session
    KEYBOARD_COMMANDS -- NVDA keyboard shortcuts by name
"""

from a11ydriver.nvda.client import NVDARemoteClient
from a11ydriver.nvda.commands import COMMANDER_COMMANDS, KEYBOARD_COMMANDS
from a11ydriver.nvda.session import NVDA

__all__ = ["COMMANDER_COMMANDS", "KEYBOARD_COMMANDS", "NVDA", "NVDARemoteClient"]
