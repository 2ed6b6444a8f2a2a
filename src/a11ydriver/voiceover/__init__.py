"""VoiceOver support for a11ydriver (macOS).

Public API:
    VoiceOver -- Screen reader session for VoiceOver
    KEYBOARD_COMMANDS -- VoiceOver keyboard shortcuts by name
    COMMANDER_COMMANDS -- VoiceOver commander commands by phrase
"""

from a11ydriver.voiceover.commands import COMMANDER_COMMANDS, KEYBOARD_COMMANDS
from a11ydriver.voiceover.session import VoiceOver

__all__ = ["COMMANDER_COMMANDS", "KEYBOARD_COMMANDS", "VoiceOver"]
