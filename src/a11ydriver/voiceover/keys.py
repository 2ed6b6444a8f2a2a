"""macOS virtual key codes and System Events modifier names.

Named keys are pressed with ``key code``; single characters are typed
with ``keystroke`` so the active keyboard layout decides the key.
"""

from __future__ import annotations

# Canonical modifier -> System Events modifier name
APPLESCRIPT_MODIFIERS: dict[str, str] = {
    "shift": "shift",
    "control": "control",
    "alt": "option",
    "meta": "command",
}

# VoiceOver modifier (VO) is Control+Option
VO = ("control", "alt")

KEY_CODES: dict[str, int] = {
    # Control keys
    "Enter": 36, "Return": 36,
    "Tab": 48,
    "Space": 49, " ": 49,
    "Backspace": 51,
    "Escape": 53, "Esc": 53,
    "Delete": 117,
    # Modifier keys pressed on their own
    "Meta": 55, "Command": 55,
    "Shift": 56,
    "CapsLock": 57,
    "Alt": 58, "Option": 58,
    "Control": 59,
    # Function keys
    "F1": 122, "F2": 120, "F3": 99, "F4": 118,
    "F5": 96, "F6": 97, "F7": 98, "F8": 100,
    "F9": 101, "F10": 109, "F11": 103, "F12": 111,
    "F13": 105, "F14": 107, "F15": 113, "F16": 106,
    "F17": 64, "F18": 79, "F19": 80, "F20": 90,
    # Navigation
    "Home": 115,
    "PageUp": 116,
    "End": 119,
    "PageDown": 121,
    "ArrowLeft": 123, "Left": 123,
    "ArrowRight": 124, "Right": 124,
    "ArrowDown": 125, "Down": 125,
    "ArrowUp": 126, "Up": 126,
}


def applescript_modifiers(modifiers: list[str] | tuple[str, ...]) -> list[str]:
    """Map canonical modifier names to System Events names.

    Raises:
        ValueError: If a modifier has no System Events equivalent.
    """
    try:
        return [APPLESCRIPT_MODIFIERS[m] for m in modifiers]
    except KeyError as e:
        raise ValueError(f"Unknown modifier: {e.args[0]!r}") from None


def key_code_for(key: str) -> int | None:
    """Return the key code for a named key, or None for a typed character.

    Raises:
        ValueError: If ``key`` is neither a known key name nor a single character.
    """
    if key in KEY_CODES:
        return KEY_CODES[key]
    if len(key) == 1:
        return None
    raise ValueError(f"Unknown key name: {key!r}")
