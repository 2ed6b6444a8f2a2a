"""Windows virtual key codes and scan codes for NVDA key messages.

NVDA Remote Access injects keys as ``(vk_code, scan_code, extended)``
triples. Scan codes are scan code set 1 on a US layout.

Reference: Microsoft "Virtual-Key Codes" and "Keyboard Scan Codes".
"""

from __future__ import annotations

# (vk_code, scan_code, extended)
Key = tuple[int, int, bool]

# Canonical modifier -> key
MODIFIER_KEYS: dict[str, Key] = {
    "shift": (0x10, 0x2A, False),
    "control": (0x11, 0x1D, False),
    "alt": (0x12, 0x38, False),
    "meta": (0x5B, 0x5B, True),
    # The NVDA key in the desktop layout
    "insert": (0x2D, 0x52, True),
}

KEYS: dict[str, Key] = {
    # Control keys
    "Backspace": (0x08, 0x0E, False),
    "Tab": (0x09, 0x0F, False),
    "Enter": (0x0D, 0x1C, False), "Return": (0x0D, 0x1C, False),
    "Escape": (0x1B, 0x01, False), "Esc": (0x1B, 0x01, False),
    "Space": (0x20, 0x39, False), " ": (0x20, 0x39, False),
    "CapsLock": (0x14, 0x3A, False),
    # Modifier keys pressed on their own
    "Shift": MODIFIER_KEYS["shift"],
    "Control": MODIFIER_KEYS["control"],
    "Alt": MODIFIER_KEYS["alt"],
    "Meta": MODIFIER_KEYS["meta"],
    "Insert": MODIFIER_KEYS["insert"],
    # Navigation
    "PageUp": (0x21, 0x49, True),
    "PageDown": (0x22, 0x51, True),
    "End": (0x23, 0x4F, True),
    "Home": (0x24, 0x47, True),
    "ArrowLeft": (0x25, 0x4B, True), "Left": (0x25, 0x4B, True),
    "ArrowUp": (0x26, 0x48, True), "Up": (0x26, 0x48, True),
    "ArrowRight": (0x27, 0x4D, True), "Right": (0x27, 0x4D, True),
    "ArrowDown": (0x28, 0x50, True), "Down": (0x28, 0x50, True),
    "Delete": (0x2E, 0x53, True),
    # Numpad keys used by NVDA mouse commands
    "NumpadMultiply": (0x6A, 0x37, False),
    "NumpadDivide": (0x6F, 0x35, True),
    # Function keys
    "F1": (0x70, 0x3B, False), "F2": (0x71, 0x3C, False),
    "F3": (0x72, 0x3D, False), "F4": (0x73, 0x3E, False),
    "F5": (0x74, 0x3F, False), "F6": (0x75, 0x40, False),
    "F7": (0x76, 0x41, False), "F8": (0x77, 0x42, False),
    "F9": (0x78, 0x43, False), "F10": (0x79, 0x44, False),
    "F11": (0x7A, 0x57, False), "F12": (0x7B, 0x58, False),
}

# Unshifted characters (US layout)
CHAR_KEYS: dict[str, Key] = {
    "1": (0x31, 0x02, False), "2": (0x32, 0x03, False),
    "3": (0x33, 0x04, False), "4": (0x34, 0x05, False),
    "5": (0x35, 0x06, False), "6": (0x36, 0x07, False),
    "7": (0x37, 0x08, False), "8": (0x38, 0x09, False),
    "9": (0x39, 0x0A, False), "0": (0x30, 0x0B, False),
    "q": (0x51, 0x10, False), "w": (0x57, 0x11, False),
    "e": (0x45, 0x12, False), "r": (0x52, 0x13, False),
    "t": (0x54, 0x14, False), "y": (0x59, 0x15, False),
    "u": (0x55, 0x16, False), "i": (0x49, 0x17, False),
    "o": (0x4F, 0x18, False), "p": (0x50, 0x19, False),
    "a": (0x41, 0x1E, False), "s": (0x53, 0x1F, False),
    "d": (0x44, 0x20, False), "f": (0x46, 0x21, False),
    "g": (0x47, 0x22, False), "h": (0x48, 0x23, False),
    "j": (0x4A, 0x24, False), "k": (0x4B, 0x25, False),
    "l": (0x4C, 0x26, False),
    "z": (0x5A, 0x2C, False), "x": (0x58, 0x2D, False),
    "c": (0x43, 0x2E, False), "v": (0x56, 0x2F, False),
    "b": (0x42, 0x30, False), "n": (0x4E, 0x31, False),
    "m": (0x4D, 0x32, False),
    "-": (0xBD, 0x0C, False), "=": (0xBB, 0x0D, False),
    "[": (0xDB, 0x1A, False), "]": (0xDD, 0x1B, False),
    ";": (0xBA, 0x27, False), "'": (0xDE, 0x28, False),
    "`": (0xC0, 0x29, False), "\\": (0xDC, 0x2B, False),
    ",": (0xBC, 0x33, False), ".": (0xBE, 0x34, False),
    "/": (0xBF, 0x35, False),
}

# Characters that require Shift to type (US layout)
SHIFT_CHARS: dict[str, str] = {
    "!": "1", "@": "2", "#": "3", "$": "4",
    "%": "5", "^": "6", "&": "7", "*": "8",
    "(": "9", ")": "0", "_": "-", "+": "=",
    "{": "[", "}": "]", "|": "\\",
    ":": ";", '"': "'", "~": "`",
    "<": ",", ">": ".", "?": "/",
}


def modifier_key(name: str) -> Key:
    """Return the key for a canonical modifier name.

    Raises:
        ValueError: If the modifier is not recognized.
    """
    if name not in MODIFIER_KEYS:
        raise ValueError(f"Unknown modifier: {name!r}")
    return MODIFIER_KEYS[name]


def key_for(key: str) -> tuple[Key, bool]:
    """Convert a key name or single character to ``(key, needs_shift)``.

    Raises:
        ValueError: If the key has no mapping.
    """
    if key in KEYS:
        return KEYS[key], False
    if key in CHAR_KEYS:
        return CHAR_KEYS[key], False
    if len(key) == 1 and key.isupper() and key.lower() in CHAR_KEYS:
        return CHAR_KEYS[key.lower()], True
    if key in SHIFT_CHARS:
        return CHAR_KEYS[SHIFT_CHARS[key]], True
    raise ValueError(f"No key mapping for {key!r}")
