"""Key chord parsing shared by every screen reader backend.

Chords use the ``Modifier+Modifier+key`` notation, for example
``Control+Shift+f`` or ``Meta++`` (Meta with the plus key).
"""

from __future__ import annotations

# Friendly names -> canonical modifier name
MODIFIER_ALIASES: dict[str, str] = {
    "shift": "shift",
    "control": "control",
    "ctrl": "control",
    "alt": "alt",
    "option": "alt",
    "meta": "meta",
    "command": "meta",
    "cmd": "meta",
    "win": "meta",
    "insert": "insert",
    "nvda": "insert",
}


def normalize_modifier(name: str) -> str:
    """Return the canonical name for a modifier.

    Raises:
        ValueError: If the modifier name is not recognized.
    """
    try:
        return MODIFIER_ALIASES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown modifier: {name!r}") from None


def parse_chord(chord: str) -> tuple[list[str], str]:
    """Split a chord into canonical modifiers and the main key.

    Raises:
        ValueError: If the chord is empty or names an unknown modifier.
    """
    if not chord:
        raise ValueError("Empty key")
    if chord == "+":
        return [], "+"
    if chord.endswith("++"):
        head, key = chord[:-2], "+"
    else:
        head, _, key = chord.rpartition("+")
    if not key:
        raise ValueError(f"Missing key in chord: {chord!r}")
    modifiers = [normalize_modifier(m) for m in head.split("+")] if head else []
    return modifiers, key


def merge_modifiers(*groups: list[str] | tuple[str, ...]) -> list[str]:
    """Combine modifier lists, normalizing names and dropping duplicates."""
    merged: list[str] = []
    for group in groups:
        for name in group:
            canonical = normalize_modifier(name)
            if canonical not in merged:
                merged.append(canonical)
    return merged
