"""a11ydriver -- Screen reader automation for accessibility testing.

Drives real screen readers (VoiceOver on macOS, NVDA on Windows) with
synthetic keyboard, mouse and screen-reader commands while recording
what the screen reader speaks, so tests can assert on the spoken output
of each individual command.
"""

__version__ = "0.1.0"

__all__ = ["NVDA", "VoiceOver", "__version__"]


def __getattr__(name: str) -> type:
    """Lazy import for the per-platform session classes."""
    if name == "VoiceOver":
        from a11ydriver.voiceover.session import VoiceOver
        return VoiceOver
    if name == "NVDA":
        from a11ydriver.nvda.session import NVDA
        return NVDA
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
