"""Configuration management for a11ydriver.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides using the ``A11YDRIVER_`` prefix.
"""

from a11ydriver.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
