"""Shared utilities for a11ydriver."""
