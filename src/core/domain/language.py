"""Language utilities for douban-catalog.

This module centralizes the language options supported across the
application. Keeping it in the domain layer allows both CLI and adapter
layers to share a single source of truth without creating circular
imports.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing messages."""

    CHINESE = "zh"
    ENGLISH = "en"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.CHINESE

    def label(self) -> str:
        """Human readable label for CLI output and logging."""

        return "Chinese" if self is Language.CHINESE else "English"
