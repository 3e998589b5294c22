"""
Language detection for semantic grouping.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Optional


class SupportedLanguage(str, Enum):
    RUST = "rust"
    KOTLIN = "kotlin"
    JAVA = "java"
    HCL = "hcl"
    PYTHON = "python"
    MARKDOWN = "markdown"
    YAML = "yaml"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_name(cls, name: str) -> Optional["SupportedLanguage"]:
        """Look up a language by its config name (case-insensitive)."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


_DISPLAY_NAMES = {
    SupportedLanguage.RUST: "Rust",
    SupportedLanguage.KOTLIN: "Kotlin",
    SupportedLanguage.JAVA: "Java",
    SupportedLanguage.HCL: "HCL",
    SupportedLanguage.PYTHON: "Python",
    SupportedLanguage.MARKDOWN: "Markdown",
    SupportedLanguage.YAML: "YAML",
}


# ── Extension → Language mapping ──

EXTENSION_MAP: dict[str, SupportedLanguage] = {
    ".rs": SupportedLanguage.RUST,
    ".kt": SupportedLanguage.KOTLIN,
    ".kts": SupportedLanguage.KOTLIN,
    ".java": SupportedLanguage.JAVA,
    ".hcl": SupportedLanguage.HCL,
    ".tf": SupportedLanguage.HCL,
    ".tfvars": SupportedLanguage.HCL,
    ".py": SupportedLanguage.PYTHON,
    ".pyw": SupportedLanguage.PYTHON,
    ".md": SupportedLanguage.MARKDOWN,
    ".markdown": SupportedLanguage.MARKDOWN,
    ".yaml": SupportedLanguage.YAML,
    ".yml": SupportedLanguage.YAML,
}


def detect_language(file_path: str) -> Optional[SupportedLanguage]:
    """
    Return the language for *file_path*, or None if unsupported.

    Only the extension is examined; the file is never opened.
    """
    ext = os.path.splitext(file_path)[1].lower()
    return EXTENSION_MAP.get(ext)
