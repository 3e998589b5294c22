"""
Configuration — loads settings from .changeselect.yaml, environment variables,
and built-in defaults (in that priority order: env > YAML > defaults).
"""

from __future__ import annotations

import logging
import os

import yaml

from .language import SupportedLanguage

logger = logging.getLogger(__name__)


_DEFAULTS = {
    "semantic_enabled": True,
    "parse_timeout_micros": 0,
    "allow_syntax_errors": False,
    "languages": [lang.value for lang in SupportedLanguage],
    "max_source_bytes": 2_000_000,
}

# Config file search locations
_CONFIG_FILENAMES = [".changeselect.yaml", ".changeselect.yml"]


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    search_dirs = [os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file, returns empty dict on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("[Config] Ignoring unreadable config %s: %s", path, exc)
        return {}


class Config:
    """Semantic grouping configuration.

    Settings are resolved in priority order:
    1. Environment variables
    2. .changeselect.yaml config file
    3. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        # Helper: env var > yaml > default
        def _get(env_key: str, yaml_key: str, default, cast=str):
            env_val = os.getenv(env_key)
            if env_val is not None:
                try:
                    return cast(env_val)
                except ValueError:
                    logger.warning("[Config] Bad value for %s: %r", env_key, env_val)
                    return default
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                try:
                    return cast(yaml_val)
                except (TypeError, ValueError):
                    logger.warning("[Config] Bad value for %s: %r", yaml_key, yaml_val)
            return default

        def _get_bool(env_key: str, yaml_key: str, default: bool) -> bool:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val.lower() in ("1", "true", "yes", "on")
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return bool(yaml_val)
            return default

        self.SEMANTIC_ENABLED = _get_bool("CHANGE_SELECT_SEMANTIC",
                                          "semantic_enabled",
                                          _DEFAULTS["semantic_enabled"])
        self.PARSE_TIMEOUT_MICROS = _get("CHANGE_SELECT_PARSE_TIMEOUT_MICROS",
                                         "parse_timeout_micros",
                                         _DEFAULTS["parse_timeout_micros"],
                                         cast=int)
        self.ALLOW_SYNTAX_ERRORS = _get_bool("CHANGE_SELECT_ALLOW_SYNTAX_ERRORS",
                                             "allow_syntax_errors",
                                             _DEFAULTS["allow_syntax_errors"])
        self.MAX_SOURCE_BYTES = _get("CHANGE_SELECT_MAX_SOURCE_BYTES",
                                     "max_source_bytes",
                                     _DEFAULTS["max_source_bytes"], cast=int)

        # Language allow-list; unknown names are dropped
        raw_languages = yd.get("languages", _DEFAULTS["languages"])
        if not isinstance(raw_languages, list):
            raw_languages = _DEFAULTS["languages"]
        self.LANGUAGES: set[SupportedLanguage] = set()
        for name in raw_languages:
            lang = SupportedLanguage.from_name(str(name))
            if lang is None:
                logger.warning("[Config] Unknown language in config: %r", name)
                continue
            self.LANGUAGES.add(lang)

    def language_enabled(self, language: SupportedLanguage) -> bool:
        """Return True if semantic grouping may run for *language*."""
        return self.SEMANTIC_ENABLED and language in self.LANGUAGES

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)
