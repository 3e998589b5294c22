"""
Tree-sitter boundary: grammar loading, parsing and node helpers.

Uses the tree-sitter >= 0.25 API with one package per grammar.  Every
failure is reported as a ``SemanticError`` subclass so callers can fall
back to the flat section view.
"""

from __future__ import annotations

import importlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import tree_sitter as ts

from ..errors import (
    ParserSetupError,
    ParseTimeoutError,
    SourceParseError,
    SyntaxTreeError,
)
from ..language import SupportedLanguage

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Language → grammar package
# ---------------------------------------------------------------------------

# (module name, attribute returning the raw language pointer)
_GRAMMAR_MODULES: dict[SupportedLanguage, tuple[str, str]] = {
    SupportedLanguage.RUST: ("tree_sitter_rust", "language"),
    SupportedLanguage.KOTLIN: ("tree_sitter_kotlin", "language"),
    SupportedLanguage.JAVA: ("tree_sitter_java", "language"),
    SupportedLanguage.HCL: ("tree_sitter_hcl", "language"),
    SupportedLanguage.PYTHON: ("tree_sitter_python", "language"),
    SupportedLanguage.MARKDOWN: ("tree_sitter_markdown", "language"),
    SupportedLanguage.YAML: ("tree_sitter_yaml", "language"),
}

# Language objects are immutable and safe to share; parsers are not.
_LANG_CACHE: dict[SupportedLanguage, ts.Language] = {}


def get_ts_language(language: SupportedLanguage) -> ts.Language:
    """
    Return the tree_sitter.Language object for *language*.

    Raises
    ------
    ParserSetupError
        If the grammar package is missing or incompatible.
    """
    cached = _LANG_CACHE.get(language)
    if cached is not None:
        return cached

    module_name, attr = _GRAMMAR_MODULES[language]
    try:
        module = importlib.import_module(module_name)
        lang_obj = ts.Language(getattr(module, attr)())
    except (ImportError, AttributeError, TypeError, ValueError) as exc:
        raise ParserSetupError(
            f"Cannot load tree-sitter grammar for {language.display_name}: {exc}"
        ) from exc

    _LANG_CACHE[language] = lang_obj
    return lang_obj


def create_parser(language: SupportedLanguage) -> ts.Parser:
    """
    Return a fresh tree-sitter Parser configured for *language*.

    A new parser is built per call so that files parsed on different
    threads never share one.
    """
    lang_obj = get_ts_language(language)
    try:
        return ts.Parser(lang_obj)
    except (TypeError, ValueError) as exc:
        raise ParserSetupError(
            f"Cannot create parser for {language.display_name}: {exc}"
        ) from exc


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

@dataclass
class ParsedFile:
    """A source text together with its syntax tree."""
    source: str
    tree: Any
    source_bytes: bytes = b""

    def __post_init__(self) -> None:
        if not self.source_bytes:
            self.source_bytes = self.source.encode("utf-8")

    @property
    def root_node(self):
        return self.tree.root_node


class _Deadline:
    """Progress callback that asks tree-sitter to cancel once the time is up."""

    def __init__(self, timeout_micros: int) -> None:
        self.at = time.monotonic() + timeout_micros / 1_000_000
        self.expired = False

    def __call__(self, *_progress) -> bool:
        if time.monotonic() >= self.at:
            self.expired = True
        return self.expired


def _timed_out(timeout_micros: int) -> ParseTimeoutError:
    logger.debug("[Semantic] Parse cancelled after %dus", timeout_micros)
    return ParseTimeoutError(f"Parse exceeded {timeout_micros}us")


def parse_source(
    parser: ts.Parser,
    source: str,
    allow_syntax_errors: bool = False,
    timeout_micros: int = 0,
) -> ParsedFile:
    """
    Parse *source* with *parser*.

    Parameters
    ----------
    parser:
        A parser from ``create_parser``.
    source:
        Full text of one version of the file.
    allow_syntax_errors:
        Keep trees containing ERROR/MISSING nodes instead of rejecting them.
    timeout_micros:
        Cancel the parse after this many microseconds; 0 means no limit.

    Raises
    ------
    ParseTimeoutError, SourceParseError, SyntaxTreeError
    """
    source_bytes = source.encode("utf-8")
    deadline = _Deadline(timeout_micros) if timeout_micros > 0 else None
    try:
        if deadline is not None:
            tree = parser.parse(source_bytes, progress_callback=deadline)
        else:
            tree = parser.parse(source_bytes)
    except ValueError as exc:
        if deadline is not None and deadline.expired:
            raise _timed_out(timeout_micros) from exc
        raise SourceParseError(f"Parse failed: {exc}") from exc

    if tree is None:
        if deadline is not None and deadline.expired:
            raise _timed_out(timeout_micros)
        raise SourceParseError("Parser returned no tree")
    if tree.root_node.has_error and not allow_syntax_errors:
        raise SyntaxTreeError("Source contains syntax errors")

    return ParsedFile(source=source, tree=tree, source_bytes=source_bytes)


def parse_file_versions(
    language: SupportedLanguage,
    old_source: str,
    new_source: str,
    timeout_micros: int = 0,
    allow_syntax_errors: bool = False,
) -> tuple[ParsedFile, ParsedFile]:
    """Parse the old and new version of a file; both must succeed."""
    parser = create_parser(language)
    old_parsed = parse_source(parser, old_source, allow_syntax_errors, timeout_micros)
    new_parsed = parse_source(parser, new_source, allow_syntax_errors, timeout_micros)
    return old_parsed, new_parsed


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------

def node_text(node, source_bytes: bytes) -> str:
    """Decode the byte range covered by *node*."""
    if node is None:
        return ""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def first_line(node) -> int:
    return node.start_point[0]


def last_line(node) -> int:
    """
    Last row that holds text of *node*.

    Nodes that swallow their trailing newline end at column 0 of the
    following row; that row is not part of the node.
    """
    end_row, end_col = node.end_point[0], node.end_point[1]
    if end_col == 0 and end_row > node.start_point[0]:
        return end_row - 1
    return end_row


def child_of_type(node, *types: str):
    """Return the first direct child whose type is in *types*, or None."""
    if node is None:
        return None
    for child in node.children:
        if child.type in types:
            return child
    return None


def named_child(node, field_name: str, *fallback_types: str):
    """
    Look up a child by field name, falling back to the first child of one
    of *fallback_types* for grammars that do not name the field.
    """
    child = node.child_by_field_name(field_name)
    if child is None and fallback_types:
        child = child_of_type(node, *fallback_types)
    return child


def child_name(node, source_bytes: bytes, field_name: str = "name",
               *fallback_types: str) -> Optional[str]:
    """Text of a node's name child, or None when it has none."""
    name_node = named_child(node, field_name, *fallback_types)
    if name_node is None:
        return None
    name = node_text(name_node, source_bytes).strip()
    return name or None
