"""
Errors raised at the syntax-tree parser boundary.

None of these escape ``try_add_semantic_containers``; they exist so the
parser layer can report *why* the semantic view is unavailable.  An
unsupported language is not an error and is signalled with ``None``.
"""


class SemanticError(Exception):
    """Base class for recoverable semantic-analysis failures."""


class ParserSetupError(SemanticError):
    """The grammar could not be loaded or the parser could not be created."""


class SourceParseError(SemanticError):
    """The parser produced no tree for the given source."""


class SyntaxTreeError(SemanticError):
    """The tree contains ERROR or MISSING nodes."""


class ParseTimeoutError(SemanticError):
    """The parser gave up after the configured timeout."""
