"""
Trivia folding: widen a declaration's line range to cover the attributes,
decorators and comments written directly above it.

Two classes of trivia node are recognised per language:

* ``always_include``: attributes and annotations.  Folded in regardless of
  blank lines between them and the declaration.
* ``adjacent_only``: comments.  Folded in only while each comment ends
  within one line of the start computed so far; the first gap stops the scan.

Any other sibling stops the scan as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..language import SupportedLanguage
from .parser import first_line, last_line


@dataclass(frozen=True)
class TriviaConfig:
    always_include: frozenset[str] = frozenset()
    adjacent_only: frozenset[str] = frozenset()

    def is_trivia(self, node_type: str) -> bool:
        return node_type in self.always_include or node_type in self.adjacent_only


GENERIC_TRIVIA = TriviaConfig(adjacent_only=frozenset({"comment"}))

TRIVIA_CONFIGS: Mapping[SupportedLanguage, TriviaConfig] = MappingProxyType({
    SupportedLanguage.RUST: TriviaConfig(
        always_include=frozenset({"attribute_item"}),
        adjacent_only=frozenset({"line_comment", "block_comment"}),
    ),
    SupportedLanguage.PYTHON: TriviaConfig(
        always_include=frozenset({"decorator"}),
        adjacent_only=frozenset({"comment"}),
    ),
    SupportedLanguage.JAVA: TriviaConfig(
        always_include=frozenset({"annotation", "marker_annotation"}),
        adjacent_only=frozenset({"line_comment", "block_comment"}),
    ),
    SupportedLanguage.KOTLIN: TriviaConfig(
        always_include=frozenset({"annotation", "file_annotation"}),
        adjacent_only=frozenset({"line_comment", "multiline_comment", "comment"}),
    ),
    SupportedLanguage.HCL: TriviaConfig(
        adjacent_only=frozenset({"comment"}),
    ),
    SupportedLanguage.MARKDOWN: TriviaConfig(),
    SupportedLanguage.YAML: GENERIC_TRIVIA,
})


def trivia_config(language: SupportedLanguage) -> TriviaConfig:
    return TRIVIA_CONFIGS.get(language, GENERIC_TRIVIA)


def _previous(node):
    """
    The node written just before *node*.

    When *node* opens its parent (same start byte), the parent's previous
    sibling is used instead, climbing as far as needed.  Grammars often
    attach a comment above the first declaration of a body to the node
    enclosing that body.
    """
    current = node
    while True:
        sibling = current.prev_sibling
        if sibling is not None:
            return sibling
        parent = current.parent
        if parent is None or parent.start_byte != current.start_byte:
            return None
        current = parent


def expand_range_for_trivia(node, config: TriviaConfig) -> tuple[int, int]:
    """
    Return ``(start_line, end_line)`` of *node* widened by leading trivia.

    Parameters
    ----------
    node:
        The declaration node.
    config:
        The language's trivia table.

    Returns
    -------
    tuple[int, int]
        0-indexed inclusive line range.
    """
    start = first_line(node)
    end = last_line(node)

    candidate = _previous(node)
    while candidate is not None:
        if candidate.type in config.always_include:
            start = min(start, first_line(candidate))
        elif candidate.type in config.adjacent_only:
            if start - last_line(candidate) > 1:
                break
            # a comment trailing the previous declaration belongs to it
            before = candidate.prev_sibling
            if (before is not None
                    and not config.is_trivia(before.type)
                    and last_line(before) == first_line(candidate)):
                break
            start = min(start, first_line(candidate))
        else:
            break
        candidate = _previous(candidate)

    return start, end
