"""
Markdown adapter: every heading becomes a ``Section{level}`` container.

A heading owns its line and the content below it up to the first nested
sub-section, so edits to a paragraph land on the heading above it rather
than on every ancestor heading.
"""

from __future__ import annotations

from typing import Optional

from ...language import SupportedLanguage
from ..containers import Container, ContainerKind, ContainerWithMembers
from ..parser import ParsedFile, child_of_type, first_line, last_line, node_text
from ..trivia import expand_range_for_trivia, trivia_config

_TRIVIA = trivia_config(SupportedLanguage.MARKDOWN)

_HEADING_TYPES = ("atx_heading", "setext_heading")
_ATX_MARKERS = {f"atx_h{n}_marker": n for n in range(1, 7)}


def heading_level(heading_node) -> int:
    if heading_node.type == "setext_heading":
        if child_of_type(heading_node, "setext_h1_underline") is not None:
            return 1
        return 2
    for child in heading_node.children:
        level = _ATX_MARKERS.get(child.type)
        if level is not None:
            return level
    return 1


def heading_text(heading_node, source_bytes: bytes) -> Optional[str]:
    content = heading_node.child_by_field_name("heading_content")
    if content is None:
        content = child_of_type(heading_node, "inline", "paragraph")
    if content is None:
        return None
    text = " ".join(node_text(content, source_bytes).split())
    return text or None


def _extract_section(section_node, source_bytes: bytes,
                     containers: list[ContainerWithMembers]) -> None:
    heading = child_of_type(section_node, *_HEADING_TYPES)
    nested = [c for c in section_node.children if c.type == "section"]

    if heading is not None:
        name = heading_text(heading, source_bytes)
        if name is not None:
            start, _ = expand_range_for_trivia(heading, _TRIVIA)
            if nested:
                end = max(first_line(nested[0]) - 1, last_line(heading))
            else:
                end = last_line(section_node)
            containers.append(ContainerWithMembers(
                container=Container(
                    kind=ContainerKind.section(heading_level(heading)),
                    name=name,
                    start_line=start,
                    end_line=end,
                ),
            ))

    for child in nested:
        _extract_section(child, source_bytes, containers)


def extract_containers_with_members(parsed: ParsedFile) -> list[ContainerWithMembers]:
    containers: list[ContainerWithMembers] = []
    root = parsed.root_node
    for child in root.children:
        if child.type == "section":
            _extract_section(child, parsed.source_bytes, containers)
    return containers
