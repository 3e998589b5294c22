"""YAML adapter: each top-level mapping key becomes a ``Section{1}`` container."""

from __future__ import annotations

from ...language import SupportedLanguage
from ..containers import ContainerKind, ContainerWithMembers
from ..parser import ParsedFile, node_text
from ..trivia import trivia_config
from ._common import make_container

_TRIVIA = trivia_config(SupportedLanguage.YAML)

# wrappers between the stream root and the top-level mapping
_PASS_THROUGH = ("stream", "document", "block_node")


def _extract_mapping(mapping_node, source_bytes: bytes,
                     containers: list[ContainerWithMembers]) -> None:
    for pair in mapping_node.children:
        if pair.type != "block_mapping_pair":
            continue
        key_node = pair.child_by_field_name("key")
        if key_node is None:
            continue
        key = node_text(key_node, source_bytes).strip().strip("\"'")
        if not key:
            continue
        containers.append(make_container(
            ContainerKind.section(1), key, pair, _TRIVIA,
        ))


def _walk(node, source_bytes: bytes, containers: list[ContainerWithMembers]) -> None:
    if node.type == "block_mapping":
        _extract_mapping(node, source_bytes, containers)
    elif node.type in _PASS_THROUGH:
        for child in node.children:
            _walk(child, source_bytes, containers)


def extract_containers_with_members(parsed: ParsedFile) -> list[ContainerWithMembers]:
    containers: list[ContainerWithMembers] = []
    _walk(parsed.root_node, parsed.source_bytes, containers)
    return containers
