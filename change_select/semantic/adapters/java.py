"""
Java adapter: top-level classes, interfaces, enums and records.

Members are fields (named after their first declarator), methods and
constructors.  Annotations live inside each declaration's ``modifiers``
node, so they are already part of the declaration's own range.
"""

from __future__ import annotations

from typing import Iterator

from ...language import SupportedLanguage
from ..containers import ContainerKind, ContainerWithMembers, Member, MemberKind
from ..parser import ParsedFile, child_name
from ..trivia import trivia_config
from ._common import make_container, make_member

_TRIVIA = trivia_config(SupportedLanguage.JAVA)

_CONTAINER_KINDS = {
    "class_declaration": ContainerKind.class_,
    "interface_declaration": ContainerKind.interface,
    "enum_declaration": ContainerKind.enum,
    "record_declaration": ContainerKind.class_,
}

_METHOD_TYPES = (
    "method_declaration",
    "constructor_declaration",
    "compact_constructor_declaration",
)
_FIELD_TYPES = ("field_declaration", "constant_declaration")


def _body_items(body_node) -> Iterator[object]:
    """Yield body items, descending into enum body declarations."""
    for item in body_node.children:
        if item.type == "enum_body_declarations":
            yield from item.children
        else:
            yield item


def _field_name(field_node, source_bytes: bytes):
    # `int x, y;` is one member named after its first declarator
    for child in field_node.children:
        if child.type == "variable_declarator":
            return child_name(child, source_bytes)
    return None


def extract_members(body_node, source_bytes: bytes) -> list[Member]:
    """Fields, methods and constructors of a class/interface/enum body."""
    members: list[Member] = []
    for item in _body_items(body_node):
        if item.type in _FIELD_TYPES:
            name = _field_name(item, source_bytes)
            kind = MemberKind.FIELD
        elif item.type in _METHOD_TYPES:
            name = child_name(item, source_bytes)
            kind = MemberKind.METHOD
        else:
            continue
        if name is None:
            continue
        members.append(make_member(kind, name, item, _TRIVIA))
    return members


def extract_containers_with_members(parsed: ParsedFile) -> list[ContainerWithMembers]:
    containers: list[ContainerWithMembers] = []
    root = parsed.root_node
    src = parsed.source_bytes

    for child in root.children:
        make_kind = _CONTAINER_KINDS.get(child.type)
        if make_kind is None:
            continue
        name = child_name(child, src)
        if name is None:
            continue
        body = child.child_by_field_name("body")
        members = extract_members(body, src) if body is not None else []
        containers.append(make_container(
            make_kind(), name, child, _TRIVIA, members,
        ))

    return containers
