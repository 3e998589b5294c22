"""
Kotlin adapter: classes, interfaces, enum classes, objects and top-level
functions.

The Kotlin grammar does not name every child with a field, so names and
bodies are looked up by node type when the field lookup comes back empty.
"""

from __future__ import annotations

from ...language import SupportedLanguage
from ..containers import ContainerKind, ContainerWithMembers, Member, MemberKind
from ..parser import ParsedFile, child_name, child_of_type, node_text
from ..trivia import trivia_config
from ._common import make_container, make_member

_TRIVIA = trivia_config(SupportedLanguage.KOTLIN)

_TYPE_NAME_NODES = ("type_identifier", "simple_identifier", "identifier")
_NAME_NODES = ("simple_identifier", "identifier")
_BODY_NODES = ("class_body", "enum_class_body")


def _property_name(prop_node, source_bytes: bytes):
    declaration = child_of_type(prop_node, "variable_declaration",
                                "multi_variable_declaration")
    if declaration is None:
        return None
    if declaration.type == "multi_variable_declaration":
        declaration = child_of_type(declaration, "variable_declaration")
        if declaration is None:
            return None
    name_node = child_of_type(declaration, *_NAME_NODES)
    if name_node is None:
        return None
    return node_text(name_node, source_bytes).strip() or None


def extract_members(body_node, source_bytes: bytes) -> list[Member]:
    """Properties, methods and enum entries of a class body."""
    members: list[Member] = []
    for item in body_node.children:
        if item.type == "property_declaration":
            name = _property_name(item, source_bytes)
            kind = MemberKind.PROPERTY
        elif item.type == "function_declaration":
            name = child_name(item, source_bytes, "name", *_NAME_NODES)
            kind = MemberKind.METHOD
        elif item.type == "enum_entry":
            name = child_name(item, source_bytes, "name", *_NAME_NODES)
            kind = MemberKind.FIELD
        else:
            continue
        if name is None:
            continue
        members.append(make_member(kind, name, item, _TRIVIA))
    return members


def _class_kind(class_node, body) -> ContainerKind:
    if child_of_type(class_node, "interface") is not None:
        return ContainerKind.interface()
    if body is not None and body.type == "enum_class_body":
        return ContainerKind.enum()
    return ContainerKind.class_()


def extract_containers_with_members(parsed: ParsedFile) -> list[ContainerWithMembers]:
    containers: list[ContainerWithMembers] = []
    root = parsed.root_node
    src = parsed.source_bytes

    for child in root.children:
        if child.type in ("class_declaration", "object_declaration"):
            name = child_name(child, src, "name", *_TYPE_NAME_NODES)
            if name is None:
                continue
            body = child_of_type(child, *_BODY_NODES)
            members = extract_members(body, src) if body is not None else []
            if child.type == "object_declaration":
                kind = ContainerKind.object()
            else:
                kind = _class_kind(child, body)
            containers.append(make_container(kind, name, child, _TRIVIA, members))
        elif child.type == "function_declaration":
            name = child_name(child, src, "name", *_NAME_NODES)
            if name is None:
                continue
            containers.append(make_container(
                ContainerKind.function(), name, child, _TRIVIA,
            ))

    return containers
