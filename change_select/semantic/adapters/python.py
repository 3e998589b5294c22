"""
Python adapter: top-level classes (with their methods) and functions.

Decorated definitions are ranged by the ``decorated_definition`` wrapper so
the decorators belong to the definition they annotate.
"""

from __future__ import annotations

from ...language import SupportedLanguage
from ..containers import ContainerKind, ContainerWithMembers, Member, MemberKind
from ..parser import ParsedFile, child_name
from ..trivia import trivia_config
from ._common import make_container, make_member

_TRIVIA = trivia_config(SupportedLanguage.PYTHON)


def _unwrap(node, wanted: str):
    """Return the ``wanted`` definition inside *node*, or None."""
    if node.type == wanted:
        return node
    if node.type == "decorated_definition":
        definition = node.child_by_field_name("definition")
        if definition is not None and definition.type == wanted:
            return definition
    return None


def extract_methods(class_node, source_bytes: bytes) -> list[Member]:
    """Methods defined directly in a class body."""
    methods: list[Member] = []
    body = class_node.child_by_field_name("body")
    if body is None:
        return methods
    for item in body.children:
        func = _unwrap(item, "function_definition")
        if func is None:
            continue
        name = child_name(func, source_bytes)
        if name is None:
            continue
        # range on the outer node so decorators are covered
        methods.append(make_member(MemberKind.METHOD, name, item, _TRIVIA))
    return methods


def extract_containers_with_members(parsed: ParsedFile) -> list[ContainerWithMembers]:
    containers: list[ContainerWithMembers] = []
    root = parsed.root_node
    src = parsed.source_bytes

    for child in root.children:
        class_def = _unwrap(child, "class_definition")
        if class_def is not None:
            name = child_name(class_def, src)
            if name is None:
                continue
            containers.append(make_container(
                ContainerKind.class_(), name, child, _TRIVIA,
                extract_methods(class_def, src),
            ))
            continue

        func = _unwrap(child, "function_definition")
        if func is not None:
            name = child_name(func, src)
            if name is None:
                continue
            containers.append(make_container(
                ContainerKind.function(), name, child, _TRIVIA,
            ))

    return containers
