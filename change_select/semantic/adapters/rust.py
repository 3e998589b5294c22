"""
Rust adapter.

Top-level structs, enums, traits, impls and functions become containers.
``mod`` items become ``Module`` containers, and the functions directly
inside them are surfaced as independent ``Function`` containers so every
test in a ``mod tests`` block can be selected on its own.
"""

from __future__ import annotations

from ...language import SupportedLanguage
from ..containers import ContainerKind, ContainerWithMembers, Member, MemberKind
from ..parser import ParsedFile, child_name, node_text
from ..trivia import trivia_config
from ._common import make_container, make_member

_TRIVIA = trivia_config(SupportedLanguage.RUST)


def extract_struct_fields(struct_node, source_bytes: bytes) -> list[Member]:
    """Named fields of a struct; tuple and unit structs have none."""
    fields: list[Member] = []
    body = struct_node.child_by_field_name("body")
    if body is None or body.type != "field_declaration_list":
        return fields
    for item in body.children:
        if item.type != "field_declaration":
            continue
        name = child_name(item, source_bytes)
        if name is None:
            continue
        fields.append(make_member(MemberKind.FIELD, name, item, _TRIVIA))
    return fields


def extract_enum_variants(enum_node, source_bytes: bytes) -> list[Member]:
    variants: list[Member] = []
    body = enum_node.child_by_field_name("body")
    if body is None:
        return variants
    for item in body.children:
        if item.type != "enum_variant":
            continue
        name = child_name(item, source_bytes)
        if name is None:
            continue
        variants.append(make_member(MemberKind.FIELD, name, item, _TRIVIA))
    return variants


def extract_impl_methods(impl_node, source_bytes: bytes) -> list[Member]:
    """Methods and associated constants of an impl or trait body."""
    members: list[Member] = []
    body = impl_node.child_by_field_name("body")
    if body is None:
        return members
    for item in body.children:
        if item.type in ("function_item", "function_signature_item"):
            kind = MemberKind.METHOD
        elif item.type == "const_item":
            kind = MemberKind.FIELD
        else:
            continue
        name = child_name(item, source_bytes)
        if name is None:
            continue
        members.append(make_member(kind, name, item, _TRIVIA))
    return members


def _extract_module(mod_node, source_bytes: bytes) -> list[ContainerWithMembers]:
    containers: list[ContainerWithMembers] = []
    name = child_name(mod_node, source_bytes)
    if name is not None:
        containers.append(make_container(
            ContainerKind.module(), name, mod_node, _TRIVIA,
        ))

    # `mod foo;` declarations have no body
    body = mod_node.child_by_field_name("body")
    if body is None:
        return containers
    for item in body.children:
        if item.type != "function_item":
            continue
        fn_name = child_name(item, source_bytes)
        if fn_name is None:
            continue
        containers.append(make_container(
            ContainerKind.function(), fn_name, item, _TRIVIA,
        ))
    return containers


def extract_containers_with_members(parsed: ParsedFile) -> list[ContainerWithMembers]:
    """Extract containers, with members, from a parsed Rust file."""
    containers: list[ContainerWithMembers] = []
    root = parsed.root_node
    src = parsed.source_bytes

    for child in root.children:
        kind = child.type
        if kind == "struct_item":
            name = child_name(child, src)
            if name is None:
                continue
            containers.append(make_container(
                ContainerKind.struct(), name, child, _TRIVIA,
                extract_struct_fields(child, src),
            ))
        elif kind == "enum_item":
            name = child_name(child, src)
            if name is None:
                continue
            containers.append(make_container(
                ContainerKind.enum(), name, child, _TRIVIA,
                extract_enum_variants(child, src),
            ))
        elif kind == "trait_item":
            name = child_name(child, src)
            if name is None:
                continue
            containers.append(make_container(
                ContainerKind.interface(), name, child, _TRIVIA,
                extract_impl_methods(child, src),
            ))
        elif kind == "impl_item":
            type_node = child.child_by_field_name("type")
            if type_node is None:
                continue
            trait_node = child.child_by_field_name("trait")
            trait_name = node_text(trait_node, src) if trait_node is not None else None
            containers.append(make_container(
                ContainerKind.impl(trait_name), node_text(type_node, src),
                child, _TRIVIA, extract_impl_methods(child, src),
            ))
        elif kind == "function_item":
            name = child_name(child, src)
            if name is None:
                continue
            containers.append(make_container(
                ContainerKind.function(), name, child, _TRIVIA,
            ))
        elif kind == "mod_item":
            containers.extend(_extract_module(child, src))

    return containers
