"""
HCL (Terraform / OpenTofu) adapter.

A block's type token and positional labels map to a container kind and
name through a fixed table:

    resource "T" "N"   -> Resource{T} named N
    data "T" "N"       -> DataSource{T} named N
    variable "N"       -> Variable named N
    output "N"         -> Output named N
    module "N"         -> Module named N

Every other block type (locals, terraform, provider...) is skipped, as is
any block missing the labels its type requires.
"""

from __future__ import annotations

from typing import Callable, Optional

from ...language import SupportedLanguage
from ..containers import ContainerKind, ContainerWithMembers
from ..parser import ParsedFile, node_text
from ..trivia import trivia_config
from ._common import make_container

_TRIVIA = trivia_config(SupportedLanguage.HCL)

# block type -> (required label count, labels -> (kind, name))
_BLOCK_TYPES: dict[str, tuple[int, Callable[[list[str]], tuple[ContainerKind, str]]]] = {
    "resource": (2, lambda labels: (ContainerKind.resource(labels[0]), labels[1])),
    "data": (2, lambda labels: (ContainerKind.data_source(labels[0]), labels[1])),
    "variable": (1, lambda labels: (ContainerKind.variable(), labels[0])),
    "output": (1, lambda labels: (ContainerKind.output(), labels[0])),
    "module": (1, lambda labels: (ContainerKind.module(), labels[0])),
}


def _block_labels(children, source_bytes: bytes) -> list[str]:
    labels: list[str] = []
    for label in children[1:]:
        if label.type == "string_lit":
            labels.append(node_text(label, source_bytes).strip().strip('"'))
        elif label.type == "identifier":
            labels.append(node_text(label, source_bytes).strip())
        else:
            break
    return labels


def classify_block(block_node, source_bytes: bytes) -> Optional[tuple[ContainerKind, str]]:
    """Map a block to ``(kind, name)``, or None when it is not tracked."""
    children = block_node.children
    if not children or children[0].type != "identifier":
        return None
    block_type = node_text(children[0], source_bytes).strip()
    entry = _BLOCK_TYPES.get(block_type)
    if entry is None:
        return None
    required, build = entry
    labels = _block_labels(children, source_bytes)
    if len(labels) < required:
        return None
    return build(labels)


def _extract_blocks(body_node, source_bytes: bytes) -> list[ContainerWithMembers]:
    containers: list[ContainerWithMembers] = []
    for child in body_node.children:
        if child.type != "block":
            continue
        classified = classify_block(child, source_bytes)
        if classified is None:
            continue
        kind, name = classified
        containers.append(make_container(kind, name, child, _TRIVIA))
    return containers


def extract_containers_with_members(parsed: ParsedFile) -> list[ContainerWithMembers]:
    root = parsed.root_node
    src = parsed.source_bytes

    # config_file wraps a single body node
    if root.type == "body":
        return _extract_blocks(root, src)
    containers: list[ContainerWithMembers] = []
    for child in root.children:
        if child.type == "body":
            containers.extend(_extract_blocks(child, src))
    return containers
