"""Helpers shared by the per-language adapters."""

from __future__ import annotations

from typing import Optional

from ..containers import Container, ContainerKind, ContainerWithMembers, Member, MemberKind
from ..trivia import TriviaConfig, expand_range_for_trivia


def make_container(
    kind: ContainerKind,
    name: str,
    node,
    config: TriviaConfig,
    members: Optional[list[Member]] = None,
) -> ContainerWithMembers:
    """Build a container whose range is *node* widened by leading trivia."""
    start_line, end_line = expand_range_for_trivia(node, config)
    return ContainerWithMembers(
        container=Container(kind=kind, name=name,
                            start_line=start_line, end_line=end_line),
        members=members or [],
    )


def make_member(kind: MemberKind, name: str, node, config: TriviaConfig) -> Member:
    start_line, end_line = expand_range_for_trivia(node, config)
    return Member(kind=kind, name=name, start_line=start_line, end_line=end_line)
