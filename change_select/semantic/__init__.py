"""
Semantic grouping: reclassify a file's diff sections into language
containers (functions, types, config blocks) using tree-sitter.
"""

from .builder import (
    SemanticContainer,
    SemanticMember,
    build_semantic_containers,
    refresh_semantic_state,
    try_add_semantic_containers,
)
from .containers import (
    Container,
    ContainerKind,
    ContainerTag,
    ContainerWithMembers,
    Member,
    MemberKind,
)
from .ranges import (
    SectionLineRange,
    calculate_section_line_ranges,
    filter_section_indices_by_range,
    ranges_overlap,
)

__all__ = [
    "Container",
    "ContainerKind",
    "ContainerTag",
    "ContainerWithMembers",
    "Member",
    "MemberKind",
    "SectionLineRange",
    "SemanticContainer",
    "SemanticMember",
    "build_semantic_containers",
    "calculate_section_line_ranges",
    "filter_section_indices_by_range",
    "ranges_overlap",
    "refresh_semantic_state",
    "try_add_semantic_containers",
]
