"""
Semantic grouping builder: attaches an AST-aware view to a ``File``.

Each extracted container (or, for containers with members, each member)
is assigned the indices of the sections its line range overlaps.  Groups
that own no editable section are dropped.  The sections themselves stay
the sole owner of the diff lines; semantic objects only hold indices.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..config import Config
from ..errors import ParserSetupError, SemanticError
from ..language import detect_language
from ..types import File, Section, Tristate
from .adapters import extract_containers_with_members
from .containers import ContainerKind, ContainerWithMembers, MemberKind
from .parser import parse_file_versions
from .ranges import (
    SectionLineRange,
    calculate_section_line_ranges,
    sections_for_lines,
    total_new_lines,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# UI-facing semantic objects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SemanticMember:
    kind: MemberKind
    name: str
    start_line: int
    end_line: int
    section_indices: tuple[int, ...] = ()
    is_checked: bool = False
    is_partial: bool = False

    @property
    def tristate(self) -> Tristate:
        return _flags_to_tristate(self.is_checked, self.is_partial)


@dataclass(frozen=True)
class SemanticContainer:
    """
    A container in the semantic view.

    ``section_indices`` is empty when the container has members; its
    sections are then reached through ``members``.  ``is_checked`` and
    ``is_partial`` are cached aggregates of the referenced sections and
    are only ever produced by ``build_semantic_containers`` or
    ``refresh_semantic_state``.
    """
    kind: ContainerKind
    name: str
    start_line: int
    end_line: int
    section_indices: tuple[int, ...] = ()
    members: tuple[SemanticMember, ...] = ()
    is_checked: bool = False
    is_partial: bool = False

    @property
    def tristate(self) -> Tristate:
        return _flags_to_tristate(self.is_checked, self.is_partial)

    def all_section_indices(self) -> list[int]:
        """Every referenced section index, deduplicated, in order."""
        seen: dict[int, None] = dict.fromkeys(self.section_indices)
        for member in self.members:
            seen.update(dict.fromkeys(member.section_indices))
        return list(seen)


def _flags_to_tristate(is_checked: bool, is_partial: bool) -> Tristate:
    if is_partial:
        return Tristate.PARTIAL
    if is_checked:
        return Tristate.CHECKED
    return Tristate.UNCHECKED


def _aggregate(sections: Sequence[Section], indices: Sequence[int]) -> tuple[bool, bool]:
    """(is_checked, is_partial) over the leaves of the given sections."""
    state = Tristate.from_bools(
        flag for i in indices for flag in sections[i].leaf_flags()
    )
    return state is Tristate.CHECKED, state is Tristate.PARTIAL


def _has_editable(sections: Sequence[Section], indices: Sequence[int]) -> bool:
    return any(sections[i].is_editable() for i in indices)


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------

def _build_member(member, sections: Sequence[Section],
                  section_ranges: Sequence[SectionLineRange]) -> Optional[SemanticMember]:
    indices = sections_for_lines(section_ranges, member.start_line, member.end_line)
    if not _has_editable(sections, indices):
        return None
    is_checked, is_partial = _aggregate(sections, indices)
    return SemanticMember(
        kind=member.kind,
        name=member.name,
        start_line=member.start_line,
        end_line=member.end_line,
        section_indices=tuple(indices),
        is_checked=is_checked,
        is_partial=is_partial,
    )


def build_semantic_containers(
    sections: Sequence[Section],
    containers: Sequence[ContainerWithMembers],
) -> list[SemanticContainer]:
    """
    Assign sections to containers and drop groups with nothing to select.

    Parameters
    ----------
    sections:
        The file's sections, in order.
    containers:
        Adapter output in source order.

    Returns
    -------
    list[SemanticContainer]
        Survivors in source order; may be empty.
    """
    section_ranges = calculate_section_line_ranges(sections)
    result: list[SemanticContainer] = []

    for cwm in containers:
        container = cwm.container

        if not cwm.members:
            indices = sections_for_lines(
                section_ranges, container.start_line, container.end_line,
            )
            if not _has_editable(sections, indices):
                continue
            is_checked, is_partial = _aggregate(sections, indices)
            result.append(SemanticContainer(
                kind=container.kind,
                name=container.name,
                start_line=container.start_line,
                end_line=container.end_line,
                section_indices=tuple(indices),
                is_checked=is_checked,
                is_partial=is_partial,
            ))
            continue

        members: list[SemanticMember] = []
        for member in cwm.members:
            built = _build_member(member, sections, section_ranges)
            if built is not None:
                members.append(built)
        if not members:
            continue

        all_indices = list(dict.fromkeys(
            i for m in members for i in m.section_indices
        ))
        is_checked, is_partial = _aggregate(sections, all_indices)
        result.append(SemanticContainer(
            kind=container.kind,
            name=container.name,
            start_line=container.start_line,
            end_line=container.end_line,
            members=tuple(members),
            is_checked=is_checked,
            is_partial=is_partial,
        ))

    return result


def refresh_semantic_state(file: File) -> File:
    """
    Recompute the cached checked/partial flags of ``file.containers``.

    New semantic objects are created from the current section state; the
    old ones are left untouched.  Returns *file* for chaining.
    """
    if not file.containers:
        return file

    sections = file.sections
    refreshed: list[SemanticContainer] = []
    for container in file.containers:
        members = []
        for member in container.members:
            is_checked, is_partial = _aggregate(sections, member.section_indices)
            members.append(dataclasses.replace(
                member, is_checked=is_checked, is_partial=is_partial,
            ))
        is_checked, is_partial = _aggregate(sections, container.all_section_indices())
        refreshed.append(dataclasses.replace(
            container,
            members=tuple(members),
            is_checked=is_checked,
            is_partial=is_partial,
        ))
    file.containers = refreshed
    return file


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def count_lines(text: str) -> int:
    """Number of lines in *text*, counting a final unterminated line."""
    if not text:
        return 0
    count = text.count("\n")
    if not text.endswith("\n"):
        count += 1
    return count


def _compute_containers(
    file: File,
    old_source: str,
    new_source: str,
    config: Config,
) -> Optional[list[SemanticContainer]]:
    language = detect_language(file.path)
    if language is None:
        logger.debug("[Semantic] No language for %s", file.path)
        return None
    if not config.language_enabled(language):
        logger.debug("[Semantic] %s disabled for %s", language.display_name, file.path)
        return None

    size = max(len(old_source.encode("utf-8")), len(new_source.encode("utf-8")))
    if config.MAX_SOURCE_BYTES and size > config.MAX_SOURCE_BYTES:
        logger.debug("[Semantic] %s too large to parse (%d bytes)", file.path, size)
        return None

    if total_new_lines(file.sections) != count_lines(new_source):
        logger.debug("[Semantic] Sections of %s do not match new source", file.path)
        return None

    _, new_parsed = parse_file_versions(
        language,
        old_source,
        new_source,
        timeout_micros=config.PARSE_TIMEOUT_MICROS,
        allow_syntax_errors=config.ALLOW_SYNTAX_ERRORS,
    )

    extracted = extract_containers_with_members(language, new_parsed)
    if not extracted:
        return None

    built = build_semantic_containers(file.sections, extracted)
    logger.debug(
        "[Semantic] %s: %d containers extracted, %d with changes",
        file.path, len(extracted), len(built),
    )
    return built or None


def try_add_semantic_containers(
    file: File,
    old_source: str,
    new_source: str,
    config: Optional[Config] = None,
) -> File:
    """
    Return a copy of *file* with ``containers`` populated when possible.

    Never raises: unsupported languages, parser failures, timeouts and
    syntax errors all produce a copy with ``containers = None`` so the
    caller falls back to the flat section view.  The input file is not
    modified; the copy shares its sections.
    """
    try:
        if config is None:
            config = Config.load()
        containers = _compute_containers(file, old_source, new_source, config)
    except ParserSetupError as exc:
        logger.warning("[Semantic] %s", exc)
        containers = None
    except SemanticError as exc:
        logger.debug("[Semantic] Falling back to flat view for %s: %s", file.path, exc)
        containers = None
    except Exception as exc:
        logger.warning(
            "[Semantic] Unexpected failure grouping %s: %s", file.path, exc,
            exc_info=True,
        )
        containers = None

    return dataclasses.replace(file, containers=containers)
