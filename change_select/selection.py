"""
Tri-state selection engine.

Scopes are addressed by small key objects (commit → file → section →
line, plus semantic container → member).  ``state`` aggregates the leaf
``is_checked`` bits under a scope; ``toggle`` sets them all at once.  Only
leaves are ever written.  Cached flags on semantic containers are
recomputed after each toggle, never patched.

Out-of-range or negative indices are caller bugs and raise ``IndexError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence, TypeVar, Union

from .semantic.builder import refresh_semantic_state
from .types import (
    BinarySection,
    ChangedSection,
    ChangeType,
    Commit,
    ContentsKind,
    File,
    FileModeSection,
    Section,
    SectionChangedLine,
    SelectedContents,
    Tristate,
    UnchangedSection,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Scope keys
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CommitKey:
    commit_idx: int


@dataclass(frozen=True)
class FileKey:
    commit_idx: int
    file_idx: int


@dataclass(frozen=True)
class SectionKey:
    commit_idx: int
    file_idx: int
    section_idx: int


@dataclass(frozen=True)
class LineKey:
    commit_idx: int
    file_idx: int
    section_idx: int
    line_idx: int


@dataclass(frozen=True)
class ContainerKey:
    commit_idx: int
    file_idx: int
    container_idx: int


@dataclass(frozen=True)
class MemberKey:
    commit_idx: int
    file_idx: int
    container_idx: int
    member_idx: int


SelectionKey = Union[CommitKey, FileKey, SectionKey, LineKey, ContainerKey, MemberKey]


def _at(items: Sequence[T], index: int, what: str) -> T:
    """Bounds-checked indexing that also rejects negative indices."""
    if index < 0 or index >= len(items):
        raise IndexError(f"{what} index {index} out of range (0..{len(items)})")
    return items[index]


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------

class _Leaf:
    """A single checkable bit: a changed line or an opaque section."""

    __slots__ = ("target",)

    def __init__(self, target: Union[SectionChangedLine, FileModeSection, BinarySection]):
        self.target = target

    @property
    def checked(self) -> bool:
        return self.target.is_checked

    @checked.setter
    def checked(self, value: bool) -> None:
        self.target.is_checked = value


def _section_leaves(section: Section) -> Iterator[_Leaf]:
    if isinstance(section, ChangedSection):
        for line in section.lines:
            yield _Leaf(line)
    elif isinstance(section, (FileModeSection, BinarySection)):
        yield _Leaf(section)


@dataclass
class RecordState:
    """
    The selection state of a recording session.

    Holds the commits being edited and exposes the query/toggle API the UI
    drives.  Mutations happen only through ``toggle`` (or ``set_all``).
    """
    commits: list[Commit] = field(default_factory=list)

    # -- resolution --------------------------------------------------------

    def _commit(self, commit_idx: int) -> Commit:
        return _at(self.commits, commit_idx, "commit")

    def _file(self, commit_idx: int, file_idx: int) -> File:
        return _at(self._commit(commit_idx).files, file_idx, "file")

    def file(self, key: Union[FileKey, SectionKey, LineKey, ContainerKey, MemberKey]) -> File:
        """The file a key points into."""
        return self._file(key.commit_idx, key.file_idx)

    def _container_sections(self, file: File, container_idx: int,
                            member_idx: int | None = None) -> list[Section]:
        containers = file.containers or []
        container = _at(containers, container_idx, "container")
        if member_idx is None:
            indices = container.all_section_indices()
        else:
            indices = list(_at(container.members, member_idx, "member").section_indices)
        return [file.sections[i] for i in indices]

    def _leaves(self, key: SelectionKey) -> list[_Leaf]:
        if isinstance(key, CommitKey):
            commit = self._commit(key.commit_idx)
            return [leaf for f in commit.files for s in f.sections
                    for leaf in _section_leaves(s)]

        if isinstance(key, FileKey):
            file = self.file(key)
            return [leaf for s in file.sections for leaf in _section_leaves(s)]

        if isinstance(key, SectionKey):
            section = _at(self.file(key).sections, key.section_idx, "section")
            return list(_section_leaves(section))

        if isinstance(key, LineKey):
            section = _at(self.file(key).sections, key.section_idx, "section")
            if isinstance(section, ChangedSection):
                return [_Leaf(_at(section.lines, key.line_idx, "line"))]
            if isinstance(section, UnchangedSection):
                _at(section.lines, key.line_idx, "line")
                return []
            raise IndexError(f"section {key.section_idx} has no addressable lines")

        if isinstance(key, ContainerKey):
            file = self.file(key)
            return [leaf for s in self._container_sections(file, key.container_idx)
                    for leaf in _section_leaves(s)]

        if isinstance(key, MemberKey):
            file = self.file(key)
            sections = self._container_sections(file, key.container_idx, key.member_idx)
            return [leaf for s in sections for leaf in _section_leaves(s)]

        raise TypeError(f"Unknown selection key: {key!r}")

    def _touched_files(self, key: SelectionKey) -> list[File]:
        if isinstance(key, CommitKey):
            return list(self._commit(key.commit_idx).files)
        return [self.file(key)]

    # -- public API --------------------------------------------------------

    def state(self, key: SelectionKey) -> Tristate:
        """Aggregate tri-state of every editable leaf under *key*."""
        return Tristate.from_bools(leaf.checked for leaf in self._leaves(key))

    def toggle(self, key: SelectionKey) -> Tristate:
        """
        Check everything under *key* unless it is already fully checked,
        in which case clear it.  Returns the new state.
        """
        leaves = self._leaves(key)
        new_value = Tristate.from_bools(leaf.checked for leaf in leaves) is not Tristate.CHECKED
        for leaf in leaves:
            leaf.checked = new_value
        for f in self._touched_files(key):
            refresh_semantic_state(f)

        logger.debug("[Select] %s -> %s (%d leaves)", key,
                     "checked" if new_value else "unchecked", len(leaves))
        return self.state(key)

    def set_all(self, checked: bool) -> None:
        """Check or clear every leaf in every commit."""
        for commit in self.commits:
            commit.set_checked(checked)
            for f in commit.files:
                refresh_semantic_state(f)
        logger.debug("[Select] All leaves set to %s", checked)

    def selected_contents(self, key: FileKey) -> SelectedContents:
        return selected_contents(self.file(key))

    def unselected_contents(self, key: FileKey) -> SelectedContents:
        return unselected_contents(self.file(key))


# ---------------------------------------------------------------------------
# Output reconstruction
# ---------------------------------------------------------------------------

def _reconstruct(file: File, selected: bool) -> SelectedContents:
    """
    Rebuild one side of *file*.

    With ``selected=True`` a line is kept iff it is unchanged, removed and
    unchecked, or added and checked.  ``selected=False`` is the complement:
    unchanged, added and unchecked, or removed and checked.
    """
    result = SelectedContents()
    absent = False

    for section in file.sections:
        if isinstance(section, UnchangedSection):
            for line in section.lines:
                result.push_str(line)

        elif isinstance(section, ChangedSection):
            for line in section.lines:
                if line.change_type is ChangeType.ADDED:
                    keep = line.is_checked == selected
                else:
                    keep = line.is_checked != selected
                if keep:
                    result.push_str(line.line)

        elif isinstance(section, FileModeSection):
            if section.is_checked == selected and section.mode.is_absent:
                absent = True

        elif isinstance(section, BinarySection):
            if section.is_checked == selected:
                result.kind = ContentsKind.BINARY
                result.contents = ""
                result.old_description = section.old_description
                result.new_description = section.new_description

    if absent:
        return SelectedContents(kind=ContentsKind.ABSENT)
    return result


def selected_contents(file: File) -> SelectedContents:
    """The file as it would be recorded with the current selection."""
    return _reconstruct(file, selected=True)


def unselected_contents(file: File) -> SelectedContents:
    """The file with the selected changes taken back out of the new version."""
    return _reconstruct(file, selected=False)
