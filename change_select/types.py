"""
Data model for one commit's worth of diffed files.

A ``File`` is an ordered list of ``Section`` objects produced by the diff
engine.  Concatenating the sections in order losslessly describes the
old → new transformation.  Only the leaf ``is_checked`` bits are ever
mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

if TYPE_CHECKING:
    from .semantic.builder import SemanticContainer


# ---------------------------------------------------------------------------
# Tri-state selection value
# ---------------------------------------------------------------------------

class Tristate(str, Enum):
    """Aggregate selection value of a scope.  Always derived, never stored."""
    UNCHECKED = "unchecked"
    PARTIAL = "partial"
    CHECKED = "checked"

    @classmethod
    def from_bools(cls, values: Iterable[bool]) -> "Tristate":
        """Fold leaf booleans into a tri-state value.

        An empty iterable is ``UNCHECKED``.
        """
        seen_checked = False
        seen_unchecked = False
        for value in values:
            if value:
                seen_checked = True
            else:
                seen_unchecked = True
            if seen_checked and seen_unchecked:
                return cls.PARTIAL
        if seen_checked:
            return cls.CHECKED
        return cls.UNCHECKED


# ---------------------------------------------------------------------------
# Lines and sections
# ---------------------------------------------------------------------------

class ChangeType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"


@dataclass
class SectionChangedLine:
    """One added or removed line.  ``line`` keeps its line terminator."""
    change_type: ChangeType
    line: str
    is_checked: bool = False


@dataclass(frozen=True)
class FileMode:
    """Unix file mode, or ``None`` when the file is absent on that side."""
    mode: Optional[int]

    @property
    def is_absent(self) -> bool:
        return self.mode is None

    def __str__(self) -> str:
        if self.mode is None:
            return "absent"
        return f"{self.mode:o}"


FileMode.ABSENT = FileMode(None)  # type: ignore[attr-defined]
FileMode.FILE_DEFAULT = FileMode(0o100644)  # type: ignore[attr-defined]


class Section:
    """Base class for diff sections."""

    def is_editable(self) -> bool:
        """Whether this section contributes selectable leaves."""
        return False

    def leaf_flags(self) -> list[bool]:
        """Checked bits of every selectable leaf in this section."""
        return []

    def tristate(self) -> Tristate:
        return Tristate.from_bools(self.leaf_flags())

    def set_checked(self, checked: bool) -> None:
        """Set every selectable leaf in this section."""

    @property
    def new_line_count(self) -> int:
        """Number of lines this section occupies in the new file."""
        return 0

    @property
    def old_line_count(self) -> int:
        """Number of lines this section occupies in the old file."""
        return 0


@dataclass
class UnchangedSection(Section):
    """Context lines present on both sides."""
    lines: list[str] = field(default_factory=list)

    @property
    def new_line_count(self) -> int:
        return len(self.lines)

    @property
    def old_line_count(self) -> int:
        return len(self.lines)


@dataclass
class ChangedSection(Section):
    """A run of added and removed lines."""
    lines: list[SectionChangedLine] = field(default_factory=list)

    def is_editable(self) -> bool:
        return len(self.lines) > 0

    def leaf_flags(self) -> list[bool]:
        return [line.is_checked for line in self.lines]

    def set_checked(self, checked: bool) -> None:
        for line in self.lines:
            line.is_checked = checked

    @property
    def new_line_count(self) -> int:
        return sum(1 for line in self.lines if line.change_type is ChangeType.ADDED)

    @property
    def old_line_count(self) -> int:
        return sum(1 for line in self.lines if line.change_type is ChangeType.REMOVED)


@dataclass
class FileModeSection(Section):
    """A change of file mode.  ``mode`` is the mode on the new side."""
    mode: FileMode = FileMode.FILE_DEFAULT  # type: ignore[attr-defined]
    is_checked: bool = False

    def is_editable(self) -> bool:
        return True

    def leaf_flags(self) -> list[bool]:
        return [self.is_checked]

    def set_checked(self, checked: bool) -> None:
        self.is_checked = checked


@dataclass
class BinarySection(Section):
    """An opaque binary change, described rather than shown."""
    old_description: Optional[str] = None
    new_description: Optional[str] = None
    is_checked: bool = False

    def is_editable(self) -> bool:
        return True

    def leaf_flags(self) -> list[bool]:
        return [self.is_checked]

    def set_checked(self, checked: bool) -> None:
        self.is_checked = checked


# ---------------------------------------------------------------------------
# Files and commits
# ---------------------------------------------------------------------------

@dataclass
class File:
    """The diff of a single file."""
    path: str
    sections: list[Section] = field(default_factory=list)
    old_path: Optional[str] = None      # set when the file was renamed
    file_mode: FileMode = FileMode.FILE_DEFAULT  # type: ignore[attr-defined]
    containers: Optional[list["SemanticContainer"]] = None

    def iter_leaf_flags(self) -> Iterator[bool]:
        for section in self.sections:
            yield from section.leaf_flags()

    def tristate(self) -> Tristate:
        return Tristate.from_bools(self.iter_leaf_flags())

    def set_checked(self, checked: bool) -> None:
        for section in self.sections:
            section.set_checked(checked)

    def editable_section_indices(self) -> list[int]:
        return [i for i, s in enumerate(self.sections) if s.is_editable()]


@dataclass
class Commit:
    """An ordered group of files recorded together."""
    files: list[File] = field(default_factory=list)
    message: Optional[str] = None

    def tristate(self) -> Tristate:
        return Tristate.from_bools(
            flag for f in self.files for flag in f.iter_leaf_flags()
        )

    def set_checked(self, checked: bool) -> None:
        for f in self.files:
            f.set_checked(checked)


# ---------------------------------------------------------------------------
# Reconstructed output
# ---------------------------------------------------------------------------

class ContentsKind(str, Enum):
    ABSENT = "absent"
    UNCHANGED = "unchanged"
    BINARY = "binary"
    PRESENT = "present"


@dataclass
class SelectedContents:
    """Text of a file as reconstructed from a selection."""
    kind: ContentsKind = ContentsKind.UNCHANGED
    contents: str = ""
    old_description: Optional[str] = None
    new_description: Optional[str] = None

    def push_str(self, text: str) -> None:
        if self.kind in (ContentsKind.ABSENT, ContentsKind.UNCHANGED):
            self.kind = ContentsKind.PRESENT
            self.contents = text
        elif self.kind is ContentsKind.PRESENT:
            self.contents += text
        # binary contents swallow text
