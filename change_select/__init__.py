"""
change_select — hierarchical change selection over file diffs.

Public API for library usage::

    from change_select import RecordState, FileKey, try_add_semantic_containers

    file = try_add_semantic_containers(file, old_source, new_source)
    state = RecordState(commits=[Commit(files=[file])])
    state.toggle(FileKey(0, 0))
    text = state.selected_contents(FileKey(0, 0)).contents
"""

from .selection import (
    CommitKey,
    ContainerKey,
    FileKey,
    LineKey,
    MemberKey,
    RecordState,
    SectionKey,
    selected_contents,
    unselected_contents,
)
from .semantic import try_add_semantic_containers
from .types import (
    BinarySection,
    ChangedSection,
    ChangeType,
    Commit,
    File,
    FileMode,
    FileModeSection,
    SectionChangedLine,
    SelectedContents,
    Tristate,
    UnchangedSection,
)

__version__ = "0.1.0"

__all__ = [
    "BinarySection",
    "ChangeType",
    "ChangedSection",
    "Commit",
    "CommitKey",
    "ContainerKey",
    "File",
    "FileKey",
    "FileMode",
    "FileModeSection",
    "LineKey",
    "MemberKey",
    "RecordState",
    "SectionChangedLine",
    "SectionKey",
    "SelectedContents",
    "Tristate",
    "UnchangedSection",
    "selected_contents",
    "try_add_semantic_containers",
    "unselected_contents",
]
