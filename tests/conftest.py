"""
Shared fixtures.

``make_file`` turns an old/new text pair into a ``File`` using difflib so
tests can describe diffs as plain source instead of hand-built sections.
"""

from __future__ import annotations

import difflib

import pytest

from change_select.types import (
    ChangedSection,
    ChangeType,
    File,
    SectionChangedLine,
    UnchangedSection,
)


def _build_file(path: str, old: str, new: str) -> File:
    old_lines = old.splitlines(keepends=True)
    new_lines = new.splitlines(keepends=True)
    matcher = difflib.SequenceMatcher(a=old_lines, b=new_lines, autojunk=False)

    sections = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            sections.append(UnchangedSection(lines=old_lines[i1:i2]))
            continue
        lines = [SectionChangedLine(ChangeType.REMOVED, text) for text in old_lines[i1:i2]]
        lines += [SectionChangedLine(ChangeType.ADDED, text) for text in new_lines[j1:j2]]
        sections.append(ChangedSection(lines=lines))
    return File(path=path, sections=sections)


@pytest.fixture()
def make_file():
    """Factory fixture: ``make_file(path, old, new) -> File``."""
    return _build_file
