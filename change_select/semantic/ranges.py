"""
Line-range reconciliation between diff sections and syntax-tree ranges.

Sections are located in new-file coordinates by a running offset:
unchanged sections advance it by their line count, changed sections by
their *added* line count only, and file-mode/binary sections not at all.
Intervals here are half-open ``[start, end)``; container and member
ranges (inclusive ``end_line``) are converted before comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..types import Section


@dataclass(frozen=True)
class SectionLineRange:
    """Where one section sits in the new file."""
    section_index: int
    start_line: int
    end_line: int   # exclusive

    @property
    def width(self) -> int:
        return self.end_line - self.start_line


def calculate_section_line_ranges(sections: Sequence[Section]) -> list[SectionLineRange]:
    """
    Compute every section's ``[start, end)`` interval in the new file.

    Zero-width sections (pure deletions, file mode and binary changes) are
    included so callers can see them, but they never overlap anything.
    """
    ranges: list[SectionLineRange] = []
    offset = 0
    for index, section in enumerate(sections):
        width = section.new_line_count
        ranges.append(SectionLineRange(index, offset, offset + width))
        offset += width
    return ranges


def total_new_lines(sections: Sequence[Section]) -> int:
    return sum(section.new_line_count for section in sections)


def ranges_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open interval overlap: ``[a_start, a_end)`` vs ``[b_start, b_end)``."""
    return a_start < b_end and b_start < a_end


def filter_section_indices_by_range(
    section_ranges: Sequence[SectionLineRange],
    start_line: int,
    end_line: int,
) -> list[int]:
    """
    Indices of the sections overlapping ``[start_line, end_line)``.

    A section straddling a boundary is reported for every range it
    touches; zero-width sections are never reported.
    """
    indices: list[int] = []
    for rng in section_ranges:
        if rng.width == 0:
            continue
        if ranges_overlap(rng.start_line, rng.end_line, start_line, end_line):
            indices.append(rng.section_index)
    return indices


def sections_for_lines(
    section_ranges: Sequence[SectionLineRange],
    start_line: int,
    end_line_inclusive: int,
) -> list[int]:
    """Like ``filter_section_indices_by_range`` for an inclusive end line."""
    return filter_section_indices_by_range(
        section_ranges, start_line, end_line_inclusive + 1,
    )
