"""Tests for the line-range reconciler."""

import pytest

from change_select.semantic.ranges import (
    SectionLineRange,
    calculate_section_line_ranges,
    filter_section_indices_by_range,
    ranges_overlap,
    sections_for_lines,
    total_new_lines,
)
from change_select.types import (
    BinarySection,
    ChangedSection,
    ChangeType,
    FileModeSection,
    SectionChangedLine,
    UnchangedSection,
)


def _unchanged(n):
    return UnchangedSection(lines=[f"ctx {i}\n" for i in range(n)])


def _changed(removed=0, added=0):
    lines = [SectionChangedLine(ChangeType.REMOVED, f"old {i}\n") for i in range(removed)]
    lines += [SectionChangedLine(ChangeType.ADDED, f"new {i}\n") for i in range(added)]
    return ChangedSection(lines=lines)


class TestRangesOverlap:
    @pytest.mark.parametrize("a,b,c,d,expected", [
        (0, 5, 10, 15, False),
        (0, 10, 8, 15, True),
        (5, 15, 15, 25, False),
        (10, 15, 0, 5, False),
        (0, 10, 2, 3, True),
        (3, 4, 3, 4, True),
    ])
    def test_half_open(self, a, b, c, d, expected):
        assert ranges_overlap(a, b, c, d) is expected


class TestCalculateSectionLineRanges:
    def test_mixed_sections(self):
        sections = [_unchanged(3), _changed(removed=1, added=2), _unchanged(2)]
        ranges = calculate_section_line_ranges(sections)
        assert [(r.start_line, r.end_line) for r in ranges] == [(0, 3), (3, 5), (5, 7)]
        assert [r.section_index for r in ranges] == [0, 1, 2]

    def test_pure_deletion_is_zero_width(self):
        sections = [_unchanged(2), _changed(removed=4), _unchanged(1)]
        ranges = calculate_section_line_ranges(sections)
        assert ranges[1] == SectionLineRange(1, 2, 2)
        assert ranges[1].width == 0
        assert ranges[2] == SectionLineRange(2, 2, 3)

    def test_mode_and_binary_occupy_nothing(self):
        sections = [FileModeSection(), _unchanged(1), BinarySection()]
        ranges = calculate_section_line_ranges(sections)
        assert [r.width for r in ranges] == [0, 1, 0]

    def test_empty(self):
        assert calculate_section_line_ranges([]) == []

    def test_total_new_lines(self):
        sections = [_unchanged(3), _changed(removed=1, added=2), FileModeSection()]
        assert total_new_lines(sections) == 5


class TestFilterSectionIndices:
    def setup_method(self):
        self.ranges = calculate_section_line_ranges(
            [_unchanged(3), _changed(removed=1, added=2), _unchanged(2)]
        )

    def test_single_section(self):
        assert filter_section_indices_by_range(self.ranges, 0, 2) == [0]

    def test_straddling_sections_are_all_reported(self):
        assert filter_section_indices_by_range(self.ranges, 2, 6) == [0, 1, 2]

    def test_boundary_is_exclusive(self):
        assert filter_section_indices_by_range(self.ranges, 3, 5) == [1]

    def test_no_match(self):
        assert filter_section_indices_by_range(self.ranges, 20, 30) == []

    def test_zero_width_sections_never_match(self):
        ranges = calculate_section_line_ranges([_unchanged(2), _changed(removed=1), _unchanged(2)])
        assert filter_section_indices_by_range(ranges, 0, 4) == [0, 2]

    def test_one_line_container(self):
        # inclusive line 3 is [3, 4)
        assert sections_for_lines(self.ranges, 3, 3) == [1]

    def test_inclusive_end(self):
        assert sections_for_lines(self.ranges, 0, 2) == [0]
        assert sections_for_lines(self.ranges, 0, 3) == [0, 1]
