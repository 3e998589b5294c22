"""
Tests for trivia folding, run against duck-typed fake nodes so the
reverse sibling scan is exercised without any grammar installed.
"""

import dataclasses

import pytest

from change_select.language import SupportedLanguage
from change_select.semantic.parser import last_line
from change_select.semantic.trivia import (
    GENERIC_TRIVIA,
    TriviaConfig,
    expand_range_for_trivia,
    trivia_config,
)


class FakeNode:
    def __init__(self, type, start_row, end_row, end_col=1, children=None, fields=None):
        self.type = type
        self.start_point = (start_row, 0)
        self.end_point = (end_row, end_col)
        # rows double as byte offsets
        self.start_byte = start_row * 100
        self.end_byte = end_row * 100 + end_col
        self.children = children or []
        self._fields = fields or {}
        self.parent = None
        self.prev_sibling = None
        for prev, child in zip([None] + self.children, self.children):
            child.parent = self
            child.prev_sibling = prev

    def child_by_field_name(self, name):
        return self._fields.get(name)


def _root(*children):
    return FakeNode("source_file", 0, 100, children=list(children))


def _expand(decl, *siblings):
    _root(*siblings)
    return expand_range_for_trivia(decl, RUST)


RUST = trivia_config(SupportedLanguage.RUST)


class TestLastLine:
    def test_trailing_newline_not_counted(self):
        node = FakeNode("function_definition", 2, 5, end_col=0)
        assert last_line(node) == 4

    def test_single_row_at_col_zero(self):
        node = FakeNode("empty", 3, 3, end_col=0)
        assert last_line(node) == 3


class TestExpandRange:
    def test_no_trivia(self):
        decl = FakeNode("function_item", 5, 8)
        assert _expand(decl, decl) == (5, 8)

    def test_detached_node(self):
        decl = FakeNode("function_item", 5, 8)
        assert expand_range_for_trivia(decl, RUST) == (5, 8)

    def test_adjacent_comment_included(self):
        comment = FakeNode("line_comment", 4, 4)
        decl = FakeNode("function_item", 5, 8)
        assert _expand(decl, comment, decl) == (4, 8)

    def test_comment_run_included(self):
        c1 = FakeNode("line_comment", 2, 2)
        c2 = FakeNode("line_comment", 3, 3)
        c3 = FakeNode("block_comment", 4, 4)
        decl = FakeNode("function_item", 5, 8)
        assert _expand(decl, c1, c2, c3, decl) == (2, 8)

    def test_gap_stops_comment(self):
        comment = FakeNode("line_comment", 2, 2)
        decl = FakeNode("function_item", 5, 8)
        assert _expand(decl, comment, decl) == (5, 8)

    def test_gap_inside_comment_run(self):
        c1 = FakeNode("line_comment", 1, 1)
        c2 = FakeNode("line_comment", 4, 4)
        decl = FakeNode("function_item", 5, 8)
        assert _expand(decl, c1, c2, decl) == (4, 8)

    def test_attribute_included_across_gap(self):
        attr = FakeNode("attribute_item", 1, 1)
        decl = FakeNode("function_item", 5, 8)
        assert _expand(decl, attr, decl) == (1, 8)

    def test_comment_above_attribute(self):
        comment = FakeNode("line_comment", 2, 2)
        attr = FakeNode("attribute_item", 3, 3)
        decl = FakeNode("function_item", 4, 8)
        assert _expand(decl, comment, attr, decl) == (2, 8)

    def test_stops_at_previous_declaration(self):
        prev = FakeNode("function_item", 0, 2)
        comment = FakeNode("line_comment", 3, 3)
        decl = FakeNode("function_item", 4, 8)
        assert _expand(decl, prev, comment, decl) == (3, 8)

    def test_trailing_comment_of_previous_declaration(self):
        prev = FakeNode("const_item", 3, 3)
        comment = FakeNode("line_comment", 3, 3)
        decl = FakeNode("function_item", 4, 8)
        assert _expand(decl, prev, comment, decl) == (4, 8)

    def test_other_sibling_stops_scan(self):
        attr = FakeNode("attribute_item", 1, 1)
        other = FakeNode("use_declaration", 2, 2)
        decl = FakeNode("function_item", 3, 8)
        assert _expand(decl, attr, other, decl) == (3, 8)

    def test_climbs_out_of_wrapper_at_same_start(self):
        comment = FakeNode("line_comment", 2, 2)
        decl = FakeNode("function_item", 3, 8)
        body = FakeNode("declaration_list", 3, 8, children=[decl])
        assert _expand(decl, comment, body) == (2, 8)

    def test_climbs_through_nested_wrappers(self):
        comment = FakeNode("line_comment", 2, 2)
        decl = FakeNode("function_item", 3, 8)
        inner = FakeNode("declaration_list", 3, 8, children=[decl])
        outer = FakeNode("declaration_list", 3, 8, children=[inner])
        assert _expand(decl, comment, outer) == (2, 8)

    def test_wrapper_opened_earlier_is_not_climbed(self):
        comment = FakeNode("line_comment", 2, 2)
        decl = FakeNode("function_item", 4, 8)
        body = FakeNode("declaration_list", 3, 9, children=[decl])
        assert _expand(decl, comment, body) == (4, 8)

    def test_first_node_of_file(self):
        decl = FakeNode("function_item", 0, 3)
        assert _expand(decl, decl) == (0, 3)


class TestTriviaConfigs:
    def test_python_decorators(self):
        cfg = trivia_config(SupportedLanguage.PYTHON)
        assert "decorator" in cfg.always_include
        assert cfg.is_trivia("comment")
        assert not cfg.is_trivia("function_definition")

    def test_markdown_has_no_trivia(self):
        assert trivia_config(SupportedLanguage.MARKDOWN) == TriviaConfig()

    def test_yaml_uses_generic(self):
        assert trivia_config(SupportedLanguage.YAML) is GENERIC_TRIVIA

    def test_configs_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            RUST.always_include = frozenset()
