"""Tests for the Python container adapter against the real grammar."""

import textwrap

import pytest

from change_select.language import SupportedLanguage
from change_select.semantic.containers import ContainerKind, MemberKind


SOURCE = textwrap.dedent("""\
    import os


    # Helper for things.
    def helper(x):
        return x + 1


    @dataclass
    class Point:
        x: int

        def norm(self):
            return abs(self.x)

        @property
        def double(self):
            return self.x * 2


    @cache
    def cached():
        return 1
""")


def _extract(source):
    pytest.importorskip("tree_sitter_python")
    from change_select.semantic.adapters import extract_containers_with_members
    from change_select.semantic.parser import create_parser, parse_source

    parsed = parse_source(create_parser(SupportedLanguage.PYTHON), source)
    return extract_containers_with_members(SupportedLanguage.PYTHON, parsed)


class TestPythonAdapter:
    def test_top_level_containers_in_order(self):
        containers = _extract(SOURCE)
        assert [(c.container.kind, c.container.name) for c in containers] == [
            (ContainerKind.function(), "helper"),
            (ContainerKind.class_(), "Point"),
            (ContainerKind.function(), "cached"),
        ]

    def test_adjacent_comment_folded_into_function(self):
        helper = _extract(SOURCE)[0].container
        assert (helper.start_line, helper.end_line) == (3, 5)

    def test_decorator_folded_into_class(self):
        point = _extract(SOURCE)[1].container
        assert point.start_line == 8
        assert point.end_line == 17

    def test_methods_are_members(self):
        point = _extract(SOURCE)[1]
        assert [(m.kind, m.name) for m in point.members] == [
            (MemberKind.METHOD, "norm"),
            (MemberKind.METHOD, "double"),
        ]
        double = point.members[1]
        assert (double.start_line, double.end_line) == (15, 17)

    def test_function_has_no_members(self):
        assert _extract(SOURCE)[0].members == []

    def test_decorated_function(self):
        cached = _extract(SOURCE)[2].container
        assert (cached.start_line, cached.end_line) == (20, 22)

    def test_empty_source(self):
        assert _extract("") == []

    def test_module_without_definitions(self):
        assert _extract("x = 1\nprint(x)\n") == []

    def test_comment_above_first_method(self):
        source = textwrap.dedent("""\
            class A:
                # about f
                def f(self):
                    pass
        """)
        a = _extract(source)[0]
        assert (a.container.start_line, a.container.end_line) == (0, 3)
        f = a.members[0]
        assert (f.name, f.start_line, f.end_line) == ("f", 1, 3)
