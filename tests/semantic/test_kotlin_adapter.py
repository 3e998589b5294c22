"""Tests for the Kotlin container adapter against the real grammar."""

import textwrap

import pytest

from change_select.language import SupportedLanguage
from change_select.semantic.containers import ContainerKind, MemberKind


SOURCE = textwrap.dedent("""\
    package demo

    class User(val id: Int) {
        val name: String = ""

        fun greet(): String {
            return "hi"
        }
    }

    interface Shape {
        fun area(): Double
    }

    enum class Color {
        RED,
        GREEN
    }

    object Registry {
        fun lookup() {}
    }

    fun main() {
        println("x")
    }
""")


def _extract(source):
    pytest.importorskip("tree_sitter_kotlin")
    from change_select.semantic.adapters import extract_containers_with_members
    from change_select.semantic.parser import create_parser, parse_source

    parsed = parse_source(create_parser(SupportedLanguage.KOTLIN), source)
    return extract_containers_with_members(SupportedLanguage.KOTLIN, parsed)


def _by_name(containers, name):
    return next(c for c in containers if c.container.name == name)


class TestKotlinAdapter:
    def test_containers(self):
        containers = _extract(SOURCE)
        assert [(c.container.kind, c.container.name) for c in containers] == [
            (ContainerKind.class_(), "User"),
            (ContainerKind.interface(), "Shape"),
            (ContainerKind.enum(), "Color"),
            (ContainerKind.object(), "Registry"),
            (ContainerKind.function(), "main"),
        ]

    def test_class_members(self):
        user = _by_name(_extract(SOURCE), "User")
        assert [(m.kind, m.name) for m in user.members] == [
            (MemberKind.PROPERTY, "name"),
            (MemberKind.METHOD, "greet"),
        ]
        greet = user.members[1]
        assert (greet.start_line, greet.end_line) == (5, 7)

    def test_object_methods(self):
        registry = _by_name(_extract(SOURCE), "Registry")
        assert [m.name for m in registry.members] == ["lookup"]

    def test_enum_entries(self):
        color = _by_name(_extract(SOURCE), "Color")
        assert [(m.kind, m.name) for m in color.members] == [
            (MemberKind.FIELD, "RED"),
            (MemberKind.FIELD, "GREEN"),
        ]

    def test_function_range(self):
        main = _by_name(_extract(SOURCE), "main")
        assert (main.container.start_line, main.container.end_line) == (23, 25)
