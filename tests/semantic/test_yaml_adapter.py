"""Tests for the YAML top-level key adapter."""

import textwrap

import pytest

from change_select.language import SupportedLanguage
from change_select.semantic.containers import ContainerKind


SOURCE = textwrap.dedent("""\
    name: demo
    build:
      context: .
      args:
        - one
    ports:
      - 80
""")


def _extract(source):
    pytest.importorskip("tree_sitter_yaml")
    from change_select.semantic.adapters import extract_containers_with_members
    from change_select.semantic.parser import create_parser, parse_source

    parsed = parse_source(create_parser(SupportedLanguage.YAML), source)
    return extract_containers_with_members(SupportedLanguage.YAML, parsed)


class TestYamlAdapter:
    def test_top_level_keys(self):
        containers = _extract(SOURCE)
        assert [(c.container.kind, c.container.name) for c in containers] == [
            (ContainerKind.section(1), "name"),
            (ContainerKind.section(1), "build"),
            (ContainerKind.section(1), "ports"),
        ]

    def test_nested_keys_are_not_containers(self):
        names = [c.container.name for c in _extract(SOURCE)]
        assert "context" not in names
        assert "args" not in names

    def test_key_ranges(self):
        build = _extract(SOURCE)[1].container
        assert (build.start_line, build.end_line) == (1, 4)

    def test_quoted_key(self):
        containers = _extract('"quoted key": 1\n')
        assert containers[0].container.name == "quoted key"

    def test_sequence_document(self):
        assert _extract("- a\n- b\n") == []

    def test_comment_above_first_key(self):
        containers = _extract("# service name\nname: demo\nports:\n  - 80\n")
        name = containers[0].container
        assert name.name == "name"
        assert (name.start_line, name.end_line) == (0, 1)

    def test_comment_above_later_key(self):
        containers = _extract("name: demo\n# exposed\nports:\n  - 80\n")
        ports = containers[1].container
        assert (ports.start_line, ports.end_line) == (1, 3)
