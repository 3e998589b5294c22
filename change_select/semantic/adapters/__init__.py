"""Per-language container extraction adapters."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ...language import SupportedLanguage
from ..containers import ContainerWithMembers
from ..parser import ParsedFile
from . import hcl, java, kotlin, markdown, python, rust, yaml

Adapter = Callable[[ParsedFile], list[ContainerWithMembers]]

ADAPTERS: Mapping[SupportedLanguage, Adapter] = MappingProxyType({
    SupportedLanguage.RUST: rust.extract_containers_with_members,
    SupportedLanguage.KOTLIN: kotlin.extract_containers_with_members,
    SupportedLanguage.JAVA: java.extract_containers_with_members,
    SupportedLanguage.HCL: hcl.extract_containers_with_members,
    SupportedLanguage.PYTHON: python.extract_containers_with_members,
    SupportedLanguage.MARKDOWN: markdown.extract_containers_with_members,
    SupportedLanguage.YAML: yaml.extract_containers_with_members,
})


def extract_containers_with_members(
    language: SupportedLanguage,
    parsed: ParsedFile,
) -> Optional[list[ContainerWithMembers]]:
    """Run the adapter for *language*; None when there is none."""
    adapter = ADAPTERS.get(language)
    if adapter is None:
        return None
    return adapter(parsed)


__all__ = ["ADAPTERS", "Adapter", "extract_containers_with_members"]
