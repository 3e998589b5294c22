"""
Language-agnostic container model.

Every grammar is normalized into ``Container`` / ``Member`` records built
from one closed set of kinds.  Supporting a new language means writing an
adapter that emits these records, never adding new types.

Line numbers are 0-indexed, inclusive, in new-file coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ContainerTag(str, Enum):
    STRUCT = "struct"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    OBJECT = "object"
    IMPL = "impl"
    FUNCTION = "function"
    MODULE = "module"
    RESOURCE = "resource"
    DATA_SOURCE = "data"
    VARIABLE = "variable"
    OUTPUT = "output"
    SECTION = "section"


@dataclass(frozen=True)
class ContainerKind:
    """A container kind plus its optional payload.

    The payload is the trait name for ``IMPL``, the resource/data type for
    ``RESOURCE``/``DATA_SOURCE`` and the heading level for ``SECTION``.
    """
    tag: ContainerTag
    detail: Union[str, int, None] = None

    # -- constructors -----------------------------------------------------

    @classmethod
    def struct(cls) -> "ContainerKind":
        return cls(ContainerTag.STRUCT)

    @classmethod
    def class_(cls) -> "ContainerKind":
        return cls(ContainerTag.CLASS)

    @classmethod
    def interface(cls) -> "ContainerKind":
        return cls(ContainerTag.INTERFACE)

    @classmethod
    def enum(cls) -> "ContainerKind":
        return cls(ContainerTag.ENUM)

    @classmethod
    def object(cls) -> "ContainerKind":
        return cls(ContainerTag.OBJECT)

    @classmethod
    def impl(cls, trait_name: Optional[str] = None) -> "ContainerKind":
        return cls(ContainerTag.IMPL, trait_name)

    @classmethod
    def function(cls) -> "ContainerKind":
        return cls(ContainerTag.FUNCTION)

    @classmethod
    def module(cls) -> "ContainerKind":
        return cls(ContainerTag.MODULE)

    @classmethod
    def resource(cls, resource_type: str) -> "ContainerKind":
        return cls(ContainerTag.RESOURCE, resource_type)

    @classmethod
    def data_source(cls, data_type: str) -> "ContainerKind":
        return cls(ContainerTag.DATA_SOURCE, data_type)

    @classmethod
    def variable(cls) -> "ContainerKind":
        return cls(ContainerTag.VARIABLE)

    @classmethod
    def output(cls) -> "ContainerKind":
        return cls(ContainerTag.OUTPUT)

    @classmethod
    def section(cls, level: int) -> "ContainerKind":
        return cls(ContainerTag.SECTION, level)

    # -- payload accessors ------------------------------------------------

    @property
    def trait_name(self) -> Optional[str]:
        return self.detail if self.tag is ContainerTag.IMPL else None  # type: ignore[return-value]

    @property
    def resource_type(self) -> Optional[str]:
        return self.detail if self.tag is ContainerTag.RESOURCE else None  # type: ignore[return-value]

    @property
    def data_type(self) -> Optional[str]:
        return self.detail if self.tag is ContainerTag.DATA_SOURCE else None  # type: ignore[return-value]

    @property
    def level(self) -> Optional[int]:
        return self.detail if self.tag is ContainerTag.SECTION else None  # type: ignore[return-value]

    def label(self) -> str:
        """Short human-readable kind, e.g. ``impl Display`` or ``h2``."""
        if self.tag is ContainerTag.IMPL and self.detail:
            return f"impl {self.detail}"
        if self.tag in (ContainerTag.RESOURCE, ContainerTag.DATA_SOURCE):
            return f"{self.tag.value} {self.detail}"
        if self.tag is ContainerTag.SECTION:
            return f"h{self.detail}"
        return self.tag.value


class MemberKind(str, Enum):
    FIELD = "field"
    METHOD = "method"
    PROPERTY = "property"


@dataclass
class Member:
    """A field, method or property inside a container."""
    kind: MemberKind
    name: str
    start_line: int
    end_line: int


@dataclass
class Container:
    """A top-level language construct: function, type, config block..."""
    kind: ContainerKind
    name: str
    start_line: int
    end_line: int


@dataclass
class ContainerWithMembers:
    container: Container
    members: list[Member] = field(default_factory=list)
