"""
DOM - Declaration Object Model for jsonskel

Declarations are discovered fresh on every invocation from raw source text.
They reference each other by simple name only, so the graph they form can be
cyclic; nothing here owns another declaration.

Resolved values are a small tagged variant. Each knows how to render itself
as the exact text that ends up in the skeleton.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class DeclarationKind(Enum):
    """Shape of a nominal type, as far as skeleton generation cares."""
    PRODUCT = "record"
    CONSTRUCTED = "class"
    ENUM = "enum"
    INTERFACE = "interface"


@dataclass(frozen=True)
class ConstructorDescriptor:
    """A constructor's marker names and raw parameter list (starting at '(')."""
    markers: tuple[str, ...]
    parameters: str

    def has_marker(self, marker: str) -> bool:
        """Match on simple name so qualified markers count too."""
        return any(name.rsplit(".", 1)[-1] == marker for name in self.markers)


@dataclass(frozen=True)
class TypeDeclaration:
    """A type declaration found in a source file."""
    name: str
    kind: DeclarationKind
    raw_source: str
    editable: bool = True  # False for library/external sources
    constructors: tuple[ConstructorDescriptor, ...] = ()
    location: str | None = None
    nested: bool = False  # member type rather than top-level


@dataclass(frozen=True)
class FieldDescriptor:
    """One component or parameter: its name and the text of its type."""
    name: str
    type_expression: str


@dataclass(frozen=True)
class TypeExpression:
    """
    A parsed type expression.

    parameterized is set when the text carried a '<'. malformed means the
    '<' had no closing '>' after it.
    """
    base_name: str
    generic_args: tuple[TypeExpression, ...] = ()
    parameterized: bool = False
    malformed: bool = False


@dataclass(frozen=True)
class SourceDocument:
    """The active document: its text and every declaration found in it."""
    path: str | None
    text: str
    declarations: tuple[TypeDeclaration, ...] = ()

    @property
    def top_level_types(self) -> list[TypeDeclaration]:
        return [d for d in self.declarations if not d.nested]


# Resolved values


class ResolvedValue(ABC):
    """Base for rendered default values."""

    @abstractmethod
    def render(self) -> str:
        """Exact JSON text for this value."""
        ...


@dataclass(frozen=True)
class Literal(ResolvedValue):
    """Already-formatted JSON text such as 0, false or a quoted string."""
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Array(ResolvedValue):
    """Single-element array, or [] when the element type is unknown."""
    item: ResolvedValue | None = None

    def render(self) -> str:
        if self.item is None:
            return "[]"
        return f"[ {self.item.render()} ]"


@dataclass(frozen=True)
class Object(ResolvedValue):
    """Inline object of key/value pairs, or {} when empty."""
    pairs: tuple[tuple[ResolvedValue, ResolvedValue], ...] = field(default=())

    def render(self) -> str:
        if not self.pairs:
            return "{}"
        body = ", ".join(f"{k.render()}: {v.render()}" for k, v in self.pairs)
        return f"{{ {body} }}"


@dataclass(frozen=True)
class NestedSkeleton(ResolvedValue):
    """Multi-line skeleton of a nested project type."""
    text: str

    def render(self) -> str:
        return self.text


EMPTY_STRING = Literal('""')
