"""
Core skeleton generation for jsonskel.

Implements:
- Field list location (record header or marker-attributed constructor)
- Skeleton rendering with depth-based indentation
- The immutable context threaded through every recursive call
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from datetime import datetime

from .catalog import TypeCatalog
from .dom import ConstructorDescriptor, DeclarationKind, TypeDeclaration
from .fields import parse_fields
from .resolver import resolve
from .scanning import find_matching_close

log = logging.getLogger(__name__)

EMPTY_OBJECT = "{}"


@dataclass(frozen=True)
class GenerationContext:
    """Everything one generation needs; a new copy per nesting level."""
    catalog: TypeCatalog
    captured: datetime
    indent: str = "\t"
    marker: str = "JsonCreator"
    external_placeholder: str = "{} // External type"
    recursion_placeholder: str = "{} // Recursive type"
    max_depth: int = 64
    depth: int = 1
    path: tuple[str, ...] = ()

    def descend(self, name: str) -> GenerationContext:
        """Context for expanding the nested type `name` one level deeper."""
        return replace(self, depth=self.depth + 1, path=self.path + (name,))


def find_creator(
    constructors: tuple[ConstructorDescriptor, ...] | list[ConstructorDescriptor],
    marker: str,
) -> ConstructorDescriptor | None:
    """Return the first constructor carrying the marker, if any."""
    for constructor in constructors:
        if constructor.has_marker(marker):
            return constructor
    return None


def _list_interior(source: str, open_index: int) -> str | None:
    """Text between the parenthesis at open_index and its match."""
    if open_index == -1:
        return None
    close = find_matching_close(source, open_index, "(", ")")
    if close == -1:
        return None
    return source[open_index + 1:close].strip()


def locate_field_list(declaration: TypeDeclaration, marker: str) -> str | None:
    """
    Find the interior of a declaration's canonical field list.

    Records use the component list after their 'record Name' header; classes
    use the parameters of the constructor carrying the marker. Returns None
    when there is no such list or its parentheses do not balance.
    """
    if declaration.kind is DeclarationKind.PRODUCT:
        source = declaration.raw_source
        header = re.search(rf"\brecord\s+{re.escape(declaration.name)}\b", source)
        if header is None:
            return None
        return _list_interior(source, source.find("(", header.end()))

    if declaration.kind is DeclarationKind.CONSTRUCTED:
        creator = find_creator(declaration.constructors, marker)
        if creator is None:
            return None
        return _list_interior(creator.parameters, creator.parameters.find("("))

    return None


def render_object(entries: list[str], depth: int, indent: str) -> str:
    """Lay out rendered '"name": value' entries as a multi-line object."""
    lines = [indent * depth + entry for entry in entries]
    return "{\n" + ",\n".join(lines) + "\n" + indent * (depth - 1) + "}"


def generate_skeleton(declaration: TypeDeclaration, ctx: GenerationContext) -> str:
    """Render the default-valued JSON skeleton of one declaration at ctx.depth."""
    field_list = locate_field_list(declaration, ctx.marker)
    if field_list is None:
        log.debug("No field list for %s, rendering empty object", declaration.name)
        return EMPTY_OBJECT

    entries = []
    for descriptor in parse_fields(field_list):
        value = resolve(descriptor.type_expression, ctx)
        entries.append(f'"{descriptor.name}": {value.render()}')

    return render_object(entries, ctx.depth, ctx.indent)
