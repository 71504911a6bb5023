"""
Type expression resolution.

Maps the text of a field's type to a representative default value:

- generic containers (List<T>, Map<K, V>, Optional<T>) are unwrapped and
  their arguments resolved recursively
- primitives and boxed types come from a fixed table
- date/time types are formatted from the invocation's captured instant
- anything else is looked up in the project catalog and, when it is a
  project record or class, expanded into a nested skeleton

All matching is exact and case-sensitive.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from .dom import (
    EMPTY_STRING,
    Array,
    DeclarationKind,
    Literal,
    NestedSkeleton,
    Object,
    ResolvedValue,
    TypeDeclaration,
    TypeExpression,
)
from .scanning import split_top_level

if TYPE_CHECKING:
    from .core import GenerationContext

log = logging.getLogger(__name__)


PRIMITIVE_DEFAULTS: dict[str, str] = {
    **dict.fromkeys(("int", "long", "short", "byte", "Integer", "Long", "Short", "Byte"), "0"),
    **dict.fromkeys(("double", "float", "BigDecimal", "Double", "Float"), "0.0"),
    **dict.fromkeys(("boolean", "Boolean"), "false"),
    **dict.fromkeys(("String", "char", "Character"), '""'),
}

COLLECTION_TYPES = frozenset({"List", "ArrayList", "Set", "HashSet", "Collection", "LinkedList"})
MAP_TYPES = frozenset({"Map", "HashMap"})
OPTIONAL_TYPE = "Optional"
CONTAINER_TYPES = COLLECTION_TYPES | MAP_TYPES | {OPTIONAL_TYPE}

# strftime patterns; "{ms}" is filled with zero-padded milliseconds
DATE_TIME_FORMATS: dict[str, str] = {
    "LocalDate": "%Y-%m-%d",
    "LocalDateTime": "%Y-%m-%dT%H:%M:%S.{ms}",
    "YearMonth": "%Y-%m",
    "Year": "%Y",
    "LocalTime": "%H:%M:%S.{ms}",
    "OffsetDateTime": "%Y-%m-%dT%H:%M:%S.{ms}{offset}",
    "ZonedDateTime": "%Y-%m-%dT%H:%M:%S.{ms}{offset}",
}


def _iso_offset(moment: datetime) -> str:
    """Render the UTC offset as +HH:MM, or Z when it is zero."""
    offset = moment.utcoffset()
    if offset is None or not offset:
        return "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_date_time(type_name: str, moment: datetime) -> str:
    """Format moment for a date/time type as a quoted JSON string."""
    pattern = DATE_TIME_FORMATS[type_name]
    text = moment.strftime(pattern).format(
        ms=f"{moment.microsecond // 1000:03d}",
        offset=_iso_offset(moment),
    )
    return f'"{text}"'


def parse_type_expression(text: str) -> TypeExpression:
    """
    Parse a type expression, splitting out generic arguments.

    The base name is the text before the first '<'; the arguments are the
    angle-bracket-level comma split of what lies between the first '<' and
    the last '>'.
    """
    text = text.strip()
    start = text.find("<")
    if start == -1:
        return TypeExpression(base_name=text)

    base_name = text[:start].strip()
    end = text.rfind(">")
    if end < start:
        return TypeExpression(base_name=base_name, parameterized=True, malformed=True)

    interior = text[start + 1:end].strip()
    args = tuple(
        parse_type_expression(arg)
        for arg in split_top_level(interior, openers="<", closers=">")
    )
    return TypeExpression(base_name=base_name, generic_args=args, parameterized=True)


def resolve(type_text: str, ctx: GenerationContext) -> ResolvedValue:
    """Resolve the default value for a type expression's text."""
    return resolve_expression(parse_type_expression(type_text), ctx)


def resolve_expression(expression: TypeExpression, ctx: GenerationContext) -> ResolvedValue:
    """Resolve the default value for a parsed type expression."""
    log.debug("Generating default value for type: %s", expression.base_name)

    if expression.malformed:
        return EMPTY_STRING

    name = expression.base_name
    # Raw container types resolve like their zero-argument form
    if expression.parameterized or name in CONTAINER_TYPES:
        return _resolve_container(expression, ctx)

    literal = PRIMITIVE_DEFAULTS.get(name)
    if literal is not None:
        return Literal(literal)

    if name in DATE_TIME_FORMATS:
        return Literal(format_date_time(name, ctx.captured))

    return resolve_nested(name, ctx)


def _resolve_container(expression: TypeExpression, ctx: GenerationContext) -> ResolvedValue:
    base = expression.base_name
    args = expression.generic_args

    if base in COLLECTION_TYPES:
        if not args:
            return Array()
        return Array(resolve_expression(args[0], ctx))

    if base in MAP_TYPES:
        if len(args) < 2:
            return Object()
        key = resolve_expression(args[0], ctx)
        value = resolve_expression(args[1], ctx)
        return Object(((key, value),))

    if base == OPTIONAL_TYPE:
        if not args:
            return Literal("null")
        return resolve_expression(args[0], ctx)

    return Object()


def pick_declaration(matches: list[TypeDeclaration]) -> TypeDeclaration | None:
    """Prefer an editable project declaration; otherwise take the first match."""
    for declaration in matches:
        if declaration.editable:
            return declaration
    return matches[0] if matches else None


def resolve_nested(name: str, ctx: GenerationContext) -> ResolvedValue:
    """
    Resolve a name the fixed tables do not know via the project catalog.

    Every call queries the catalog; nothing is cached between occurrences.
    CatalogLookupError propagates and aborts the whole generation.
    """
    from .core import generate_skeleton

    if not name:
        return EMPTY_STRING

    matches = ctx.catalog.find_declaration(name)
    log.debug("Catalog lookup for %s: %d match(es)", name, len(matches))

    found = pick_declaration(matches)
    if found is None:
        return EMPTY_STRING

    if not found.editable:
        return Literal(ctx.external_placeholder)

    if found.kind is DeclarationKind.ENUM:
        return EMPTY_STRING

    if found.kind is DeclarationKind.INTERFACE:
        return Object()

    if found.name in ctx.path or ctx.depth >= ctx.max_depth:
        log.warning(
            "Not expanding %s at depth %d (resolution path: %s)",
            found.name, ctx.depth, " -> ".join(ctx.path),
        )
        return Literal(ctx.recursion_placeholder)

    return NestedSkeleton(generate_skeleton(found, ctx.descend(found.name)))
