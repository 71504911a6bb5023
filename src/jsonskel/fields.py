"""
Field declaration parsing.

A declaration is one comma-separated entry of a record component list or
constructor parameter list, e.g. '@JsonProperty("id") final Long id'.
Markers are stripped first; the last remaining token is the field name and
everything before it is the type expression. Leftover modifiers such as
'final' stay in the type text and simply fail the fixed-table lookups.
"""

from __future__ import annotations

from .dom import FieldDescriptor
from .scanning import find_matching_close, split_top_level


def split_markers(text: str) -> tuple[list[str], str]:
    """
    Peel leading '@Name' markers (with optional argument lists) off text.

    Returns (marker names, remainder). An unbalanced argument list consumes
    the rest of the text.
    """
    names: list[str] = []
    rest = text.lstrip()

    while rest.startswith("@"):
        i = 1
        while i < len(rest) and not rest[i].isspace() and rest[i] != "(":
            i += 1
        names.append(rest[1:i])

        if i < len(rest) and rest[i] == "(":
            close = find_matching_close(rest, i, "(", ")")
            if close == -1:
                return names, ""
            i = close + 1

        rest = rest[i:].lstrip()

    return names, rest


def strip_markers(declaration: str) -> str:
    """Return the declaration with its leading markers removed."""
    return split_markers(declaration)[1]


def parse_field(declaration: str) -> FieldDescriptor | None:
    """
    Parse one declaration into a FieldDescriptor.

    Returns None when fewer than two tokens remain after marker stripping.
    """
    parts = strip_markers(declaration).split()
    if len(parts) < 2:
        return None
    return FieldDescriptor(name=parts[-1], type_expression=" ".join(parts[:-1]))


def parse_fields(field_list: str) -> list[FieldDescriptor]:
    """Parse the interior of a component/parameter list, keeping order."""
    fields = []
    for declaration in split_top_level(field_list):
        descriptor = parse_field(declaration)
        if descriptor is not None:
            fields.append(descriptor)
    return fields
