"""
Java source format.

Finds type declarations (records, classes, enums, interfaces) in Java source
without building a syntax tree. Comments and string/char literals are blanked
out first, offsets preserved, so braces and parentheses inside them never
disturb the delimiter scans.

For classes, constructors are collected with their marker names and raw
parameter lists so the canonical one can be picked later.
"""

from __future__ import annotations

import re

from ..dom import ConstructorDescriptor, DeclarationKind, TypeDeclaration
from ..fields import split_markers
from ..scanning import find_matching_close
from .base import SourceFormat, registry

HEADER_RE = re.compile(
    r"(?<![\w.$@])(record|class|enum|interface|@\s*interface)\s+([A-Za-z_$][\w$]*)"
)

KINDS = {
    "record": DeclarationKind.PRODUCT,
    "class": DeclarationKind.CONSTRUCTED,
    "enum": DeclarationKind.ENUM,
    "interface": DeclarationKind.INTERFACE,
}

ACCESS_MODIFIERS = frozenset({"public", "protected", "private"})


def mask_source(content: str) -> str:
    """
    Blank out comments and the inside of string, text block and char literals
    with spaces. Newlines and length are preserved.
    """
    out = list(content)
    n = len(content)

    def blank(start: int, end: int) -> None:
        for k in range(start, min(end, n)):
            if out[k] != "\n":
                out[k] = " "

    i = 0
    while i < n:
        if content.startswith("//", i):
            end = content.find("\n", i)
            end = n if end == -1 else end
            blank(i, end)
            i = end
        elif content.startswith("/*", i):
            end = content.find("*/", i + 2)
            end = n if end == -1 else end + 2
            blank(i, end)
            i = end
        elif content.startswith('"""', i):
            end = content.find('"""', i + 3)
            end = n if end == -1 else end
            blank(i + 3, end)
            i = end + 3
        elif content[i] in "\"'":
            quote = content[i]
            j = i + 1
            while j < n and content[j] != quote and content[j] != "\n":
                j += 2 if content[j] == "\\" else 1
            blank(i + 1, j)
            i = j + 1
        else:
            i += 1

    return "".join(out)


def _depth_at(masked: str, start: int, pos: int) -> int:
    """Brace depth at pos, counting from start."""
    return masked.count("{", start, pos) - masked.count("}", start, pos)


def _member_boundary(masked: str, start: int, pos: int) -> int:
    """
    Index of the ';', '{' or '}' ending the member before pos, or start - 1.

    Scans backwards and skips parenthesized groups, so braces inside a
    marker's argument list (e.g. @ConstructorProperties({"x"})) do not count.
    """
    depth = 0
    for i in range(pos - 1, start - 1, -1):
        c = masked[i]
        if c == ")":
            depth += 1
        elif c == "(":
            depth -= 1
        elif depth == 0 and c in ";{}":
            return i
    return start - 1


def _constructor_markers(prefix: str) -> list[str] | None:
    """
    Marker names in front of a constructor name.

    Returns None when the prefix holds anything besides markers and access
    modifiers, i.e. the match is a call or a method rather than a constructor.
    """
    markers: list[str] = []
    rest = prefix
    while True:
        names, rest = split_markers(rest)
        markers.extend(names)
        if not rest:
            return markers
        token, _, remainder = rest.partition(" ")
        if token not in ACCESS_MODIFIERS:
            return None
        rest = remainder


class JavaFormat(SourceFormat):
    """Java declaration scanner."""

    @property
    def name(self) -> str:
        return "java"

    @property
    def extensions(self) -> list[str]:
        return [".java"]

    def parse(
        self,
        content: str,
        location: str | None = None,
        editable: bool = True,
    ) -> list[TypeDeclaration]:
        """Find all type declarations in Java source."""
        masked = mask_source(content)
        declarations: list[TypeDeclaration] = []
        self._scan(masked, 0, len(content), False, location, editable, declarations)
        return declarations

    def _scan(
        self,
        masked: str,
        start: int,
        end: int,
        nested: bool,
        location: str | None,
        editable: bool,
        out: list[TypeDeclaration],
    ) -> None:
        """Collect declarations at brace depth zero of masked[start:end]."""
        pos = start
        while True:
            match = HEADER_RE.search(masked, pos, end)
            if match is None:
                return
            if _depth_at(masked, start, match.start()) != 0:
                pos = match.end()
                continue

            keyword = "interface" if match.group(1).startswith("@") else match.group(1)
            kind = KINDS[keyword]
            name = match.group(2)

            body_open = self._find_body_open(masked, match.end(), end, kind)
            if body_open == -1:
                out.append(TypeDeclaration(
                    name=name, kind=kind, raw_source=masked[match.start():end],
                    editable=editable, location=location, nested=nested,
                ))
                return

            body_close = find_matching_close(masked, body_open, "{", "}")
            if body_close == -1 or body_close >= end:
                body_close = end - 1

            constructors: tuple[ConstructorDescriptor, ...] = ()
            if kind is DeclarationKind.CONSTRUCTED:
                constructors = self._find_constructors(masked, name, body_open + 1, body_close)

            out.append(TypeDeclaration(
                name=name,
                kind=kind,
                raw_source=masked[match.start():body_close + 1],
                editable=editable,
                constructors=constructors,
                location=location,
                nested=nested,
            ))

            self._scan(masked, body_open + 1, body_close, True, location, editable, out)
            pos = body_close + 1

    def _find_body_open(self, masked: str, pos: int, end: int, kind: DeclarationKind) -> int:
        """Index of the '{' opening a type body, skipping a record's components."""
        if kind is DeclarationKind.PRODUCT:
            paren = masked.find("(", pos, end)
            brace = masked.find("{", pos, end)
            if paren != -1 and (brace == -1 or paren < brace):
                close = find_matching_close(masked, paren, "(", ")")
                if close == -1:
                    return -1
                pos = close + 1
        return masked.find("{", pos, end)

    def _find_constructors(
        self,
        masked: str,
        name: str,
        start: int,
        end: int,
    ) -> tuple[ConstructorDescriptor, ...]:
        """Constructors declared directly in a class body."""
        pattern = re.compile(rf"(?<![\w.$]){re.escape(name)}\s*\(")
        constructors = []

        for match in pattern.finditer(masked, start, end):
            if _depth_at(masked, start, match.start()) != 0:
                continue

            boundary = _member_boundary(masked, start, match.start())
            prefix = " ".join(masked[boundary + 1:match.start()].split())
            markers = _constructor_markers(prefix)
            if markers is None:
                continue

            paren = match.end() - 1
            close = find_matching_close(masked, paren, "(", ")")
            parameters = masked[paren:] if close == -1 else masked[paren:close + 1]
            constructors.append(ConstructorDescriptor(markers=tuple(markers), parameters=parameters))

        return tuple(constructors)


# Register the format
registry.register(JavaFormat())
