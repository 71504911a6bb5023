"""
Raw-text delimiter scanning.

Locating parameter lists and splitting them into declarations is done with
balanced-delimiter scans instead of a parse tree. The bracket families are
fixed: a comma only separates declarations when none of ( < { [ is open.
"""

from __future__ import annotations

OPENERS = "(<{["
CLOSERS = ")>}]"


def find_matching_close(
    text: str,
    open_index: int,
    open_char: str = "(",
    close_char: str = ")",
) -> int:
    """
    Return the index of the delimiter closing the one at open_index.

    Scans left to right from open_index, counting open_char/close_char.
    Returns -1 when the text ends before the depth returns to zero.
    """
    depth = 0
    for i in range(open_index, len(text)):
        c = text[i]
        if c == open_char:
            depth += 1
        elif c == close_char:
            depth -= 1
            if depth == 0:
                return i
    return -1


def split_top_level(
    text: str,
    openers: str = OPENERS,
    closers: str = CLOSERS,
) -> list[str]:
    """
    Split text on commas that are not nested inside any bracket.

    Segments are trimmed. Empty segments between commas are kept so callers
    can decide what to drop; a blank trailing segment is not emitted.
    """
    result: list[str] = []
    depth = 0
    start = 0

    for i, c in enumerate(text):
        if c in openers:
            depth += 1
        elif c in closers:
            depth -= 1
        elif c == "," and depth == 0:
            result.append(text[start:i].strip())
            start = i + 1

    last = text[start:].strip()
    if last:
        result.append(last)

    return result
