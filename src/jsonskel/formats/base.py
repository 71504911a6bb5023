"""
Base source format interface and registry.

Each format knows how to find type declarations in the raw text of one kind
of source file. The registry maps file extensions to formats.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..dom import TypeDeclaration


class SourceFormat(ABC):
    """Base class for source language handlers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name."""
        ...

    @property
    @abstractmethod
    def extensions(self) -> list[str]:
        """File extensions this format handles (e.g., ['.java'])."""
        ...

    @abstractmethod
    def parse(
        self,
        content: str,
        location: str | None = None,
        editable: bool = True,
    ) -> list[TypeDeclaration]:
        """
        Find every type declaration in content, member types included.

        Member types are returned with nested=True after their enclosing type.
        """
        ...


class FormatRegistry:
    """Registry of source formats keyed by file extension."""

    def __init__(self):
        self._by_extension: dict[str, SourceFormat] = {}

    def register(self, source_format: SourceFormat) -> None:
        """Register a source format; an extension already claimed keeps its format."""
        for ext in source_format.extensions:
            self._by_extension.setdefault(ext.lower(), source_format)

    def detect(self, filename: str | None) -> SourceFormat | None:
        """Pick the format for a file name by its extension, case-insensitively."""
        if not filename or "." not in filename:
            return None
        return self._by_extension.get("." + filename.rsplit(".", 1)[-1].lower())


# Global registry instance
registry = FormatRegistry()
