"""
Project type catalog.

Answers "which declarations carry this simple name?" for nested type
resolution. ProjectCatalog indexes source directories on first use: files
under source roots are editable project code, files under library roots are
external and never expanded.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Protocol

from .config import get_config
from .dom import TypeDeclaration
from .exceptions import CatalogLookupError
from .formats import java as _java  # noqa: F401 - ensure java format is registered
from .formats.base import registry

log = logging.getLogger(__name__)

BUILD_MARKERS = (
    "pom.xml",
    "build.gradle",
    "build.gradle.kts",
    "settings.gradle",
    "settings.gradle.kts",
    ".git",
)


class TypeCatalog(Protocol):
    """Name-based lookup of type declarations across a project."""

    def find_declaration(self, simple_name: str) -> list[TypeDeclaration]:
        """Exact, case-sensitive lookup; empty list when nothing matches."""
        ...


class StaticCatalog:
    """Catalog over an already known set of declarations."""

    def __init__(self, declarations: Iterable[TypeDeclaration] = ()):
        self._by_name: dict[str, list[TypeDeclaration]] = {}
        for declaration in declarations:
            self.add(declaration)

    def add(self, declaration: TypeDeclaration) -> None:
        self._by_name.setdefault(declaration.name, []).append(declaration)

    def find_declaration(self, simple_name: str) -> list[TypeDeclaration]:
        return list(self._by_name.get(simple_name, []))

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_name.values())


class ProjectCatalog:
    """Catalog built by scanning source and library directories."""

    def __init__(
        self,
        source_roots: Iterable[str | Path],
        library_roots: Iterable[str | Path] = (),
        extensions: Iterable[str] | None = None,
        skip_patterns: Iterable[str] | None = None,
    ):
        """
        Args:
            source_roots: Directories holding editable project sources
            library_roots: Directories holding external (read-only) sources
            extensions: File extensions to index (default from config)
            skip_patterns: Directory name patterns to skip (default from config)
        """
        cfg = get_config().catalog
        self._source_roots = [Path(p) for p in source_roots]
        self._library_roots = [Path(p) for p in library_roots]
        self._extensions = frozenset(
            e.lower() for e in (extensions if extensions is not None else cfg.extensions)
        )
        self._skip_patterns = tuple(skip_patterns if skip_patterns is not None else cfg.skip_patterns)
        self._index: StaticCatalog | None = None

    def find_declaration(self, simple_name: str) -> list[TypeDeclaration]:
        if self._index is None:
            self._index = self._build_index()
        return self._index.find_declaration(simple_name)

    def refresh(self) -> None:
        """Drop the index; the next lookup rescans the roots."""
        self._index = None

    def _build_index(self) -> StaticCatalog:
        index = StaticCatalog()
        for root in self._source_roots:
            self._index_root(index, root, editable=True)
        for root in self._library_roots:
            self._index_root(index, root, editable=False)
        log.info("Indexed %d declarations", len(index))
        return index

    def _index_root(self, index: StaticCatalog, root: Path, editable: bool) -> None:
        if not root.exists():
            raise CatalogLookupError(f"Catalog root does not exist: {root}")

        for path in self._iter_sources(root):
            source_format = registry.detect(path.name)
            if source_format is None:
                continue
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise CatalogLookupError(f"Cannot read {path}: {e}") from e
            log.debug("Indexing %s as %s", path, source_format.name)
            for declaration in source_format.parse(content, str(path), editable=editable):
                index.add(declaration)

    def _iter_sources(self, root: Path) -> Iterator[Path]:
        """Yield indexable files under root in a stable order."""
        if root.is_file():
            yield root
            return
        try:
            entries = sorted(root.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise CatalogLookupError(f"Cannot list {root}: {e}") from e

        for entry in entries:
            if entry.is_dir():
                if self._should_skip(entry.name):
                    continue
                yield from self._iter_sources(entry)
            elif entry.suffix.lower() in self._extensions:
                yield entry

    def _should_skip(self, name: str) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in self._skip_patterns)


def find_project_root(path: str | Path) -> Path:
    """Nearest ancestor directory holding a build marker, else the file's directory."""
    start = Path(path).resolve()
    if start.is_file():
        start = start.parent
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in BUILD_MARKERS):
            return candidate
    return start
