"""
Command entry point: turn the active document's first eligible type into a
JSON skeleton and hand it to the clipboard.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .catalog import TypeCatalog
from .clipboard import Clipboard, Diagnostics
from .config import Config, get_config
from .core import GenerationContext, find_creator, generate_skeleton
from .dom import DeclarationKind, SourceDocument, TypeDeclaration
from .exceptions import DocumentError, JsonSkelError
from .formats import java as _java  # noqa: F401 - ensure java format is registered
from .formats.base import registry

log = logging.getLogger(__name__)


def system_now() -> datetime:
    """Current local time with the system zone attached."""
    return datetime.now().astimezone()


def load_document(path: str | Path, editable: bool = True) -> SourceDocument:
    """Read a source file and find its declarations."""
    path = Path(path)
    source_format = registry.detect(path.name)
    if source_format is None:
        raise DocumentError(f"Unsupported file type: {path.name}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DocumentError(f"{path} is not valid UTF-8: {e}") from e
    declarations = source_format.parse(text, str(path), editable=editable)
    return SourceDocument(path=str(path), text=text, declarations=tuple(declarations))


def select_target(types: list[TypeDeclaration], marker: str) -> TypeDeclaration | None:
    """
    Pick the type to generate for.

    The first record wins; failing that, the first class with a
    marker-attributed constructor.
    """
    for declaration in types:
        if declaration.kind is DeclarationKind.PRODUCT:
            return declaration
    for declaration in types:
        if (declaration.kind is DeclarationKind.CONSTRUCTED
                and find_creator(declaration.constructors, marker) is not None):
            return declaration
    return None


class SkeletonCommand:
    """The 'copy as JSON' command bound to one catalog and output pair."""

    def __init__(
        self,
        catalog: TypeCatalog,
        clipboard: Clipboard,
        diagnostics: Diagnostics,
        config: Config | None = None,
        clock: Callable[[], datetime] = system_now,
    ):
        self._catalog = catalog
        self._clipboard = clipboard
        self._diagnostics = diagnostics
        self._config = config if config is not None else get_config()
        self._clock = clock

    def new_context(self, root: str) -> GenerationContext:
        """Context for generating `root`, with the timestamp captured now."""
        out = self._config.output
        return GenerationContext(
            catalog=self._catalog,
            captured=self._clock(),
            indent=out.indent,
            marker=self._config.parser.marker,
            external_placeholder=out.external_placeholder,
            recursion_placeholder=out.recursion_placeholder,
            max_depth=out.max_depth,
            path=(root,),
        )

    def generate(self, document: SourceDocument) -> str | None:
        """Skeleton for the document's eligible type, or None if there is none."""
        target = select_target(document.top_level_types, self._config.parser.marker)
        if target is None:
            log.debug("No eligible type in %s", document.path)
            return None
        log.debug("Generating skeleton for %s", target.name)
        return generate_skeleton(target, self.new_context(target.name))

    def run(self, document: SourceDocument) -> str | None:
        """
        Generate and deliver the skeleton.

        Returns the delivered text, or None when nothing was delivered (no
        eligible type, or a failure that was reported to diagnostics).
        """
        try:
            text = self.generate(document)
            if text is None:
                return None
            self._clipboard.set_contents(text)
        except JsonSkelError as e:
            self._diagnostics.error("Error processing record", str(e))
            return None
        log.info("Delivered skeleton (%d chars)", len(text))
        return text

    def is_enabled(self, document: SourceDocument | None) -> bool:
        """True when the document has at least one editable top-level type."""
        if document is None:
            return False
        return any(d.editable for d in document.top_level_types)


def is_available(path: str | Path, editable: bool = True) -> bool:
    """Availability check for a file; unreadable or unparsable means False."""
    try:
        document = load_document(path, editable=editable)
    except JsonSkelError as e:
        log.debug("Treating %s as unavailable: %s", path, e)
        return False
    return any(d.editable for d in document.top_level_types)
