"""
CLI interface for jsonskel.

Generates a default-valued JSON skeleton for the first record (or
@JsonCreator class) in a Java file and prints it or copies it to the
clipboard.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .catalog import ProjectCatalog, find_project_root
from .clipboard import StderrDiagnostics, StreamClipboard, SystemClipboard
from .config import get_config, parse_indent, parse_max_depth
from .exceptions import JsonSkelError
from .handler import SkeletonCommand, is_available, load_document

log = logging.getLogger(__name__)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr; -v for INFO, -vv for DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="jsonskel",
        description="Generate a default-valued JSON skeleton from a Java record or @JsonCreator class",
    )

    parser.add_argument(
        "file",
        help="Java source file holding the type",
    )

    parser.add_argument(
        "--project",
        "-p",
        type=str,
        help="Project directory to resolve nested types in (default: nearest build root)",
    )

    parser.add_argument(
        "--library",
        "-l",
        action="append",
        default=[],
        help="Directory of external sources; its types render as placeholders (repeatable)",
    )

    parser.add_argument(
        "--copy",
        "-c",
        action="store_true",
        help="Copy the skeleton to the system clipboard instead of printing it",
    )

    parser.add_argument(
        "--marker",
        type=str,
        help="Annotation marking the canonical constructor (default: JsonCreator)",
    )

    parser.add_argument(
        "--indent",
        type=str,
        help="Indent unit: 'tab' or a number of spaces",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        help="Nesting level at which nested types stop being expanded",
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Only report whether the file has a type to generate for",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug)",
    )

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)

    cfg = get_config()
    if parsed.marker:
        cfg.parser.marker = parsed.marker
    if parsed.indent:
        cfg.output.indent = parse_indent(parsed.indent)
    if parsed.max_depth is not None:
        try:
            cfg.output.max_depth = parse_max_depth(parsed.max_depth)
        except ValueError as e:
            print(f"Error: --max-depth: {e}", file=sys.stderr)
            return 1

    path = Path(parsed.file)
    if not path.is_file():
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1

    if parsed.check:
        available = is_available(path)
        print("available" if available else "unavailable")
        return 0 if available else 1

    try:
        document = load_document(path)
    except JsonSkelError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    project = Path(parsed.project) if parsed.project else find_project_root(path)
    log.info("Resolving nested types under %s", project)
    catalog = ProjectCatalog([project], library_roots=parsed.library)

    clipboard = SystemClipboard(cfg.clipboard.command) if parsed.copy else StreamClipboard()
    diagnostics = StderrDiagnostics()
    command = SkeletonCommand(catalog, clipboard, diagnostics, config=cfg)

    command.run(document)
    return 1 if diagnostics.reported else 0


if __name__ == "__main__":
    sys.exit(main())
