"""
Output collaborators: where a finished skeleton goes, and where failures are
reported.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import sys
from typing import Protocol, TextIO

from .exceptions import ClipboardError

log = logging.getLogger(__name__)

# Tried in order when no clipboard command is configured
CLIPBOARD_COMMANDS = (
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
)


class Clipboard(Protocol):
    def set_contents(self, text: str) -> None:
        """Replace the clipboard contents with text."""
        ...


class Diagnostics(Protocol):
    def error(self, title: str, message: str) -> None:
        """Report a failure that aborted the current generation."""
        ...


class StreamClipboard:
    """Writes the payload to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    def set_contents(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text + "\n")
        stream.flush()


class SystemClipboard:
    """Pipes the payload into a clipboard command."""

    def __init__(self, command: str | list[str] | None = None):
        if isinstance(command, str):
            command = shlex.split(command)
        self._command = command

    def resolve_command(self) -> list[str]:
        """The configured command, or the first available known one."""
        if self._command:
            return list(self._command)
        for candidate in CLIPBOARD_COMMANDS:
            if shutil.which(candidate[0]):
                return list(candidate)
        raise ClipboardError("No clipboard command found (tried pbcopy, wl-copy, xclip, xsel, clip)")

    def set_contents(self, text: str) -> None:
        command = self.resolve_command()
        log.debug("Copying %d chars with %s", len(text), command[0])
        try:
            subprocess.run(command, input=text, text=True, check=True, capture_output=True)
        except FileNotFoundError as e:
            raise ClipboardError(f"Clipboard command not found: {command[0]}") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise ClipboardError(f"Clipboard command failed: {detail}") from e


class StderrDiagnostics:
    """Prints failures to stderr and counts them in `reported`."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream
        self.reported = 0

    def error(self, title: str, message: str) -> None:
        self.reported += 1
        log.error("%s: %s", title, message)
        stream = self._stream if self._stream is not None else sys.stderr
        print(f"Error: {title}: {message}", file=stream)
