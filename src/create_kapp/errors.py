"""Error taxonomy for the scaffolding workflow.

Prompt validation failures never surface as exceptions; they are retried
inside the prompt loop. Everything here is fatal for a run and is reported
by the CLI entry point with a non-zero exit code.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for all fatal create-kapp errors."""


class TerminalInitError(ScaffoldError):
    """The terminal could not be prepared for styled output."""


class PathError(ScaffoldError):
    """The target directory could not be created or canonicalized."""


class DownloadError(ScaffoldError):
    """The template archive could not be retrieved."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ArchiveError(ScaffoldError):
    """The downloaded payload is not a readable zip archive."""


class ExtractionError(ScaffoldError):
    """An archive entry could not be written to disk."""
