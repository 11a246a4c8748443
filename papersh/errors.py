"""Exception types raised by papersh.

Every error a user can trigger from the prompt derives from
``PaperShellError``; the REPL reports those and keeps running.
"""

from pathlib import Path


class PaperShellError(Exception):
    """Base class for user-facing papersh errors."""


class ExitRequested(Exception):
    """Raised by the ``exit`` command to leave the REPL."""


# ---------------------------------------------------------------------------
# Startup / shutdown
# ---------------------------------------------------------------------------

class ConfigError(PaperShellError):
    """Configuration file could not be read or failed validation."""


class StateLoadError(PaperShellError):
    """Paper metadata could not be read or decoded at startup."""

    def __init__(self, path: Path, reason: Exception):
        super().__init__(f"Failed to load paper metadata from '{path}': {reason}")
        self.path = path
        self.reason = reason


class StateStoreError(PaperShellError):
    """Paper metadata could not be written at shutdown."""

    def __init__(self, path: Path, reason: Exception):
        super().__init__(f"Failed to store paper metadata to '{path}': {reason}")
        self.path = path
        self.reason = reason


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

class ParseError(PaperShellError):
    """Malformed command line (pipe placement)."""


class InvalidCommand(PaperShellError):
    """A command chain is shaped incorrectly."""

    def __init__(self, message: str):
        super().__init__(f"Invalid command: {message}")


class UnknownCommand(PaperShellError):
    def __init__(self, name: str):
        super().__init__(f"Unknown command: '{name}'")
        self.name = name


class ConfirmationDeclined(PaperShellError):
    """The user declined (or garbled) an interactive confirmation."""

    def __init__(self, message: str = "Aborted."):
        super().__init__(message)


# ---------------------------------------------------------------------------
# Filters and papers
# ---------------------------------------------------------------------------

class FilterBuildFailed(PaperShellError):
    def __init__(self, pattern: str, reason: Exception):
        super().__init__(f"Failed to build filter from regex '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class PaperDuplicateField(PaperShellError):
    def __init__(self, keyword: str):
        super().__init__(f"Duplicate paper field keyword specified: '{keyword}'")
        self.keyword = keyword


class PaperMissingFields(PaperShellError):
    def __init__(self, missing: list[str]):
        super().__init__(f"Required paper fields not given: {', '.join(missing)}")
        self.missing = missing


class PathDoesNotExist(PaperShellError):
    def __init__(self, path: Path):
        super().__init__(f"Specified file path does not exist: '{path}'")
        self.path = path


class NoPapersGiven(PaperShellError):
    def __init__(self) -> None:
        super().__init__("No papers given through pipe.")


class NoteError(PaperShellError):
    """A note file could not be created, read, or rendered."""

    def __init__(self, path: Path, reason: Exception):
        super().__init__(f"Failed to access note '{path}': {reason}")
        self.path = path
        self.reason = reason


# ---------------------------------------------------------------------------
# man
# ---------------------------------------------------------------------------

class ManInvalidArgument(PaperShellError):
    def __init__(self) -> None:
        super().__init__("`man` accepts at most one argument.")


class ManUnknownSubject(PaperShellError):
    def __init__(self, subject: str):
        super().__init__(f"Unknown subject: '{subject}'")
        self.subject = subject


# ---------------------------------------------------------------------------
# curl
# ---------------------------------------------------------------------------

class CurlError(PaperShellError):
    """Base class for failures while importing a paper from the web."""


class CurlNoSource(CurlError):
    def __init__(self) -> None:
        super().__init__("`curl` accepts exactly one argument as source.")


class CurlUnknownSource(CurlError):
    def __init__(self, url: str):
        super().__init__(f"Unknown source: '{url}'")


class CurlInvalidSourceUrl(CurlError):
    def __init__(self, url: str):
        super().__init__(f"Invalid source: '{url}'. Refer to `man curl`.")


class CurlFetchFailed(CurlError):
    def __init__(self, url: str, reason: Exception):
        super().__init__(f"Failed to fetch from url '{url}': {reason}")
        self.reason = reason


class CurlCannotFindTitle(CurlError):
    def __init__(self, detail: str):
        super().__init__(f"Failed to parse title. {detail}")


class CurlCannotFindAuthor(CurlError):
    def __init__(self, detail: str):
        super().__init__(f"Failed to parse author list. {detail}")


class CurlFileExists(CurlError):
    def __init__(self, path: Path):
        super().__init__(f"Paper file already exists: '{path}'")
        self.path = path
