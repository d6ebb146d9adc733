"""
Exception hierarchy for interface generation.

Configuration problems abort a run before any file is read; everything else
is raised per file so the driver can report it and move on.
"""

from pathlib import Path


class GenInterfaceError(Exception):
    """Base class for all generator errors."""


class ConfigError(GenInterfaceError):
    """Invalid struct name pattern, prefix or configuration file."""


class SourceParseError(GenInterfaceError):
    """A Go source file could not be parsed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"failed to parse {path}: {reason}")


class FormatError(GenInterfaceError):
    """Rendered source was rejected by the canonical formatter.

    The offending text is kept on the exception so it can be shown next to
    the formatter's complaint.
    """

    def __init__(self, message: str, source: str) -> None:
        self.source = source
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.args[0]}\n{self.source}"


class OutputWriteError(GenInterfaceError):
    """Creating the destination directory or writing the file failed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"failed to write {path}: {reason}")


class DuplicateTargetError(GenInterfaceError):
    """Two interfaces in one run would be written to the same file."""

    def __init__(self, path: Path | str, owner: Path | str, source: Path | str) -> None:
        self.path = Path(path)
        self.owner = Path(owner)
        super().__init__(f"target {path} for {source} is already generated from {owner}")
