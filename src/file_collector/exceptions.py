from __future__ import annotations


class FileCollectorError(Exception):
    """Base exception for file-collector."""


class ConfigError(FileCollectorError):
    """Invalid or inconsistent configuration."""


class InvalidPathError(FileCollectorError, ValueError):
    """A source or destination path string failed validation."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(message)


class NullPathError(InvalidPathError):
    """Path is ``None``."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"{name} is null.")


class EmptyPathError(InvalidPathError):
    """Path is empty or consists only of white-space characters."""

    def __init__(self, name: str) -> None:
        super().__init__(
            name, f"{name} is empty or consists only of white-space characters."
        )


class InvalidPathCharsError(InvalidPathError):
    """Path contains characters that are invalid on this platform."""

    def __init__(self, name: str, chars: str = "") -> None:
        self.chars = chars
        super().__init__(name, f"{name} contains invalid character(s): {chars!r}")


class SourceNotFoundError(FileCollectorError, FileNotFoundError):
    """The source root directory does not exist. Fatal for the whole run."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"The directory {path} is not found.")


class PathTooLongError(OSError):
    """A path exceeds the platform limit.

    Raised by file systems that detect the condition themselves instead of
    reporting ``errno.ENAMETOOLONG``.
    """
