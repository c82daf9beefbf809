"""Gather the files of a directory tree into one flat directory."""
from __future__ import annotations

from .collector import Collector, classify_error
from .config import Settings, load_settings
from .exceptions import (
    ConfigError,
    EmptyPathError,
    FileCollectorError,
    InvalidPathCharsError,
    InvalidPathError,
    NullPathError,
    PathTooLongError,
    SourceNotFoundError,
)
from .filesystem import FileSystem, LocalFileSystem
from .models import (
    CollectErrorType,
    CollectOperation,
    CollectResult,
    CollectResultBase,
    CollectSummary,
    FileCollectResult,
    RunResult,
    summarize,
)
from .run import run_collection

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Collector",
    "classify_error",
    "run_collection",
    "Settings",
    "load_settings",
    "FileSystem",
    "LocalFileSystem",
    "CollectErrorType",
    "CollectOperation",
    "CollectResultBase",
    "CollectResult",
    "FileCollectResult",
    "CollectSummary",
    "RunResult",
    "summarize",
    "FileCollectorError",
    "ConfigError",
    "InvalidPathError",
    "NullPathError",
    "EmptyPathError",
    "InvalidPathCharsError",
    "SourceNotFoundError",
    "PathTooLongError",
]
