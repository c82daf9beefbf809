from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class CollectErrorType(Enum):
    """Classification of a failed directory listing or file transfer."""

    NONE = "none"
    UNAUTHORIZED = "unauthorized"
    NOT_SUPPORTED = "not_supported"
    NOT_FOUND = "not_found"
    PATH_TOO_LONG = "path_too_long"
    IO = "io"
    UNKNOWN = "unknown"


class CollectOperation(Enum):
    """How files reach the destination directory."""

    COPY = "copy"
    MOVE = "move"


@dataclass
class CollectResultBase:
    """Fields shared by directory and file results."""

    path: str
    is_succeeded: bool = False
    error_type: CollectErrorType = CollectErrorType.NONE
    error_message: str | None = None

    def fail(self, error_type: CollectErrorType, message: str) -> None:
        self.is_succeeded = False
        self.error_type = error_type
        self.error_message = message

    def to_dict(self) -> dict[str, Any]:
        return {
            "PATH": self.path,
            "IS_SUCCEEDED": self.is_succeeded,
            "ERROR_TYPE": self.error_type.value,
            "ERROR_MESSAGE": self.error_message,
        }


@dataclass
class FileCollectResult(CollectResultBase):
    """Outcome of one attempted copy or move."""

    new_file_path: str | None = None
    is_renamed: bool = False

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["NEW_FILE_PATH"] = self.new_file_path
        d["IS_RENAMED"] = self.is_renamed
        return d


@dataclass
class CollectResult(CollectResultBase):
    """Outcome of visiting one directory.

    ``is_succeeded`` only reflects the file-listing step; per-file outcomes
    live in ``file_collect_results``.
    """

    file_collect_results: list[FileCollectResult] = field(default_factory=list)
    has_sub_directories: bool = False

    @property
    def processed_file_count(self) -> int:
        return len(self.file_collect_results)

    @property
    def succeeded_count(self) -> int:
        return sum(1 for r in self.file_collect_results if r.is_succeeded)

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["HAS_SUB_DIRECTORIES"] = self.has_sub_directories
        d["PROCESSED_FILE_COUNT"] = self.processed_file_count
        d["SUCCEEDED_COUNT"] = self.succeeded_count
        d["FILES"] = [r.to_dict() for r in self.file_collect_results]
        return d


@dataclass
class CollectSummary:
    """Totals over the directory results of one collection run."""

    directories: int = 0
    failed_directories: int = 0
    files_processed: int = 0
    files_succeeded: int = 0
    files_failed: int = 0
    files_renamed: int = 0

    @property
    def ok(self) -> bool:
        return self.failed_directories == 0 and self.files_failed == 0


def summarize(results: list[CollectResult]) -> CollectSummary:
    summary = CollectSummary(directories=len(results))
    for r in results:
        if not r.is_succeeded:
            summary.failed_directories += 1
        summary.files_processed += r.processed_file_count
        summary.files_succeeded += r.succeeded_count
        summary.files_renamed += sum(1 for f in r.file_collect_results if f.is_renamed)
    summary.files_failed = summary.files_processed - summary.files_succeeded
    return summary


@dataclass
class RunResult:
    """Outcome of a ``run_collection()`` invocation."""

    results: list[CollectResult]
    summary: CollectSummary
    report_path: Path | None = None
