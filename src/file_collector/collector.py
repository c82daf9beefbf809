"""Depth-first collection of a directory tree into one flat directory."""
from __future__ import annotations

import errno
import io
import logging
import os
from typing import TYPE_CHECKING, Iterable

from .exceptions import PathTooLongError
from .filesystem import FileSystem, LocalFileSystem
from .models import (
    CollectErrorType,
    CollectOperation,
    CollectResult,
    CollectResultBase,
    FileCollectResult,
)
from .preflight.checks import check_path, check_source_root

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)


def classify_error(exc: BaseException) -> CollectErrorType:
    """Map a caught failure to a :class:`CollectErrorType`.

    Order matters: most ``OSError`` subclasses would otherwise land on ``IO``.
    """
    if isinstance(exc, PermissionError):
        return CollectErrorType.UNAUTHORIZED
    if isinstance(exc, (NotImplementedError, io.UnsupportedOperation)):
        return CollectErrorType.NOT_SUPPORTED
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return CollectErrorType.NOT_FOUND
    if isinstance(exc, PathTooLongError) or (
        isinstance(exc, OSError) and exc.errno == errno.ENAMETOOLONG
    ):
        return CollectErrorType.PATH_TOO_LONG
    if isinstance(exc, OSError):
        return CollectErrorType.IO
    return CollectErrorType.UNKNOWN


def _record_failure(result: CollectResultBase, exc: Exception) -> None:
    result.fail(classify_error(exc), str(exc) or type(exc).__name__)


def _failure_fields(result: CollectResultBase) -> dict[str, str]:
    return {"COLLECT_PATH": result.path, "ERROR_TYPE": result.error_type.value}


def renamed(file_name: str, index: int) -> str:
    """``report.txt`` -> ``report_(2).txt`` for *index* 2."""
    stem, ext = os.path.splitext(file_name)
    return f"{stem}_({index}){ext}"


class Collector:
    """Collects every file under ``source_root_path`` into ``destination_directory_path``.

    Files with the same name (compared case-insensitively) anywhere in the tree
    are disambiguated with a ``_(n)`` suffix. Failures listing a directory or
    transferring a file are recorded on the returned results instead of raised.

    Not safe for concurrent ``collect_files()`` calls on one instance.
    """

    def __init__(
        self,
        source_root_path: str | None,
        destination_directory_path: str | None,
        overwrite: bool = False,
        collect_operation: CollectOperation = CollectOperation.COPY,
        extensions_to_ignore: Iterable[str] | None = None,
        file_system: FileSystem | None = None,
    ) -> None:
        self.source_root_path = source_root_path
        self.destination_directory_path = destination_directory_path
        self.overwrite = overwrite
        self.collect_operation = collect_operation
        if isinstance(extensions_to_ignore, str):
            extensions_to_ignore = [extensions_to_ignore]
        self.extensions_to_ignore = list(extensions_to_ignore or [])
        self.file_system: FileSystem = file_system or LocalFileSystem()

    @classmethod
    def from_settings(cls, cfg: Settings, file_system: FileSystem | None = None) -> Collector:
        return cls(
            cfg.SOURCE_ROOT_PATH,
            cfg.DESTINATION_DIRECTORY_PATH,
            overwrite=cfg.OVERWRITE,
            collect_operation=CollectOperation(cfg.COLLECT_OPERATION),
            extensions_to_ignore=cfg.EXTENSIONS_TO_IGNORE,
            file_system=file_system,
        )

    def collect_files(self) -> list[CollectResult]:
        """Copy or move every file of the source tree into the destination.

        Raises :class:`~file_collector.exceptions.InvalidPathError` subclasses or
        :class:`~file_collector.exceptions.SourceNotFoundError` before touching
        anything. Returns one :class:`CollectResult` per visited directory,
        sorted by path.
        """
        fs = self.file_system
        source = check_source_root(self.source_root_path, fs)
        destination = check_path(self.destination_directory_path, "destination_directory_path")

        logger.info(
            "Collecting %s -> %s (%s, overwrite=%s)",
            source, destination, self.collect_operation.value, self.overwrite,
        )

        if not fs.directory_exists(destination):
            logger.info("Creating destination directory %s", destination)
            fs.create_directory(destination)

        results: list[CollectResult] = []
        processed_names: dict[str, int] = {}
        # depth-first, pre-order: a directory is fully handled before its first child
        pending = [source]
        while pending:
            collect_result, subdirectories = self._collect_directory(
                pending.pop(), destination, processed_names,
            )
            results.append(collect_result)
            pending.extend(reversed(subdirectories))
        results.sort(key=lambda r: r.path)

        logger.info(
            "Collection finished: %d directories, %d files, %d succeeded",
            len(results),
            sum(r.processed_file_count for r in results),
            sum(r.succeeded_count for r in results),
        )
        return results

    def _collect_directory(
        self, directory: str, destination: str, processed_names: dict[str, int],
    ) -> tuple[CollectResult, list[str]]:
        """Transfer the files of *directory*; return its result and the subdirectories to visit."""
        collect_result = CollectResult(directory)
        subdirectories: list[str] = []

        for file_path in self._get_file_paths(directory, collect_result):
            collect_result.file_collect_results.append(
                self._transfer_file(file_path, destination, processed_names)
            )

        if collect_result.is_succeeded:
            try:
                subdirectories = self.file_system.get_directories(directory)
            except Exception as exc:
                _record_failure(collect_result, exc)
                logger.warning(
                    "Cannot list subdirectories of %s [%s]: %s",
                    directory, collect_result.error_type.value, collect_result.error_message,
                    extra=_failure_fields(collect_result),
                )
                subdirectories = []
            collect_result.has_sub_directories = len(subdirectories) > 0

        return collect_result, subdirectories

    def _get_file_paths(self, directory: str, collect_result: CollectResult) -> list[str]:
        try:
            file_paths = self.file_system.get_files(directory)
        except Exception as exc:
            _record_failure(collect_result, exc)
            logger.warning(
                "Cannot list files in %s [%s]: %s",
                directory, collect_result.error_type.value, collect_result.error_message,
                extra=_failure_fields(collect_result),
            )
            return []

        collect_result.is_succeeded = True
        if self.extensions_to_ignore:
            ignored = tuple(e.lower() for e in self.extensions_to_ignore)
            file_paths = [p for p in file_paths if not p.lower().endswith(ignored)]
        return file_paths

    def _transfer_file(
        self, file_path: str, destination: str, processed_names: dict[str, int],
    ) -> FileCollectResult:
        result = FileCollectResult(file_path)
        file_name = os.path.basename(file_path)
        key = file_name.lower()

        if key in processed_names:
            processed_names[key] += 1
            file_name = renamed(file_name, processed_names[key])
            result.is_renamed = True
            logger.debug("Renaming duplicate %s to %s", file_path, file_name)
        else:
            processed_names[key] = 0

        destination_file_path = os.path.join(destination, file_name)
        result.new_file_path = destination_file_path

        fs = self.file_system
        try:
            if self.collect_operation is CollectOperation.MOVE:
                if self.overwrite and fs.file_exists(destination_file_path):
                    fs.delete_file(destination_file_path)
                fs.move_file(file_path, destination_file_path)
            else:
                fs.copy_file(file_path, destination_file_path, self.overwrite)
        except Exception as exc:
            _record_failure(result, exc)
            logger.warning(
                "Cannot %s %s [%s]: %s",
                self.collect_operation.value, file_path,
                result.error_type.value, result.error_message,
                extra=_failure_fields(result),
            )
            return result

        result.is_succeeded = True
        logger.debug("%s %s -> %s", self.collect_operation.value, file_path, destination_file_path)
        return result
