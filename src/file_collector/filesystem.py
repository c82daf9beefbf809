"""Filesystem capability consumed by the collector.

The collector only talks to a :class:`FileSystem`; tests substitute an
in-memory fake or a mock.
"""
from __future__ import annotations

import os
import shutil
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Synchronous filesystem primitives. Every method may raise ``OSError``."""

    def directory_exists(self, path: str) -> bool:
        ...

    def create_directory(self, path: str) -> None:
        """Create *path* and any missing parents."""
        ...

    def get_files(self, path: str) -> list[str]:
        """Full paths of the files directly inside *path*."""
        ...

    def get_directories(self, path: str) -> list[str]:
        """Full paths of the subdirectories directly inside *path*."""
        ...

    def copy_file(self, source: str, destination: str, overwrite: bool) -> None:
        """Raise ``IsADirectoryError`` if *destination* is a directory."""
        ...

    def move_file(self, source: str, destination: str) -> None:
        ...

    def file_exists(self, path: str) -> bool:
        ...

    def delete_file(self, path: str) -> None:
        ...


class LocalFileSystem:
    """:class:`FileSystem` backed by ``os`` and ``shutil``.

    Listings are sorted by entry name so collection runs are repeatable.
    """

    def directory_exists(self, path: str) -> bool:
        return os.path.isdir(path)

    def create_directory(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def _entries(self, path: str, want_dirs: bool) -> list[str]:
        with os.scandir(path) as it:
            names = [
                e.name for e in it
                if (e.is_dir(follow_symlinks=False) if want_dirs else e.is_file())
            ]
        return [os.path.join(path, n) for n in sorted(names)]

    def get_files(self, path: str) -> list[str]:
        return self._entries(path, want_dirs=False)

    def get_directories(self, path: str) -> list[str]:
        return self._entries(path, want_dirs=True)

    def copy_file(self, source: str, destination: str, overwrite: bool) -> None:
        # shutil would copy *into* an existing directory instead of failing
        if os.path.isdir(destination):
            raise IsADirectoryError(f"The target file '{destination}' is a directory, not a file.")
        if not overwrite and os.path.exists(destination):
            raise FileExistsError(f"The file '{destination}' already exists.")
        shutil.copy2(source, destination)

    def move_file(self, source: str, destination: str) -> None:
        if os.path.exists(destination):
            raise FileExistsError(f"The file '{destination}' already exists.")
        if not os.path.isfile(source):
            raise FileNotFoundError(f"Could not find file '{source}'.")
        shutil.move(source, destination)

    def file_exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def delete_file(self, path: str) -> None:
        os.remove(path)
