from __future__ import annotations

import posixpath

import pytest

SOURCE = "/source"
DESTINATION = "/destination"


class InMemoryFileSystem:
    """Dictionary-backed FileSystem fake.

    Listings come back in insertion order. ``fail(method, path, exc)`` makes
    the named method raise *exc* when called with *path* as first argument.
    """

    def __init__(self) -> None:
        self.directories: list[str] = []
        self.files: dict[str, str] = {}
        self.calls: list[tuple] = []
        self._failures: dict[tuple[str, str], BaseException] = {}

    # --- scripting helpers ---

    def add_dir(self, path: str) -> InMemoryFileSystem:
        parts = path.strip("/").split("/")
        for i in range(1, len(parts) + 1):
            p = "/" + "/".join(parts[:i])
            if p not in self.directories:
                self.directories.append(p)
        return self

    def add_file(self, path: str, content: str = "") -> InMemoryFileSystem:
        self.add_dir(posixpath.dirname(path))
        self.files[path] = content
        return self

    def fail(self, method: str, path: str, exc: BaseException) -> InMemoryFileSystem:
        self._failures[(method, path)] = exc
        return self

    def _check(self, method: str, path: str, *rest) -> None:
        self.calls.append((method, path, *rest))
        exc = self._failures.get((method, path))
        if exc is not None:
            raise exc

    def called(self, method: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == method]

    # --- FileSystem ---

    def directory_exists(self, path: str) -> bool:
        self._check("directory_exists", path)
        return path in self.directories

    def create_directory(self, path: str) -> None:
        self._check("create_directory", path)
        self.add_dir(path)

    def get_files(self, path: str) -> list[str]:
        self._check("get_files", path)
        if path not in self.directories:
            raise FileNotFoundError(f"Could not find a part of the path '{path}'.")
        return [f for f in self.files if posixpath.dirname(f) == path]

    def get_directories(self, path: str) -> list[str]:
        self._check("get_directories", path)
        return [d for d in self.directories if d != "/" and posixpath.dirname(d) == path]

    def copy_file(self, source: str, destination: str, overwrite: bool) -> None:
        self._check("copy_file", source, destination, overwrite)
        if source not in self.files:
            raise FileNotFoundError(f"Could not find file '{source}'.")
        if destination in self.files and not overwrite:
            raise FileExistsError(f"The file '{destination}' already exists.")
        self.files[destination] = self.files[source]

    def move_file(self, source: str, destination: str) -> None:
        self._check("move_file", source, destination)
        if source not in self.files:
            raise FileNotFoundError(f"Could not find file '{source}'.")
        if destination in self.files:
            raise FileExistsError(f"The file '{destination}' already exists.")
        self.files[destination] = self.files.pop(source)

    def file_exists(self, path: str) -> bool:
        self._check("file_exists", path)
        return path in self.files

    def delete_file(self, path: str) -> None:
        self._check("delete_file", path)
        self.files.pop(path, None)


@pytest.fixture
def fs() -> InMemoryFileSystem:
    return InMemoryFileSystem().add_dir(SOURCE)


@pytest.fixture
def tree(fs: InMemoryFileSystem) -> InMemoryFileSystem:
    """/source with duplicate.txt at three depths plus a .jpg and an empty sibling dir."""
    fs.add_file(f"{SOURCE}/duplicate.txt", "root")
    fs.add_file(f"{SOURCE}/secondfile.jpg", "jpg")
    fs.add_file(f"{SOURCE}/firstsubdir/duplicate.txt", "sub")
    fs.add_file(f"{SOURCE}/firstsubdir/firstsubsubdir/duplicate.txt", "subsub")
    fs.add_dir(f"{SOURCE}/secondsubdir")
    return fs
