from __future__ import annotations

import logging
import os

from ..exceptions import (
    EmptyPathError,
    InvalidPathCharsError,
    NullPathError,
    SourceNotFoundError,
)
from ..filesystem import FileSystem

logger = logging.getLogger(__name__)

if os.name == "nt":
    INVALID_PATH_CHARS = frozenset('"<>|' + "".join(chr(c) for c in range(32)))
else:
    INVALID_PATH_CHARS = frozenset("\0")


def check_path(path: str | None, name: str) -> str:
    """Validate a path string before any filesystem access.

    Raises :class:`NullPathError`, :class:`EmptyPathError` or
    :class:`InvalidPathCharsError`. Returns *path* unchanged.
    """
    if path is None:
        raise NullPathError(name)
    if not path.strip():
        raise EmptyPathError(name)
    bad = "".join(sorted({c for c in path if c in INVALID_PATH_CHARS}))
    if bad:
        raise InvalidPathCharsError(name, bad)
    return path


def check_source_root(path: str | None, fs: FileSystem) -> str:
    path = check_path(path, "source_root_path")
    if not fs.directory_exists(path):
        logger.error("Source directory %s does not exist", path)
        raise SourceNotFoundError(path)
    return path
