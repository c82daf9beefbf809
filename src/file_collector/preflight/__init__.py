from __future__ import annotations

from .checks import INVALID_PATH_CHARS, check_path, check_source_root

__all__ = ["INVALID_PATH_CHARS", "check_path", "check_source_root"]
