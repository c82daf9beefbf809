from __future__ import annotations

from .io import write_jsonl, write_csv, write_report

__all__ = ["write_jsonl", "write_csv", "write_report"]
