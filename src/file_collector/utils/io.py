from __future__ import annotations
import csv
import json
import logging
from pathlib import Path
from typing import Iterable, Mapping, Any

from ..models import CollectResult

_logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "DIRECTORY", "PATH", "NEW_FILE_PATH", "IS_RENAMED",
    "IS_SUCCEEDED", "ERROR_TYPE", "ERROR_MESSAGE",
]


def write_jsonl(
    path: Path, rows: Iterable[Mapping[str, Any]], *, mode: str = "w",
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open(mode, encoding="utf-8") as f:
        for r in rows:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")


def write_csv(
    path: Path,
    rows: Iterable[Mapping[str, Any]],
    fieldnames: list[str],
    *,
    mode: str = "w",
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    write_header = mode == "w" or not path.exists()
    with path.open(mode, newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        if write_header:
            w.writeheader()
        for r in rows:
            w.writerow({k: r.get(k) for k in fieldnames})


def _csv_rows(results: Iterable[CollectResult]) -> Iterable[dict[str, Any]]:
    for d in results:
        if not d.is_succeeded:
            # the directory itself failed; no file rows exist for it
            yield {
                "DIRECTORY": d.path,
                "IS_SUCCEEDED": False,
                "ERROR_TYPE": d.error_type.value,
                "ERROR_MESSAGE": d.error_message,
            }
        for f in d.file_collect_results:
            row = f.to_dict()
            row["DIRECTORY"] = d.path
            yield row


def write_report(path: Path, results: list[CollectResult], fmt: str = "jsonl") -> Path:
    """Write collection results to *path* as JSON lines or CSV.

    JSONL holds one record per directory with its file records nested; CSV
    holds one row per file plus one row per failed directory.
    """
    if fmt == "jsonl":
        write_jsonl(path, (r.to_dict() for r in results))
    elif fmt == "csv":
        write_csv(path, _csv_rows(results), CSV_FIELDS)
    else:
        raise ValueError(f"Unknown report format: {fmt!r}")
    _logger.info("Wrote %s report for %d directories to %s", fmt, len(results), path)
    return path
