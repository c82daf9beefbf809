from __future__ import annotations

import logging
from pathlib import Path

from .collector import Collector
from .config import Settings
from .filesystem import FileSystem
from .models import RunResult, summarize
from .utils.io import write_report
from .utils.logger import setup_file_handler

logger = logging.getLogger(__name__)


def run_collection(cfg: Settings, file_system: FileSystem | None = None) -> RunResult:
    """Run one collection described by *cfg*.

    Pre-flight errors from :meth:`Collector.collect_files` propagate unchanged.
    """
    if cfg.LOG_DIR:
        log_path = setup_file_handler(Path(cfg.LOG_DIR))
        logger.debug("File logging to %s", log_path)

    collector = Collector.from_settings(cfg, file_system=file_system)
    results = collector.collect_files()
    summary = summarize(results)

    report_path: Path | None = None
    if cfg.REPORT_PATH:
        report_path = write_report(Path(cfg.REPORT_PATH), results, cfg.REPORT_FORMAT)

    if not summary.ok:
        logger.warning(
            "%d of %d directories and %d of %d files failed",
            summary.failed_directories, summary.directories,
            summary.files_failed, summary.files_processed,
        )
    return RunResult(results=results, summary=summary, report_path=report_path)
