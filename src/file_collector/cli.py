from __future__ import annotations

import click
from pydantic import ValidationError

from .config import Settings, load_settings
from .exceptions import ConfigError, FileCollectorError
from .utils.logger import setup_cli_logging


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (repeat for more).")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Suppress all but warnings.")
@click.pass_context
def main(ctx: click.Context, verbose: int, quiet: bool) -> None:
    """file-collector CLI"""
    ctx.ensure_object(dict)
    verbosity = -1 if quiet else verbose
    ctx.obj["verbosity"] = verbosity
    setup_cli_logging(verbosity=verbosity)


def _build_settings(
    config_path: str | None,
    source: str | None,
    destination: str | None,
    operation: str | None,
    overwrite: bool | None,
    ignore_ext: tuple[str, ...],
    report_path: str | None,
    report_format: str | None,
    log_dir: str | None,
) -> Settings:
    cfg = load_settings(config_path)
    if source is not None:
        cfg.SOURCE_ROOT_PATH = source
    if destination is not None:
        cfg.DESTINATION_DIRECTORY_PATH = destination
    if operation is not None:
        cfg.COLLECT_OPERATION = operation
    if overwrite is not None:
        cfg.OVERWRITE = overwrite
    if ignore_ext:
        cfg.EXTENSIONS_TO_IGNORE = list(ignore_ext)
    if report_path is not None:
        cfg.REPORT_PATH = report_path
    if report_format is not None:
        cfg.REPORT_FORMAT = report_format
    if log_dir is not None:
        cfg.LOG_DIR = log_dir
    return cfg


@main.command()
@click.argument("source", required=False)
@click.argument("destination", required=False)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False), default=None,
    help="Path to YAML config file.",
)
@click.option(
    "--operation", type=click.Choice(["copy", "move"]), default=None,
    help="Copy or move files (overrides COLLECT_OPERATION).",
)
@click.option(
    "--overwrite", is_flag=True, default=False,
    help="Replace files that already exist in the destination.",
)
@click.option(
    "--no-overwrite", "no_overwrite", is_flag=True, default=False,
    help="Never replace existing files, even if the config sets OVERWRITE.",
)
@click.option(
    "--ignore-ext", "ignore_ext", multiple=True,
    help="File extension to skip, e.g. '.jpg' (repeatable).",
)
@click.option("--report", "report_path", type=click.Path(dir_okay=False), default=None,
              help="Write a per-file report to this path.")
@click.option("--report-format", type=click.Choice(["jsonl", "csv"]), default=None)
@click.option("--log-dir", type=click.Path(file_okay=False), default=None,
              help="Also write JSON-lines logs to LOG_DIR/run.log.")
def collect(
    source: str | None,
    destination: str | None,
    config_path: str | None,
    operation: str | None,
    overwrite: bool,
    no_overwrite: bool,
    ignore_ext: tuple[str, ...],
    report_path: str | None,
    report_format: str | None,
    log_dir: str | None,
) -> None:
    """Gather every file under SOURCE into the flat DESTINATION directory."""
    from .run import run_collection

    if overwrite and no_overwrite:
        raise click.UsageError("--overwrite and --no-overwrite are mutually exclusive.")
    # None keeps whatever the config says
    overwrite_override = None
    if overwrite:
        overwrite_override = True
    elif no_overwrite:
        overwrite_override = False

    try:
        cfg = _build_settings(
            config_path, source, destination, operation, overwrite_override,
            ignore_ext, report_path, report_format, log_dir,
        )
    except (ConfigError, ValidationError) as exc:
        raise click.UsageError(f"Invalid configuration: {exc}")

    # --- Run ---
    try:
        result = run_collection(cfg)
    except FileCollectorError as exc:
        click.echo(f"Collection aborted: {exc}", err=True)
        raise SystemExit(2)

    # --- Summary ---
    s = result.summary
    click.echo(f"\nCollected into {cfg.DESTINATION_DIRECTORY_PATH}")
    click.echo(f"  Directories:        {s.directories}")
    click.echo(f"  Files processed:    {s.files_processed}")
    click.echo(f"  Files succeeded:    {s.files_succeeded}")
    click.echo(f"  Files renamed:      {s.files_renamed}")
    if result.report_path:
        click.echo(f"  Report:             {result.report_path}")
    if not s.ok:
        click.echo(
            f"  Failures:           {s.files_failed} file(s), "
            f"{s.failed_directories} director(y/ies)",
            err=True,
        )
        raise SystemExit(1)


if __name__ == "__main__":
    main()
