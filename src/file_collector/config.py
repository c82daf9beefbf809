from __future__ import annotations
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml  # type: ignore[import-untyped]
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError

COLLECT_OPERATIONS = ("copy", "move")
REPORT_FORMATS = ("jsonl", "csv")


class Settings(BaseSettings):
    # Environment overrides use the FILE_COLLECTOR_ prefix, e.g. FILE_COLLECTOR_OVERWRITE=1
    model_config = SettingsConfigDict(
        extra="ignore", env_prefix="FILE_COLLECTOR_", validate_assignment=True,
    )

    # Paths (validated by the collector pre-flight, not here)
    SOURCE_ROOT_PATH: Optional[str] = None
    DESTINATION_DIRECTORY_PATH: Optional[str] = None

    # Collection
    OVERWRITE: bool = False
    COLLECT_OPERATION: str = "copy"
    EXTENSIONS_TO_IGNORE: list[str] = []

    # Reporting
    REPORT_PATH: Optional[str] = None
    REPORT_FORMAT: str = "jsonl"
    LOG_DIR: Optional[str] = None

    @field_validator("COLLECT_OPERATION")
    @classmethod
    def _validate_collect_operation(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in COLLECT_OPERATIONS:
            raise ValueError(f"COLLECT_OPERATION must be 'copy' or 'move', got {v!r}")
        return v

    @field_validator("REPORT_FORMAT")
    @classmethod
    def _validate_report_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in REPORT_FORMATS:
            raise ValueError(f"REPORT_FORMAT must be 'jsonl' or 'csv', got {v!r}")
        return v

    @field_validator("EXTENSIONS_TO_IGNORE")
    @classmethod
    def _validate_extensions(cls, v: list[str]) -> list[str]:
        for i, ext in enumerate(v):
            if not ext or not ext.strip():
                raise ValueError(f"EXTENSIONS_TO_IGNORE[{i}] is empty")
        return v


def load_settings(config_path: str | Path | None) -> Settings:
    if config_path is None:
        return Settings()
    p = Path(config_path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{p} must contain a YAML mapping, got {type(data).__name__}")
    return Settings(**data)
