from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field


class LogConfig(BaseModel):
    level: str = "WARNING"
    json_logs: bool = Field(default=False, alias="json")
    file: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    fixtures_dir: str = "fixtures"


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load YAML config; no path means defaults."""
    if path is None:
        return AppConfig()
    p = Path(path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    return AppConfig.model_validate(data)
