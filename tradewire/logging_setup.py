from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pythonjsonlogger import jsonlogger

from tradewire.config import LogConfig


def make_formatter(cfg: LogConfig) -> logging.Formatter:
    if cfg.json_logs:
        return jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "ts", "levelname": "level", "name": "logger"},
        )
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


def setup_logging(cfg: LogConfig) -> None:
    level = getattr(logging, cfg.level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers when the CLI is invoked repeatedly in one process
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = make_formatter(cfg)

    if cfg.file:
        Path(cfg.file).parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(cfg.file, maxBytes=5_000_000, backupCount=5, encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)
