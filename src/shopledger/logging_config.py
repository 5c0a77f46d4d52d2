from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

# file name -> (logger name, minimum level); "" is the root logger
LOG_FILES = {
    "app.log": ("", logging.INFO),
    "errors.log": ("", logging.ERROR),
    "ledger.log": ("shopledger.ledger", logging.INFO),
    "fx.log": ("shopledger.fx", logging.INFO),
}

MAX_BYTES = 2_000_000
BACKUP_COUNT = 5


class JsonFormatter(logging.Formatter):
    """One JSON object per line, so ledger.log can be grepped or loaded line by line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "where": f"{record.module}:{record.lineno}",
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _file_handler(path: Path, level: int) -> RotatingFileHandler:
    fh = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8")
    fh.setFormatter(JsonFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    fh.setLevel(level)
    fh.set_name(f"shopledger:{path.name}")
    return fh


def setup_logging(logs_dir: Path, level: int = logging.INFO) -> list[Path]:
    """Attach the rotating JSON handlers; calling it again does not duplicate them."""
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.getLogger().setLevel(level)

    paths = []
    for filename, (logger_name, min_level) in LOG_FILES.items():
        logger = logging.getLogger(logger_name or None)
        path = logs_dir / filename
        paths.append(path)
        if any(h.get_name() == f"shopledger:{filename}" for h in logger.handlers):
            continue
        logger.addHandler(_file_handler(path, min_level))
        if logger_name:
            logger.setLevel(min_level)
    return paths
