from __future__ import annotations

import logging
import os
import shutil
import zipfile
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .settings import Settings

LOG_FILE_NAME = "navrouter.log"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

logger = logging.getLogger("navrouter")


def resolve_log_dir(settings: Settings) -> Path:
    """Resolve the log directory; relative paths are taken from the CWD."""
    p = Path(settings.NAVROUTER_LOG_DIR).expanduser()
    if p.is_absolute():
        return p
    return Path.cwd() / p


def setup_logging(settings: Settings) -> Path:
    """Configure the ``navrouter`` logger to write to a size-rotated file.

    Returns the resolved log file path.

    Rotation:
      - Roll over once the file exceeds `NAVROUTER_LOG_MAX_BYTES`.
      - Keep the last `NAVROUTER_LOG_BACKUP_COUNT` archived files.

    This function is safe to call multiple times (it resets handlers).
    """

    log_dir = resolve_log_dir(settings)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / LOG_FILE_NAME

    level_name = str(settings.NAVROUTER_LOG_LEVEL or "INFO").upper().strip()
    level = getattr(logging, level_name, logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        filename=str(log_file),
        maxBytes=max(0, settings.NAVROUTER_LOG_MAX_BYTES),
        backupCount=max(0, settings.NAVROUTER_LOG_BACKUP_COUNT),
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)

    if settings.NAVROUTER_LOG_CONSOLE:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    logger.setLevel(level)
    logger.propagate = False

    logger.info("navrouter logging enabled (file=%s, level=%s)", os.fspath(log_file), level_name)
    return log_file


def default_export_path(settings: Settings) -> Path:
    return resolve_log_dir(settings).parent / "navrouter-logs.zip"


def export_logs(settings: Settings, destination: Path | None = None) -> Path:
    """Zip the whole log directory (live file plus rotated archives).

    An existing archive at ``destination`` is replaced.
    """
    log_dir = resolve_log_dir(settings)
    dest = Path(destination) if destination is not None else default_export_path(settings)
    dest.parent.mkdir(parents=True, exist_ok=True)
    if dest.exists():
        dest.unlink()

    for handler in logger.handlers:
        handler.flush()

    tmp = dest.with_name(dest.name + ".part")
    try:
        with zipfile.ZipFile(tmp, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            if log_dir.is_dir():
                for path in sorted(log_dir.rglob("*")):
                    if path.is_file() and path not in (tmp, dest):
                        zf.write(path, arcname=str(Path(log_dir.name) / path.relative_to(log_dir)))
        shutil.move(str(tmp), str(dest))
    except OSError as exc:
        logger.error("Creating log archive failed: %s", exc)
        tmp.unlink(missing_ok=True)
        raise

    logger.info("exported logs to %s", os.fspath(dest))
    return dest
