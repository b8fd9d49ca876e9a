"""Logging setup for the resolver tools.

The engine modules only create module-level loggers (``logging.getLogger(__name__)``);
handlers are attached here by entry points such as ``tools.resolve_cli``.

- Records go to a UTF-8 rotating file, so long evaluation sweeps stay inspectable.
- Console output is off unless requested; the CLI prints its own rich tables.
- Handlers are looked up by name, so repeated setup never duplicates them.

Usage:
    from logging_config import setup_logging
    setup_logging(get_config())

Environment overrides:
    ECONOMY_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR   (read through EconomyConfig)
    ECONOMY_LOG_FILE=path/to/file.log
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from economy.config import EconomyConfig

FILE_HANDLER_NAME = "economy_file"
CONSOLE_HANDLER_NAME = "economy_console"
DEFAULT_LOG_PATH = Path("logs") / "economy.log"

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    level_str = (level or "").strip().upper()
    return logging._nameToLevel.get(level_str, logging.INFO)


def _resolve_log_path(log_file: str | Path | None) -> Path:
    env_log_file = os.environ.get("ECONOMY_LOG_FILE")
    if env_log_file:
        log_file = env_log_file
    path = Path(log_file) if log_file else DEFAULT_LOG_PATH
    if not path.is_absolute():
        path = Path.cwd() / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _ensure_handler(
    root: logging.Logger,
    name: str,
    factory: Callable[[], logging.Handler],
    level: int,
) -> logging.Handler:
    handler = next((h for h in root.handlers if h.name == name), None)
    if handler is None:
        handler = factory()
        handler.name = name
        root.addHandler(handler)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    handler.setLevel(level)
    return handler


def setup_logging(
    config: EconomyConfig | None = None,
    *,
    log_file: str | Path | None = None,
    enable_file: bool = True,
    enable_console: bool = False,
    console_level: str | int = "WARNING",
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Attach the file / console handlers to the root logger and return it.

    The file level comes from ``config.log_level`` (global config when omitted).
    """
    if config is None:
        from economy.config import get_config

        config = get_config()
    file_level = _parse_level(config.log_level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)  # handlers filter

    log_path = None
    if enable_file:
        log_path = _resolve_log_path(log_file)
        _ensure_handler(
            root,
            FILE_HANDLER_NAME,
            lambda: RotatingFileHandler(
                str(log_path), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            ),
            file_level,
        )

    if enable_console:
        _ensure_handler(root, CONSOLE_HANDLER_NAME, logging.StreamHandler,
                        _parse_level(console_level))

    logging.getLogger(__name__).info(
        "Logging initialized | level=%s file=%s console=%s",
        config.log_level, log_path, enable_console,
    )
    return root


def teardown_logging() -> None:
    """Detach and close the handlers installed by setup_logging()."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.name in (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME):
            root.removeHandler(handler)
            handler.close()
