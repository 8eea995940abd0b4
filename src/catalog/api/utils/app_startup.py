"""Loguru setup for the catalog: console sink, optional file sink, stdlib bridge."""

import logging
import sys
from pathlib import Path

from loguru import logger

from src.catalog.runtime.config.config_data import LoggingConfig
from src.catalog.runtime.context import get_config

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Levels for the stdlib loggers of uvicorn and SQLAlchemy once bridged
STDLIB_LEVELS = {
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.CRITICAL,
}


class StdlibBridge(logging.Handler):
    """Send records from the standard ``logging`` module to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # log_requests already writes one line per request
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _add_file_sink(cfg: LoggingConfig, verbose_tracebacks: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)

    if cfg.format == "json":
        record_options = {"serialize": True}
    else:
        record_options = {"format": CONSOLE_FORMAT, "colorize": False}

    logger.add(
        path,
        level=cfg.level,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=verbose_tracebacks,
        diagnose=verbose_tracebacks,
        **record_options,
    )


def _bridge_stdlib_logging(echo_sql: bool) -> None:
    logging.basicConfig(handlers=[StdlibBridge()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        existing = logging.getLogger(name)
        existing.handlers = []
        existing.propagate = True

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if echo_sql else logging.WARNING
    )
    for name, level in STDLIB_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def configure_logging() -> None:
    """(Re)install the loguru sinks described by the current configuration.

    Safe to call repeatedly: previous sinks are removed first. Records logged
    outside a request carry ``request_id="-"``.
    """
    config = get_config()
    cfg = config.logging
    verbose_tracebacks = config.app.environment != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=verbose_tracebacks,
        diagnose=verbose_tracebacks,
    )
    if cfg.file:
        _add_file_sink(cfg, verbose_tracebacks)

    _bridge_stdlib_logging(config.database.echo)

    logger.bind(
        log_level=cfg.level,
        log_format=cfg.format,
        log_file=cfg.file,
        environment=config.app.environment,
    ).info("Logging configured")
