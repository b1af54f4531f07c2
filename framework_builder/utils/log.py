"""Logging helpers for the framework_builder package."""

import logging
from typing import Union

ROOT_LOGGER_NAME = "framework_builder"
_LOG_CONFIGURED = False


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Attach a stream handler to the package root logger once.

    Later calls only adjust the level.
    """
    global _LOG_CONFIGURED
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(_coerce_level(level))
    if _LOG_CONFIGURED:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

    _LOG_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a package-scoped logger.

    Parameters
    ----------
    name : str
        Logger name suffix appended to the package root logger namespace.

    Returns
    -------
    logging.Logger
        Logger scoped under ``framework_builder``.
    """
    if not _LOG_CONFIGURED:
        configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved
