"""
Logging configuration — central setup for the CLI entrypoint.

Every module logs through ``logging.getLogger(__name__)``, so all records
flow through the ``uplugingen`` package logger. Library use
(``PluginBuilder`` from a build script) never calls ``setup_logging``:
the package logger only carries a ``NullHandler`` and the host
application's logging setup stays in charge.

The CLI calls ``setup_logging`` once, with the level from
``resolve_level``:
    --debug / --verbose / --quiet  >  UPLUGINGEN_LOG_LEVEL  >  WARNING

Optional file output via UPLUGINGEN_LOG_FILE / UPLUGINGEN_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

PACKAGE_LOGGER = "uplugingen"

ENV_LOG_LEVEL = "UPLUGINGEN_LOG_LEVEL"
ENV_LOG_FILE = "UPLUGINGEN_LOG_FILE"
ENV_LOG_FILE_LEVEL = "UPLUGINGEN_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

# WARNING and above: the message only, CLI output stays readable
_FMT_MINIMAL = "%(message)s"

# INFO: generation progress with the emitting module
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"

# DEBUG and file output: per-file write decisions with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Console level name from the CLI flags, falling back to the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(ENV_LOG_LEVEL) or "WARNING"


def _console_format(numeric_level: int) -> logging.Formatter:
    if numeric_level <= logging.DEBUG:
        return logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_CONSOLE)
    if numeric_level <= logging.INFO:
        return logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_CONSOLE)
    return logging.Formatter(_FMT_MINIMAL)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.

    Returns:
        The configured ``uplugingen`` logger.
    """
    numeric_level = parse_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(_console_format(numeric_level))
    logger.addHandler(console)

    # Logger level = minimum of console and file levels
    effective_level = numeric_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        logger.addHandler(fh)

    logger.setLevel(effective_level)
    # Handled here; the root logger belongs to whoever embeds the CLI
    logger.propagate = False
    return logger
