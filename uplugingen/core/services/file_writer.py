"""
Directory / file writer — the only code that touches the output tree.

Three write policies, matching ``WriteMode``:

    if_changed  producer runs once; skip the write when bytes are identical
    always      truncate and overwrite
    once        write only when nothing exists at the path (the icon)

Every ``OSError`` becomes a ``GenerationIOError`` and aborts the run.
Nothing is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from uplugingen.core.models.template import GeneratedFile, WriteMode

logger = logging.getLogger(__name__)


class GenerationIOError(Exception):
    """Raised when a directory or file cannot be created, read or written."""

    def __init__(self, operation: str, path: Path, cause: OSError):
        super().__init__(f"Cannot {operation} {path}: {cause}")
        self.operation = operation
        self.path = path
        self.cause = cause


def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def ensure_dir(path: Path) -> None:
    """Create *path* and missing ancestors; existing directories are fine."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise GenerationIOError("create directory", path, e) from e


def write_always(path: Path, data: str | bytes) -> bool:
    """Overwrite *path* unconditionally. Always returns True."""
    try:
        path.write_bytes(_as_bytes(data))
    except OSError as e:
        raise GenerationIOError("write", path, e) from e
    logger.debug("Wrote %s", path)
    return True


def write_if_changed(path: Path, producer: Callable[[], str | bytes]) -> bool:
    """Write the producer's output unless *path* already holds the same bytes.

    The producer runs exactly once, before the file is opened, so its
    errors leave the file untouched.

    Returns:
        True if the file was written, False if it was already up to date.
    """
    data = _as_bytes(producer())

    if path.exists():
        try:
            current = path.read_bytes()
        except OSError as e:
            raise GenerationIOError("read", path, e) from e
        if current == data:
            logger.debug("Unchanged %s", path)
            return False

    return write_always(path, data)


def write_once(path: Path, data: str | bytes) -> bool:
    """Write *path* only if nothing exists there yet.

    Returns:
        True if the file was written, False if an existing file was kept.
    """
    if path.exists():
        logger.debug("Keeping existing %s", path)
        return False
    return write_always(path, data)


def write_generated_file(package_dir: Path, file: GeneratedFile) -> bool:
    """Write a ``GeneratedFile`` below *package_dir* using its write mode.

    The parent directory must already exist; the orchestrator creates
    directories in plan order.
    """
    target = package_dir / file.path

    if file.mode == WriteMode.IF_CHANGED:
        return write_if_changed(target, file.render)
    if file.mode == WriteMode.ONCE:
        return write_once(target, file.render())
    return write_always(target, file.render())
