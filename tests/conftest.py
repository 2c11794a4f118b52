"""
Shared test fixtures and configuration.
"""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Output root for generation runs (not created up front)."""
    return tmp_path / "out"


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Remove the environment-derived output root variables."""
    monkeypatch.delenv("UPLUGINGEN_PROJECT_DIR", raising=False)
    monkeypatch.delenv("UPLUGINGEN_TARGET", raising=False)


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, bytes]]:
    """Return a function mapping every file below a root to its bytes."""

    def _snapshot(root: Path) -> dict[str, bytes]:
        return {
            p.relative_to(root).as_posix(): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo CLI logging setup so handlers never outlive a test's streams."""
    logger = logging.getLogger("uplugingen")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for h in logger.handlers:
        if h not in handlers:
            h.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
