"""
Generated file model — used by all generators.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, Field


class WriteMode(StrEnum):
    """How the writer treats an existing file at the target path."""

    IF_CHANGED = "if_changed"  # skip when bytes are identical
    ALWAYS = "always"          # truncate and overwrite
    ONCE = "once"              # never touch an existing file


class GeneratedFile(BaseModel):
    """A file produced by a generator, relative to the package directory.

    Attributes:
        path:     Relative POSIX path from the package directory.
        mode:     Overwrite policy for the writer.
        reason:   Why this file was generated.
        content:  Full file content, when known up front.
        producer: Deferred content step, called once by the writer.
    """

    path: str
    mode: WriteMode = WriteMode.ALWAYS
    reason: str = ""
    content: str | bytes | None = None
    producer: Callable[[], str | bytes] | None = Field(default=None, exclude=True, repr=False)

    def render(self) -> bytes:
        """Return the file bytes, running the producer if there is one."""
        data = self.producer() if self.producer is not None else self.content
        if data is None:
            raise ValueError(f"GeneratedFile {self.path} has neither content nor producer")
        if isinstance(data, str):
            return data.encode("utf-8")
        return data
