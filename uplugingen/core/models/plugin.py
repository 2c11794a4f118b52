"""
Plugin model — the package a generation run produces.

The descriptor holds the ``.uplugin`` metadata, the ordered module list
and the plugin dependencies. Its ``name`` doubles as the output
directory and descriptor file stem.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from uplugingen.core.models.module import Module, check_token

_PACKAGE_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")

# Descriptor file format written into FileVersion
DESCRIPTOR_FILE_VERSION = 3


class PluginDependency(BaseModel):
    """Another plugin this package depends on (descriptor ``Plugins`` entry)."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    enabled: bool = True
    whitelist_platforms: list[str] = Field(default_factory=list)
    blacklist_targets: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return check_token(v, "plugin name")

    @field_validator("whitelist_platforms", "blacklist_targets")
    @classmethod
    def _check_lists(cls, v: list[str]) -> list[str]:
        return [check_token(t, "platform/target") for t in v]


class PluginDescriptor(BaseModel):
    """Root package identity plus everything written into ``<name>.uplugin``."""

    # YAML reads `version_name: 1.0` as a float
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str

    # ── Metadata ─────────────────────────────────────────────────
    version: int = 1
    version_name: str = ""
    category: str = ""
    description: str = ""
    created_by: str = ""
    created_by_url: str = ""
    docs_url: str = ""
    marketplace_url: str = ""
    support_url: str = ""

    # ── Flags ────────────────────────────────────────────────────
    can_contain_content: bool = False
    is_beta_version: bool = False
    installed: bool = False
    enabled_by_default: bool = False
    enabled: bool = True  # false → generate() does nothing

    icon: bytes | None = None
    output_root: Path | None = None

    modules: list[Module] = Field(default_factory=list)
    plugins: list[PluginDependency] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not _PACKAGE_NAME_RE.match(v) or v in (".", ".."):
            raise ValueError(
                f"plugin name {v!r} must be a plain directory name ([A-Za-z0-9_.-], no separators)"
            )
        return v

    def is_sole_module(self, module: Module) -> bool:
        """True when *module* is the only module and shares the package name."""
        return len(self.modules) == 1 and module.name == self.name
