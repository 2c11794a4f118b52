"""
Configuration loader — reads plugin.yml into domain models and resolves
the output root.

The YAML mirrors ``PluginDescriptor``. Paths inside it (``icon``,
``output_root``) are relative to the config file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml

from uplugingen.core.models.plugin import PluginDescriptor

logger = logging.getLogger(__name__)

# Default config filename
PLUGIN_CONFIG_FILE = "plugin.yml"

# Environment defaults, used only when no explicit output root is given
ENV_PROJECT_DIR = "UPLUGINGEN_PROJECT_DIR"
ENV_TARGET = "UPLUGINGEN_TARGET"


class ConfigError(Exception):
    """Raised when plugin configuration is invalid or missing."""


def resolve_output_root(
    override: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Directory the package directory is created in.

    An explicit *override* wins. Otherwise the root is
    ``$UPLUGINGEN_PROJECT_DIR/target/unrealplugin-$UPLUGINGEN_TARGET``.

    Raises:
        ConfigError: No override and an environment variable is unset.
    """
    if override is not None:
        return Path(override)

    env = os.environ if environ is None else environ
    missing = [var for var in (ENV_PROJECT_DIR, ENV_TARGET) if not env.get(var)]
    if missing:
        raise ConfigError(
            f"No output directory given and {', '.join(missing)} not set. "
            "Pass an output directory or set the environment variable(s)."
        )

    root = Path(env[ENV_PROJECT_DIR]) / "target" / f"unrealplugin-{env[ENV_TARGET]}"
    logger.debug("Output root from environment: %s", root)
    return root


def load_plugin_config(path: Path) -> PluginDescriptor:
    """Load and validate a plugin configuration file.

    Args:
        path: Path to plugin.yml.

    Returns:
        Validated PluginDescriptor.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading plugin config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "plugin" key or be flat
    plugin_data = dict(data["plugin"]) if isinstance(data.get("plugin"), dict) else dict(data)

    base_dir = path.parent.resolve()

    icon = plugin_data.get("icon")
    if isinstance(icon, str):
        icon_path = base_dir / icon
        try:
            plugin_data["icon"] = icon_path.read_bytes()
        except OSError as e:
            raise ConfigError(f"Cannot read icon {icon_path}: {e}") from e

    output_root = plugin_data.get("output_root")
    if isinstance(output_root, str):
        plugin_data["output_root"] = base_dir / output_root

    try:
        plugin = PluginDescriptor.model_validate(plugin_data)
    except Exception as e:
        raise ConfigError(f"Invalid plugin configuration: {e}") from e

    logger.info("Loaded plugin '%s' with %d modules", plugin.name, len(plugin.modules))
    return plugin
