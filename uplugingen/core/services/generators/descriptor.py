"""
Plugin descriptor generator — ``<Name>.uplugin`` and the icon resource.
"""

from __future__ import annotations

import json
from functools import partial

from uplugingen.core.data import DEFAULT_ICON_FILENAME, default_icon
from uplugingen.core.models.module import Module
from uplugingen.core.models.plugin import DESCRIPTOR_FILE_VERSION, PluginDependency, PluginDescriptor
from uplugingen.core.models.template import GeneratedFile, WriteMode
from uplugingen.core.services.normalize import quote_join
from uplugingen.core.services.template_engine import Renderer, render

DESCRIPTOR_EXTENSION = "uplugin"
ICON_PATH = f"Resources/{DEFAULT_ICON_FILENAME}"

_ENTRY_INDENT = "\t\t"
_PROP_INDENT = "\t\t\t"


def _json_bool(value: bool) -> str:
    return "true" if value else "false"


def _entry(props: list[tuple[str, str]]) -> str:
    """``{ "Key": value, ... }`` block at descriptor list indentation."""
    body = ",\n".join(f'{_PROP_INDENT}"{k}": {v}' for k, v in props)
    return f"{_ENTRY_INDENT}{{\n{body}\n{_ENTRY_INDENT}}}"


def format_module_entry(module: Module) -> str:
    props = [
        ("Name", f'"{module.name}"'),
        ("Type", f'"{module.host_type.value}"'),
        ("LoadingPhase", f'"{module.loading_phase.value}"'),
    ]
    if module.whitelist_platforms:
        props.append(("WhitelistPlatforms", f"[ {quote_join(module.whitelist_platforms)} ]"))
    return _entry(props)


def format_plugin_entry(dep: PluginDependency) -> str:
    """One ``Plugins`` entry; empty platform/target lists are left out."""
    props = [
        ("Name", f'"{dep.name}"'),
        ("Enabled", _json_bool(dep.enabled)),
    ]
    if dep.whitelist_platforms:
        props.append(("WhitelistPlatforms", f"[ {quote_join(dep.whitelist_platforms)} ]"))
    if dep.blacklist_targets:
        props.append(("BlacklistTargets", f"[ {quote_join(dep.blacklist_targets)} ]"))
    return _entry(props)


def descriptor_fields(plugin: PluginDescriptor) -> dict[str, str]:
    """Field map for the ``descriptor`` template.

    Free-text metadata is JSON-encoded so quotes in a description stay valid.
    """
    return {
        "file_version": str(DESCRIPTOR_FILE_VERSION),
        "version": str(plugin.version),
        "version_name": json.dumps(plugin.version_name),
        "friendly_name": json.dumps(plugin.name),
        "description": json.dumps(plugin.description),
        "category": json.dumps(plugin.category),
        "created_by": json.dumps(plugin.created_by),
        "created_by_url": json.dumps(plugin.created_by_url),
        "docs_url": json.dumps(plugin.docs_url),
        "marketplace_url": json.dumps(plugin.marketplace_url),
        "support_url": json.dumps(plugin.support_url),
        "can_contain_content": _json_bool(plugin.can_contain_content),
        "is_beta_version": _json_bool(plugin.is_beta_version),
        "installed": _json_bool(plugin.installed),
        "enabled_by_default": _json_bool(plugin.enabled_by_default),
        "modules": ",\n".join(format_module_entry(m) for m in plugin.modules),
        "plugins": ",\n".join(format_plugin_entry(p) for p in plugin.plugins),
    }


def render_descriptor(plugin: PluginDescriptor, renderer: Renderer = render) -> str:
    return renderer("descriptor", descriptor_fields(plugin))


def generate_descriptor(plugin: PluginDescriptor, renderer: Renderer = render) -> GeneratedFile:
    """Package descriptor, rendered lazily and written only when changed."""
    return GeneratedFile(
        path=f"{plugin.name}.{DESCRIPTOR_EXTENSION}",
        mode=WriteMode.IF_CHANGED,
        reason=f"Descriptor for plugin {plugin.name} ({len(plugin.modules)} modules)",
        producer=partial(render_descriptor, plugin, renderer),
    )


def generate_icon(plugin: PluginDescriptor) -> GeneratedFile:
    """Icon resource; written once and never updated afterwards."""
    custom = plugin.icon is not None
    return GeneratedFile(
        path=ICON_PATH,
        mode=WriteMode.ONCE,
        reason="Custom plugin icon" if custom else "Placeholder plugin icon",
        content=plugin.icon if custom else default_icon(),
    )
