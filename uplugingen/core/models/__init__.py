"""
Domain models — Pydantic types for plugin generation.

All models are re-exported here for convenient access:

    from uplugingen.core.models import PluginDescriptor, Module, ModuleSources, GeneratedFile
"""

from uplugingen.core.models.module import (
    AndroidConfig,
    CodeFile,
    CodeFileKind,
    Definition,
    DependencyKind,
    HostType,
    LoadingPhase,
    Module,
    ModuleSources,
    PrivateDependency,
    SourceGroup,
    SourcesMode,
)
from uplugingen.core.models.plugin import (
    DESCRIPTOR_FILE_VERSION,
    PluginDependency,
    PluginDescriptor,
)
from uplugingen.core.models.template import GeneratedFile, WriteMode

__all__ = [
    # module.py
    "AndroidConfig",
    "CodeFile",
    "CodeFileKind",
    "Definition",
    "DependencyKind",
    "HostType",
    "LoadingPhase",
    "Module",
    "ModuleSources",
    "PrivateDependency",
    "SourceGroup",
    "SourcesMode",
    # plugin.py
    "DESCRIPTOR_FILE_VERSION",
    "PluginDependency",
    "PluginDescriptor",
    # template.py
    "GeneratedFile",
    "WriteMode",
]
