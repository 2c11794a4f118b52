"""
File emission planner — what each generation run writes, and where.

Plans are pure: nothing here touches the filesystem. The orchestrator
walks a ``PackagePlan`` in order, creating each directory before the
files that live in it.

Layout relative to the package directory::

    <Name>.uplugin
    Resources/Icon128.png
    Source/[<Module>/]<Module>.build.cs
    Source/[<Module>/]BaseAPL.xml
    Source/[<Module>/]Public/*.h
    Source/[<Module>/]Private/*.cpp

The ``<Module>/`` level is dropped when the package has exactly one
module and it carries the package name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath

from uplugingen.core.models.module import Module
from uplugingen.core.models.plugin import PluginDescriptor
from uplugingen.core.models.template import GeneratedFile
from uplugingen.core.services.generators.android_manifest import generate_android_manifest
from uplugingen.core.services.generators.build_config import generate_build_config
from uplugingen.core.services.generators.descriptor import ICON_PATH, generate_descriptor, generate_icon
from uplugingen.core.services.generators.module_sources import generate_module_sources
from uplugingen.core.services.template_engine import Renderer, render

SOURCE_DIR = PurePosixPath("Source")
RESOURCES_DIR = PurePosixPath(ICON_PATH).parent


def module_directory(module: Module, *, collapse: bool) -> PurePosixPath:
    """``Source/`` for a collapsed sole module, else ``Source/<Module>/``."""
    return SOURCE_DIR if collapse else SOURCE_DIR / module.name


@dataclass
class ModulePlan:
    """Everything emitted for one module, in write order."""

    name: str
    directory: PurePosixPath
    config_files: list[GeneratedFile] = field(default_factory=list)  # build rules, manifest
    source_files: list[GeneratedFile] = field(default_factory=list)

    @property
    def public_dir(self) -> PurePosixPath:
        return self.directory / "Public"

    @property
    def private_dir(self) -> PurePosixPath:
        return self.directory / "Private"

    @property
    def files(self) -> list[GeneratedFile]:
        return self.config_files + self.source_files


@dataclass
class PackagePlan:
    """Ordered emission plan for a whole package."""

    name: str
    descriptor: GeneratedFile
    icon: GeneratedFile
    modules: list[ModulePlan] = field(default_factory=list)

    @property
    def files(self) -> list[GeneratedFile]:
        out = [self.descriptor, self.icon]
        for mp in self.modules:
            out.extend(mp.files)
        return out

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.name,
            "files": [
                {"path": f.path, "mode": f.mode.value, "reason": f.reason}
                for f in self.files
            ],
            "modules": [
                {"name": mp.name, "directory": str(mp.directory)}
                for mp in self.modules
            ],
        }


def plan_module(module: Module, *, collapse: bool = False, renderer: Renderer = render) -> ModulePlan:
    """Plan the files for one module.

    The build rules file is always present; the Android manifest
    fragment only when the module has native libraries and an Android
    config; then the resolved source groups.
    """
    directory = module_directory(module, collapse=collapse)
    plan = ModulePlan(name=module.name, directory=directory)

    plan.config_files.append(generate_build_config(module, directory, renderer))
    manifest = generate_android_manifest(module, directory, renderer)
    if manifest is not None:
        plan.config_files.append(manifest)

    plan.source_files.extend(generate_module_sources(module, directory, renderer))
    return plan


def plan_package(plugin: PluginDescriptor, renderer: Renderer = render) -> PackagePlan:
    """Plan every file of *plugin*, modules in attachment order."""
    return PackagePlan(
        name=plugin.name,
        descriptor=generate_descriptor(plugin, renderer),
        icon=generate_icon(plugin),
        modules=[
            plan_module(m, collapse=plugin.is_sole_module(m), renderer=renderer)
            for m in plugin.modules
        ],
    )
