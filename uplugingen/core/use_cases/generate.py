"""
Generate use case — fluent plugin/module builders and the generation run.

    result = (
        PluginBuilder("MyPlugin")
        .created_by("Studio")
        .module(ModuleBuilder("MyPlugin").public_dependencies("Core", "Engine"))
        .out_dir(Path("Plugins"))
        .generate()
    )

A ``PluginBuilder`` is configured with any number of setter calls and
then consumed by ``generate()``. After that every call raises
``BuilderStateError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from uplugingen.core.config.loader import resolve_output_root
from uplugingen.core.models.module import (
    AndroidConfig,
    Definition,
    HostType,
    LoadingPhase,
    Module,
    ModuleSources,
    PrivateDependency,
    SourceGroup,
)
from uplugingen.core.models.plugin import PluginDependency, PluginDescriptor
from uplugingen.core.models.template import GeneratedFile
from uplugingen.core.services.file_writer import ensure_dir, write_generated_file
from uplugingen.core.services.generators.descriptor import generate_descriptor, generate_icon
from uplugingen.core.services.planner import RESOURCES_DIR, plan_module
from uplugingen.core.services.template_engine import Renderer, render

logger = logging.getLogger(__name__)


class BuilderState(StrEnum):
    CONFIGURING = "configuring"
    GENERATING = "generating"
    DONE = "done"
    FAILED = "failed"


class BuilderStateError(Exception):
    """Raised when a builder is used after ``generate()``."""


@dataclass
class GenerationResult:
    """Outcome of one ``generate()`` run."""

    name: str
    package_dir: Path | None = None
    skipped: bool = False
    written: list[Path] = field(default_factory=list)
    unchanged: list[Path] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.name,
            "package_dir": str(self.package_dir) if self.package_dir else None,
            "skipped": self.skipped,
            "written": [str(p) for p in self.written],
            "unchanged": [str(p) for p in self.unchanged],
        }


# ═══════════════════════════════════════════════════════════════════
#  ModuleBuilder
# ═══════════════════════════════════════════════════════════════════


class ModuleBuilder:
    """Fluent construction of a ``Module``.

    List setters append, so calls can be chained or repeated. Validation
    happens in ``build()``.
    """

    def __init__(self, name: str):
        self._fields: dict = {
            "name": name,
            "public_dependencies": [],
            "private_dependencies": [],
            "public_include_paths": [],
            "private_include_paths": [],
            "public_definitions": [],
            "private_definitions": [],
            "whitelist_platforms": [],
            "external_dynamic_libraries": [],
        }

    def host_type(self, value: HostType | str) -> ModuleBuilder:
        self._fields["host_type"] = HostType(value)
        return self

    def loading_phase(self, value: LoadingPhase | str) -> ModuleBuilder:
        self._fields["loading_phase"] = LoadingPhase(value)
        return self

    def public_dependencies(self, *names: str) -> ModuleBuilder:
        self._fields["public_dependencies"].extend(names)
        return self

    def private_dependencies(self, *names: str) -> ModuleBuilder:
        self._fields["private_dependencies"].extend(PrivateDependency.plain(n) for n in names)
        return self

    def editor_data_dependencies(self, *names: str) -> ModuleBuilder:
        self._fields["private_dependencies"].extend(PrivateDependency.editor_data(n) for n in names)
        return self

    def private_dependency(self, dep: PrivateDependency) -> ModuleBuilder:
        self._fields["private_dependencies"].append(dep)
        return self

    def public_include_paths(self, *paths: str) -> ModuleBuilder:
        self._fields["public_include_paths"].extend(paths)
        return self

    def private_include_paths(self, *paths: str) -> ModuleBuilder:
        self._fields["private_include_paths"].extend(paths)
        return self

    def public_definition(self, key: str, value: str = "") -> ModuleBuilder:
        self._fields["public_definitions"].append(Definition(key=key, value=value))
        return self

    def private_definition(self, key: str, value: str = "") -> ModuleBuilder:
        self._fields["private_definitions"].append(Definition(key=key, value=value))
        return self

    def whitelist_platforms(self, *platforms: str) -> ModuleBuilder:
        self._fields["whitelist_platforms"].extend(platforms)
        return self

    def external_dynamic_libraries(self, *libraries: str) -> ModuleBuilder:
        self._fields["external_dynamic_libraries"].extend(libraries)
        return self

    def android(self, permissions: Iterable[str] = ()) -> ModuleBuilder:
        self._fields["android"] = AndroidConfig(permissions=list(permissions))
        return self

    def sources(self, sources: ModuleSources) -> ModuleBuilder:
        self._fields["sources"] = sources
        return self

    def with_default_module(self, groups: Iterable[SourceGroup]) -> ModuleBuilder:
        return self.sources(ModuleSources.with_default_module(list(groups)))

    def without_default_module(self, groups: Iterable[SourceGroup]) -> ModuleBuilder:
        return self.sources(ModuleSources.without_default_module(list(groups)))

    def debug(self, value: bool = True) -> ModuleBuilder:
        self._fields["debug"] = value
        return self

    def build(self) -> Module:
        """Validate and return the module."""
        return Module.model_validate(self._fields)


# ═══════════════════════════════════════════════════════════════════
#  PluginBuilder
# ═══════════════════════════════════════════════════════════════════


class PluginBuilder:
    """Fluent configuration of a plugin package, consumed by ``generate()``.

    Args:
        name: Package name; also the output directory and descriptor stem.
        renderer: ``render(template_id, fields)`` collaborator.
        environ: Environment used to derive the default output root.
    """

    def __init__(
        self,
        name: str,
        *,
        renderer: Renderer = render,
        environ: Mapping[str, str] | None = None,
    ):
        PluginDescriptor(name=name)  # fail fast on an unusable name
        self._fields: dict = {"name": name}
        self._modules: list[Module] = []
        self._plugins: list[PluginDependency] = []
        self._renderer = renderer
        self._environ = environ
        self._state = BuilderState.CONFIGURING

    @classmethod
    def from_descriptor(
        cls,
        descriptor: PluginDescriptor,
        *,
        renderer: Renderer = render,
        environ: Mapping[str, str] | None = None,
    ) -> PluginBuilder:
        """Builder pre-filled from an already validated descriptor."""
        builder = cls(descriptor.name, renderer=renderer, environ=environ)
        builder._fields = descriptor.model_dump(exclude={"modules", "plugins"})
        builder._modules = list(descriptor.modules)
        builder._plugins = list(descriptor.plugins)
        return builder

    @property
    def state(self) -> BuilderState:
        return self._state

    def _check_configuring(self) -> None:
        if self._state != BuilderState.CONFIGURING:
            raise BuilderStateError(
                f"Plugin builder '{self._fields['name']}' was already consumed by generate() "
                f"(state: {self._state})"
            )

    def _set(self, key: str, value: object) -> PluginBuilder:
        """Validate and store one descriptor field.

        Raises:
            pydantic.ValidationError: *value* is not valid for *key*; the
                builder keeps its previous configuration.
        """
        self._check_configuring()
        checked = PluginDescriptor.model_validate({**self._fields, key: value})
        self._fields[key] = getattr(checked, key)
        return self

    # ── Metadata ─────────────────────────────────────────────────

    def version(self, value: int) -> PluginBuilder:
        return self._set("version", value)

    def version_name(self, value: str) -> PluginBuilder:
        return self._set("version_name", value)

    def category(self, value: str) -> PluginBuilder:
        return self._set("category", value)

    def description(self, value: str) -> PluginBuilder:
        return self._set("description", value)

    def created_by(self, value: str) -> PluginBuilder:
        return self._set("created_by", value)

    def created_by_url(self, value: str) -> PluginBuilder:
        return self._set("created_by_url", value)

    def docs_url(self, value: str) -> PluginBuilder:
        return self._set("docs_url", value)

    def marketplace_url(self, value: str) -> PluginBuilder:
        return self._set("marketplace_url", value)

    def support_url(self, value: str) -> PluginBuilder:
        return self._set("support_url", value)

    # ── Flags ────────────────────────────────────────────────────

    def can_contain_content(self, value: bool = True) -> PluginBuilder:
        return self._set("can_contain_content", value)

    def is_beta_version(self, value: bool = True) -> PluginBuilder:
        return self._set("is_beta_version", value)

    def installed(self, value: bool = True) -> PluginBuilder:
        return self._set("installed", value)

    def enabled_by_default(self, value: bool = True) -> PluginBuilder:
        return self._set("enabled_by_default", value)

    def enabled(self, value: bool = True) -> PluginBuilder:
        return self._set("enabled", value)

    def disabled(self) -> PluginBuilder:
        return self.enabled(False)

    # ── Resources / output ───────────────────────────────────────

    def icon(self, data: bytes) -> PluginBuilder:
        return self._set("icon", data)

    def out_dir(self, path: Path | str) -> PluginBuilder:
        return self._set("output_root", Path(path))

    # ── Topology ─────────────────────────────────────────────────

    def module(self, module: Module | ModuleBuilder) -> PluginBuilder:
        """Attach a module; attachment order is emission order."""
        self._check_configuring()
        if isinstance(module, ModuleBuilder):
            module = module.build()
        self._modules.append(module)
        return self

    def add_plugin(
        self,
        name: str,
        enabled: bool = True,
        whitelist_platforms: Iterable[str] = (),
        blacklist_targets: Iterable[str] = (),
    ) -> PluginBuilder:
        """Declare a dependency on another plugin."""
        self._check_configuring()
        self._plugins.append(PluginDependency(
            name=name,
            enabled=enabled,
            whitelist_platforms=list(whitelist_platforms),
            blacklist_targets=list(blacklist_targets),
        ))
        return self

    def descriptor(self) -> PluginDescriptor:
        """Validated snapshot of the current configuration."""
        return PluginDescriptor.model_validate({
            **self._fields,
            "modules": self._modules,
            "plugins": self._plugins,
        })

    # ── Generation ───────────────────────────────────────────────

    def generate(self) -> GenerationResult:
        """Write the plugin package. Consumes the builder.

        Raises:
            BuilderStateError: The builder was already consumed.
            ConfigError: No output root could be resolved.
            TemplateError: A template rejected its fields.
            GenerationIOError: A directory or file could not be written.
        """
        self._check_configuring()
        self._state = BuilderState.GENERATING
        try:
            result = self._run(self.descriptor())
        except Exception:
            self._state = BuilderState.FAILED
            raise
        self._state = BuilderState.DONE
        return result

    def _run(self, plugin: PluginDescriptor) -> GenerationResult:
        if not plugin.enabled:
            logger.info("Plugin '%s' is disabled, nothing generated", plugin.name)
            return GenerationResult(name=plugin.name, skipped=True)

        output_root = resolve_output_root(plugin.output_root, self._environ)
        package_dir = output_root / plugin.name
        result = GenerationResult(name=plugin.name, package_dir=package_dir)
        logger.info("Generating plugin '%s' into %s", plugin.name, package_dir)

        ensure_dir(package_dir)
        self._emit(package_dir, generate_descriptor(plugin, self._renderer), result)

        ensure_dir(package_dir / RESOURCES_DIR)
        self._emit(package_dir, generate_icon(plugin), result)

        for module in plugin.modules:
            plan = plan_module(module, collapse=plugin.is_sole_module(module), renderer=self._renderer)
            ensure_dir(package_dir / plan.directory)
            for file in plan.config_files:
                self._emit(package_dir, file, result)

            ensure_dir(package_dir / plan.private_dir)
            ensure_dir(package_dir / plan.public_dir)
            for file in plan.source_files:
                self._emit(package_dir, file, result)

            logger.info("Module '%s' → %s (%d files)", module.name, plan.directory, len(plan.files))

        logger.info(
            "Plugin '%s' done: %d written, %d unchanged",
            plugin.name, len(result.written), len(result.unchanged),
        )
        return result

    @staticmethod
    def _emit(package_dir: Path, file: GeneratedFile, result: GenerationResult) -> None:
        target = package_dir / file.path
        if write_generated_file(package_dir, file):
            result.written.append(target)
        else:
            result.unchanged.append(target)
