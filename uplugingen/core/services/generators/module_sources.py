"""
Module source generator — boilerplate module pair plus caller sources.

Resolves a module's ``ModuleSources`` into ordered source groups and
turns each file into a ``GeneratedFile`` under ``Public/`` or
``Private/``. The default ``<Name>Module`` group, when present, is
always last and rendered lazily by the writer.
"""

from __future__ import annotations

from functools import partial
from pathlib import PurePosixPath

from uplugingen.core.models.module import CodeFile, CodeFileKind, Module, SourceGroup
from uplugingen.core.models.template import GeneratedFile, WriteMode
from uplugingen.core.services.template_engine import Renderer, render

# Template per file of the default module pair
DEFAULT_MODULE_TEMPLATES: dict[CodeFileKind, str] = {
    CodeFileKind.HEADER: "module_header",
    CodeFileKind.SOURCE: "module_source",
}


def default_module_group(module: Module) -> SourceGroup:
    """The boilerplate ``IModuleInterface`` header/source pair, contents unrendered."""
    return SourceGroup(
        name=module.default_module_name,
        files=[CodeFile.header("", public=True), CodeFile.source("")],
    )


def default_module_fields(module: Module) -> dict[str, str]:
    return {"module_name": module.name, "filename": module.default_module_name}


def resolve_source_groups(module: Module) -> list[SourceGroup]:
    """Ordered source groups for *module* according to its sources mode."""
    groups = list(module.sources.groups)
    if module.sources.includes_default_module:
        groups.append(default_module_group(module))
    return groups


def source_file_path(module_dir: PurePosixPath, group: SourceGroup, item: CodeFile) -> PurePosixPath:
    return module_dir / item.subdirectory / f"{group.name}.{item.extension}"


def generate_module_sources(
    module: Module,
    module_dir: PurePosixPath,
    renderer: Renderer = render,
) -> list[GeneratedFile]:
    """Source files for *module*, each overwritten on every run."""
    groups = resolve_source_groups(module)
    default = groups[-1] if module.sources.includes_default_module else None

    files: list[GeneratedFile] = []
    for group in groups:
        for item in group.files:
            producer = None
            if group is default:
                producer = partial(renderer, DEFAULT_MODULE_TEMPLATES[item.kind], default_module_fields(module))
            files.append(GeneratedFile(
                path=str(source_file_path(module_dir, group, item)),
                mode=WriteMode.ALWAYS,
                reason=f"{item.kind.value} {group.name} of module {module.name}",
                content=None if producer else item.contents,
                producer=producer,
            ))
    return files
