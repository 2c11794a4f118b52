"""
Dependency / definition normalizer — module fields → build rules tokens.

Pure string formatting. Order is always the caller's order: dependency
order drives link and initialization order downstream, so nothing here
sorts or deduplicates.
"""

from __future__ import annotations

from collections.abc import Iterable

from uplugingen.core.models.module import Definition, DependencyKind, Module, PrivateDependency


def quote(item: str) -> str:
    return f'"{item}"'


def quote_join(items: Iterable[str], sep: str = ",") -> str:
    """``["A", "B"]`` → ``"A","B"``."""
    return sep.join(quote(i) for i in items)


def partition_private_dependencies(
    deps: Iterable[PrivateDependency],
) -> tuple[list[str], list[str]]:
    """Split private dependencies by tag into (plain, editor-data) name lists."""
    plain: list[str] = []
    editor_data: list[str] = []
    for dep in deps:
        if dep.kind == DependencyKind.EDITOR_DATA:
            editor_data.append(dep.name)
        else:
            plain.append(dep.name)
    return plain, editor_data


def format_definitions(defs: Iterable[Definition]) -> list[str]:
    """Definitions as ``KEY=VALUE`` strings; the value is not quoted."""
    return [f"{d.key}={d.value}" for d in defs]


def _definition_lines(public: list[str], private: list[str]) -> str:
    lines = [f"\t\tPublicDefinitions.Add({quote(d)});" for d in public]
    lines += [f"\t\tPrivateDefinitions.Add({quote(d)});" for d in private]
    return "\n".join(lines)


def _library_lines(libraries: list[str]) -> str:
    lines: list[str] = []
    for lib in libraries:
        path = f'Path.Combine(ModuleDirectory, {quote(lib)})'
        lines.append(f"\t\tPublicAdditionalLibraries.Add({path});")
        lines.append(f"\t\tRuntimeDependencies.Add({path});")
    return "\n".join(lines)


def build_config_fields(module: Module, *, manifest_filename: str) -> dict[str, str | bool]:
    """Field map for the ``build_config`` template.

    Args:
        module: The module to describe.
        manifest_filename: File name of the Android manifest fragment,
            referenced only when the module emits one.
    """
    plain, editor_data = partition_private_dependencies(module.private_dependencies)
    public_defs = format_definitions(module.public_definitions)
    private_defs = format_definitions(module.private_definitions)

    return {
        "module_name": module.name,
        "public_dependencies": quote_join(module.public_dependencies),
        "private_dependencies": quote_join(plain),
        "editor_dependencies": quote_join(editor_data),
        "public_include_paths": quote_join(module.public_include_paths),
        "private_include_paths": quote_join(module.private_include_paths),
        "definitions": _definition_lines(public_defs, private_defs),
        "dynamic_libraries": _library_lines(module.external_dynamic_libraries),
        "android_manifest": manifest_filename,
        # features
        "debug": module.debug,
        "has_editor_dependencies": bool(editor_data),
        "has_definitions": bool(public_defs or private_defs),
        "has_dynamic_libraries": bool(module.external_dynamic_libraries),
        "has_android_manifest": module.needs_android_manifest,
    }
