"""
Android manifest fragment generator — ``BaseAPL.xml``.

Only modules that ship native dynamic libraries and carry an Android
config get one. The fragment adds the permissions and copies/loads each
library.
"""

from __future__ import annotations

from functools import partial
from pathlib import PurePosixPath

from uplugingen.core.models.module import AndroidConfig, Module
from uplugingen.core.models.template import GeneratedFile, WriteMode
from uplugingen.core.services.template_engine import Renderer, render

MANIFEST_FILENAME = "BaseAPL.xml"


def _library_stem(library: str) -> str:
    """``libfoo.so`` → ``foo`` for ``System.loadLibrary``."""
    name = PurePosixPath(library).name
    if name.endswith(".so"):
        name = name[: -len(".so")]
    if name.startswith("lib"):
        name = name[len("lib"):]
    return name


def android_manifest_fields(permissions: list[str], libraries: list[str], module_name: str) -> dict[str, str]:
    permission_lines = [f'\t\t<addPermission android:name="{p}"/>' for p in permissions]
    copy_lines = [
        f'\t\t<copyFile src="$S(PluginDir)/{lib}" dst="$S(BuildDir)/libs/$S(Architecture)/{PurePosixPath(lib).name}"/>'
        for lib in libraries
    ]
    load_lines = [
        f'\t\t<loadLibrary name="{_library_stem(lib)}" failmsg="Failed to load {lib}"/>'
        for lib in libraries
    ]
    return {
        "module_name": module_name,
        "permissions": "\n".join(permission_lines),
        "library_copies": "\n".join(copy_lines),
        "library_loads": "\n".join(load_lines),
    }


def render_android_manifest(module: Module, android: AndroidConfig, renderer: Renderer = render) -> str:
    return renderer(
        "android_manifest",
        android_manifest_fields(android.permissions, module.external_dynamic_libraries, module.name),
    )


def generate_android_manifest(
    module: Module,
    module_dir: PurePosixPath,
    renderer: Renderer = render,
) -> GeneratedFile | None:
    """Manifest fragment for *module*, or None when it needs none.

    Rendered lazily, so the build rules file ahead of it is written
    even when the fragment fails to render.
    """
    android = module.android
    if android is None or not module.needs_android_manifest:
        return None

    return GeneratedFile(
        path=str(module_dir / MANIFEST_FILENAME),
        mode=WriteMode.ALWAYS,
        reason=f"Android manifest fragment for {len(module.external_dynamic_libraries)} native libraries",
        producer=partial(render_android_manifest, module, android, renderer),
    )
