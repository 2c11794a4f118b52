"""
Build rules generator — ``<Module>.build.cs`` for one module.
"""

from __future__ import annotations

from functools import partial
from pathlib import PurePosixPath

from uplugingen.core.models.module import Module
from uplugingen.core.models.template import GeneratedFile, WriteMode
from uplugingen.core.services.generators.android_manifest import MANIFEST_FILENAME
from uplugingen.core.services.normalize import build_config_fields
from uplugingen.core.services.template_engine import Renderer, render

BUILD_CONFIG_EXTENSION = "build.cs"


def build_config_filename(module: Module) -> str:
    return f"{module.name}.{BUILD_CONFIG_EXTENSION}"


def render_build_config(module: Module, renderer: Renderer = render) -> str:
    """Render the build rules text for *module*."""
    return renderer("build_config", build_config_fields(module, manifest_filename=MANIFEST_FILENAME))


def generate_build_config(
    module: Module,
    module_dir: PurePosixPath,
    renderer: Renderer = render,
) -> GeneratedFile:
    """Build rules file, rendered lazily and written only when changed."""
    return GeneratedFile(
        path=str(module_dir / build_config_filename(module)),
        mode=WriteMode.IF_CHANGED,
        reason=f"Build rules for module {module.name}",
        producer=partial(render_build_config, module, renderer),
    )
