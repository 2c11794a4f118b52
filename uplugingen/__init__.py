"""
uplugingen — generate plugin package scaffolding for an Unreal-style engine.

    from uplugingen import ModuleBuilder, PluginBuilder

    PluginBuilder("MyPlugin").module(ModuleBuilder("MyPlugin")).out_dir(out).generate()
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from uplugingen.core.use_cases.generate import (  # noqa: E402
    BuilderStateError,
    GenerationResult,
    ModuleBuilder,
    PluginBuilder,
)

__all__ = [
    "BuilderStateError",
    "GenerationResult",
    "ModuleBuilder",
    "PluginBuilder",
    "__version__",
]
