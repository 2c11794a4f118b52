"""
Template engine for generated plugin files.

Processes template files with two mechanisms:
  1. Conditional blocks:  // __IF_FEATURE_xxx__ / // __IF_NOT_FEATURE_xxx__ / // __ENDIF__
  2. Placeholder substitution:  __PLACEHOLDER_NAME__

The template files live in templates/ and read like the files they
produce. Marker lines are removed from the output whatever the host
language's comment syntax is.

Callers go through ``render(template_id, fields)``: boolean fields are
features, string fields are placeholders (``module_name`` fills
``__MODULE_NAME__``). Anything else is a ``TemplateError``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from functools import cache
from pathlib import Path

logger = logging.getLogger(__name__)


# ── Template directory ──────────────────────────────────────────────

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Template ids → file names under TEMPLATES_DIR
TEMPLATES: dict[str, str] = {
    "descriptor": "Plugin.uplugin.tmpl",
    "build_config": "Module.build.cs.tmpl",
    "android_manifest": "BaseAPL.xml.tmpl",
    "module_header": "Module.h.tmpl",
    "module_source": "Module.cpp.tmpl",
}

_PLACEHOLDER_RE = re.compile(r"__([A-Z][A-Z0-9]*(?:_[A-Z0-9]+)*)__")

Renderer = Callable[[str, Mapping[str, object]], str]


class TemplateError(Exception):
    """Raised when a template cannot be rendered with the supplied fields."""


# ── Template Processing ────────────────────────────────────────────


def process_template(
    content: str,
    features: Mapping[str, bool],
    placeholders: Mapping[str, str],
) -> str:
    """Process a template with conditional blocks and placeholders.

    Conditional blocks:

        // __IF_FEATURE_xxx__
        ... included only if feature 'xxx' is enabled ...
        // __ENDIF__

        // __IF_NOT_FEATURE_xxx__
        ... included only if feature 'xxx' is DISABLED ...
        // __ENDIF__

    Blocks can be nested. Processing is done iteratively from innermost out.

    Placeholders are keyed by their bare upper-case name (``MODULE_NAME``
    for ``__MODULE_NAME__``) and substituted in a single pass, so values
    are never re-scanned.

    Raises:
        TemplateError: a placeholder left in the template has no value.
    """
    changed = True
    while changed:
        changed = False

        def _replace_if(m: re.Match) -> str:
            nonlocal changed
            changed = True
            return m.group(2) if features.get(m.group(1), False) else ""

        content = re.sub(
            r"//\s*__IF_FEATURE_(\w+?)__[ \t]*\n((?:(?!//\s*__IF_).)*?)//\s*__ENDIF__[ \t]*\n",
            _replace_if,
            content,
            flags=re.DOTALL,
        )

        def _replace_if_not(m: re.Match) -> str:
            nonlocal changed
            changed = True
            return "" if features.get(m.group(1), False) else m.group(2)

        content = re.sub(
            r"//\s*__IF_NOT_FEATURE_(\w+?)__[ \t]*\n((?:(?!//\s*__IF_).)*?)//\s*__ENDIF__[ \t]*\n",
            _replace_if_not,
            content,
            flags=re.DOTALL,
        )

    missing = sorted({m.group(1) for m in _PLACEHOLDER_RE.finditer(content)} - set(placeholders))
    if missing:
        raise TemplateError(f"No value for placeholder(s): {', '.join(missing)}")

    return _PLACEHOLDER_RE.sub(lambda m: placeholders[m.group(1)], content)


@cache
def load_template(template_id: str) -> str:
    """Read a template file by id."""
    filename = TEMPLATES.get(template_id)
    if filename is None:
        raise TemplateError(
            f"Unknown template '{template_id}'. Known: {', '.join(sorted(TEMPLATES))}"
        )
    path = TEMPLATES_DIR / filename
    logger.debug("Loading template %s from %s", template_id, path)
    return path.read_text(encoding="utf-8")


def render(template_id: str, fields: Mapping[str, object]) -> str:
    """Render a bundled template.

    Args:
        template_id: One of ``TEMPLATES``.
        fields: ``snake_case`` names → str (placeholder) or bool (feature).

    Raises:
        TemplateError: unknown template, a field of another type, or a
            placeholder without a field.
    """
    features: dict[str, bool] = {}
    placeholders: dict[str, str] = {}
    for key, value in fields.items():
        if isinstance(value, bool):
            features[key] = value
        elif isinstance(value, str):
            placeholders[key.upper()] = value
        else:
            raise TemplateError(
                f"Field '{key}' of template '{template_id}' must be str or bool, "
                f"got {type(value).__name__}"
            )

    try:
        return process_template(load_template(template_id), features, placeholders)
    except TemplateError as e:
        raise TemplateError(f"{template_id}: {e}") from e
