"""
Tests for the template engine — conditionals, placeholders, errors.
"""

import pytest

from uplugingen.core.services.template_engine import (
    TEMPLATES,
    TEMPLATES_DIR,
    TemplateError,
    process_template,
    render,
)


class TestProcessTemplate:
    def test_placeholder(self):
        assert process_template("class __NAME__;\n", {}, {"NAME": "Foo"}) == "class Foo;\n"

    def test_placeholder_inside_identifier(self):
        out = process_template("F__MODULE_NAME__Module", {}, {"MODULE_NAME": "Game"})
        assert out == "FGameModule"

    def test_values_not_rescanned(self):
        out = process_template("__A__ __B__", {}, {"A": "__B__", "B": "b"})
        assert out == "__B__ b"

    def test_feature_block(self):
        tmpl = "a\n// __IF_FEATURE_x__\nb\n// __ENDIF__\nc\n"
        assert process_template(tmpl, {"x": True}, {}) == "a\nb\nc\n"
        assert process_template(tmpl, {"x": False}, {}) == "a\nc\n"
        assert process_template(tmpl, {}, {}) == "a\nc\n"

    def test_not_feature_block(self):
        tmpl = "a\n// __IF_NOT_FEATURE_x__\nb\n// __ENDIF__\n"
        assert process_template(tmpl, {"x": False}, {}) == "a\nb\n"
        assert process_template(tmpl, {"x": True}, {}) == "a\n"

    def test_nested_blocks(self):
        tmpl = (
            "a\n"
            "// __IF_FEATURE_x__\n"
            "b\n"
            "// __IF_NOT_FEATURE_y__\n"
            "c\n"
            "// __ENDIF__\n"
            "// __ENDIF__\n"
            "d\n"
        )
        assert process_template(tmpl, {"x": True, "y": False}, {}) == "a\nb\nc\nd\n"
        assert process_template(tmpl, {"x": True, "y": True}, {}) == "a\nb\nd\n"
        assert process_template(tmpl, {"x": False}, {}) == "a\nd\n"

    def test_placeholder_in_dropped_block_not_required(self):
        tmpl = "// __IF_FEATURE_x__\n__MISSING__\n// __ENDIF__\nok\n"
        assert process_template(tmpl, {}, {}) == "ok\n"

    def test_missing_placeholder(self):
        with pytest.raises(TemplateError, match="MISSING"):
            process_template("__MISSING__", {}, {})


class TestRender:
    def test_all_templates_exist(self):
        for filename in TEMPLATES.values():
            assert (TEMPLATES_DIR / filename).is_file(), filename

    def test_module_header(self):
        out = render("module_header", {"module_name": "Game"})
        assert "class FGameModule : public IModuleInterface" in out
        assert "MODULE_NAME" not in out

    def test_unknown_template(self):
        with pytest.raises(TemplateError, match="Unknown template"):
            render("nope", {})

    def test_non_string_field(self):
        with pytest.raises(TemplateError, match="must be str or bool"):
            render("module_header", {"module_name": 42})

    def test_missing_field(self):
        with pytest.raises(TemplateError, match="MODULE_NAME"):
            render("module_header", {})
