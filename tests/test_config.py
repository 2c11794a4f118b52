"""
Tests for plugin.yml loading and output root resolution.
"""

from pathlib import Path

import pytest

from uplugingen.core.config.loader import ConfigError, load_plugin_config, resolve_output_root
from uplugingen.core.models import DependencyKind, HostType, SourcesMode


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "plugin.yml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadPluginConfig:
    def test_flat(self, tmp_path):
        path = _write(tmp_path, """
name: MyPlugin
version: 3
description: Networking helpers
modules:
  - name: MyPlugin
    host_type: Editor
    public_dependencies: [Core, Engine]
    private_dependencies:
      - Slate
      - {name: UnrealEd, kind: editor_data}
    public_definitions: ["WITH_NET=1"]
plugins:
  - name: OnlineSubsystem
    whitelist_platforms: [Android]
""")
        plugin = load_plugin_config(path)
        assert plugin.name == "MyPlugin"
        assert plugin.version == 3
        module = plugin.modules[0]
        assert module.host_type == HostType.EDITOR
        assert module.public_dependencies == ["Core", "Engine"]
        assert [d.kind for d in module.private_dependencies] == [DependencyKind.PLAIN, DependencyKind.EDITOR_DATA]
        assert [str(d) for d in module.public_definitions] == ["WITH_NET=1"]
        assert plugin.plugins[0].whitelist_platforms == ["Android"]

    def test_numeric_version_name(self, tmp_path):
        path = _write(tmp_path, "name: P\nversion_name: 1.0\n")
        assert load_plugin_config(path).version_name == "1.0"

    @pytest.mark.parametrize("definition", [
        "[WITH_FOO, 1]",
        "{key: WITH_FOO, value: 1}",
        "WITH_FOO=1",
    ])
    def test_numeric_definition_values(self, tmp_path, definition):
        path = _write(tmp_path, f"name: P\nmodules:\n  - name: P\n    public_definitions: [{definition}]\n")
        module = load_plugin_config(path).modules[0]
        assert [str(d) for d in module.public_definitions] == ["WITH_FOO=1"]

    def test_wrapped_under_plugin_key(self, tmp_path):
        path = _write(tmp_path, "plugin:\n  name: Wrapped\n")
        assert load_plugin_config(path).name == "Wrapped"

    def test_sources(self, tmp_path):
        path = _write(tmp_path, """
name: P
modules:
  - name: P
    sources:
      mode: without_default_module
      groups:
        - name: Foo
          files:
            - {kind: header, public: true, contents: "#pragma once"}
            - {kind: source, contents: "// Foo"}
""")
        sources = load_plugin_config(path).modules[0].sources
        assert sources.mode == SourcesMode.WITHOUT_DEFAULT_MODULE
        assert sources.groups[0].files[0].contents == "#pragma once"

    def test_icon_relative_to_config(self, tmp_path):
        (tmp_path / "art").mkdir()
        (tmp_path / "art" / "icon.png").write_bytes(b"\x89PNGcustom")
        path = _write(tmp_path, "name: P\nicon: art/icon.png\n")
        assert load_plugin_config(path).icon == b"\x89PNGcustom"

    def test_missing_icon(self, tmp_path):
        path = _write(tmp_path, "name: P\nicon: nope.png\n")
        with pytest.raises(ConfigError, match="Cannot read icon"):
            load_plugin_config(path)

    def test_output_root_relative_to_config(self, tmp_path):
        path = _write(tmp_path, "name: P\noutput_root: build/plugins\n")
        assert load_plugin_config(path).output_root == tmp_path.resolve() / "build" / "plugins"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_plugin_config(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path, "name: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_plugin_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = _write(tmp_path, "- just\n- a list\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_plugin_config(path)

    def test_invalid_model(self, tmp_path):
        path = _write(tmp_path, "name: P\nmodules:\n  - name: Bad Name\n")
        with pytest.raises(ConfigError, match="Invalid plugin configuration"):
            load_plugin_config(path)

    def test_unsafe_dependency(self, tmp_path):
        path = _write(tmp_path, 'name: P\nmodules:\n  - name: M\n    public_dependencies: [\'Co"re\']\n')
        with pytest.raises(ConfigError):
            load_plugin_config(path)


class TestResolveOutputRoot:
    def test_override_wins(self, tmp_path):
        env = {"UPLUGINGEN_PROJECT_DIR": "/elsewhere", "UPLUGINGEN_TARGET": "Win64"}
        assert resolve_output_root(tmp_path, env) == tmp_path

    def test_from_environment(self):
        env = {"UPLUGINGEN_PROJECT_DIR": "/work/game", "UPLUGINGEN_TARGET": "Android"}
        assert resolve_output_root(None, env) == Path("/work/game/target/unrealplugin-Android")

    def test_missing_target(self):
        with pytest.raises(ConfigError, match="UPLUGINGEN_TARGET") as exc:
            resolve_output_root(None, {"UPLUGINGEN_PROJECT_DIR": "/work/game"})
        assert "UPLUGINGEN_PROJECT_DIR" not in str(exc.value)

    def test_both_missing(self):
        with pytest.raises(ConfigError, match="UPLUGINGEN_PROJECT_DIR, UPLUGINGEN_TARGET"):
            resolve_output_root(None, {})

    def test_empty_value_counts_as_missing(self):
        with pytest.raises(ConfigError):
            resolve_output_root(None, {"UPLUGINGEN_PROJECT_DIR": "", "UPLUGINGEN_TARGET": "Win64"})
