"""
Tests for the dependency / definition normalizer.

Pure unit tests: module fields in → build rules tokens out.
"""

from uplugingen.core.models import Definition, Module, PrivateDependency
from uplugingen.core.services.normalize import (
    build_config_fields,
    format_definitions,
    partition_private_dependencies,
    quote_join,
)


class TestQuoteJoin:
    def test_order_preserved(self):
        """Never sorted, never deduplicated."""
        assert quote_join(["A", "B", "C"]) == '"A","B","C"'
        assert quote_join(["C", "A", "C"]) == '"C","A","C"'

    def test_empty(self):
        assert quote_join([]) == ""


class TestPartition:
    def test_plain_and_editor_data_split(self):
        deps = [
            PrivateDependency.plain("X"),
            PrivateDependency.editor_data("Y"),
            PrivateDependency.plain("Z"),
        ]
        plain, editor = partition_private_dependencies(deps)
        assert plain == ["X", "Z"]
        assert editor == ["Y"]

    def test_no_inference_from_name(self):
        """A name that looks editor-only stays plain unless tagged."""
        plain, editor = partition_private_dependencies([PrivateDependency.plain("UnrealEd")])
        assert plain == ["UnrealEd"]
        assert editor == []


class TestDefinitions:
    def test_key_value(self):
        defs = [Definition(key="B", value="2"), Definition(key="A", value="1"), Definition(key="FLAG")]
        assert format_definitions(defs) == ["B=2", "A=1", "FLAG="]


class TestBuildConfigFields:
    def test_fields(self):
        m = Module(
            name="Game",
            public_dependencies=["Core", "Engine"],
            private_dependencies=["Slate", {"name": "UnrealEd", "kind": "editor_data"}],
            public_include_paths=["Game/Public"],
            private_include_paths=["ThirdParty/include", "Game/Private"],
            private_definitions=["WITH_GAME=1"],
        )
        fields = build_config_fields(m, manifest_filename="BaseAPL.xml")

        assert fields["module_name"] == "Game"
        assert fields["public_dependencies"] == '"Core","Engine"'
        assert fields["private_dependencies"] == '"Slate"'
        assert fields["editor_dependencies"] == '"UnrealEd"'
        assert fields["public_include_paths"] == '"Game/Public"'
        assert fields["private_include_paths"] == '"ThirdParty/include","Game/Private"'
        assert fields["definitions"] == '\t\tPrivateDefinitions.Add("WITH_GAME=1");'
        assert fields["has_editor_dependencies"] is True
        assert fields["has_definitions"] is True
        assert fields["has_dynamic_libraries"] is False
        assert fields["has_android_manifest"] is False
        assert fields["debug"] is False

    def test_public_definitions_before_private(self):
        m = Module(name="M", public_definitions=["PUB=1"], private_definitions=["PRIV=2"])
        lines = build_config_fields(m, manifest_filename="BaseAPL.xml")["definitions"].splitlines()
        assert lines == [
            '\t\tPublicDefinitions.Add("PUB=1");',
            '\t\tPrivateDefinitions.Add("PRIV=2");',
        ]

    def test_dynamic_libraries(self):
        m = Module(name="M", external_dynamic_libraries=["lib/libfoo.so"])
        fields = build_config_fields(m, manifest_filename="BaseAPL.xml")
        assert fields["has_dynamic_libraries"] is True
        assert 'PublicAdditionalLibraries.Add(Path.Combine(ModuleDirectory, "lib/libfoo.so"));' in fields["dynamic_libraries"]
        assert 'RuntimeDependencies.Add(Path.Combine(ModuleDirectory, "lib/libfoo.so"));' in fields["dynamic_libraries"]
