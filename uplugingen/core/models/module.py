"""
Module model — one named code unit inside a plugin package.

A module carries everything its build rules file needs (dependencies,
include paths, definitions, native libraries) plus the source files to
emit under ``Public/`` and ``Private/``.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Characters that would break the quoted/XML contexts tokens are written into
_UNSAFE_CHARS = frozenset('"\\<>&')


def check_token(value: str, what: str = "value") -> str:
    """Reject tokens that cannot be interpolated verbatim into generated files."""
    if not value:
        raise ValueError(f"{what} must not be empty")
    bad = sorted({c for c in value if c in _UNSAFE_CHARS or ord(c) < 0x20 or ord(c) == 0x7F})
    if bad:
        raise ValueError(f"{what} {value!r} contains unsupported characters: {bad!r}")
    return value


def check_identifier(value: str, what: str = "name") -> str:
    """Reject names that are not valid C#/C++ identifiers."""
    if not _IDENTIFIER_RE.match(value):
        raise ValueError(f"{what} {value!r} must be an identifier ([A-Za-z_][A-Za-z0-9_]*)")
    return value


class HostType(StrEnum):
    """When and where the engine loads a module."""

    RUNTIME = "Runtime"
    RUNTIME_NO_COMMANDLET = "RuntimeNoCommandlet"
    RUNTIME_AND_PROGRAM = "RuntimeAndProgram"
    COOKED_ONLY = "CookedOnly"
    UNCOOKED_ONLY = "UncookedOnly"
    DEVELOPER = "Developer"
    DEVELOPER_TOOL = "DeveloperTool"
    EDITOR = "Editor"
    EDITOR_NO_COMMANDLET = "EditorNoCommandlet"
    EDITOR_AND_PROGRAM = "EditorAndProgram"
    PROGRAM = "Program"
    SERVER_ONLY = "ServerOnly"
    CLIENT_ONLY = "ClientOnly"
    CLIENT_ONLY_NO_COMMANDLET = "ClientOnlyNoCommandlet"


class LoadingPhase(StrEnum):
    """Module initialization order relative to engine startup."""

    EARLIEST_POSSIBLE = "EarliestPossible"
    POST_CONFIG_INIT = "PostConfigInit"
    POST_SPLASH_SCREEN = "PostSplashScreen"
    PRE_EARLY_LOADING_SCREEN = "PreEarlyLoadingScreen"
    PRE_LOADING_SCREEN = "PreLoadingScreen"
    PRE_DEFAULT = "PreDefault"
    DEFAULT = "Default"
    POST_DEFAULT = "PostDefault"
    POST_ENGINE_INIT = "PostEngineInit"
    NONE = "None"


class DependencyKind(StrEnum):
    PLAIN = "plain"
    EDITOR_DATA = "editor_data"


class CodeFileKind(StrEnum):
    HEADER = "header"
    SOURCE = "source"


class SourcesMode(StrEnum):
    NONE = "none"
    WITH_DEFAULT_MODULE = "with_default_module"
    WITHOUT_DEFAULT_MODULE = "without_default_module"


# Fixed extension per code file kind
EXTENSIONS: dict[CodeFileKind, str] = {
    CodeFileKind.HEADER: "h",
    CodeFileKind.SOURCE: "cpp",
}


class PrivateDependency(BaseModel):
    """A private module dependency, tagged plain or editor-data."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    kind: DependencyKind = DependencyKind.PLAIN

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return check_token(v, "dependency")

    @classmethod
    def plain(cls, name: str) -> PrivateDependency:
        return cls(name=name, kind=DependencyKind.PLAIN)

    @classmethod
    def editor_data(cls, name: str) -> PrivateDependency:
        return cls(name=name, kind=DependencyKind.EDITOR_DATA)


class Definition(BaseModel):
    """A preprocessor definition ``KEY=VALUE``."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    key: str
    value: str = ""

    @field_validator("key")
    @classmethod
    def _check_key(cls, v: str) -> str:
        return check_identifier(v, "definition key")

    @field_validator("value")
    @classmethod
    def _check_value(cls, v: str) -> str:
        return check_token(v, "definition value") if v else v

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


class AndroidConfig(BaseModel):
    """Android manifest settings for a module that bundles native libraries."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    permissions: list[str] = Field(default_factory=list)

    @field_validator("permissions")
    @classmethod
    def _check_permissions(cls, v: list[str]) -> list[str]:
        return [check_token(p, "permission") for p in v]


class CodeFile(BaseModel):
    """One header or source file inside a source group.

    Sources always land in ``Private/``; headers go to ``Public/`` when
    ``public`` is set.
    """

    kind: CodeFileKind
    public: bool = False
    contents: str = ""

    @model_validator(mode="after")
    def _sources_are_private(self) -> CodeFile:
        if self.kind == CodeFileKind.SOURCE and self.public:
            raise ValueError("source files cannot be public")
        return self

    @property
    def extension(self) -> str:
        return EXTENSIONS[self.kind]

    @property
    def subdirectory(self) -> str:
        return "Public" if self.public else "Private"

    @classmethod
    def header(cls, contents: str, *, public: bool = True) -> CodeFile:
        return cls(kind=CodeFileKind.HEADER, public=public, contents=contents)

    @classmethod
    def source(cls, contents: str) -> CodeFile:
        return cls(kind=CodeFileKind.SOURCE, contents=contents)


class SourceGroup(BaseModel):
    """Files sharing one logical name, e.g. ``Foo.h`` + ``Foo.cpp``."""

    name: str
    files: list[CodeFile] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"source file name {v!r} must be a plain file name")
        return v


class ModuleSources(BaseModel):
    """Which source files a module emits.

    ``none`` emits only the default ``<Name>Module`` pair,
    ``with_default_module`` emits the groups followed by that pair,
    ``without_default_module`` emits exactly the groups.
    """

    mode: SourcesMode = SourcesMode.NONE
    groups: list[SourceGroup] = Field(default_factory=list)

    @model_validator(mode="after")
    def _none_has_no_groups(self) -> ModuleSources:
        if self.mode == SourcesMode.NONE and self.groups:
            raise ValueError("sources mode 'none' takes no groups")
        return self

    @property
    def includes_default_module(self) -> bool:
        return self.mode != SourcesMode.WITHOUT_DEFAULT_MODULE

    @classmethod
    def none(cls) -> ModuleSources:
        return cls(mode=SourcesMode.NONE)

    @classmethod
    def with_default_module(cls, groups: list[SourceGroup]) -> ModuleSources:
        return cls(mode=SourcesMode.WITH_DEFAULT_MODULE, groups=groups)

    @classmethod
    def without_default_module(cls, groups: list[SourceGroup]) -> ModuleSources:
        return cls(mode=SourcesMode.WITHOUT_DEFAULT_MODULE, groups=groups)


class Module(BaseModel):
    """A code module of the plugin.

    Immutable once attached to a package. Dependency and definition lists
    keep the caller's order; nothing is sorted or deduplicated.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    # ── Identity ─────────────────────────────────────────────────
    name: str
    host_type: HostType = HostType.RUNTIME
    loading_phase: LoadingPhase = LoadingPhase.DEFAULT

    # ── Build rules ──────────────────────────────────────────────
    public_dependencies: list[str] = Field(default_factory=list)
    private_dependencies: list[PrivateDependency] = Field(default_factory=list)
    public_include_paths: list[str] = Field(default_factory=list)
    private_include_paths: list[str] = Field(default_factory=list)
    public_definitions: list[Definition] = Field(default_factory=list)
    private_definitions: list[Definition] = Field(default_factory=list)
    debug: bool = False

    # ── Platforms / native code ──────────────────────────────────
    whitelist_platforms: list[str] = Field(default_factory=list)
    external_dynamic_libraries: list[str] = Field(default_factory=list)
    android: AndroidConfig | None = None

    sources: ModuleSources = Field(default_factory=ModuleSources)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return check_identifier(v, "module name")

    @field_validator("public_dependencies")
    @classmethod
    def _check_public_deps(cls, v: list[str]) -> list[str]:
        return [check_token(d, "dependency") for d in v]

    @field_validator("public_include_paths", "private_include_paths")
    @classmethod
    def _check_include_paths(cls, v: list[str]) -> list[str]:
        return [check_token(p, "include path") for p in v]

    @field_validator("whitelist_platforms")
    @classmethod
    def _check_platforms(cls, v: list[str]) -> list[str]:
        return [check_token(p, "platform") for p in v]

    @field_validator("external_dynamic_libraries")
    @classmethod
    def _check_libraries(cls, v: list[str]) -> list[str]:
        return [check_token(lib, "library") for lib in v]

    @field_validator("private_dependencies", mode="before")
    @classmethod
    def _coerce_private_deps(cls, v: object) -> object:
        # Bare strings are plain dependencies
        if isinstance(v, list):
            return [{"name": d} if isinstance(d, str) else d for d in v]
        return v

    @field_validator("public_definitions", "private_definitions", mode="before")
    @classmethod
    def _coerce_definitions(cls, v: object) -> object:
        if not isinstance(v, list):
            return v
        coerced: list[object] = []
        for d in v:
            if isinstance(d, str):
                key, _, value = d.partition("=")
                coerced.append({"key": key, "value": value})
            elif isinstance(d, (tuple, list)) and len(d) == 2:
                coerced.append({"key": d[0], "value": d[1]})
            else:
                coerced.append(d)
        return coerced

    @property
    def default_module_name(self) -> str:
        """Logical file name of the boilerplate module pair."""
        return f"{self.name}Module"

    @property
    def needs_android_manifest(self) -> bool:
        return bool(self.external_dynamic_libraries) and self.android is not None
