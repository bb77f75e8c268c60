"""Code generation settings, their defaults and their validation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import MISSING, Field, dataclass, field, fields, is_dataclass, replace
from typing import Any


class ConfigurationError(ValueError):
    """Raised for a configuration that is malformed or invalid."""


def _opt(key: str, kind: str, *, omitempty: bool = True, item: type | None = None) -> dict:
    return {"key": key, "kind": kind, "omitempty": omitempty, "item": item}


@dataclass
class AdditionalImport:
    """An extra package to import into the generated code."""

    alias: str = field(default="", metadata=_opt("alias", "str"))
    package: str = field(default="", metadata=_opt("package", "str", omitempty=False))


@dataclass
class GenerateOptions:
    """Which kinds of output to generate."""

    chi_server: bool = field(default=False, metadata=_opt("chi-server", "bool"))
    echo_server: bool = field(default=False, metadata=_opt("echo-server", "bool"))
    gin_server: bool = field(default=False, metadata=_opt("gin-server", "bool"))
    gorilla_server: bool = field(default=False, metadata=_opt("gorilla-server", "bool"))
    strict: bool = field(default=False, metadata=_opt("strict-server", "bool"))
    client: bool = field(default=False, metadata=_opt("client", "bool"))
    models: bool = field(default=False, metadata=_opt("models", "bool"))
    embedded_spec: bool = field(default=False, metadata=_opt("embedded-spec", "bool"))


@dataclass
class CompatibilityOptions:
    """Switches that restore earlier generator behaviour."""

    old_merge_schemas: bool = field(default=False, metadata=_opt("old-merge-schemas", "bool"))
    old_enum_conflicts: bool = field(default=False, metadata=_opt("old-enum-conflicts", "bool"))
    old_aliasing: bool = field(default=False, metadata=_opt("old-aliasing", "bool"))
    disable_flatten_additional_properties: bool = field(
        default=False, metadata=_opt("disable-flatten-additional-properties", "bool")
    )
    disable_required_readonly_as_pointer: bool = field(
        default=False, metadata=_opt("disable-required-readonly-as-pointer", "bool")
    )
    always_prefix_enum_values: bool = field(
        default=False, metadata=_opt("always-prefix-enum-values", "bool")
    )


@dataclass
class OutputOptions:
    """Settings that change the generated output."""

    skip_fmt: bool = field(default=False, metadata=_opt("skip-fmt", "bool"))
    skip_prune: bool = field(default=False, metadata=_opt("skip-prune", "bool"))
    include_tags: list[str] = field(default_factory=list, metadata=_opt("include-tags", "strs"))
    exclude_tags: list[str] = field(default_factory=list, metadata=_opt("exclude-tags", "strs"))
    user_templates: dict[str, str] = field(
        default_factory=dict, metadata=_opt("user-templates", "map")
    )
    user_templates_dir: str = field(default="", metadata=_opt("user-templates-dir", "str"))
    exclude_schemas: list[str] = field(
        default_factory=list, metadata=_opt("exclude-schemas", "strs")
    )
    response_type_suffix: str = field(default="", metadata=_opt("response-type-suffix", "str"))


@dataclass
class Configuration:
    """All code generation settings."""

    package_name: str = field(default="", metadata=_opt("package", "str", omitempty=False))
    generate: GenerateOptions = field(
        default_factory=GenerateOptions, metadata=_opt("generate", "struct")
    )
    compatibility: CompatibilityOptions = field(
        default_factory=CompatibilityOptions, metadata=_opt("compatibility", "struct")
    )
    output_options: OutputOptions = field(
        default_factory=OutputOptions, metadata=_opt("output-options", "struct")
    )
    import_mapping: dict[str, str] = field(
        default_factory=dict, metadata=_opt("import-mapping", "map")
    )
    additional_imports: list[AdditionalImport] = field(
        default_factory=list,
        metadata=_opt("additional-imports", "structs", item=AdditionalImport),
    )

    def update_defaults(self) -> Configuration:
        """Return a copy with defaults filled in for unset fields."""
        if self.generate == GenerateOptions():
            return replace(
                self,
                generate=GenerateOptions(echo_server=True, models=True, embedded_spec=True),
            )
        return replace(self)

    def validate(self) -> None:
        """Raise ConfigurationError if the settings cannot be used."""
        if not self.package_name:
            raise ConfigurationError("package name must be specified")
        servers = (self.generate.chi_server, self.generate.echo_server, self.generate.gin_server)
        if sum(servers) > 1:
            raise ConfigurationError("only one server type is supported at a time")

    @classmethod
    def from_dict(cls, data: Any) -> Configuration:
        """Build a configuration from a mapping as read from a YAML file."""
        return _load(cls, data, "")

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a mapping in its YAML form, empty fields left out."""
        return _dump(self)


def _describe(where: str) -> str:
    return where or "configuration"


def _load(cls: type, data: Any, where: str) -> Any:
    if data is None:
        return cls()
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"{_describe(where)}: expected a mapping, got {type(data).__name__}"
        )
    kwargs = {}
    for f in fields(cls):
        key = f.metadata["key"]
        if key in data:
            kwargs[f.name] = _convert(f, data[key], f"{where}.{key}" if where else key)
    return cls(**kwargs)


def _string(value: Any, where: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ConfigurationError(f"{where}: expected a string, got {value!r}")


def _convert(f: Field, value: Any, where: str) -> Any:
    kind = f.metadata["kind"]
    if value is None:
        return f.default_factory() if f.default_factory is not MISSING else f.default
    if kind == "bool":
        if not isinstance(value, bool):
            raise ConfigurationError(f"{where}: expected a boolean, got {value!r}")
        return value
    if kind == "str":
        return _string(value, where)
    if kind == "strs":
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise ConfigurationError(f"{where}: expected a list, got {value!r}")
        return [_string(item, where) for item in value]
    if kind == "map":
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"{where}: expected a mapping, got {value!r}")
        return {_string(k, where): _string(v, where) for k, v in value.items()}
    if kind == "struct":
        return _load(f.default_factory, value, where)
    if kind == "structs":
        if not isinstance(value, (list, tuple)):
            raise ConfigurationError(f"{where}: expected a list, got {value!r}")
        return [_load(f.metadata["item"], item, where) for item in value]
    raise ConfigurationError(f"{where}: unsupported field kind {kind}")


def _is_empty(value: Any) -> bool:
    if is_dataclass(value):
        return value == type(value)()
    return not value


def _dump(obj: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if f.metadata["omitempty"] and _is_empty(value):
            continue
        kind = f.metadata["kind"]
        if kind == "struct":
            value = _dump(value)
        elif kind == "structs":
            value = [_dump(item) for item in value]
        elif kind == "strs":
            value = list(value)
        elif kind == "map":
            value = dict(value)
        out[f.metadata["key"]] = value
    return out