"""Command-line flags and configuration loading for the code generator."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from .configuration import (
    CompatibilityOptions,
    Configuration,
    ConfigurationError,
    GenerateOptions,
    OutputOptions,
)
from .templates import load_template_overrides

DEFAULT_GENERATE = "types,client,server,spec"

_GENERATE_TARGETS = {
    "client": ("generate", "client"),
    "chi-server": ("generate", "chi_server"),
    "server": ("generate", "echo_server"),
    "gin": ("generate", "gin_server"),
    "gorilla": ("generate", "gorilla_server"),
    "strict-server": ("generate", "strict"),
    "types": ("generate", "models"),
    "spec": ("generate", "embedded_spec"),
    "skip-fmt": ("output", "skip_fmt"),
    "skip-prune": ("output", "skip_prune"),
}


class FlagError(ValueError):
    """Raised for command-line flags that are malformed or cannot be used together."""


@dataclass
class Flags:
    """The parsed command line."""

    output_file: str = ""
    config_file: str = ""
    old_config_style: bool = False
    output_config: bool = False
    print_version: bool = False
    package_name: str = ""
    generate: str = DEFAULT_GENERATE
    include_tags: str = ""
    exclude_tags: str = ""
    templates_dir: str = ""
    import_mapping: str = ""
    exclude_schemas: str = ""
    response_type_suffix: str = ""
    alias_types: bool = False
    args: list[str] = field(default_factory=list)


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise FlagError(message)


def _build_parser() -> _Parser:
    parser = _Parser(prog="oapigen", allow_abbrev=False, add_help=False)

    def add(name: str, dest: str, help_text: str, *, flag: bool = False, default: Any = "") -> None:
        names = [f"-{name}", f"--{name}"]
        if flag:
            parser.add_argument(*names, dest=dest, action="store_true", help=help_text)
        else:
            parser.add_argument(*names, dest=dest, default=default, help=help_text)

    add("o", "output_file", "Where to output generated code, stdout is default")
    add("old-config-style", "old_config_style",
        "whether to use the older style config file format", flag=True)
    add("output-config", "output_config",
        "when true, outputs a configuration file using current settings", flag=True)
    add("config", "config_file", "a YAML config file that controls generator behavior")
    add("version", "print_version", "when specified, print version and exit", flag=True)
    add("package", "package_name", "The package name for generated code")
    add("generate", "generate",
        'Comma-separated list of code to generate; valid options: "types", "client", '
        '"chi-server", "server", "gin", "gorilla", "spec", "skip-fmt", "skip-prune"',
        default=DEFAULT_GENERATE)
    add("include-tags", "include_tags",
        "Only include operations with the given tags. Comma-separated list of tags.")
    add("exclude-tags", "exclude_tags",
        "Exclude operations that are tagged with the given tags. Comma-separated list of tags.")
    add("templates", "templates_dir", "Path to directory containing user templates")
    add("import-mapping", "import_mapping",
        "A dict from the external reference to package path")
    add("exclude-schemas", "exclude_schemas",
        "A comma separated list of schemas which must be excluded from generation")
    add("response-type-suffix", "response_type_suffix", "the suffix used for responses types")
    add("alias-types", "alias_types", "Alias type declarations of possible", flag=True)
    parser.add_argument("args", nargs="*")
    return parser


def parse_flags(argv: Sequence[str] | None = None) -> Flags:
    """Parse the command line into Flags; raise FlagError on a bad command line."""
    if argv is None:
        argv = sys.argv[1:]
    namespace = _build_parser().parse_args(list(argv))
    return Flags(**vars(namespace))


def _parse_list(text: str) -> list[str]:
    return [item.strip() for item in text.split(",") if item.strip()]


def _parse_map(text: str) -> dict[str, str]:
    result: dict[str, str] = {}
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.rpartition(":")
        if not sep or not key:
            raise FlagError(f"error parsing import-mapping: invalid mapping {item!r}")
        result[key.strip()] = value.strip()
    return result


def _optional_list(data: Mapping[str, Any], key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"{key}: expected a list, got {value!r}")
    return [str(item) for item in value]


def _optional_map(data: Mapping[str, Any], key: str) -> dict[str, str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{key}: expected a mapping, got {value!r}")
    return {str(k): str(v) for k, v in value.items()}


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list, bool)):
        raise ConfigurationError(f"{key}: expected a string, got {value!r}")
    return str(value)


@dataclass
class OldConfiguration:
    """The older configuration file format, kept for backwards compatibility."""

    package_name: str = ""
    generate_targets: list[str] | None = None
    output_file: str = ""
    include_tags: list[str] | None = None
    exclude_tags: list[str] | None = None
    templates_dir: str = ""
    import_mapping: dict[str, str] | None = None
    exclude_schemas: list[str] | None = None
    response_type_suffix: str = ""
    compatibility: CompatibilityOptions = field(default_factory=CompatibilityOptions)

    @classmethod
    def from_dict(cls, data: Any) -> OldConfiguration:
        """Build an old-style configuration from a mapping as read from YAML."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"configuration: expected a mapping, got {type(data).__name__}"
            )
        return cls(
            package_name=_string(data, "package"),
            generate_targets=_optional_list(data, "generate"),
            output_file=_string(data, "output"),
            include_tags=_optional_list(data, "include-tags"),
            exclude_tags=_optional_list(data, "exclude-tags"),
            templates_dir=_string(data, "templates"),
            import_mapping=_optional_map(data, "import-mapping"),
            exclude_schemas=_optional_list(data, "exclude-schemas"),
            response_type_suffix=_string(data, "response-type-suffix"),
            compatibility=Configuration.from_dict(
                {"compatibility": data.get("compatibility")}
            ).compatibility,
        )


@dataclass
class AppConfiguration:
    """Generation settings together with the file the output goes to."""

    configuration: Configuration = field(default_factory=Configuration)
    output_file: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> AppConfiguration:
        """Build from a mapping whose generation settings sit at the top level."""
        configuration = Configuration.from_dict(data)
        output = _string(data, "output") if isinstance(data, Mapping) else ""
        return cls(configuration=configuration, output_file=output)

    def to_dict(self) -> dict[str, Any]:
        """Return the YAML form, with the output file beside the generation settings."""
        out = self.configuration.to_dict()
        if self.output_file:
            out["output"] = self.output_file
        return out


def update_config_from_flags(config: AppConfiguration, flags: Flags) -> AppConfiguration:
    """Apply flags over a loaded configuration, rejecting flags of the old style."""
    result = replace(config)
    if flags.package_name:
        result.configuration = replace(config.configuration, package_name=flags.package_name)

    checks = [
        (flags.generate != DEFAULT_GENERATE, "--generate"),
        (bool(flags.include_tags), "--include-tags"),
        (bool(flags.exclude_tags), "--exclude-tags"),
        (bool(flags.templates_dir), "--templates"),
        (bool(flags.import_mapping), "--import-mapping"),
        (bool(flags.exclude_schemas), "--exclude-schemas"),
        (bool(flags.response_type_suffix), "--response-type-suffix"),
        (flags.alias_types, "--alias-types"),
    ]
    unsupported = [name for used, name in checks if used]
    if unsupported:
        raise FlagError(
            f"flags {', '.join(unsupported)} aren't supported in new config style, "
            "please use  -old-config-style or update your configuration "
        )
    return result


def update_old_config_from_flags(config: OldConfiguration, flags: Flags) -> OldConfiguration:
    """Fill the unset fields of an old-style configuration from flags."""
    cfg = replace(config)
    if not cfg.package_name:
        cfg.package_name = flags.package_name
    if cfg.generate_targets is None:
        cfg.generate_targets = _parse_list(flags.generate)
    if cfg.include_tags is None:
        cfg.include_tags = _parse_list(flags.include_tags)
    if cfg.exclude_tags is None:
        cfg.exclude_tags = _parse_list(flags.exclude_tags)
    if not cfg.templates_dir:
        cfg.templates_dir = flags.templates_dir
    if cfg.import_mapping is None and flags.import_mapping:
        cfg.import_mapping = _parse_map(flags.import_mapping)
    if cfg.exclude_schemas is None:
        cfg.exclude_schemas = _parse_list(flags.exclude_schemas)
    if not cfg.output_file:
        cfg.output_file = flags.output_file
    return cfg


def new_config_from_old_config(config: OldConfiguration, flags: Flags) -> AppConfiguration:
    """Translate an old-style configuration, with flags applied, into the current one."""
    cfg = update_old_config_from_flags(config, flags)

    generate = GenerateOptions()
    output = OutputOptions(response_type_suffix=flags.response_type_suffix)
    for target in cfg.generate_targets or ():
        try:
            section, attr = _GENERATE_TARGETS[target]
        except KeyError:
            raise FlagError(f"unknown generate option {target}") from None
        setattr(generate if section == "generate" else output, attr, True)

    output.include_tags = list(cfg.include_tags or ())
    output.exclude_tags = list(cfg.exclude_tags or ())
    output.exclude_schemas = list(cfg.exclude_schemas or ())
    try:
        output.user_templates = load_template_overrides(cfg.templates_dir)
    except OSError as exc:
        raise ConfigurationError(f"error loading template overrides: {exc}") from exc

    configuration = Configuration(
        package_name=cfg.package_name,
        generate=generate,
        compatibility=replace(cfg.compatibility),
        output_options=output,
        import_mapping=dict(cfg.import_mapping or {}),
    )
    return AppConfiguration(configuration=configuration, output_file=cfg.output_file)


def _read_yaml(path: str) -> Any:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"error reading config file '{path}': {exc}") from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"error parsing '{path}' as YAML: {exc}") from exc


def load_configuration(flags: Flags) -> AppConfiguration:
    """Build the effective, validated configuration from flags and any config file."""
    if not flags.old_config_style:
        app = AppConfiguration()
        if flags.config_file:
            app = AppConfiguration.from_dict(_read_yaml(flags.config_file))
        app = update_config_from_flags(app, flags)
    else:
        old = OldConfiguration()
        if flags.config_file:
            old = OldConfiguration.from_dict(_read_yaml(flags.config_file))
        app = new_config_from_old_config(old, flags)

    app.configuration = app.configuration.update_defaults()
    app.configuration.validate()
    return app