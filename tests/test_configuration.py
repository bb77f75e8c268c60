import pytest

from oapigen.configuration import (
    AdditionalImport,
    CompatibilityOptions,
    Configuration,
    ConfigurationError,
    GenerateOptions,
    OutputOptions,
)


def full_data():
    return {
        "package": "api",
        "generate": {"chi-server": True, "models": True},
        "compatibility": {"old-aliasing": True},
        "output-options": {
            "skip-prune": True,
            "include-tags": ["cat"],
            "user-templates": {"typedef.tmpl": "//blah"},
            "response-type-suffix": "Resp",
        },
        "import-mapping": {"other.yaml": "example.com/other"},
        "additional-imports": [{"alias": "u", "package": "example.com/uuid"}],
    }


def test_update_defaults_fills_generate():
    cfg = Configuration(package_name="api")
    updated = cfg.update_defaults()
    assert updated.generate == GenerateOptions(echo_server=True, models=True, embedded_spec=True)
    assert cfg.generate == GenerateOptions()
    assert updated.package_name == "api"


def test_update_defaults_keeps_explicit_generate():
    cfg = Configuration(package_name="api", generate=GenerateOptions(client=True))
    assert cfg.update_defaults().generate == GenerateOptions(client=True)


def test_validate_requires_package_name():
    with pytest.raises(ConfigurationError, match="package name must be specified"):
        Configuration().validate()


@pytest.mark.parametrize(
    "generate",
    [
        GenerateOptions(chi_server=True, echo_server=True),
        GenerateOptions(echo_server=True, gin_server=True),
        GenerateOptions(chi_server=True, gin_server=True, echo_server=True),
    ],
)
def test_validate_rejects_several_servers(generate):
    with pytest.raises(ConfigurationError, match="only one server type"):
        Configuration(package_name="api", generate=generate).validate()


def test_from_dict_reads_all_sections():
    cfg = Configuration.from_dict(full_data())
    assert cfg.package_name == "api"
    assert cfg.generate == GenerateOptions(chi_server=True, models=True)
    assert cfg.compatibility == CompatibilityOptions(old_aliasing=True)
    assert cfg.output_options == OutputOptions(
        skip_prune=True,
        include_tags=["cat"],
        user_templates={"typedef.tmpl": "//blah"},
        response_type_suffix="Resp",
    )
    assert cfg.import_mapping == {"other.yaml": "example.com/other"}
    assert cfg.additional_imports == [AdditionalImport(alias="u", package="example.com/uuid")]


def test_round_trip():
    data = full_data()
    cfg = Configuration.from_dict(data)
    assert cfg.to_dict() == data
    assert Configuration.from_dict(cfg.to_dict()) == cfg


def test_to_dict_leaves_out_empty_fields():
    assert Configuration(package_name="api").to_dict() == {"package": "api"}


def test_additional_import_package_always_written():
    cfg = Configuration(package_name="api", additional_imports=[AdditionalImport(package="x")])
    assert cfg.to_dict()["additional-imports"] == [{"package": "x"}]


def test_from_dict_none_gives_defaults():
    assert Configuration.from_dict(None) == Configuration()


def test_from_dict_ignores_unknown_keys():
    cfg = Configuration.from_dict({"package": "api", "output": "out.go"})
    assert cfg == Configuration(package_name="api")


@pytest.mark.parametrize(
    "data",
    [
        ["not", "a", "mapping"],
        {"generate": {"client": "yes"}},
        {"output-options": {"include-tags": "cat"}},
        {"import-mapping": ["a"]},
        {"generate": "client"},
    ],
)
def test_from_dict_rejects_bad_types(data):
    with pytest.raises(ConfigurationError):
        Configuration.from_dict(data)