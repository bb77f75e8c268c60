import pytest

from oapigen.extension import (
    ExtensionError,
    ext_extra_tags,
    ext_parse_go_field_name,
    ext_parse_omit_empty,
    ext_string,
    ext_type_name,
)


def test_ext_type_name_success():
    assert ext_type_name(b'"uint64"') == "uint64"


def test_ext_type_name_type_conversion_error():
    with pytest.raises(ExtensionError, match="failed to convert type"):
        ext_type_name(None)


def test_ext_type_name_json_unmarshal_error():
    with pytest.raises(ExtensionError, match="failed to unmarshal json"):
        ext_type_name(b"invalid json format")


def test_ext_string_accepts_text():
    assert ext_string('"Pet"') == "Pet"


def test_ext_string_rejects_number():
    with pytest.raises(ExtensionError):
        ext_string(b"42")


def test_go_field_name():
    assert ext_parse_go_field_name(b'"DeadSince"') == "DeadSince"


@pytest.mark.parametrize("raw, expected", [(b"true", True), (b"false", False)])
def test_parse_omit_empty(raw, expected):
    assert ext_parse_omit_empty(raw) is expected


@pytest.mark.parametrize("raw", [b'"true"', b"1", b"not json"])
def test_parse_omit_empty_rejects(raw):
    with pytest.raises(ExtensionError):
        ext_parse_omit_empty(raw)


def test_parse_omit_empty_wrong_type():
    with pytest.raises(ExtensionError, match="failed to convert type"):
        ext_parse_omit_empty(True)


def test_extra_tags():
    raw = b'{"tag1": "value1", "tag2": "value2"}'
    assert ext_extra_tags(raw) == {"tag1": "value1", "tag2": "value2"}


@pytest.mark.parametrize("raw", [b'["a"]', b'{"tag1": 3}', b"{"])
def test_extra_tags_rejects(raw):
    with pytest.raises(ExtensionError):
        ext_extra_tags(raw)