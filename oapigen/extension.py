"""Readers for the vendor extension values of an OpenAPI document."""

from __future__ import annotations

import json
from typing import Any

EXT_PROP_GO_TYPE = "x-go-type"
EXT_GO_NAME = "x-go-name"
EXT_PROP_OMIT_EMPTY = "x-omitempty"
EXT_PROP_EXTRA_TAGS = "x-oapi-codegen-extra-tags"


class ExtensionError(ValueError):
    """Raised when an extension value cannot be read."""


def _decode(value: Any) -> Any:
    if not isinstance(value, (bytes, bytearray, str)):
        raise ExtensionError(f"failed to convert type: {type(value).__name__}")
    try:
        return json.loads(value)
    except ValueError as exc:
        raise ExtensionError(f"failed to unmarshal json: {exc}") from exc


def ext_string(value: Any) -> str:
    """Read a raw JSON extension value holding a string."""
    decoded = _decode(value)
    if decoded is None:
        return ""
    if not isinstance(decoded, str):
        raise ExtensionError(f"failed to unmarshal json: {decoded!r} is not a string")
    return decoded


def ext_type_name(value: Any) -> str:
    """Read the type name given by an x-go-type extension."""
    return ext_string(value)


def ext_parse_go_field_name(value: Any) -> str:
    """Read the field name given by an x-go-name extension."""
    return ext_string(value)


def ext_parse_omit_empty(value: Any) -> bool:
    """Read the flag given by an x-omitempty extension."""
    decoded = _decode(value)
    if decoded is None:
        return False
    if not isinstance(decoded, bool):
        raise ExtensionError(f"failed to unmarshal json: {decoded!r} is not a boolean")
    return decoded


def ext_extra_tags(value: Any) -> dict[str, str]:
    """Read the struct tags given by an x-oapi-codegen-extra-tags extension."""
    decoded = _decode(value)
    if decoded is None:
        return {}
    if not isinstance(decoded, dict):
        raise ExtensionError(f"failed to unmarshal json: {decoded!r} is not an object")
    for key, tag in decoded.items():
        if not isinstance(tag, str):
            raise ExtensionError(f"failed to unmarshal json: tag {key!r} is not a string")
    return decoded