"""Removal of operations from an OpenAPI document by their tags."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

from .configuration import Configuration

HTTP_METHODS = ("connect", "delete", "get", "head", "options", "patch", "post", "put", "trace")


def filter_operations_by_tag(spec: MutableMapping[str, Any], config: Configuration) -> None:
    """Drop operations from spec according to the configured include and exclude tags."""
    paths = spec.get("paths")
    if config.output_options.exclude_tags:
        exclude_operations_with_tags(paths, config.output_options.exclude_tags)
    if config.output_options.include_tags:
        include_operations_with_tags(paths, config.output_options.include_tags, False)


def exclude_operations_with_tags(paths: Any, tags: Iterable[str]) -> None:
    """Remove every operation carrying one of tags."""
    include_operations_with_tags(paths, tags, True)


def include_operations_with_tags(paths: Any, tags: Iterable[str], exclude: bool) -> None:
    """Remove operations whose having one of tags equals exclude."""
    if not paths:
        return
    tags = list(tags)
    for path_item in paths.values():
        if not isinstance(path_item, MutableMapping):
            continue
        doomed = [
            method
            for method in HTTP_METHODS
            if path_item.get(method) is not None
            and operation_has_tag(path_item[method], tags) == exclude
        ]
        for method in doomed:
            del path_item[method]


def operation_has_tag(operation: Mapping[str, Any] | None, tags: Iterable[str]) -> bool:
    """Tell whether the operation is tagged with any of tags."""
    if operation is None:
        return False
    wanted = set(tags)
    return any(tag in wanted for tag in operation.get("tags") or ())