"""Imports that the generated code needs for external references and types."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _quote(text: str) -> str:
    """Quote text as a double-quoted literal of the generated language."""
    parts = []
    for char in text:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif char.isprintable():
            parts.append(char)
        elif ord(char) < 0x80:
            parts.append(f"\\x{ord(char):02x}")
        elif ord(char) <= 0xFFFF:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(f"\\U{ord(char):08x}")
    return '"' + "".join(parts) + '"'


@dataclass(frozen=True)
class GoImport:
    """A package to import, with the local name it is imported under."""

    name: str = ""
    path: str = ""

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} {_quote(self.path)}"
        return _quote(self.path)


def construct_import_mapping(mapping: Mapping[str, str] | None) -> dict[str, GoImport]:
    """Map each external spec reference to an import with a stable generated name.

    Package paths are named externalRef0, externalRef1, ... in sorted order,
    and references to the same package share one name.
    """
    if not mapping:
        return {}
    path_to_name: dict[str, str] = {}
    for package_path in sorted(mapping.values()):
        if package_path not in path_to_name:
            path_to_name[package_path] = f"externalRef{len(path_to_name)}"
    return {
        spec_path: GoImport(name=path_to_name[package_path], path=package_path)
        for spec_path, package_path in mapping.items()
    }


def go_imports(mapping: Mapping[str, GoImport] | None) -> list[str]:
    """Return the import statements for every import in mapping."""
    if not mapping:
        return []
    return [str(imp) for imp in mapping.values()]


def merge_imports(*args: Mapping[str, GoImport] | None) -> dict[str, GoImport]:
    """Merge import mappings into one; later mappings win on equal keys."""
    merged: dict[str, GoImport] = {}
    for mapping in args:
        if mapping:
            merged.update(mapping)
    return merged


def iter_import_lines(*mappings: Mapping[str, GoImport] | None) -> Iterable[str]:
    """Yield the import statements of each mapping in turn."""
    for mapping in mappings:
        yield from go_imports(mapping)