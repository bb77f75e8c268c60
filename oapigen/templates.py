"""Loading of user-supplied template overrides and clean-up of generated code."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

_BYTE_ORDER_MARK = "\ufeff"


def sanitize_code(code: str) -> str:
    """Remove byte-order marks, which would stop the generated code from compiling."""
    return code.replace(_BYTE_ORDER_MARK, "")


def load_template_overrides(templates_dir: str | Path | None) -> dict[str, str]:
    """Read every file under templates_dir into a mapping of template name to text.

    Files in subdirectories are keyed by their path relative to templates_dir,
    joined with "/", so that the templates of a particular server kind can be
    overridden too. An empty directory name gives an empty mapping. A directory
    that cannot be read raises OSError.
    """
    if not templates_dir:
        return {}
    root = Path(templates_dir)
    templates: dict[str, str] = {}
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            for sub_name, text in load_template_overrides(entry).items():
                templates[f"{entry.name}/{sub_name}"] = text
        else:
            templates[entry.name] = entry.read_text(encoding="utf-8")
    return templates


def merge_template_overrides(
    templates_dir: str | Path | None,
    user_templates: Mapping[str, str] | None,
) -> dict[str, str]:
    """Combine templates from a directory with inline ones; inline templates win."""
    overrides = load_template_overrides(templates_dir)
    if user_templates:
        overrides.update(user_templates)
    return overrides