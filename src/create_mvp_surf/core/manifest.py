"""``package.json`` renaming.

The manifest is treated as an untyped JSON object: only the ``name``
key is written, every other key keeps its value and position.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from create_mvp_surf.exceptions import ManifestParseError


def rename_manifest(document: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a copy of *document* whose ``name`` is *name*."""
    renamed = dict(document)
    renamed["name"] = name
    return renamed


def dump_manifest(document: dict[str, Any]) -> str:
    """Serialise with two-space indentation and a trailing newline."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def load_manifest(path: Path) -> dict[str, Any]:
    """Read and parse the manifest at *path*.

    Raises
    ------
    ManifestParseError
        If the file is not valid UTF-8 JSON or its top level is not an
        object.
    """
    try:
        document: Any = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestParseError(
            f"{path.name} is not valid JSON: {exc}",
            hint=f"Fix {path} by hand and set its \"name\" field.",
        ) from exc

    if not isinstance(document, dict):
        raise ManifestParseError(
            f"{path.name} must contain a JSON object, "
            f"got {type(document).__name__}.",
        )
    return document


def patch_manifest(
    target_dir: Path,
    project_name: str,
    *,
    filename: str = "package.json",
) -> Path | None:
    """Set the manifest's ``name`` to *project_name*.

    Returns the manifest path, or ``None`` when the template ships no
    manifest (nothing is written in that case).
    """
    path = target_dir / filename
    if not path.is_file():
        return None

    document = load_manifest(path)
    path.write_text(
        dump_manifest(rename_manifest(document, project_name)),
        encoding="utf-8",
    )
    return path
