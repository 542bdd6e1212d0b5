"""Project-name validation and target-directory resolution."""

from __future__ import annotations

from pathlib import Path

from create_mvp_surf.core.models import RunContext
from create_mvp_surf.exceptions import DirectoryExistsError, ValidationError

BLANK_NAME_MESSAGE: str = "Please enter a name."


def validate_project_name(value: str) -> bool | str:
    """Prompt validator: ``True`` when *value* is usable, else a message."""
    if value and value.strip():
        return True
    return BLANK_NAME_MESSAGE


def normalize_project_name(value: str | None) -> str:
    """Trim surrounding whitespace; internal spaces are kept verbatim.

    Raises
    ------
    ValidationError
        If nothing but whitespace remains.
    """
    name = (value or "").strip()
    if not name:
        raise ValidationError(BLANK_NAME_MESSAGE)
    return name


def resolve_target_dir(ctx: RunContext, project_name: str) -> Path:
    """Return the absolute project path, refusing to reuse an existing one.

    Raises
    ------
    DirectoryExistsError
        If ``ctx.cwd / project_name`` already exists.
    """
    target = (ctx.cwd / project_name).absolute()
    if target.exists():
        raise DirectoryExistsError(
            f"The folder {project_name} already exists.",
            hint="Choose a different project name.",
        )
    return target
