"""Installer selection from lockfile markers.

The policy is data: an ordered sequence of
:class:`~create_mvp_surf.core.models.InstallerRule` entries, evaluated
first-match-wins, with a fallback command when no marker is present.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from pathlib import Path

from create_mvp_surf.core.models import InstallerRule


def detect_lockfiles(target_dir: Path, rules: Sequence[InstallerRule]) -> frozenset[str]:
    """Return the rule markers that exist as files in *target_dir*."""
    return frozenset(
        rule.marker for rule in rules if (target_dir / rule.marker).is_file()
    )


def select_installer(
    present: Collection[str],
    rules: Sequence[InstallerRule],
    default: tuple[str, ...],
) -> tuple[str, ...]:
    """Pick the command of the first rule whose marker is in *present*."""
    for rule in rules:
        if rule.marker in present:
            return rule.command
    return default
