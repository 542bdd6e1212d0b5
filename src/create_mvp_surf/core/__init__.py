"""Core / service layer: scaffolding stages and pure transformations.

Rules
-----
* No ``print()`` calls.
* No network access and no child processes; those go through
  :mod:`create_mvp_surf.core.protocols`.
* Filesystem access is limited to the project's target directory.
* No imports from ``cli`` or ``infra``.
"""

from create_mvp_surf.core.models import (
    FetchOptions,
    FetchResult,
    InstallerRule,
    InstallOutcome,
    InstallStatus,
    RunContext,
    Session,
    TemplateRef,
)
from create_mvp_surf.core.protocols import CommandRunner, Prompter, TemplateFetcher
from create_mvp_surf.core.scaffold_service import ScaffoldService

__all__: list[str] = [
    "CommandRunner",
    "FetchOptions",
    "FetchResult",
    "InstallOutcome",
    "InstallStatus",
    "InstallerRule",
    "Prompter",
    "RunContext",
    "ScaffoldService",
    "Session",
    "TemplateFetcher",
    "TemplateRef",
]
