"""Domain models for create-mvp-surf.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero dependencies
on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from create_mvp_surf import config


# ---------------------------------------------------------------------------
# Template reference
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TemplateRef:
    """A parsed ``[host:]owner/repo[/subdir][#ref]`` template reference."""

    host: str
    """Hosting service: ``github``, ``gitlab`` or ``bitbucket``."""

    owner: str
    repo: str

    ref: str = "HEAD"
    """Branch, tag or commit to download."""

    subdir: str | None = None
    """Sub-directory of the repository to materialise, if any."""

    def __str__(self) -> str:
        path = f"{self.owner}/{self.repo}"
        if self.subdir:
            path = f"{path}/{self.subdir}"
        return f"{self.host}:{path}#{self.ref}"


@dataclass(frozen=True, slots=True)
class FetchOptions:
    """Behaviour switches for the template fetcher."""

    cache: bool = config.FETCH_CACHE
    """Reuse a previously downloaded archive instead of fetching fresh."""

    force: bool = config.FETCH_FORCE
    """Extract even when the destination already contains files."""

    verbose: bool = config.FETCH_VERBOSE
    """Report download progress."""


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of a successful template fetch."""

    archive_url: str
    files_written: int
    from_cache: bool = False


# ---------------------------------------------------------------------------
# Installer selection
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InstallerRule:
    """Run *command* when *marker* exists in the project root."""

    marker: str
    command: tuple[str, ...]


class InstallStatus(enum.Enum):
    SKIPPED = "skipped"
    INSTALLED = "installed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class InstallOutcome:
    """What happened in the dependency-install stage."""

    status: InstallStatus
    command: tuple[str, ...] | None = None
    error: Exception | None = None

    @property
    def command_line(self) -> str:
        return " ".join(self.command) if self.command else ""


# ---------------------------------------------------------------------------
# Run-scoped state
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RunContext:
    """Process-wide inputs made explicit for the scaffolding stages.

    Stages never call :func:`os.getcwd` or read module constants
    directly; everything they need arrives through this object.
    """

    cwd: Path
    template: TemplateRef
    fetch_options: FetchOptions = field(default_factory=FetchOptions)
    installers: tuple[InstallerRule, ...] = ()
    default_install_command: tuple[str, ...] = config.DEFAULT_INSTALL_COMMAND
    default_project_name: str = config.DEFAULT_PROJECT_NAME
    manifest_filename: str = config.MANIFEST_FILENAME

    @classmethod
    def from_defaults(cls, cwd: Path) -> RunContext:
        """Build the context from :mod:`create_mvp_surf.config`."""
        from create_mvp_surf.core.template_ref import parse_template_ref

        return cls(
            cwd=cwd.resolve(),
            template=parse_template_ref(config.TEMPLATE_SOURCE),
            installers=tuple(
                InstallerRule(marker=marker, command=command)
                for marker, command in config.INSTALLER_RULES
            ),
        )


@dataclass(frozen=True, slots=True)
class Session:
    """The answers gathered for a single scaffolding run."""

    project_name: str
    """Trimmed, non-empty folder name exactly as typed."""

    target_dir: Path
    """Absolute path of the project directory to create."""

    install_requested: bool = False
