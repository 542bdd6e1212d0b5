"""Core scaffolding service: one method per stage of the flow.

The CLI layer drives the stages in order::

    CollectingName → Fetching → PatchingManifest → OfferingInstall
        → {Installing | Skipped} → Done

and renders their results.  Prompting, downloading and process
execution are injected through the protocols in
:mod:`create_mvp_surf.core.protocols`.

Guarantees
----------
* No ``print()``: the service returns values, the CLI renders them.
* Only :class:`~create_mvp_surf.exceptions.ScaffoldError` subclasses
  escape, and :class:`~create_mvp_surf.exceptions.InstallError` never
  does: it becomes a ``FAILED`` :class:`InstallOutcome`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

from create_mvp_surf.core import manifest
from create_mvp_surf.core.installer import detect_lockfiles, select_installer
from create_mvp_surf.core.models import (
    FetchResult,
    InstallOutcome,
    InstallStatus,
    RunContext,
    Session,
)
from create_mvp_surf.core.project_name import (
    normalize_project_name,
    resolve_target_dir,
    validate_project_name,
)
from create_mvp_surf.core.protocols import CommandRunner, Prompter, TemplateFetcher
from create_mvp_surf.exceptions import (
    FetchError,
    InstallError,
    PromptAbortedError,
    ScaffoldError,
    UnexpectedError,
    ValidationError,
)

NAME_PROMPT: str = "Project folder name"
INSTALL_PROMPT: str = "Install dependencies now?"
MAX_NAME_ATTEMPTS: int = 5


class ScaffoldService:
    """Drives a single scaffolding run.

    Parameters
    ----------
    prompter:
        Any object satisfying the :class:`Prompter` protocol.
    fetcher:
        Any object satisfying the :class:`TemplateFetcher` protocol.
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    """

    def __init__(
        self,
        prompter: Prompter,
        fetcher: TemplateFetcher,
        runner: CommandRunner,
    ) -> None:
        self._prompter: Prompter = prompter
        self._fetcher: TemplateFetcher = fetcher
        self._runner: CommandRunner = runner

    # ------------------------------------------------------------------
    # Stage 1: input
    # ------------------------------------------------------------------

    def collect_project_name(self, ctx: RunContext) -> Session:
        """Ask for the project name and resolve the target directory.

        Blank answers are re-asked up to :data:`MAX_NAME_ATTEMPTS` times.

        Raises
        ------
        PromptAbortedError
            If the user cancels the prompt.
        ValidationError
            If every attempt was blank.
        DirectoryExistsError
            If the resolved directory already exists.
        """
        for _ in range(MAX_NAME_ATTEMPTS):
            answer = self._prompter.ask_text(
                NAME_PROMPT,
                default=ctx.default_project_name,
                validate=validate_project_name,
            )
            if answer is None:
                raise PromptAbortedError("No project name given.")
            try:
                name = normalize_project_name(answer)
            except ValidationError:
                continue
            return Session(
                project_name=name,
                target_dir=resolve_target_dir(ctx, name),
            )

        raise ValidationError(
            "A project name is required.",
            hint="Type a folder name, or press Enter to accept the default.",
        )

    # ------------------------------------------------------------------
    # Stage 2: template download
    # ------------------------------------------------------------------

    def fetch_template(
        self,
        ctx: RunContext,
        session: Session,
        *,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
    ) -> FetchResult:
        """Download the template into ``session.target_dir``.

        Raises
        ------
        FetchError
            On any download failure, or when nothing was written.
        """
        try:
            result = self._fetcher.fetch(
                ctx.template,
                session.target_dir,
                ctx.fetch_options,
                progress_callback=progress_callback,
            )
        except ScaffoldError:
            raise
        except Exception as exc:
            raise FetchError(f"Unexpected fetch error: {exc}") from exc

        if not _is_populated(session.target_dir):
            raise FetchError(
                f"The template {ctx.template} produced no files.",
            )
        return result

    # ------------------------------------------------------------------
    # Stage 3: manifest
    # ------------------------------------------------------------------

    def patch_manifest(self, ctx: RunContext, session: Session) -> Path | None:
        """Rename the generated manifest; ``None`` when there is none.

        Raises
        ------
        ManifestParseError
            If the manifest is not a JSON object.
        UnexpectedError
            If the manifest cannot be read or written.
        """
        try:
            return manifest.patch_manifest(
                session.target_dir,
                session.project_name,
                filename=ctx.manifest_filename,
            )
        except OSError as exc:
            raise UnexpectedError(
                f"Could not update {ctx.manifest_filename}: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Stage 4: dependencies
    # ------------------------------------------------------------------

    def offer_install(self, session: Session) -> Session:
        """Ask whether to install now; a cancelled prompt means no."""
        answer = self._prompter.ask_confirm(INSTALL_PROMPT, default=True)
        return replace(session, install_requested=bool(answer))

    def choose_install_command(self, ctx: RunContext, session: Session) -> tuple[str, ...]:
        present = detect_lockfiles(session.target_dir, ctx.installers)
        return select_installer(present, ctx.installers, ctx.default_install_command)

    def install_dependencies(self, ctx: RunContext, session: Session) -> InstallOutcome:
        """Run the selected installer if the user asked for it.

        Never raises :class:`InstallError`; a failure is reported through
        the returned outcome instead.
        """
        if not session.install_requested:
            return InstallOutcome(status=InstallStatus.SKIPPED)

        command = self.choose_install_command(ctx, session)
        try:
            self._runner.run(command, cwd=session.target_dir)
        except InstallError as exc:
            return InstallOutcome(status=InstallStatus.FAILED, command=command, error=exc)
        return InstallOutcome(status=InstallStatus.INSTALLED, command=command)


def _is_populated(path: Path) -> bool:
    return path.is_dir() and any(path.iterdir())
