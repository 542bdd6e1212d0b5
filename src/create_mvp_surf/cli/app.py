"""CLI application entry point for create-mvp-surf.

This module is the **sole error boundary** for the entire application.
It catches :class:`~create_mvp_surf.exceptions.ScaffoldError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here: every stage is delegated to
  :class:`~create_mvp_surf.core.scaffold_service.ScaffoldService`.
* ``print()`` is forbidden outside the CLI layer; the Rich console
  proxy is used exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import shlex
import sys
from pathlib import Path

from create_mvp_surf import config
from create_mvp_surf.cli import exit_codes
from create_mvp_surf.cli.console import console, escape
from create_mvp_surf.core.models import InstallOutcome, InstallStatus, RunContext, Session
from create_mvp_surf.exceptions import ScaffoldError
from create_mvp_surf.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser.

    Everything is asked interactively; only ``--help`` and ``--version``
    are accepted on the command line.
    """
    parser = argparse.ArgumentParser(
        prog="create-mvp-surf",
        description="Create a new MVP Surf project from the starter template.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------

def _start_command(install_command: tuple[str, ...]) -> str:
    return config.START_COMMANDS.get(install_command, "npm run start")


def _render_install_failure(outcome: InstallOutcome) -> None:
    console.print(
        "\n[bold yellow]Installing packages failed.[/bold yellow] "
        "Please install them manually.\n"
    )
    if outcome.command_line:
        console.print(f"  Run [cyan]{escape(outcome.command_line)}[/cyan] inside the project.")
    if outcome.error is not None:
        console.print(f"  {escape(str(outcome.error))}")
        hint = getattr(outcome.error, "hint", None)
        if hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")


def _render_completion(session: Session, start_command: str) -> None:
    console.print("\n[bold green]Project created![/bold green]\n")
    console.print(f"[cyan]  cd {escape(shlex.quote(session.project_name))}[/cyan]")
    console.print(
        f"[cyan]  {start_command}[/cyan]"
        "        [dim]# or the yarn / pnpm equivalent[/dim]\n"
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_create(ctx: RunContext) -> int:
    """Run the interactive scaffolding flow.

    Flow:
    1. Ask for the project name and refuse an existing folder.
    2. Download the template into the new folder.
    3. Rename ``package.json``.
    4. Offer to install dependencies; a failure only warns.
    5. Print the next steps.
    """
    from create_mvp_surf.cli.progress import RichProgressHook
    from create_mvp_surf.cli.prompts import QuestionaryPrompter
    from create_mvp_surf.core.scaffold_service import ScaffoldService
    from create_mvp_surf.infra.archive_fetcher import ArchiveTemplateFetcher
    from create_mvp_surf.infra.command_runner import SubprocessCommandRunner

    service = ScaffoldService(
        QuestionaryPrompter(),
        ArchiveTemplateFetcher(),
        SubprocessCommandRunner(),
    )

    console.print("\n[bold cyan]Welcome to create-mvp-surf[/bold cyan]\n")
    session = service.collect_project_name(ctx)

    console.print(
        f"\n[cyan]Downloading the template… ({escape(session.project_name)})[/cyan]\n"
    )
    if ctx.fetch_options.verbose:
        with RichProgressHook() as hook:
            result = service.fetch_template(ctx, session, progress_callback=hook)
        source = "cache" if result.from_cache else result.archive_url
        console.print(f"[dim]{result.files_written} files from {source}[/dim]")
    else:
        service.fetch_template(ctx, session)

    manifest_path = service.patch_manifest(ctx, session)
    if manifest_path is not None and ctx.fetch_options.verbose:
        console.print(f"[dim]Renamed project in {manifest_path.name}[/dim]")

    session = service.offer_install(session)
    install_command = service.choose_install_command(ctx, session)
    if session.install_requested:
        console.print(
            f"\n[cyan]Installing packages with {' '.join(install_command)}…[/cyan]\n"
        )
    outcome = service.install_dependencies(ctx, session)
    if outcome.status is InstallStatus.FAILED:
        _render_install_failure(outcome)

    _render_completion(session, _start_command(install_command))
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the create-mvp-surf CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    parser.parse_args(argv)
    return _handle_create(RunContext.from_defaults(Path.cwd()))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace for known failures.  Unknown failures
    are shown with their full traceback.
    """
    try:
        code = main()
        sys.exit(code)
    except ScaffoldError as exc:
        console.print(f"\n[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "\n[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        console.print_exception()
        sys.exit(exit_codes.UNEXPECTED_ERROR)
