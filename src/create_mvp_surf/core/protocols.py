"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and CLI adapters must
satisfy.  Core code depends ONLY on these protocols, never on concrete
implementations, so tests can substitute deterministic fakes for the
terminal, the network and child processes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Protocol

from create_mvp_surf.core.models import FetchOptions, FetchResult, TemplateRef


class Prompter(Protocol):
    """Contract for interactive question backends."""

    def ask_text(
        self,
        message: str,
        *,
        default: str = "",
        validate: Callable[[str], bool | str] | None = None,
    ) -> str | None:
        """Ask for a line of text.

        *validate* returns ``True`` for acceptable input or an error
        message to display; interactive backends re-ask until it passes.
        Returns ``None`` when the user cancels the prompt.
        """
        ...  # pragma: no cover

    def ask_confirm(self, message: str, *, default: bool = True) -> bool | None:
        """Ask a yes/no question.  Returns ``None`` on cancel."""
        ...  # pragma: no cover


class TemplateFetcher(Protocol):
    """Contract for template download backends.

    Implementations must map all backend-specific exceptions to
    :class:`~create_mvp_surf.exceptions.FetchError`.
    """

    def fetch(
        self,
        template: TemplateRef,
        target_dir: Path,
        options: FetchOptions,
        *,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
    ) -> FetchResult:
        """Materialise *template*'s file tree into *target_dir*.

        Raises
        ------
        FetchError
            On network, authentication, not-found or archive errors.
        """
        ...  # pragma: no cover


class CommandRunner(Protocol):
    """Contract for synchronous child-process execution."""

    def run(self, command: Sequence[str], *, cwd: Path) -> None:
        """Run *command* in *cwd* with the terminal's standard streams.

        Raises
        ------
        InstallError
            When the command cannot be spawned or exits non-zero.
        """
        ...  # pragma: no cover
