"""Interactive prompts for the CLI layer.

:class:`QuestionaryPrompter` is the terminal implementation of the
:class:`~create_mvp_surf.core.protocols.Prompter` protocol.  It asks
exactly the two questions the flow needs: a text prompt for the project
name and a yes/no confirm for installing dependencies.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from create_mvp_surf.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompting."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class QuestionaryPrompter:
    """Terminal prompts backed by questionary.

    ``ask()`` swallows Ctrl+C and returns ``None``; both methods pass
    that ``None`` through so the service can decide what a cancel means.
    """

    def ask_text(
        self,
        message: str,
        *,
        default: str = "",
        validate: Callable[[str], bool | str] | None = None,
    ) -> str | None:
        questionary = _import_questionary()
        kwargs: dict[str, Any] = {"default": default}
        if validate is not None:
            kwargs["validate"] = validate
        answer: str | None = questionary.text(message, **kwargs).ask()
        return answer

    def ask_confirm(self, message: str, *, default: bool = True) -> bool | None:
        questionary = _import_questionary()
        answer: bool | None = questionary.confirm(message, default=default).ask()
        return answer
