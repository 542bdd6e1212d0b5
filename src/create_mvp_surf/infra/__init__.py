"""Infrastructure layer: external system integration.

This layer wraps all interaction with the network (httpx) and with
child processes.  Every raw third-party exception must be caught here
and re-raised as a :class:`~create_mvp_surf.exceptions.ScaffoldError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from create_mvp_surf.infra.archive_fetcher import ArchiveTemplateFetcher
from create_mvp_surf.infra.command_runner import SubprocessCommandRunner

__all__: list[str] = [
    "ArchiveTemplateFetcher",
    "SubprocessCommandRunner",
]
