"""Rich-based progress display driven by template download events.

The fetcher reports progress as plain dicts (``status``,
``downloaded_bytes``, ``total_bytes``); :class:`RichProgressHook` turns
them into a Rich :class:`~rich.progress.Progress` bar.  Calls made
before :meth:`~RichProgressHook.start` or after
:meth:`~RichProgressHook.stop` are ignored.
"""

from __future__ import annotations

from typing import Any

from create_mvp_surf.cli.console import get_rich_console
from create_mvp_surf.exceptions import EnvironmentError


class RichProgressHook:
    """Callable progress adapter for Rich.

    Usage::

        with RichProgressHook("Downloading template") as hook:
            service.fetch_template(ctx, session, progress_callback=hook)
    """

    def __init__(self, description: str = "Downloading template") -> None:
        try:
            from rich.progress import (
                BarColumn,
                DownloadColumn,
                Progress,
                SpinnerColumn,
                TextColumn,
                TransferSpeedColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._description: str = description
        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold cyan]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=get_rich_console(),
            transient=False,
        )
        self._task_id: int | None = None
        self._started: bool = False

    def __enter__(self) -> RichProgressHook:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    def start(self) -> None:
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    def __call__(self, event: dict[str, Any]) -> None:
        if not self._started:
            return

        status: str = event.get("status", "")
        if status == "downloading":
            self._handle_downloading(event)
        elif status == "finished":
            self._handle_finished()

    def _handle_downloading(self, event: dict[str, Any]) -> None:
        total = _safe_int(event.get("total_bytes"))
        downloaded = _safe_int(event.get("downloaded_bytes")) or 0

        if self._task_id is None:
            self._task_id = self._progress.add_task(self._description, total=total)

        # GitHub streams snapshots without a content-length, so the bar
        # may only ever know the running byte count.
        if total is not None:
            self._progress.update(self._task_id, total=total, completed=downloaded)
        else:
            self._progress.update(self._task_id, completed=downloaded)

    def _handle_finished(self) -> None:
        if self._task_id is None:
            return
        task = self._progress.tasks[self._task_id]
        self._progress.update(
            self._task_id,
            total=task.completed if task.total is None else task.total,
            completed=task.completed if task.total is None else task.total,
        )


def _safe_int(value: object) -> int | None:
    """Convert *value* to ``int`` or return ``None``."""
    if value is None:
        return None
    try:
        if isinstance(value, (int, float, str)):
            return int(value)
        return None
    except (TypeError, ValueError):
        return None
