"""Shared pytest fixtures and fakes for the create-mvp-surf test suite.

Guidelines
----------
* No internet access in any test: httpx is driven by ``MockTransport``.
* No real terminal: prompts go through :class:`FakePrompter`.
* No real package manager: installs go through :class:`FakeRunner`.
* Filesystem effects stay inside ``tmp_path``.
"""

from __future__ import annotations

import io
import tarfile
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from create_mvp_surf.core.models import (
    FetchOptions,
    FetchResult,
    InstallerRule,
    RunContext,
    TemplateRef,
)


# ---------------------------------------------------------------------------
# Fakes for the core protocols
# ---------------------------------------------------------------------------

class FakePrompter:
    """Replays canned answers and records the questions asked."""

    def __init__(self, texts: Sequence[str | None] = ("my-app",), confirm: bool | None = True) -> None:
        self._texts: list[str | None] = list(texts)
        self._confirm = confirm
        self.text_calls: list[tuple[str, str]] = []
        self.confirm_calls: list[tuple[str, bool]] = []

    def ask_text(
        self,
        message: str,
        *,
        default: str = "",
        validate: Callable[[str], bool | str] | None = None,
    ) -> str | None:
        self.text_calls.append((message, default))
        return self._texts.pop(0)

    def ask_confirm(self, message: str, *, default: bool = True) -> bool | None:
        self.confirm_calls.append((message, default))
        return self._confirm


class FakeFetcher:
    """Writes a fixed file tree instead of downloading."""

    def __init__(self, files: dict[str, str] | None = None, error: Exception | None = None) -> None:
        self.files = {"README.md": "# template\n"} if files is None else files
        self.error = error
        self.calls: list[tuple[TemplateRef, Path, FetchOptions]] = []

    def fetch(
        self,
        template: TemplateRef,
        target_dir: Path,
        options: FetchOptions,
        *,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
    ) -> FetchResult:
        self.calls.append((template, target_dir, options))
        if self.error is not None:
            raise self.error
        target_dir.mkdir(parents=True, exist_ok=True)
        for name, content in self.files.items():
            path = target_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return FetchResult(archive_url="https://example.invalid/t.tar.gz", files_written=len(self.files))


class FakeRunner:
    """Records commands; optionally fails every run."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[tuple[str, ...], Path]] = []

    def run(self, command: Sequence[str], *, cwd: Path) -> None:
        self.calls.append((tuple(command), cwd))
        if self.error is not None:
            raise self.error


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def make_tarball(
    files: dict[str, str | bytes],
    *,
    root: str = "create-mvp-surf-main",
    modes: dict[str, int] | None = None,
    symlinks: dict[str, str] | None = None,
    hardlinks: dict[str, str] | None = None,
) -> bytes:
    """Build an in-memory ``.tar.gz`` shaped like a GitHub snapshot.

    *symlinks* maps a link name to its target as stored in the archive;
    *hardlinks* maps a link name to another member of *files*.  Links
    are appended after the regular files.
    """
    modes = modes or {}
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        root_info = tarfile.TarInfo(root)
        root_info.type = tarfile.DIRTYPE
        root_info.mode = 0o755
        tar.addfile(root_info)
        for name, content in files.items():
            data = content.encode("utf-8") if isinstance(content, str) else content
            info = tarfile.TarInfo(f"{root}/{name}" if root else name)
            info.size = len(data)
            info.mode = modes.get(name, 0o644)
            tar.addfile(info, io.BytesIO(data))
        for name, target in (symlinks or {}).items():
            info = tarfile.TarInfo(f"{root}/{name}")
            info.type = tarfile.SYMTYPE
            info.linkname = target
            tar.addfile(info)
        for name, target in (hardlinks or {}).items():
            info = tarfile.TarInfo(f"{root}/{name}")
            info.type = tarfile.LNKTYPE
            info.linkname = f"{root}/{target}"
            info.mode = modes.get(target, 0o644)
            tar.addfile(info)
    return buffer.getvalue()


@pytest.fixture()
def template() -> TemplateRef:
    return TemplateRef(host="github", owner="coldsurfers", repo="create-mvp-surf", ref="main")


@pytest.fixture()
def ctx(tmp_path: Path, template: TemplateRef) -> RunContext:
    """A run context rooted in an empty temporary working directory."""
    return RunContext(
        cwd=tmp_path,
        template=template,
        fetch_options=FetchOptions(cache=False, force=True, verbose=False),
        installers=(
            InstallerRule("pnpm-lock.yaml", ("pnpm", "install")),
            InstallerRule("yarn.lock", ("yarn",)),
        ),
        default_install_command=("npm", "install"),
    )
