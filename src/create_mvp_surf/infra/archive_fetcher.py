"""httpx-backed implementation of :class:`~create_mvp_surf.core.protocols.TemplateFetcher`.

This module is the **only** place in the codebase that imports ``httpx``.
The repository is downloaded as the hosting service's ``.tar.gz``
snapshot, so no git client is needed and no ``.git`` metadata ends up
in the project.  All httpx / tarfile / filesystem exceptions are caught
here and re-raised as :class:`~create_mvp_surf.exceptions.FetchError`.
"""

from __future__ import annotations

import shutil
import tarfile
import tempfile
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from typing import Any

from create_mvp_surf import config
from create_mvp_surf.core.models import FetchOptions, FetchResult, TemplateRef
from create_mvp_surf.core.template_ref import archive_url, cache_key
from create_mvp_surf.exceptions import CorruptArchiveError, EnvironmentError, FetchError

_SKIPPED_PARTS: frozenset[str] = frozenset({".git"})
_CHUNK_SIZE: int = 8192


def _import_httpx() -> Any:
    """Import httpx lazily so ``--help`` works without it."""
    try:
        import httpx
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "httpx is not installed. Install with: pip install httpx",
        ) from exc
    return httpx


class ArchiveTemplateFetcher:
    """Concrete :class:`TemplateFetcher` downloading repository tarballs.

    Usage::

        fetcher = ArchiveTemplateFetcher()
        fetcher.fetch(parse_template_ref("owner/repo#main"), target, FetchOptions())

    Parameters
    ----------
    client:
        Optional pre-built ``httpx.Client``.  When omitted a client is
        created for each fetch and closed afterwards.
    cache_dir:
        Root of the on-disk archive cache used when ``options.cache``.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        cache_dir: Path = config.CACHE_DIR,
        timeout: float = config.FETCH_TIMEOUT_SECONDS,
    ) -> None:
        self._client: Any | None = client
        self._cache_dir: Path = cache_dir
        self._timeout: float = timeout

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch(
        self,
        template: TemplateRef,
        target_dir: Path,
        options: FetchOptions,
        *,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
    ) -> FetchResult:
        """Download *template* and extract it into *target_dir*.

        Raises
        ------
        FetchError
            For refused destinations, HTTP / network failures, corrupt
            archives and archives that yield no files.
        """
        if not options.force and target_dir.is_dir() and any(target_dir.iterdir()):
            raise FetchError(
                f"Destination {target_dir} is not empty.",
                hint="Remove it or enable forced extraction.",
            )

        url = archive_url(template)
        callback = progress_callback if options.verbose else None
        cached = self._cache_dir.joinpath(*cache_key(template))

        if options.cache and cached.is_file():
            try:
                written = self._extract(cached, target_dir, template)
            except CorruptArchiveError:
                cached.unlink(missing_ok=True)
            else:
                return FetchResult(archive_url=url, files_written=written, from_cache=True)

        with tempfile.TemporaryDirectory(prefix="create-mvp-surf-") as tmp:
            archive = Path(tmp) / cached.name
            self._download(url, archive, callback)
            if options.cache:
                self._store_in_cache(archive, cached)
            written = self._extract(archive, target_dir, template)

        return FetchResult(archive_url=url, files_written=written)

    # ------------------------------------------------------------------
    # Download
    # ------------------------------------------------------------------

    def _download(
        self,
        url: str,
        destination: Path,
        progress_callback: Callable[[dict[str, Any]], None] | None,
    ) -> None:
        """Stream *url* into *destination*, reporting progress dicts."""
        httpx = _import_httpx()
        owns_client = self._client is None
        client = self._client or httpx.Client(timeout=self._timeout)

        try:
            with client.stream("GET", url, follow_redirects=True) as response:
                if response.status_code != 200:
                    self._raise_for_status(response.status_code, url)
                total = _content_length(response.headers.get("content-length"))
                downloaded = 0
                with destination.open("wb") as fh:
                    for chunk in response.iter_bytes(chunk_size=_CHUNK_SIZE):
                        fh.write(chunk)
                        downloaded += len(chunk)
                        if progress_callback is not None:
                            progress_callback({
                                "status": "downloading",
                                "downloaded_bytes": downloaded,
                                "total_bytes": total,
                                "filename": url,
                            })
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Network error while downloading {url}: {exc}",
                hint="Check your internet connection and try again.",
            ) from exc
        except OSError as exc:
            raise FetchError(f"Could not save the template archive: {exc}") from exc
        finally:
            if owns_client:
                client.close()

        if progress_callback is not None:
            progress_callback({"status": "finished"})

    @staticmethod
    def _raise_for_status(status: int, url: str) -> None:
        """Translate a non-200 response into a :class:`FetchError`."""
        if status in (401, 403):
            raise FetchError(
                f"Access to {url} was denied (HTTP {status}).",
                hint="The template repository may be private.",
            )
        if status == 404:
            raise FetchError(
                f"Could not find the template at {url} (HTTP 404).",
                hint="Check the repository name and branch.",
            )
        raise FetchError(f"Downloading {url} failed with HTTP {status}.")

    def _store_in_cache(self, archive: Path, cached: Path) -> None:
        try:
            cached.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(archive, cached)
        except OSError as exc:
            raise FetchError(f"Could not write the archive cache: {exc}") from exc

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    @staticmethod
    def _extract(archive: Path, target_dir: Path, template: TemplateRef) -> int:
        """Unpack *archive* into *target_dir*; return the entry count.

        Regular files, hard links and symbolic links are materialised.
        Symbolic links are recreated only when they point inside the
        project.
        """
        written = 0
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            root = target_dir.resolve()
            with tarfile.open(archive, "r:*") as tar:
                for member in tar:
                    relative = _member_path(member.name, template.subdir)
                    if relative is None:
                        continue
                    if member.issym():
                        _make_symlink(root, relative, member.linkname, member.name)
                        written += 1
                        continue
                    destination = (root / relative).resolve()
                    if not destination.is_relative_to(root):
                        raise FetchError(
                            f"Refusing to extract {member.name!r} outside {target_dir}.",
                        )
                    if member.isdir():
                        destination.mkdir(parents=True, exist_ok=True)
                        continue
                    if not (member.isfile() or member.islnk()):
                        continue
                    # hard links are read through their target member
                    source = tar.extractfile(member)
                    if source is None:
                        continue
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    with source, destination.open("wb") as fh:
                        shutil.copyfileobj(source, fh)
                    if member.mode & 0o111:
                        destination.chmod(destination.stat().st_mode | 0o111)
                    written += 1
        except (tarfile.TarError, KeyError) as exc:
            raise CorruptArchiveError(f"The template archive is corrupt: {exc}") from exc
        except OSError as exc:
            raise FetchError(f"Could not write template files: {exc}") from exc

        if written == 0:
            where = f" under {template.subdir}" if template.subdir else ""
            raise FetchError(f"The template {template} has no files{where}.")
        return written


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------

def _make_symlink(root: Path, relative: PurePosixPath, linkname: str, member_name: str) -> None:
    """Create ``root/relative`` as a symlink to *linkname*.

    Both the link's parent directory and the link target must resolve
    inside *root*.
    """
    link = root.joinpath(*relative.parts)
    parent = link.parent.resolve()
    if not parent.is_relative_to(root) or not (parent / linkname).resolve().is_relative_to(root):
        raise FetchError(f"Refusing to extract link {member_name!r} to {linkname!r} outside {root}.")
    parent.mkdir(parents=True, exist_ok=True)
    if link.is_symlink() or link.is_file():
        link.unlink()
    (parent / link.name).symlink_to(linkname)

def _member_path(name: str, subdir: str | None) -> PurePosixPath | None:
    """Map an archive member name to a path relative to the project.

    Drops the snapshot's top-level ``<repo>-<ref>/`` directory, keeps
    only *subdir* when given, and skips VCS metadata.
    """
    parts = PurePosixPath(name).parts[1:]
    if subdir:
        prefix = PurePosixPath(subdir).parts
        if parts[: len(prefix)] != prefix:
            return None
        parts = parts[len(prefix):]
    if not parts or _SKIPPED_PARTS.intersection(parts):
        return None
    return PurePosixPath(*parts)


def _content_length(value: str | None) -> int | None:
    try:
        return int(value) if value else None
    except ValueError:
        return None
