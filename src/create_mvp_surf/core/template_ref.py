"""Pure parsing of template references and archive URL construction.

Every function in this module is a **pure** transformation: no I/O,
no side effects, fully deterministic.

Accepted reference syntax::

    [host:]owner/repo[/sub/dir][#ref]

``host`` is one of ``github`` (default), ``gitlab`` or ``bitbucket``.
Full ``https://<host>.com/...`` URLs are accepted as well.
"""

from __future__ import annotations

import re

from create_mvp_surf.core.models import TemplateRef
from create_mvp_surf.exceptions import FetchError

SUPPORTED_HOSTS: tuple[str, ...] = ("github", "gitlab", "bitbucket")

_REF_PATTERN = re.compile(
    r"""
    ^
    (?:(?:https?://)?(?P<url_host>github|gitlab|bitbucket)\.(?:com|org)/
      |(?P<host>github|gitlab|bitbucket):)?
    (?P<owner>[^/\s#]+)/
    (?P<repo>[^/\s#]+?)(?:\.git)?
    (?P<subdir>(?:/[^/\s#]+)+)?
    (?:\#(?P<ref>[^\s#]+))?
    $
    """,
    re.VERBOSE,
)


def parse_template_ref(source: str) -> TemplateRef:
    """Parse *source* into a :class:`TemplateRef`.

    Raises
    ------
    FetchError
        If *source* does not look like a repository reference.
    """
    match = _REF_PATTERN.match(source.strip())
    if match is None:
        raise FetchError(
            f"Could not parse template source: {source!r}",
            hint="Expected something like owner/repo#branch",
        )

    host = match.group("host") or match.group("url_host") or "github"
    subdir = match.group("subdir")
    return TemplateRef(
        host=host,
        owner=match.group("owner"),
        repo=match.group("repo"),
        ref=match.group("ref") or "HEAD",
        subdir=subdir.strip("/") if subdir else None,
    )


def archive_url(template: TemplateRef) -> str:
    """Return the ``.tar.gz`` download URL for *template* on its host."""
    owner, repo, ref = template.owner, template.repo, template.ref
    if template.host == "gitlab":
        return f"https://gitlab.com/{owner}/{repo}/repository/archive.tar.gz?ref={ref}"
    if template.host == "bitbucket":
        return f"https://bitbucket.org/{owner}/{repo}/get/{ref}.tar.gz"
    return f"https://github.com/{owner}/{repo}/archive/{ref}.tar.gz"


def cache_key(template: TemplateRef) -> tuple[str, ...]:
    """Path components under the cache root for *template*'s archive."""
    safe_ref = template.ref.replace("/", "_")
    return (template.host, template.owner, template.repo, f"{safe_ref}.tar.gz")
