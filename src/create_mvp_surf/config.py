"""Built-in configuration for create-mvp-surf.

The tool reads no configuration files and no environment variables.
Everything tunable lives here as a module-level constant and is packed
into a :class:`~create_mvp_surf.core.models.RunContext` at start-up.
"""

from __future__ import annotations

from pathlib import Path

TEMPLATE_SOURCE: str = "coldsurfers/create-mvp-surf#main"
"""Hosted repository the project is generated from."""

DEFAULT_PROJECT_NAME: str = "mvp-surf-app"
"""Suggested folder name shown in the name prompt."""

MANIFEST_FILENAME: str = "package.json"

FETCH_CACHE: bool = False
"""Always download a fresh archive unless switched on."""

FETCH_FORCE: bool = True
"""Allow extracting into a directory that already holds files."""

FETCH_VERBOSE: bool = True

FETCH_TIMEOUT_SECONDS: float = 60.0

CACHE_DIR: Path = Path.home() / ".cache" / "create-mvp-surf"

# Checked in order; the first marker present in the generated project wins.
INSTALLER_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("pnpm-lock.yaml", ("pnpm", "install")),
    ("yarn.lock", ("yarn",)),
)

DEFAULT_INSTALL_COMMAND: tuple[str, ...] = ("npm", "install")

START_COMMANDS: dict[tuple[str, ...], str] = {
    ("pnpm", "install"): "pnpm start",
    ("yarn",): "yarn start",
    ("npm", "install"): "npm run start",
}
