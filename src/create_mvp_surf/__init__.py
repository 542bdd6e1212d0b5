"""create-mvp-surf: interactive project scaffolder.

Downloads the MVP Surf starter template into a new folder, renames its
``package.json`` and optionally installs its dependencies.
"""

from create_mvp_surf.version import __version__

__all__: list[str] = ["__version__"]
