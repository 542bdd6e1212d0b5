"""Allow ``python -m create_mvp_surf`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m create_mvp_surf`` behaves identically to the
``create-mvp-surf`` console script.
"""

from __future__ import annotations

from create_mvp_surf.cli.app import cli

if __name__ == "__main__":
    cli()
