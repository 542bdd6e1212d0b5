"""Infrastructure: synchronous package-manager execution.

This module is the **only** place in the codebase that spawns child
processes.  The child inherits the terminal's stdin/stdout/stderr so
install progress is shown live.

Rules
-----
* Executables are resolved with :func:`shutil.which` so that ``npm.cmd``
  and friends work on Windows without ``shell=True``.
* No ``print()``: failures are raised as
  :class:`~create_mvp_surf.exceptions.InstallError`.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from create_mvp_surf.exceptions import InstallError, append_manual_install_suggestion


class SubprocessCommandRunner:
    """Concrete :class:`~create_mvp_surf.core.protocols.CommandRunner`.

    This class satisfies the protocol structurally: no explicit
    inheritance required.
    """

    def run(self, command: Sequence[str], *, cwd: Path) -> None:
        """Run *command* in *cwd*, blocking until it exits.

        Raises
        ------
        InstallError
            If the executable is missing, cannot be spawned, or exits
            with a non-zero status.
        """
        if not command:
            raise InstallError("No install command given.")

        command_line = " ".join(command)
        hint = append_manual_install_suggestion(
            f"Run it from inside {cwd.name}.",
            command_line,
        )

        executable = shutil.which(command[0])
        if executable is None:
            raise InstallError(
                f"{command[0]} was not found on PATH.",
                hint=hint,
            )

        try:
            subprocess.run([executable, *command[1:]], cwd=cwd, check=True)
        except subprocess.CalledProcessError as exc:
            raise InstallError(
                f"{command_line} exited with status {exc.returncode}.",
                hint=hint,
            ) from exc
        except OSError as exc:
            raise InstallError(
                f"Could not start {command_line}: {exc}",
                hint=hint,
            ) from exc
