"""Custom exception hierarchy for create-mvp-surf.

All exceptions that cross layer boundaries must inherit from
:class:`ScaffoldError`.  Raw third-party exceptions (httpx, tarfile,
subprocess) must NEVER propagate beyond the infrastructure layer: they
must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
ScaffoldError
├── ValidationError
├── PromptAbortedError
├── DirectoryExistsError
├── FetchError
│   └── CorruptArchiveError
├── ManifestParseError
├── InstallError
├── EnvironmentError
└── UnexpectedError
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base exception for all create-mvp-surf errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input -----------------------------------------------------------------

class ValidationError(ScaffoldError):
    """Raised when the project name is blank after trimming."""


class PromptAbortedError(ScaffoldError):
    """Raised when the user cancels a required prompt (Ctrl+C / Esc)."""


class DirectoryExistsError(ScaffoldError):
    """Raised when the target project directory already exists."""


# --- Template download -----------------------------------------------------

class FetchError(ScaffoldError):
    """Raised when the template cannot be downloaded or extracted."""


class CorruptArchiveError(FetchError):
    """Raised when a downloaded or cached archive cannot be read."""


# --- Manifest --------------------------------------------------------------

class ManifestParseError(ScaffoldError):
    """Raised when ``package.json`` exists but is not a JSON object."""


# --- Dependency installation -----------------------------------------------

class InstallError(ScaffoldError):
    """Raised when the package-manager child process fails.

    This is the only error the flow recovers from: it is downgraded to
    a warning and the run still completes successfully.
    """


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ScaffoldError):
    """Raised when a required runtime library is not available."""


class UnexpectedError(ScaffoldError):
    """Raised when a non-domain exception is wrapped at a service boundary."""


def append_manual_install_suggestion(hint: str, command: str) -> str:
    """Append manual-install guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Install the dependencies yourself:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            f"    {command}",
        )
    )
