# topmark:header:start
#
#   project      : ApiDelta
#   file         : errors.py
#   file_relpath : src/apidelta/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ApiDelta CLI.

Each class carries the process exit code for its failure category (see
`apidelta.core.exit_codes.ExitCode`). Click prints the message and exits with
``exit_code`` when one of them escapes a command.

Styling:
    Errors are printed through the project console when one is present on the
    Click context (see `ApiDeltaCliError.show`), otherwise Click's default
    styling is used.
"""

from __future__ import annotations

from typing import IO, Any

import click

from apidelta.core.errors import ConfigurationError, SnapshotError
from apidelta.core.exit_codes import ExitCode


class ApiDeltaCliError(click.ClickException):
    """Base class for all ApiDelta CLI errors."""

    exit_code = ExitCode.UNEXPECTED_ERROR

    def format_message(self) -> str:
        """Return the plain message text (color is applied in `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        console: Any = None
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
        if console is not None:
            console.error(f"Error: {self.format_message()}")
            return
        super().show(file)


class ApiDeltaUsageError(ApiDeltaCliError):
    """Invalid flags or arguments."""

    exit_code = ExitCode.USAGE_ERROR


class ApiDeltaConfigError(ApiDeltaCliError):
    """Missing, malformed or invalid configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class ApiDeltaFileNotFoundError(ApiDeltaCliError):
    """An input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ApiDeltaSnapshotError(ApiDeltaCliError):
    """A snapshot document cannot be parsed."""

    exit_code = ExitCode.SNAPSHOT_ERROR


class ApiDeltaIOError(ApiDeltaCliError):
    """Reading or writing a file failed."""

    exit_code = ExitCode.IO_ERROR


class ApiDeltaComparisonError(ApiDeltaCliError):
    """The comparison could not be completed."""

    exit_code = ExitCode.COMPARISON_ERROR


class ApiDeltaUnexpectedError(ApiDeltaCliError):
    """Unhandled error (last resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR


def translate_error(exc: Exception) -> ApiDeltaCliError:
    """Map a core exception onto the CLI exception with the matching exit code."""
    if isinstance(exc, ApiDeltaCliError):
        return exc
    if isinstance(exc, ConfigurationError):
        return ApiDeltaConfigError(str(exc))
    if isinstance(exc, SnapshotError):
        return ApiDeltaSnapshotError(str(exc))
    if isinstance(exc, FileNotFoundError):
        return ApiDeltaFileNotFoundError(str(exc))
    if isinstance(exc, OSError):
        return ApiDeltaIOError(str(exc))
    return ApiDeltaUnexpectedError(f"{type(exc).__name__}: {exc}")
