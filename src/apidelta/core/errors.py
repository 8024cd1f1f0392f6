# topmark:header:start
#
#   project      : ApiDelta
#   file         : errors.py
#   file_relpath : src/apidelta/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception hierarchy for the ApiDelta engine and configuration layer.

These exceptions are UI-agnostic. The CLI translates them into
`apidelta.cli.errors` exceptions (which carry exit codes) at the command
boundary.

Sections:
    * ApiDeltaError: base class for all engine-level failures.
    * ConfigurationError: invalid mapping, pattern, enum value or document.
    * SnapshotError: a descriptor snapshot document cannot be read or parsed.
    * DescriptorError: one descriptor is malformed (recoverable, see the engine).
"""

from __future__ import annotations


class ApiDeltaError(Exception):
    """Base class for all ApiDelta errors."""


class ConfigurationError(ApiDeltaError):
    """Raised when the comparison configuration is invalid.

    Configuration errors are fatal and always raised *before* any comparison
    work is performed.

    Attributes:
        key (str | None): Configuration key (dotted path) that caused the error, if known.
    """

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        message: str = super().__str__()
        if self.key:
            return f"{self.key}: {message}"
        return message


class SnapshotError(ApiDeltaError):
    """Raised when a descriptor snapshot document cannot be read or parsed."""


class DescriptorError(ApiDeltaError, ValueError):
    """Raised when a single descriptor violates the descriptor contract.

    The engine catches this per descriptor, records a diagnostic and skips the
    descriptor; it never aborts a comparison.
    """
