# topmark:header:start
#
#   project      : ApiDelta
#   file         : exit_codes.py
#   file_relpath : src/apidelta/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the ApiDelta CLI.

ApiDelta aligns with the BSD `sysexits` convention where practical, so that other tooling
can interpret failures consistently. The deliberate divergences are
`BREAKING_CHANGES=1`, which CI gates test for, and `COMPARISON_ERROR=2`.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apidelta.model.result import ComparisonResult


class ExitCode(IntEnum):
    """Standardized exit codes for the ApiDelta CLI.

    Attributes:
        SUCCESS: Comparison completed; no breaking change (or failing disabled).
        BREAKING_CHANGES: Comparison completed and found at least one breaking change.
        COMPARISON_ERROR: The comparison itself could not be completed.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        SNAPSHOT_ERROR: A snapshot document is malformed. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    BREAKING_CHANGES = 1
    COMPARISON_ERROR = 2

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    SNAPSHOT_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255


def exit_code_for_result(result: ComparisonResult, *, fail_on_breaking: bool) -> ExitCode:
    """Return the process exit code for a completed comparison.

    Args:
        result (ComparisonResult): The comparison result.
        fail_on_breaking (bool): Whether breaking changes should fail the run.

    Returns:
        ExitCode: ``BREAKING_CHANGES`` when breaking changes were found and
            ``fail_on_breaking`` is set, ``SUCCESS`` otherwise.
    """
    if fail_on_breaking and result.has_breaking_changes:
        return ExitCode.BREAKING_CHANGES
    return ExitCode.SUCCESS
