# topmark:header:start
#
#   project      : ApiDelta
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers: invoking ApiDelta and writing snapshot documents.

Commands read snapshots and configuration documents from disk, so the helpers
here write them under ``tmp_path`` and return their paths as strings ready to
be passed on the command line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from click.testing import CliRunner, Result

from apidelta.cli.main import cli
from apidelta.core.exit_codes import ExitCode
from apidelta.snapshot import dump_snapshot

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from apidelta.model.descriptor import MemberDescriptor


def run_cli(argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI with a fresh context object.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g.
            ``["compare", old, new]``.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.

    Example:
        ```python
        result = run_cli(["version"])
        assert_SUCCESS(result)
        ```
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, obj={})


def write_snapshot(
    tmp_path: Path, name: str, descriptors: list[MemberDescriptor], *, assembly: str = ""
) -> str:
    """Write ``descriptors`` as ``<name>.json`` under ``tmp_path`` and return the path."""
    path = tmp_path / f"{name}.json"
    path.write_text(dump_snapshot(descriptors, assembly=assembly), encoding="utf-8")
    return str(path)


def write_text(tmp_path: Path, name: str, text: str) -> str:
    """Write ``text`` to ``tmp_path / name`` and return the path."""
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_BREAKING(result: Result) -> None:
    """Assert that the comparison found breaking changes (code 1)."""
    assert result.exit_code == ExitCode.BREAKING_CHANGES, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert an ApiDelta usage error (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert a configuration error (code 78)."""
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output


def assert_CLICK_USAGE(result: Result) -> None:
    """Assert that Click itself rejected the invocation (code 2)."""
    assert result.exit_code == 2, result.output
