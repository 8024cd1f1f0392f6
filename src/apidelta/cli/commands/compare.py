# topmark:header:start
#
#   project      : ApiDelta
#   file         : compare.py
#   file_relpath : src/apidelta/cli/commands/compare.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta `compare` command.

Compares two descriptor snapshots and reports the differences.

Configuration layering (last wins): built-in defaults, then the ``--config``
document, then command-line overrides (``--output``, ``--output-path``,
``--filter-namespace``, ``--exclude-type``, ``--no-fail-on-breaking``).

Exit status:
    * 0: no breaking change, or ``--no-fail-on-breaking``.
    * 1: breaking changes found.
    * 64/65/66/74/78: usage, snapshot, missing file, I/O and configuration errors.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from apidelta.cli.cli_types import EnumChoiceParam
from apidelta.cli.console import get_console
from apidelta.cli.errors import (
    ApiDeltaComparisonError,
    ApiDeltaConfigError,
    ApiDeltaFileNotFoundError,
    ApiDeltaIOError,
    translate_error,
)
from apidelta.cli.options import (
    apply_command_overrides,
    common_config_options,
    common_verbose_options,
)
from apidelta.config.filters import MutableExclusionConfig, MutableFilterConfig
from apidelta.config.io import load_configuration
from apidelta.config.logging import get_logger
from apidelta.config.model import MutableComparisonConfiguration
from apidelta.core.errors import ApiDeltaError
from apidelta.core.exit_codes import ExitCode, exit_code_for_result
from apidelta.core.formats import ReportFormat
from apidelta.engine import compare_snapshots
from apidelta.rendering.api import render_report
from apidelta.rendering.console import render_summary_line
from apidelta.snapshot import load_snapshot

if TYPE_CHECKING:
    from apidelta.cli.console import ConsoleLike
    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.config.model import ComparisonConfiguration
    from apidelta.model.result import ComparisonResult
    from apidelta.snapshot import Snapshot

logger: ApiDeltaLogger = get_logger(__name__)


def build_configuration(
    *,
    config_path: str | None,
    output_format: ReportFormat | None,
    output_path: str | None,
    filter_namespaces: tuple[str, ...],
    exclude_types: tuple[str, ...],
    fail_on_breaking: bool | None,
) -> ComparisonConfiguration:
    """Merge defaults, the configuration document and CLI overrides, then freeze.

    Raises:
        ApiDeltaConfigError: If the document is missing or the result is invalid.
    """
    layer = MutableComparisonConfiguration()
    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise ApiDeltaConfigError(f"configuration file not found: {path}")
        layer = layer.merge_with(load_configuration(path))

    overrides = MutableComparisonConfiguration(
        filters=MutableFilterConfig(include_namespaces=list(filter_namespaces)),
        exclusions=MutableExclusionConfig(excluded_type_patterns=list(exclude_types)),
        output_format=output_format,
        output_path=output_path,
        fail_on_breaking_changes=fail_on_breaking,
    )
    return layer.merge_with(overrides).freeze()


def _load(path_text: str) -> Snapshot:
    path = Path(path_text)
    if not path.exists():
        raise ApiDeltaFileNotFoundError(f"snapshot not found: {path}")
    return load_snapshot(path)


def _write_report(text: str, output_path: str, console: ConsoleLike) -> None:
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ApiDeltaIOError(f"cannot write report to {path}: {exc}") from exc
    logger.info("Report written to %s", path)
    console.warn(f"Report written to {path}")


@click.command(
    name="compare",
    help="Compare two API snapshots (OLD and NEW) and report breaking changes.",
)
@click.argument("old", metavar="OLD", type=click.Path(dir_okay=False, path_type=str))
@click.argument("new", metavar="NEW", type=click.Path(dir_okay=False, path_type=str))
@common_config_options
@click.option(
    "-o",
    "--output",
    "output_format",
    type=EnumChoiceParam(ReportFormat),
    default=None,
    help="Report format (default: console).",
)
@click.option(
    "--output-path",
    "output_path",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Write the report to this file instead of stdout.",
)
@click.option(
    "-f",
    "--filter-namespace",
    "filter_namespaces",
    multiple=True,
    help="Only compare namespaces matching this pattern (repeatable; * and ? wildcards).",
)
@click.option(
    "-e",
    "--exclude-type",
    "exclude_types",
    multiple=True,
    help="Treat types matching this pattern as intentionally removed (repeatable).",
)
@click.option(
    "--fail-on-breaking/--no-fail-on-breaking",
    "fail_on_breaking",
    default=None,
    help="Exit with status 1 when breaking changes are found (default: on).",
)
@common_verbose_options
@click.option("--no-color", "no_color", is_flag=True, help="Disable color output.")
def compare_command(
    *,
    old: str,
    new: str,
    config_path: str | None,
    output_format: ReportFormat | None,
    output_path: str | None,
    filter_namespaces: tuple[str, ...],
    exclude_types: tuple[str, ...],
    fail_on_breaking: bool | None,
    verbose: int = 0,
    quiet: int = 0,
    no_color: bool = False,
) -> None:
    """Compare two snapshots and exit with a status reflecting breaking changes.

    Args:
        old (str): Path of the source (old) snapshot.
        new (str): Path of the target (new) snapshot.
        config_path (str | None): Optional configuration document.
        output_format (ReportFormat | None): Report format override.
        output_path (str | None): Report destination override.
        filter_namespaces (tuple[str, ...]): Extra ``includeNamespaces`` patterns.
        exclude_types (tuple[str, ...]): Extra ``excludedTypePatterns``.
        fail_on_breaking (bool | None): Override for ``failOnBreakingChanges``.
        verbose (int): Count of ``-v`` flags (overrides the group option).
        quiet (int): Count of ``-q`` flags (overrides the group option).
        no_color (bool): Disable colors (overrides the group option).
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    apply_command_overrides(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ConsoleLike = get_console(ctx)
    verbosity_level: int = int(ctx.obj.get("verbosity_level", 0))

    try:
        config: ComparisonConfiguration = build_configuration(
            config_path=config_path,
            output_format=output_format,
            output_path=output_path,
            filter_namespaces=filter_namespaces,
            exclude_types=exclude_types,
            fail_on_breaking=fail_on_breaking,
        )
        source: Snapshot = _load(old)
        target: Snapshot = _load(new)
        result: ComparisonResult = compare_snapshots(
            source.entries,
            target.entries,
            config,
            source_label=source.label,
            target_label=target.label,
        )
    except click.ClickException:
        raise
    except ApiDeltaError as exc:
        raise translate_error(exc) from exc
    except OSError as exc:
        raise translate_error(exc) from exc
    except (ValueError, TypeError) as exc:
        raise ApiDeltaComparisonError(f"comparison failed: {exc}") from exc

    fmt: ReportFormat = config.output_format
    color: bool = bool(ctx.obj.get("color_enabled", False)) and fmt == ReportFormat.CONSOLE
    if verbosity_level < 0 and fmt == ReportFormat.CONSOLE and config.output_path is None:
        console.print(render_summary_line(result, color=color))
    else:
        text: str = render_report(
            result,
            fmt,
            color=color and config.output_path is None,
            verbosity_level=max(verbosity_level, 0),
        )
        if config.output_path is not None:
            _write_report(text, config.output_path, console)
        else:
            console.print(text, nl=False)

    code: ExitCode = exit_code_for_result(
        result, fail_on_breaking=config.fail_on_breaking_changes
    )
    logger.debug("compare exit code: %s", code.name)
    ctx.exit(int(code))
