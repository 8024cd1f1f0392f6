# topmark:header:start
#
#   project      : ApiDelta
#   file         : main.py
#   file_relpath : src/apidelta/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta CLI entry point.

Group-level options (verbosity and color) are resolved once and stored in
``ctx.obj``:

    * ``verbosity_level``: program-output verbosity (``-1`` quiet .. ``n`` for ``-v``xn).
    * ``log_level``: internal logging level (``APIDELTA_LOG_LEVEL`` or ``-vv``/``-vvv``).
    * ``color_enabled``: whether reports may use ANSI colors.
    * ``console``: the `ConsoleLike` every command prints through.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from apidelta.cli.commands.compare import compare_command
from apidelta.cli.commands.config import config_command
from apidelta.cli.commands.version import version_command
from apidelta.cli.console import ClickConsole
from apidelta.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_log_level,
    resolve_verbosity,
)
from apidelta.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from apidelta.cli.console import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color, console) on ``ctx.obj``.

    Args:
        ctx (click.Context): Current Click context.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit ``--color`` value.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.ensure_object(dict)

    verbosity_level: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = verbosity_level

    log_level: int | None = resolve_log_level(verbosity_level, resolve_env_log_level())
    ctx.obj["log_level"] = log_level
    setup_logging(level=log_level)

    effective_mode: ColorMode = ColorMode.NEVER if no_color else ColorMode(color_mode or "auto")
    enable_color: bool = resolve_color_mode(cli_mode=effective_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj.setdefault("console", ClickConsole(enable_color=enable_color))


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="ApiDelta: compare API snapshots and classify breaking changes.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the ApiDelta CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=ColorMode(color_mode) if color_mode else None,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'apidelta compare OLD NEW' to compare two snapshots.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(compare_command)

cli.add_command(config_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
