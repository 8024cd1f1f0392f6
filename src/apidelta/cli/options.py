# topmark:header:start
#
#   project      : ApiDelta
#   file         : options.py
#   file_relpath : src/apidelta/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reusable Click options and their resolution logic.

Commands stay thin by stacking these decorators; the ``resolve_*`` helpers
turn raw option values into the settings the commands act upon.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from apidelta.cli.errors import ApiDeltaUsageError
from apidelta.config.logging import (
    TRACE_LEVEL,
    get_logger,
    resolve_env_log_level,
    setup_logging,
)

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from ``-v``/``-q`` counts.

    Returns:
        int: ``-1`` (quiet: summary line only), ``0`` (default), or the number
        of ``-v`` flags.

    Raises:
        ApiDeltaUsageError: If both ``--verbose`` and ``--quiet`` are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ApiDeltaUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def resolve_log_level(verbosity_level: int, env_level: int | None) -> int | None:
    """Return the internal logging level.

    ``APIDELTA_LOG_LEVEL`` wins when set. Otherwise ``-vv`` enables DEBUG and
    ``-vvv`` TRACE; lower verbosity leaves logging silent (``None``).
    """
    if env_level is not None:
        return env_level
    if verbosity_level >= 3:
        return TRACE_LEVEL
    if verbosity_level == 2:
        return logging.DEBUG
    return None


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counted, mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity (-vv: debug logging, -vvv: trace logging).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only print the summary line.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Decide whether to emit ANSI colors.

    Honors ``--color``/``--no-color`` first, then ``FORCE_COLOR`` and
    ``NO_COLOR``, and finally whether stdout is a terminal.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color [auto|always|never]`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-c/--config PATH`` (a JSON or TOML configuration document)."""
    return click.option(
        "-c",
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=str),
        default=None,
        help="Configuration document (.json or .toml).",
    )(f)


def apply_command_overrides(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Apply ``-v``/``-q``/``--no-color`` given after a subcommand name.

    The group resolves these options once; a command that repeats them
    (``apidelta compare -q OLD NEW``) overrides the group-level state.
    """
    ctx.ensure_object(dict)
    if verbose or quiet:
        verbosity_level: int = resolve_verbosity(verbose, quiet)
        ctx.obj["verbosity_level"] = verbosity_level
        log_level: int | None = resolve_log_level(verbosity_level, resolve_env_log_level())
        if log_level != ctx.obj.get("log_level"):
            ctx.obj["log_level"] = log_level
            setup_logging(level=log_level)
    if no_color:
        ctx.obj["color_enabled"] = False
        ctx.color = False
