# topmark:header:start
#
#   project      : ApiDelta
#   file         : console.py
#   file_relpath : src/apidelta/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Program-output console, kept apart from logging.

Reports and user messages go through a `ConsoleLike` stored in
``ctx.obj["console"]``; diagnostics about ApiDelta itself go through
`apidelta.config.logging`. Both write to different streams (reports to stdout,
logs and errors to stderr), so ``apidelta compare -o json > report.json`` stays
parseable.
"""

from __future__ import annotations

import sys
from typing import Any, Protocol, TextIO

import click


class ConsoleLike(Protocol):
    """Output surface used by the CLI commands."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to the output stream."""
        ...

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning to the error stream."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error to the error stream."""
        ...

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled (unchanged when color is off)."""
        ...


class ClickConsole:
    """`ConsoleLike` backed by ``click.echo``.

    Args:
        enable_color (bool): Emit ANSI styles; when False all output is plain.
        out (TextIO | None): Output stream (defaults to ``sys.stdout``).
        err (TextIO | None): Error stream (defaults to ``sys.stderr``).
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out
        self.err = err

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to stdout."""
        click.echo(text, nl=nl, file=self.out or sys.stdout, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a yellow warning to stderr."""
        click.secho(
            text, nl=nl, file=self.err or sys.stderr, color=self.enable_color, fg="yellow"
        )

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write a bright red error to stderr."""
        click.secho(
            text, nl=nl, file=self.err or sys.stderr, color=self.enable_color, fg="bright_red"
        )

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` passed through ``click.style`` (plain when color is off)."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)


def get_console(ctx: click.Context | None = None) -> ConsoleLike:
    """Return the console stored on the Click context, or a colorless fallback.

    The fallback keeps commands usable when invoked without the top-level
    group (e.g. a command object tested in isolation).
    """
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and "console" in ctx.obj:
        console: ConsoleLike = ctx.obj["console"]
        return console
    return ClickConsole(enable_color=False)
