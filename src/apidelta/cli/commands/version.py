# topmark:header:start
#
#   project      : ApiDelta
#   file         : version.py
#   file_relpath : src/apidelta/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta `version` command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from apidelta.cli.console import get_console
from apidelta.constants import APIDELTA_VERSION

if TYPE_CHECKING:
    from apidelta.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the installed version of ApiDelta.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help='Print {"version": ...} instead of plain text.',
)
def version_command(*, as_json: bool) -> None:
    """Print the version of ApiDelta installed in the current environment."""
    console: ConsoleLike = get_console()
    if as_json:
        console.print(json.dumps({"version": APIDELTA_VERSION}))
        return
    console.print(console.styled(APIDELTA_VERSION, bold=True))
