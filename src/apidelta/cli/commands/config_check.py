# topmark:header:start
#
#   project      : ApiDelta
#   file         : config_check.py
#   file_relpath : src/apidelta/cli/commands/config_check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta `config check` command.

Validates a configuration document without comparing anything: the document
is parsed, merged over the defaults and frozen, which runs every validation
(unknown keys, malformed patterns, empty or circular mappings). Exits 0 when
valid and 78 (``CONFIG_ERROR``) otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from apidelta.cli.commands.config_dump import load_effective_configuration
from apidelta.cli.console import get_console

if TYPE_CHECKING:
    from apidelta.cli.console import ConsoleLike
    from apidelta.config.model import ComparisonConfiguration


@click.command(
    name="check",
    help="Validate a configuration document.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=str),
    required=True,
    help="Configuration document (.json or .toml).",
)
def config_check_command(*, config_path: str) -> None:
    """Validate ``config_path`` and print a one-line verdict.

    Args:
        config_path (str): Configuration document to validate.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)

    config: ComparisonConfiguration = load_effective_configuration(config_path)
    if int(ctx.obj.get("verbosity_level", 0)) > 0:
        m = config.mappings
        console.print(
            f"{len(m.namespace_mappings)} namespace mapping(s), "
            f"{len(m.type_mappings)} type mapping(s)"
        )
    console.print(console.styled(f"{config_path}: configuration is valid", fg="green"))
