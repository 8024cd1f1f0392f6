# topmark:header:start
#
#   project      : ApiDelta
#   file         : config.py
#   file_relpath : src/apidelta/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta `config` command group.

  * ``apidelta config defaults``: print the annotated default configuration.
  * ``apidelta config dump``: print the effective configuration (defaults + document).
  * ``apidelta config check``: validate a configuration document.
"""

from __future__ import annotations

import click

from apidelta.cli.commands.config_check import config_check_command
from apidelta.cli.commands.config_defaults import config_defaults_command
from apidelta.cli.commands.config_dump import config_dump_command
from apidelta.cli.options import CONTEXT_SETTINGS


@click.group(
    name="config",
    help="Inspect and validate ApiDelta configuration.",
    context_settings=CONTEXT_SETTINGS,
)
def config_command() -> None:
    """Group for configuration-related subcommands (no action of its own)."""


config_command.add_command(config_defaults_command, name="defaults")
config_command.add_command(config_dump_command, name="dump")
config_command.add_command(config_check_command, name="check")
