# topmark:header:start
#
#   project      : ApiDelta
#   file         : config_defaults.py
#   file_relpath : src/apidelta/cli/commands/config_defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta `config defaults` command.

TOML output is the annotated template shipped with the package (a good
starting point for a project configuration file); JSON output is generated
from the runtime defaults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from apidelta.cli.cli_types import EnumChoiceParam
from apidelta.cli.console import get_console
from apidelta.config.io import DocumentFormat, load_default_template_text, render_configuration
from apidelta.config.model import ComparisonConfiguration

if TYPE_CHECKING:
    from apidelta.cli.console import ConsoleLike


@click.command(
    name="defaults",
    help="Display the built-in default configuration.",
)
@click.option(
    "--format",
    "doc_format",
    type=EnumChoiceParam(DocumentFormat),
    default=None,
    help="Document format (toml or json; default: toml).",
)
def config_defaults_command(*, doc_format: DocumentFormat | None) -> None:
    """Print the default configuration.

    Args:
        doc_format (DocumentFormat | None): Output document format.
    """
    console: ConsoleLike = get_console()
    if (doc_format or DocumentFormat.TOML) == DocumentFormat.TOML:
        console.print(load_default_template_text(), nl=False)
        return
    console.print(render_configuration(ComparisonConfiguration.default(), DocumentFormat.JSON))
