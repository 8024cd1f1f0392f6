# topmark:header:start
#
#   project      : ApiDelta
#   file         : config_dump.py
#   file_relpath : src/apidelta/cli/commands/config_dump.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta `config dump` command.

Prints the *effective* configuration: the built-in defaults merged with the
optional ``--config`` document, validated and rendered in full (every switch
explicit). Useful to see which breaking-change rules a CI job actually applies.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from apidelta.cli.cli_types import EnumChoiceParam
from apidelta.cli.console import get_console
from apidelta.cli.errors import ApiDeltaConfigError, translate_error
from apidelta.cli.options import common_config_options
from apidelta.config.io import DocumentFormat, load_frozen_configuration, render_configuration
from apidelta.config.logging import get_logger
from apidelta.core.errors import ConfigurationError

if TYPE_CHECKING:
    from apidelta.cli.console import ConsoleLike
    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.config.model import ComparisonConfiguration

logger: ApiDeltaLogger = get_logger(__name__)


def load_effective_configuration(config_path: str | None) -> ComparisonConfiguration:
    """Load and freeze the configuration for ``config_path`` (defaults when None).

    Raises:
        ApiDeltaConfigError: If the document is missing or invalid.
    """
    path: Path | None = Path(config_path) if config_path is not None else None
    if path is not None and not path.is_file():
        raise ApiDeltaConfigError(f"configuration file not found: {path}")
    try:
        return load_frozen_configuration(path)
    except ConfigurationError as exc:
        raise translate_error(exc) from exc


@click.command(
    name="dump",
    help="Display the effective configuration (defaults merged with --config).",
)
@common_config_options
@click.option(
    "--format",
    "doc_format",
    type=EnumChoiceParam(DocumentFormat),
    default=None,
    help="Document format (toml or json; default: toml).",
)
def config_dump_command(*, config_path: str | None, doc_format: DocumentFormat | None) -> None:
    """Print the effective configuration.

    Args:
        config_path (str | None): Optional configuration document.
        doc_format (DocumentFormat | None): Output document format.
    """
    console: ConsoleLike = get_console()
    config: ComparisonConfiguration = load_effective_configuration(config_path)
    fmt: DocumentFormat = doc_format or DocumentFormat.TOML
    logger.debug("Dumping effective configuration as %s", fmt.value)
    text: str = render_configuration(config, fmt)
    console.print(text, nl=not text.endswith("\n"))
