# topmark:header:start
#
#   project      : ApiDelta
#   file         : constants.py
#   file_relpath : src/apidelta/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

APIDELTA_VERSION: str = get_version("apidelta")

# Name of the bundled default config inside the package `apidelta.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "apidelta.config"
DEFAULT_TOML_CONFIG_NAME: str = "apidelta-default.toml"

# Environment variable consulted by `apidelta.config.logging.resolve_env_log_level`.
LOG_LEVEL_ENV_VAR: str = "APIDELTA_LOG_LEVEL"

HEADER_END_MARKER: str = "topmark:header:end"

