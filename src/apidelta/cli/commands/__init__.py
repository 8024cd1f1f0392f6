# topmark:header:start
#
#   project      : ApiDelta
#   file         : __init__.py
#   file_relpath : src/apidelta/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta CLI commands (one module per command or command group)."""

from __future__ import annotations
