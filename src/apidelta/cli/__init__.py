# topmark:header:start
#
#   project      : ApiDelta
#   file         : __init__.py
#   file_relpath : src/apidelta/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for ApiDelta.

Commands:
    - ``apidelta compare OLD NEW``: compare two descriptor snapshots.
    - ``apidelta config defaults|dump|check``: inspect configuration.
    - ``apidelta version``: print the installed version.

Core errors (`apidelta.core.errors`) are translated into
`apidelta.cli.errors` exceptions, which carry the process exit code.
"""

from __future__ import annotations
