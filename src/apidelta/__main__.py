# topmark:header:start
#
#   project      : ApiDelta
#   file         : __main__.py
#   file_relpath : src/apidelta/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running ApiDelta via ``python -m apidelta``.

Delegates directly to `apidelta.cli.main.cli`, so there is a single CLI
entry point regardless of how ApiDelta is launched.

Examples:
    Compare two descriptor snapshots::

        python -m apidelta compare old.json new.json
"""

from __future__ import annotations

from apidelta.cli.main import cli

if __name__ == "__main__":
    cli()
