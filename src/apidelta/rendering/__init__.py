# topmark:header:start
#
#   project      : ApiDelta
#   file         : __init__.py
#   file_relpath : src/apidelta/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Report renderers for ApiDelta.

Every renderer is a pure function of a `ComparisonResult` returning text; none
of them prints. Writing the text (stdout or ``--output-path``) is the CLI's job.

Public modules:
    - apidelta.rendering.api
    - apidelta.rendering.console
    - apidelta.rendering.markdown
    - apidelta.rendering.machine
    - apidelta.rendering.html_report
"""

from __future__ import annotations

from apidelta.rendering.api import render_report

__all__ = ["render_report"]
