# topmark:header:start
#
#   project      : ApiDelta
#   file         : __init__.py
#   file_relpath : src/apidelta/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ApiDelta package.

ApiDelta compares the public API surface of two versions of a compiled library,
reports what changed and classifies every change as breaking or non-breaking
under a configurable policy. It exposes a CLI and a small typed engine API
(`apidelta.engine.compare_snapshots`) for automation.
"""

from __future__ import annotations
