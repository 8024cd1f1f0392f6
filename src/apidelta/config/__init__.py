# topmark:header:start
#
#   project      : ApiDelta
#   file         : __init__.py
#   file_relpath : src/apidelta/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for ApiDelta.

- ``model``: `ComparisonConfiguration` (frozen) and its mutable builder.
- ``mapping``, ``filters``, ``rules``: the configuration sections.
- ``io``: JSON/TOML document loading and rendering.
- ``logging``: logger class, TRACE level and colored log formatting.

This package intentionally re-exports nothing: `apidelta.config.logging` is
imported by nearly every module, and importing it must stay cheap.
"""

from __future__ import annotations
