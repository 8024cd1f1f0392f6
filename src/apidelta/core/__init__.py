# topmark:header:start
#
#   project      : ApiDelta
#   file         : __init__.py
#   file_relpath : src/apidelta/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across ApiDelta.

The ``apidelta.core`` package provides small, reusable building blocks that are
safe to import from anywhere in the codebase (CLI, config, engine, tests)
without pulling in rendering or user-interface concerns.

Included modules:

- ``errors``
  The exception hierarchy raised by the engine and the configuration layer.

- ``exit_codes``
  Process exit codes, aligned with BSD-style ``sysexits`` where practical,
  with a dedicated ``BREAKING_CHANGES`` code for CI gates.

- ``enum_mixins``
  Typing-friendly Enum utilities (keyed enums, token parsing).

- ``graph``
  Cycle detection over small directed graphs (namespace mappings).

- ``patterns``
  Anchored ``*``/``?`` wildcard matching for identifiers.

- ``formats``
  Report output formats.
"""

from __future__ import annotations
