# topmark:header:start
#
#   project      : ApiDelta
#   file         : __init__.py
#   file_relpath : src/apidelta/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics recorded during a comparison (see `apidelta.diagnostic.model`)."""

from __future__ import annotations

from apidelta.diagnostic.model import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticLog,
    DiagnosticStats,
    FrozenDiagnosticLog,
)

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "DiagnosticStats",
    "FrozenDiagnosticLog",
]
